# どこで: `src/polygallery/interactive/gl/shader.py`。
# 何を: 頂点/フラグメントのソース対からリンク・検証済みのシェーダプログラムを構築する。
# なぜ: 失敗段階（コンパイル/リンク/検証）を型で区別し、失敗時に中間 GPU オブジェクトを残さないため。

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import moderngl

from polygallery.interactive.gl.errors import (
    CompileError,
    LinkError,
    ResourceAllocationError,
    ShaderBuildError,
    ShaderStage,
    ValidationError,
)

_logger = logging.getLogger(__name__)

_COMPILER_FAILED = "GLSL Compiler failed"
_LINKER_FAILED = "GLSL Linker failed"
_STAGE_TITLES: tuple[tuple[str, ShaderStage], ...] = (
    ("vertex_shader", "vertex"),
    ("fragment_shader", "fragment"),
)


def _classify_driver_error(exc: moderngl.Error) -> Exception:
    """moderngl.Error の診断文ヘッダから失敗段階を判定する。"""
    text = str(exc)
    if text.startswith(_COMPILER_FAILED):
        body = text[len(_COMPILER_FAILED) :].strip()
        for title, stage in _STAGE_TITLES:
            if body.startswith(title):
                return CompileError(stage, _strip_title(body, title))
        return CompileError("vertex", body)
    if text.startswith(_LINKER_FAILED):
        return LinkError(text[len(_LINKER_FAILED) :].strip())
    return ResourceAllocationError(f"シェーダプログラムの確保に失敗しました: {text}")


def _strip_title(body: str, title: str) -> str:
    # "vertex_shader\n=============\n<log>" の見出し 2 行を落としてログ本文だけにする。
    lines = body[len(title) :].lstrip("\n").split("\n", 1)
    if lines and set(lines[0]) == {"="}:
        return lines[1].strip() if len(lines) > 1 else ""
    return body[len(title) :].strip()


def build_program(
    ctx: Any,
    vertex_source: str,
    fragment_source: str,
    *,
    required: Iterable[str] = (),
) -> moderngl.Program:
    """シェーダソース対からプログラムを構築して返す。

    Parameters
    ----------
    ctx : moderngl.Context
        プログラムを確保するコンテキスト。
    vertex_source, fragment_source : str
        GLSL ソース。
    required : Iterable[str]
        リンク後のプログラムに存在しなければならない attribute / uniform 名。
        GLSL コンパイラは未使用の入力を除去するため、ここで欠落を検出する。

    Raises
    ------
    CompileError
        いずれかのステージのコンパイルに失敗した場合（`stage` に "vertex" / "fragment"）。
    LinkError
        リンクに失敗した場合。
    ValidationError
        required の名前が 1 つでも欠けている場合。
    ResourceAllocationError
        プログラムオブジェクト自体を確保できなかった場合。

    Notes
    -----
    ステージオブジェクトの確保・削除は moderngl がリンク処理の中で行う（失敗時も含む）。
    ここで所有するのはプログラムだけなので、検証失敗時はそれを解放してから送出する。
    """
    try:
        program = ctx.program(vertex_shader=vertex_source, fragment_shader=fragment_source)
    except moderngl.Error as exc:
        raise _classify_driver_error(exc) from exc

    if program is None:
        raise ResourceAllocationError("シェーダプログラムの確保に失敗しました")

    missing = [name for name in required if program.get(name, None) is None]
    if missing:
        program.release()
        raise ValidationError(f"missing active inputs: {', '.join(missing)}")

    return program


def try_build_program(
    ctx: Any,
    vertex_source: str,
    fragment_source: str,
    *,
    required: Iterable[str] = (),
) -> moderngl.Program | None:
    """`build_program` の失敗をログに記録して None を返す版。"""
    try:
        return build_program(ctx, vertex_source, fragment_source, required=required)
    except ShaderBuildError as exc:
        _logger.error("%s\n%s", exc, exc.log)
    except ResourceAllocationError as exc:
        _logger.error("%s", exc)
    return None


__all__ = ["build_program", "try_build_program"]
