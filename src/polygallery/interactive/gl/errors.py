# どこで: `src/polygallery/interactive/gl/errors.py`。
# 何を: shape のマウント時に起こり得る GL 系エラーの型を定義する。
# なぜ: moderngl.Error を用途別に分類し、呼び出し側が「描画しない」へ劣化させる判断を型で行えるようにするため。

from __future__ import annotations

from typing import Literal

ShaderStage = Literal["vertex", "fragment"]


class GalleryGLError(RuntimeError):
    """マウント時の GL 系エラーの基底クラス。"""


class ContextUnavailable(GalleryGLError):
    """要求バージョンを満たす描画コンテキストが得られない。"""


class ResourceAllocationError(GalleryGLError):
    """バッファ/テクスチャ/プログラムの確保に失敗した。"""


class ShaderBuildError(GalleryGLError):
    """シェーダプログラム構築失敗の基底クラス。`log` にドライバの診断文を保持する。"""

    def __init__(self, message: str, *, log: str) -> None:
        super().__init__(message)
        self.log = log


class CompileError(ShaderBuildError):
    """シェーダステージのコンパイルに失敗した。"""

    def __init__(self, stage: ShaderStage, log: str) -> None:
        super().__init__(f"{stage} shader のコンパイルに失敗しました", log=log)
        self.stage: ShaderStage = stage


class LinkError(ShaderBuildError):
    """プログラムのリンクに失敗した。"""

    def __init__(self, log: str) -> None:
        super().__init__("シェーダプログラムのリンクに失敗しました", log=log)


class ValidationError(ShaderBuildError):
    """リンク済みプログラムが必要なインターフェースを満たさない。"""

    def __init__(self, log: str) -> None:
        super().__init__("シェーダプログラムの検証に失敗しました", log=log)


__all__ = [
    "CompileError",
    "ContextUnavailable",
    "GalleryGLError",
    "LinkError",
    "ResourceAllocationError",
    "ShaderBuildError",
    "ShaderStage",
    "ValidationError",
]
