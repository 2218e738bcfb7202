# どこで: `tests/interactive/conftest.py`。
# 何を: moderngl.Context の代わりに使う記録用ダミー（プログラム/バッファ/VAO/テクスチャ）を提供する。
# なぜ: GPU もディスプレイも無い環境で、マウント/描画/解放の手順を検証するため。

from __future__ import annotations

import re
from typing import Any

import pytest

from polygallery.core.runtime_config import RuntimeConfig

_IN_RE = re.compile(r"^\s*in\s+\w+\s+(\w+)\s*;", re.MULTILINE)
_UNIFORM_RE = re.compile(r"^\s*uniform\s+\w+\s+(\w+)\s*;", re.MULTILINE)


class DummyUniform:
    def __init__(self, name: str) -> None:
        self.name = name
        self.value: Any = None
        self.written: bytes | None = None

    def write(self, data: bytes) -> None:
        self.written = bytes(data)


class DummyProgram:
    """頂点シェーダの `in` と両ステージの `uniform` を active な名前として持つ。"""

    def __init__(self, vertex_shader: str, fragment_shader: str, *, missing: set[str]) -> None:
        names = _IN_RE.findall(vertex_shader)
        names += _UNIFORM_RE.findall(vertex_shader)
        names += _UNIFORM_RE.findall(fragment_shader)
        self.members = {n: DummyUniform(n) for n in names if n not in missing}
        self.released = False

    def get(self, name: str, default: Any) -> Any:
        return self.members.get(name, default)

    def __getitem__(self, name: str) -> DummyUniform:
        return self.members[name]

    def release(self) -> None:
        self.released = True


class DummyBuffer:
    def __init__(self, data: bytes, *, dynamic: bool) -> None:
        self.data = bytes(data)
        self.dynamic = dynamic
        self.writes: list[bytes] = []
        self.released = False

    def write(self, data: bytes) -> None:
        self.writes.append(bytes(data))
        self.data = bytes(data)

    def release(self) -> None:
        self.released = True


class DummyVertexArray:
    def __init__(self, ctx: DummyContext, program: Any, content: list[tuple], index_buffer: Any) -> None:
        self.ctx = ctx
        self.program = program
        self.content = content
        self.index_buffer = index_buffer
        self.released = False

    def render(self, *, mode: int, vertices: int) -> None:
        self.ctx.draw_calls.append((mode, vertices))

    def release(self) -> None:
        self.released = True


class DummyTexture:
    def __init__(self, size: tuple[int, int], components: int, data: bytes) -> None:
        self.size = size
        self.components = components
        self.data = bytes(data)
        self.mipmaps = False
        self.location: int | None = None
        self.released = False

    def build_mipmaps(self) -> None:
        self.mipmaps = True

    def use(self, location: int = 0) -> None:
        self.location = location

    def release(self) -> None:
        self.released = True


class DummyFramebuffer:
    def __init__(self) -> None:
        self.uses = 0

    def use(self) -> None:
        self.uses += 1


class DummyContext:
    """呼び出しを記録する moderngl.Context 互換のダミー。

    `program_error` / `buffer_error` / `texture_error` に例外を入れると、対応する確保で送出する。
    `missing` に入れた名前はリンク後のプログラムから除かれる（コンパイラの最適化を模す）。
    """

    TRIANGLES = 0x0004
    LINES = 0x0001
    DEPTH_TEST = 0x0B71

    def __init__(self) -> None:
        self.missing: set[str] = set()
        self.program_error: Exception | None = None
        self.buffer_error: Exception | None = None
        self.texture_error: Exception | None = None

        self.programs: list[DummyProgram] = []
        self.buffers: list[DummyBuffer] = []
        self.vertex_arrays: list[DummyVertexArray] = []
        self.textures: list[DummyTexture] = []
        self.draw_calls: list[tuple[int, int]] = []
        self.clears: list[tuple[tuple[float, ...], float]] = []
        self.enabled: list[int] = []
        self.depth_func: str | None = None
        self.screen = DummyFramebuffer()
        self.viewport: tuple[int, int, int, int] | None = None

    def program(self, *, vertex_shader: str, fragment_shader: str) -> DummyProgram:
        if self.program_error is not None:
            raise self.program_error
        program = DummyProgram(vertex_shader, fragment_shader, missing=self.missing)
        self.programs.append(program)
        return program

    def buffer(self, data: bytes, *, dynamic: bool = False) -> DummyBuffer:
        if self.buffer_error is not None:
            raise self.buffer_error
        buffer = DummyBuffer(data, dynamic=dynamic)
        self.buffers.append(buffer)
        return buffer

    def vertex_array(
        self,
        program: Any,
        content: list[tuple],
        *,
        index_buffer: Any = None,
        index_element_size: int = 4,
    ) -> DummyVertexArray:
        vao = DummyVertexArray(self, program, content, index_buffer)
        self.vertex_arrays.append(vao)
        return vao

    def texture(self, size: tuple[int, int], components: int, data: bytes) -> DummyTexture:
        if self.texture_error is not None:
            raise self.texture_error
        texture = DummyTexture(size, components, data)
        self.textures.append(texture)
        return texture

    def clear(self, *color: float, depth: float = 1.0) -> None:
        self.clears.append((tuple(color), depth))

    def enable(self, flag: int) -> None:
        self.enabled.append(flag)


@pytest.fixture
def dummy_ctx() -> DummyContext:
    return DummyContext()


@pytest.fixture
def gallery_config() -> RuntimeConfig:
    """同梱デフォルトとほぼ同じ値の RuntimeConfig（config.yaml を読まない）。"""
    return RuntimeConfig(
        config_path=None,
        canvas_size=(640, 480),
        fps=60.0,
        start_index=0,
        background_color=(0.0, 0.0, 0.0),
        sierpinski_depth=2,
        texture_paths=(None, None, None),
        window_pos_gallery=(25, 25),
        window_pos_speed_gui=(700, 25),
        speed_gui_window_size=(360, 180),
    )
