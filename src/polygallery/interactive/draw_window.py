# どこで: `src/polygallery/interactive/draw_window.py`。
# 何を: ギャラリー表示用の pyglet ウィンドウ（深度バッファ + MSAA）を作る。
# なぜ: ウィンドウ生成を 1 か所にまとめ、GL 層とランタイムから OS 依存の設定を切り離すため。

from __future__ import annotations

import pyglet
from pyglet.window import Window

# 立体の前後判定に 24bit 深度、辺のジャギー低減に 4x MSAA。
_DEPTH_BITS = 24
_MSAA_SAMPLES = 4


def create_gallery_window(canvas_size: tuple[int, int], *, caption: str = "polygallery") -> Window:
    """固定サイズ `canvas_size` のギャラリーウィンドウを返す。"""
    width, height = (int(v) for v in canvas_size)
    config = pyglet.gl.Config(  # type: ignore[abstract]
        double_buffer=True,
        depth_size=_DEPTH_BITS,
        sample_buffers=1,
        samples=_MSAA_SAMPLES,
    )
    return pyglet.window.Window(  # type: ignore[abstract]
        width=width,
        height=height,
        caption=caption,
        resizable=False,
        config=config,
    )
