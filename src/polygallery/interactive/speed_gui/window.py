# どこで: `src/polygallery/interactive/speed_gui/window.py`。
# 何を: 速度スライダー用の pyglet ウィンドウと、pyimgui の pyglet renderer を用意する。
# なぜ: pyimgui のバージョン差（renderer の生成関数名）をここで吸収し、SpeedControlGUI を描画だけに保つため。

from __future__ import annotations

from typing import Any

import pyglet


def create_speed_gui_window(size: tuple[int, int], *, caption: str = "Rotation Speed") -> Any:
    """速度スライダー用のウィンドウを生成する（サイズ固定、vsync 無し）。"""
    width, height = size
    # スライダーの描画だけなので深度バッファと MSAA は要らない。
    config = pyglet.gl.Config(double_buffer=True)  # type: ignore[abstract]
    return pyglet.window.Window(  # type: ignore[abstract]
        width=int(width),
        height=int(height),
        caption=caption,
        resizable=False,
        vsync=False,
        config=config,
    )


def create_imgui_renderer(window: Any) -> Any:
    """window に描く pyimgui renderer を返す。

    Raises
    ------
    RuntimeError
        imgui の pyglet 統合が使えない場合。
    """
    try:
        from imgui.integrations import pyglet as imgui_pyglet  # type: ignore[import-untyped]
    except ImportError as exc:
        raise RuntimeError(f"imgui.integrations.pyglet を import できない: {exc}") from exc

    # pyimgui 2.x は create_renderer、それ以前は PygletRenderer のみを持つ。
    factory = getattr(imgui_pyglet, "create_renderer", None) or getattr(imgui_pyglet, "PygletRenderer", None)
    if factory is None:
        raise RuntimeError("imgui.integrations.pyglet に renderer がない")
    return factory(window)


__all__ = ["create_imgui_renderer", "create_speed_gui_window"]
