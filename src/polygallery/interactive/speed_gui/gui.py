# どこで: `src/polygallery/interactive/speed_gui/gui.py`。
# 何を: tesseract の回転速度スライダーを pyimgui で描く別ウィンドウ GUI（初期化/1フレーム描画/破棄）。
# なぜ: ImGui のグローバル状態（current context / IO）の扱いを 1 クラスに閉じ込めるため。

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from polygallery.core.phase import AnimationPhaseController

from .sliders import render_speed_sliders
from .window import create_imgui_renderer

# GUI ウィンドウの背景色。
_BACKGROUND = (0.12, 0.12, 0.12, 1.0)


class SpeedControlGUI:
    """XY / XZ / XW の回転速度スライダーを持つ GUI。

    Parameters
    ----------
    window : pyglet.window.Window
        GUI を描くウィンドウ。`close()` で一緒に閉じる。
    phases_source : Callable[[], AnimationPhaseController | None]
        マウント中の shape の位相を返す。shape の切り替えに追従するため毎フレーム呼ぶ。
    time_source : Callable[[], float]
        描画側と共有しているフレーム時計。
    """

    def __init__(
        self,
        window: Any,
        *,
        phases_source: Callable[[], AnimationPhaseController | None],
        time_source: Callable[[], float],
        title: str = "Rotation Speed",
    ) -> None:
        import imgui  # type: ignore[import-untyped]

        self._imgui = imgui
        self._window = window
        self._phases_source = phases_source
        self._time_source = time_source
        self._title = title

        # ImGui の current context はプロセスで 1 つなので、描画のたびに自分のものへ切り替える。
        self._context = imgui.create_context()
        imgui.set_current_context(self._context)
        imgui.style_colors_dark()
        self._renderer = create_imgui_renderer(window)

        self._last_frame = time.monotonic()
        self._closed = False

    def _begin_frame(self) -> None:
        imgui = self._imgui
        imgui.set_current_context(self._context)
        now = time.monotonic()
        dt, self._last_frame = now - self._last_frame, now

        # renderer.process_inputs() は pyglet.clock.tick() を呼ぶため使わず、IO を直接更新する。
        imgui.new_frame()
        io = imgui.get_io()
        io.delta_time = max(dt, 1e-4)
        width, height = self._window.width, self._window.height
        fb_width, fb_height = self._window.get_framebuffer_size()
        io.display_size = (float(width), float(height))
        io.display_fb_scale = (fb_width / max(1, width), fb_height / max(1, height))

    def draw_frame(self) -> list[str]:
        """1 フレーム分の GUI を描き、速度を変えた軸名を返す（`flip()` は呼ばない）。"""
        if self._closed:
            return []

        imgui = self._imgui
        self._begin_frame()
        imgui.set_next_window_position(0, 0)
        imgui.set_next_window_size(self._window.width, self._window.height)
        imgui.begin(
            self._title,
            flags=imgui.WINDOW_NO_RESIZE | imgui.WINDOW_NO_COLLAPSE | imgui.WINDOW_NO_TITLE_BAR,
        )
        try:
            changed = render_speed_sliders(imgui, self._phases_source(), t=self._time_source())
        finally:
            imgui.end()
        imgui.render()

        import pyglet

        pyglet.gl.glClearColor(*_BACKGROUND)
        self._window.clear()
        self._renderer.render(imgui.get_draw_data())
        return changed

    def close(self) -> None:
        """renderer と ImGui コンテキストを破棄し、ウィンドウを閉じる（冪等）。"""
        if self._closed:
            return
        self._closed = True
        shutdown = getattr(self._renderer, "shutdown", None)
        if callable(shutdown):
            shutdown()
        self._imgui.destroy_context(self._context)
        self._window.close()


__all__ = ["SpeedControlGUI"]
