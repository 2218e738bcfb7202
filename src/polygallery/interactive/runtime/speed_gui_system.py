# どこで: `src/polygallery/interactive/runtime/speed_gui_system.py`。
# 何を: 回転速度 GUI を「1フレーム描画できるサブシステム」として提供する。
# なぜ: `src/polygallery/api/runner.py` の `run()` から GUI 初期化/描画/後始末を分離し、肥大化を防ぐため。

from __future__ import annotations

from collections.abc import Callable

from polygallery.core.phase import AnimationPhaseController
from polygallery.core.runtime_config import runtime_config
from polygallery.interactive.speed_gui import SpeedControlGUI, create_speed_gui_window


class SpeedGUIWindowSystem:
    """回転速度 GUI（別ウィンドウ）のサブシステム。"""

    def __init__(
        self,
        *,
        phases_source: Callable[[], AnimationPhaseController | None],
        time_source: Callable[[], float],
    ) -> None:
        self.window = create_speed_gui_window(runtime_config().speed_gui_window_size)
        self._gui = SpeedControlGUI(
            self.window,
            phases_source=phases_source,
            time_source=time_source,
        )

    def draw_frame(self) -> None:
        """1 フレーム分の GUI を描画する（`flip()` は呼ばない）。"""
        self._gui.draw_frame()

    def close(self) -> None:
        self._gui.close()


__all__ = ["SpeedGUIWindowSystem"]
