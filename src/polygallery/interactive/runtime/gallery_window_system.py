# どこで: `src/polygallery/interactive/runtime/gallery_window_system.py`。
# 何を: ギャラリーウィンドウを持ち、現在の shape を毎フレーム描画し、左右キーで shape を切り替えるサブシステム。
# なぜ: `src/polygallery/api/runner.py` の `run()` を「配線」に寄せ、描画責務を独立させるため。

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pyglet.window import key

from polygallery.core.phase import AnimationPhaseController
from polygallery.interactive.draw_window import create_gallery_window
from polygallery.interactive.gl.context import create_render_context
from polygallery.interactive.runtime.frame_clock import RealTimeClock
from polygallery.interactive.runtime.gallery_navigator import GalleryNavigator
from polygallery.interactive.shapes import Shape

_logger = logging.getLogger(__name__)


class GalleryWindowSystem:
    """描画（メインウィンドウ）のサブシステム。"""

    def __init__(
        self,
        catalogue: Sequence[Shape],
        *,
        canvas_size: tuple[int, int],
        clock: RealTimeClock,
        start_index: int = 0,
    ) -> None:
        """描画用の window を作り、start_index の shape をマウントする。"""

        self.window = create_gallery_window(canvas_size)
        self._clock = clock
        self._ctx: Any | None = None
        # キー入力で溜めた切り替え量（次フレームの先頭で反映）。
        self._pending_step = 0
        self.navigator = GalleryNavigator(
            catalogue,
            surface_size=self._framebuffer_size(),
            context_factory=self._context,
            start_index=start_index,
        )
        self.navigator.on_switch = self._on_switch
        self.window.push_handlers(on_key_press=self._on_key_press)
        self.navigator.mount_current()

    @property
    def phases(self) -> AnimationPhaseController | None:
        return self.navigator.phases

    def _context(self) -> Any:
        # ウィンドウの GL コンテキストは 1 つなので、最初のマウントで取得して使い回す。
        if self._ctx is None:
            self._ctx = create_render_context(self.window)
        return self._ctx

    def _on_switch(self, shape: Shape) -> None:
        self.window.set_caption(f"polygallery - {shape.name}")

    def _on_key_press(self, symbol: int, _modifiers: int) -> None:
        # ここでは GL に触れない（別ウィンドウのコンテキストがカレントの可能性がある）。
        # 切り替えは次の draw_frame で、このウィンドウをカレントにした状態で行う。
        if symbol == key.RIGHT:
            self._pending_step += 1
        elif symbol == key.LEFT:
            self._pending_step -= 1

    def _apply_pending_step(self) -> None:
        delta, self._pending_step = self._pending_step, 0
        if delta:
            self.navigator.step(delta)

    def _framebuffer_size(self) -> tuple[int, int]:
        getter = getattr(self.window, "get_framebuffer_size", None)
        if callable(getter):
            w, h = getter()
            return int(w), int(h)
        return int(self.window.width), int(self.window.height)

    def draw_frame(self) -> None:
        """保留中の切り替えを反映してから 1 フレーム分描画する（`flip()` は呼ばない）。"""

        # 注: 呼び出し側（pyglet.window.Window.draw）が事前に self.window.switch_to() 済みである前提。
        self._apply_pending_step()
        ctx = self._ctx
        if ctx is None:
            return
        ctx.screen.use()
        fb_w, fb_h = self._framebuffer_size()
        ctx.viewport = (0, 0, fb_w, fb_h)
        self.navigator.tick(self._clock.t())

    def close(self) -> None:
        """GPU / window 資源を解放する。"""

        try:
            # 速度 GUI が先に閉じられていても、解放はこのウィンドウのコンテキストで行う。
            self.window.switch_to()
            self.navigator.close()
        except Exception:
            _logger.exception("Failed to unmount shape")
        self.window.close()


__all__ = ["GalleryWindowSystem"]
