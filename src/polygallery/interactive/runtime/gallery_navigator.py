# どこで: `src/polygallery/interactive/runtime/gallery_navigator.py`。
# 何を: shape カタログ上の現在位置を持ち、切り替えのたびに旧 shape をアンマウントして新 shape をマウントする。
# なぜ: 切り替え規則をウィンドウ（pyglet）から切り離し、ディスプレイ無しで検証できるようにするため。

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from polygallery.core.phase import AnimationPhaseController
from polygallery.interactive.runtime.shape_renderer import ShapeRenderer
from polygallery.interactive.shapes import Shape


def cycle_index(index: int, step: int, count: int) -> int:
    """index を step だけ進め、両端で折り返した値を返す。"""
    if count <= 0:
        raise ValueError(f"count は正である必要がある: got={count}")
    return (int(index) + int(step)) % int(count)


class GalleryNavigator:
    """マウント中の shape を常に高々 1 つに保つ。"""

    def __init__(
        self,
        catalogue: Sequence[Shape],
        *,
        surface_size: tuple[int, int],
        context_factory: Callable[[], Any],
        start_index: int = 0,
    ) -> None:
        if not catalogue:
            raise ValueError("catalogue が空です")
        if not 0 <= int(start_index) < len(catalogue):
            raise ValueError(f"start_index は 0..{len(catalogue) - 1} である必要がある: got={start_index}")
        self._catalogue = list(catalogue)
        self._surface_size = surface_size
        self._context_factory = context_factory
        self.index = int(start_index)
        self.handle: ShapeRenderer | None = None
        self._mounted: Shape | None = None
        self.on_switch: Callable[[Shape], None] | None = None

    @property
    def current(self) -> Shape:
        return self._catalogue[self.index]

    @property
    def phases(self) -> AnimationPhaseController | None:
        handle = self.handle
        return None if handle is None else handle.phases

    def mount_current(self) -> ShapeRenderer:
        """現在の shape をマウントする（既にマウント済みなら先にアンマウントする）。"""
        self._unmount()
        shape = self.current
        self.handle = shape.mount(self._surface_size, self._context_factory)
        self._mounted = shape
        on_switch = self.on_switch
        if on_switch is not None:
            on_switch(shape)
        return self.handle

    def step(self, delta: int) -> ShapeRenderer:
        """delta だけ隣の shape へ切り替える。"""
        self.index = cycle_index(self.index, delta, len(self._catalogue))
        return self.mount_current()

    def tick(self, t: float) -> bool:
        handle = self.handle
        if handle is None:
            return False
        return handle.tick(t)

    def close(self) -> None:
        self._unmount()

    def _unmount(self) -> None:
        handle, shape = self.handle, self._mounted
        if handle is None or shape is None:
            return
        self.handle = None
        self._mounted = None
        shape.unmount(handle)


__all__ = ["GalleryNavigator", "cycle_index"]
