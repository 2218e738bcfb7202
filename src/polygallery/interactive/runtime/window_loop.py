# どこで: `src/polygallery/interactive/runtime/window_loop.py`。
# 何を: ギャラリーと速度 GUI の 2 ウィンドウを 1 つの `pyglet.app.run()` で回す。
# なぜ: キー入力・スライダー操作・描画を同じスレッドで順に処理し、フレーム途中で状態が変わらないようにするため。

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import pyglet


@dataclass(frozen=True, slots=True)
class WindowTask:
    """pyglet window と、その back buffer へ 1 フレーム描く関数の組。

    `draw_frame` は flip しない。`switch_to()` / `flip()` は `Window.draw()` 側で行われる。
    """

    window: Any
    draw_frame: Callable[[], None]


def frame_interval(fps: float) -> float | None:
    """fps をスケジュール間隔（秒）へ変換する。`fps<=0` は間隔なし（毎 tick）として None。"""
    fps = float(fps)
    return 1.0 / fps if fps > 0 else None


class MultiWindowLoop:
    """登録したウィンドウ群を 1 本の app loop で描画し、どれか 1 つが閉じたら抜ける。"""

    def __init__(self, tasks: Sequence[WindowTask], *, fps: float) -> None:
        self._tasks = tuple(tasks)
        self._interval = frame_interval(fps)

    def _stop(self, *_args: object) -> None:
        # on_close は window ごとに引数付きで呼ばれることがある。
        pyglet.app.exit()

    def _tick(self, dt: float) -> None:
        alive = pyglet.app.windows
        for task in self._tasks:
            # 閉じた window への draw は例外になる。
            if task.window in alive:
                task.window.draw(dt)

    def run(self) -> None:
        """ブロッキングでループを回す。戻った時点でスケジュールは解除済み。"""
        for task in self._tasks:
            task.window.push_handlers(on_close=self._stop, on_draw=task.draw_frame)

        if self._interval is None:
            pyglet.clock.schedule(self._tick)
        else:
            pyglet.clock.schedule_interval(self._tick, self._interval)
        try:
            pyglet.app.run(interval=None)
        finally:
            pyglet.clock.unschedule(self._tick)


__all__ = ["MultiWindowLoop", "WindowTask", "frame_interval"]
