# どこで: `src/polygallery/interactive/runtime/frame_task.py`。
# 何を: 1 フレーム分の処理を「再装填される 1 回きりのタスク」として表し、取り消しフラグで止める。
# なぜ: アンマウント後にフレームが 1 つも実行されないことを、ループ側の状態に頼らず保証するため。

from __future__ import annotations

from typing import Callable


class FrameTask:
    """フレームごとに 1 回だけ `step(t)` を実行する協調タスク。

    `run(t)` は装填済みかつ未取り消しのときに限り `step(t)` を呼び、呼び終えたら次フレーム用に再装填する。
    `cancel()` 後は二度と `step` を呼ばない。
    """

    def __init__(self, step: Callable[[float], None]) -> None:
        self._step = step
        self._armed = False
        self._cancelled = False

    @property
    def armed(self) -> bool:
        return self._armed

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def arm(self) -> None:
        if not self._cancelled:
            self._armed = True

    def run(self, t: float) -> bool:
        """1 フレームを実行する。実行したら True を返す。"""
        if self._cancelled or not self._armed:
            return False
        self._armed = False
        self._step(t)
        # step の中で cancel された場合は再装填しない。
        if not self._cancelled:
            self._armed = True
        return True

    def cancel(self) -> None:
        self._cancelled = True
        self._armed = False


__all__ = ["FrameTask"]
