# どこで: `src/polygallery/interactive/runtime/frame_clock.py`。
# 何を: 描画と速度変更の両方が参照するフレーム時刻 `t` を提供する。
# なぜ: 回転角の計算と位相オフセットの更新を同じ時間軸で行い、速度変更時の角度の連続性を保つため。

from __future__ import annotations

import time


class RealTimeClock:
    """実時間ベースのフレーム時計。

    Notes
    -----
    `t` は `perf_counter()` の差分（秒）。
    ギャラリー全体で 1 つを共有し、shape を切り替えても時刻は巻き戻らない。
    """

    def __init__(self, *, start_time: float | None = None) -> None:
        self._start_time = float(time.perf_counter() if start_time is None else start_time)

    def t(self) -> float:
        """現在のフレーム時刻 `t`（秒）を返す。"""

        return float(time.perf_counter() - self._start_time)


__all__ = ["RealTimeClock"]
