# どこで: `src/polygallery/core/phase.py`。
# 何を: 回転軸ごとの (speed, offset) を保持し、速度変更時にも角度が連続するよう offset を更新する。
# なぜ: スライダー操作で回転速度を変えた瞬間に tesseract の姿勢が跳ばないようにするため。

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

AXES: tuple[str, ...] = ("xy", "xz", "xw")
DEFAULT_SPEEDS: dict[str, float] = {"xy": 0.5, "xz": 0.3, "xw": 0.2}

# 速度スライダーの入力契約（範囲 [-1, 1]、刻み 0.1）。
SPEED_MIN = -1.0
SPEED_MAX = 1.0
SPEED_STEP = 0.1


def snap_speed(value: float) -> float:
    """速度を [SPEED_MIN, SPEED_MAX] にクランプし、SPEED_STEP 刻みに丸める。"""
    v = min(max(float(value), SPEED_MIN), SPEED_MAX)
    steps = round(v / SPEED_STEP)
    # 0.1 の倍数は 2 進で表せないため、小数 1 桁に丸めて -0.0 を 0.0 に揃える。
    return round(steps * SPEED_STEP, 1) + 0.0


@dataclass(frozen=True, slots=True)
class AxisPhase:
    """1 回転軸の角速度と位相オフセット。`angle(t) = t * speed + offset`。"""

    speed: float
    offset: float = 0.0

    def angle(self, t: float) -> float:
        return float(t) * self.speed + self.offset

    def with_speed(self, new_speed: float, *, t: float) -> AxisPhase:
        """時刻 t での角度を保ったまま速度だけを差し替えた AxisPhase を返す。"""
        angle = self.angle(t)
        new_speed_f = float(new_speed)
        return AxisPhase(speed=new_speed_f, offset=angle - float(t) * new_speed_f)


class AnimationPhaseController:
    """XY / XZ / XW 各軸の AxisPhase を管理する。

    Notes
    -----
    状態を変えるのは `set_speed()`（ユーザー入力）だけで、フレームループは読み取りのみ。
    どちらも同じスレッドで交互に呼ばれる前提のため排他制御は持たない。
    """

    def __init__(self, speeds: Mapping[str, float] | None = None) -> None:
        initial = dict(DEFAULT_SPEEDS)
        if speeds is not None:
            unknown = set(speeds) - set(AXES)
            if unknown:
                raise KeyError(f"未知の回転軸: {sorted(unknown)}")
            initial.update({k: float(v) for k, v in speeds.items()})
        self._phases: dict[str, AxisPhase] = {
            axis: AxisPhase(speed=initial[axis]) for axis in AXES
        }

    def phase(self, axis: str) -> AxisPhase:
        return self._phases[axis]

    def speed(self, axis: str) -> float:
        return self._phases[axis].speed

    def angle(self, axis: str, t: float) -> float:
        return self._phases[axis].angle(t)

    def angles(self, t: float) -> tuple[float, float, float]:
        """(xy, xz, xw) の角度を返す。"""
        return (self.angle("xy", t), self.angle("xz", t), self.angle("xw", t))

    def set_speed(self, axis: str, new_speed: float, *, t: float) -> AxisPhase:
        """軸の速度を変更する。時刻 t での角度は変更前後で一致する。

        Raises
        ------
        KeyError
            未知の軸名が指定された場合。
        """
        current = self._phases[axis]
        updated = current.with_speed(new_speed, t=t)
        self._phases[axis] = updated
        return updated


__all__ = [
    "AXES",
    "DEFAULT_SPEEDS",
    "SPEED_MAX",
    "SPEED_MIN",
    "SPEED_STEP",
    "AnimationPhaseController",
    "AxisPhase",
    "snap_speed",
]
