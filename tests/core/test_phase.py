from __future__ import annotations

import math

import pytest

from polygallery.core.phase import (
    DEFAULT_SPEEDS,
    AnimationPhaseController,
    AxisPhase,
    snap_speed,
)


def test_axis_phase_angle_is_linear_in_time():
    phase = AxisPhase(speed=0.5, offset=0.25)
    assert phase.angle(0.0) == pytest.approx(0.25)
    assert phase.angle(4.0) == pytest.approx(2.25)


def test_with_speed_keeps_angle_continuous_at_change_time():
    phase = AxisPhase(speed=0.5)
    t0 = 12.3
    updated = phase.with_speed(-0.7, t=t0)
    assert updated.speed == -0.7
    assert updated.angle(t0) == pytest.approx(phase.angle(t0))
    # 以降は新しい速度で進む。
    assert updated.angle(t0 + 2.0) - updated.angle(t0) == pytest.approx(-1.4)


def test_controller_starts_with_default_speeds_and_zero_offsets():
    phases = AnimationPhaseController()
    for axis, speed in DEFAULT_SPEEDS.items():
        assert phases.speed(axis) == speed
        assert phases.phase(axis).offset == 0.0
    assert phases.angles(2.0) == pytest.approx((1.0, 0.6, 0.4))


def test_controller_set_speed_only_changes_that_axis():
    phases = AnimationPhaseController()
    before = phases.angles(3.0)
    phases.set_speed("xz", 1.0, t=3.0)
    after = phases.angles(3.0)
    assert after == pytest.approx(before)
    assert phases.speed("xz") == 1.0
    assert phases.speed("xy") == DEFAULT_SPEEDS["xy"]
    assert phases.speed("xw") == DEFAULT_SPEEDS["xw"]


def test_repeated_speed_changes_stay_continuous():
    phases = AnimationPhaseController()
    for t, speed in ((1.0, 0.9), (2.5, -0.3), (7.0, 0.0), (9.1, 1.0)):
        before = phases.angle("xw", t)
        phases.set_speed("xw", speed, t=t)
        assert phases.angle("xw", t) == pytest.approx(before)


def test_controller_rejects_unknown_axis():
    with pytest.raises(KeyError):
        AnimationPhaseController({"yz": 0.1})
    with pytest.raises(KeyError):
        AnimationPhaseController().set_speed("yw", 0.1, t=0.0)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(0.34, 0.3), (0.36, 0.4), (-2.0, -1.0), (5.0, 1.0), (-0.04, 0.0), (0.7, 0.7)],
)
def test_snap_speed_clamps_and_rounds_to_step(raw: float, expected: float):
    assert snap_speed(raw) == expected


def test_snap_speed_never_returns_negative_zero():
    assert math.copysign(1.0, snap_speed(-0.01)) == 1.0
