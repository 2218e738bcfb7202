import math

import pytest

from polygallery.core.colorize import face_color, face_hue, hsv_to_rgb


@pytest.mark.parametrize(
    ("h", "expected"),
    [
        (0.0, (1.0, 0.0, 0.0)),
        (1.0 / 3.0, (0.0, 1.0, 0.0)),
        (2.0 / 3.0, (0.0, 0.0, 1.0)),
        (0.5, (0.0, 1.0, 1.0)),
    ],
)
def test_hsv_to_rgb_primary_hues(h: float, expected: tuple[float, float, float]):
    assert hsv_to_rgb(h, 1.0, 1.0) == pytest.approx(expected)


def test_hsv_to_rgb_zero_saturation_is_gray():
    assert hsv_to_rgb(0.7, 0.0, 0.4) == pytest.approx((0.4, 0.4, 0.4))


def test_face_hue_uses_normalized_centroid():
    # 重心 (1, 1, 0)/√2 → h = (1/√2 + 1 + 1/√2 + 1) / 4
    a, b, c = (1.0, 1.0, 0.0), (1.0, 1.0, 0.0), (1.0, 1.0, 0.0)
    expected = (2.0 / math.sqrt(2.0) + 2.0) / 4.0
    assert face_hue(a, b, c) == pytest.approx(expected)


def test_face_hue_stays_below_one_and_non_negative():
    top = face_hue((3.0, 3.0, 0.0), (3.0, 3.0, 0.0), (3.0, 3.0, 0.0))
    bottom = face_hue((-1.0, -1.0, 0.0), (-1.0, -1.0, 0.0), (-1.0, -1.0, 0.0))
    assert 0.0 <= bottom < 1.0
    assert 0.0 <= top < 1.0


def test_face_hue_of_degenerate_centroid_is_half():
    assert face_hue((1.0, 0.0, 0.0), (-1.0, 0.0, 0.0), (0.0, 0.0, 0.0)) == 0.5


def test_face_hue_rejects_wrong_shape():
    with pytest.raises(ValueError):
        face_hue((1.0, 0.0), (0.0, 1.0), (0.0, 0.0))


def test_face_color_is_deterministic_and_opaque():
    verts = ((0.0, 1.0, 0.5), (1.0, 0.0, 0.5), (0.5, 0.5, 1.0))
    first = face_color(*verts)
    second = face_color(*verts)
    assert first == second
    assert first[3] == 1.0
    assert all(0.0 <= c <= 1.0 for c in first[:3])
