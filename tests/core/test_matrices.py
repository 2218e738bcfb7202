import math

import numpy as np
import pytest

from polygallery.core.matrices import (
    aspect_ratio,
    look_at,
    normalize,
    perspective,
    rotation,
    rotation_y,
    to_gl_bytes,
    translation,
)


def test_aspect_ratio_and_invalid_sizes():
    assert aspect_ratio(640, 480) == pytest.approx(4.0 / 3.0)
    with pytest.raises(ValueError):
        aspect_ratio(0, 480)
    with pytest.raises(ValueError):
        aspect_ratio(640, -1)


def test_perspective_maps_near_and_far_planes_to_ndc_bounds():
    m = perspective(math.radians(45.0), 4.0 / 3.0, 0.1, 100.0)
    assert m.dtype == np.float32
    for z, ndc in ((-0.1, -1.0), (-100.0, 1.0)):
        clip = m.astype(np.float64) @ np.array([0.0, 0.0, z, 1.0])
        assert clip[2] / clip[3] == pytest.approx(ndc, abs=1e-4)


def test_translation_moves_points():
    p = translation(1.0, 2.0, -6.0) @ np.array([0.0, 0.0, 0.0, 1.0])
    np.testing.assert_allclose(p, (1.0, 2.0, -6.0, 1.0))


def test_rotation_about_y_matches_right_hand_rule():
    p = rotation_y(math.pi / 2.0) @ np.array([1.0, 0.0, 0.0, 1.0])
    np.testing.assert_allclose(p, (0.0, 0.0, -1.0, 1.0), atol=1e-6)


def test_rotation_normalizes_its_axis():
    np.testing.assert_allclose(rotation(0.8, (0.0, 5.0, 0.0)), rotation_y(0.8), atol=1e-6)
    m = rotation(1.1, (-1.0, 1.0, 0.0)).astype(np.float64)
    np.testing.assert_allclose(m @ m.T, np.eye(4), atol=1e-6)


def test_look_at_places_eye_at_origin_looking_down_negative_z():
    view = look_at((0.0, 0.0, 5.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    np.testing.assert_allclose(view @ np.array([0.0, 0.0, 5.0, 1.0]), (0.0, 0.0, 0.0, 1.0), atol=1e-6)
    np.testing.assert_allclose(view @ np.array([0.0, 0.0, 0.0, 1.0]), (0.0, 0.0, -5.0, 1.0), atol=1e-6)


def test_normalize_keeps_zero_vector():
    np.testing.assert_allclose(normalize((0.0, 0.0, 0.0)), (0.0, 0.0, 0.0))
    np.testing.assert_allclose(normalize((1.0, 1.0, -1.0)), np.array((1.0, 1.0, -1.0)) / math.sqrt(3.0))


def test_to_gl_bytes_is_column_major():
    m = translation(1.0, 2.0, 3.0)
    data = np.frombuffer(to_gl_bytes(m), dtype=np.float32)
    assert data.size == 16
    # 列優先では平行移動成分が末尾 4 要素に並ぶ。
    np.testing.assert_allclose(data[12:15], (1.0, 2.0, 3.0))
