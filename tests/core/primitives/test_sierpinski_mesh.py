import numpy as np
import pytest

from polygallery.core.primitives.sierpinski import (
    MAX_SIERPINSKI_DEPTH,
    ROOT_TETRAHEDRON,
    sierpinski_mesh,
    sierpinski_tetrahedra,
    subdivide_corners,
)


@pytest.mark.parametrize("depth", [0, 1, 2, 5])
def test_sierpinski_triangle_count_is_4_pow_depth_plus_1(depth: int):
    mesh = sierpinski_mesh(depth, rng=np.random.default_rng(0))
    assert mesh.indices is None
    assert mesh.primitive_count == 4 ** (depth + 1)
    assert mesh.vertex_count == 3 * 4 ** (depth + 1)
    assert mesh.colors is not None
    assert mesh.colors.shape == (mesh.vertex_count, 3)


def test_depth_zero_is_the_root_tetrahedron():
    np.testing.assert_allclose(sierpinski_tetrahedra(0)[0], ROOT_TETRAHEDRON)


def test_subdivide_corners_keeps_the_parent_corners():
    children = subdivide_corners(ROOT_TETRAHEDRON[None, :, :])
    assert children.shape == (4, 4, 3)
    for i in range(4):
        np.testing.assert_allclose(children[i, i], ROOT_TETRAHEDRON[i])
    # 子の辺長は親の半分。
    parent_edge = np.linalg.norm(ROOT_TETRAHEDRON[0] - ROOT_TETRAHEDRON[1])
    child_edge = np.linalg.norm(children[0, 0] - children[0, 1])
    assert child_edge == pytest.approx(parent_edge / 2.0)


def test_each_face_has_one_color():
    mesh = sierpinski_mesh(1, rng=np.random.default_rng(3))
    assert mesh.colors is not None
    faces = mesh.colors.reshape(-1, 3, 3)
    assert np.all(faces == faces[:, :1, :])


@pytest.mark.parametrize("depth", [-1, MAX_SIERPINSKI_DEPTH + 1, 2.5, True])
def test_invalid_depth_is_rejected(depth):
    with pytest.raises(ValueError):
        sierpinski_tetrahedra(depth)
