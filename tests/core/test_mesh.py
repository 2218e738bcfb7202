import numpy as np
import pytest

from polygallery.core.mesh import Mesh


def _triangle() -> np.ndarray:
    return np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]], dtype=np.float64)


def test_mesh_converts_to_float32_and_uint32_and_freezes_arrays():
    mesh = Mesh(positions=_triangle(), indices=[0, 1, 2], colors=np.ones((3, 3)))

    assert mesh.positions.dtype == np.float32
    assert mesh.indices is not None
    assert mesh.indices.dtype == np.uint32
    assert mesh.colors is not None
    assert mesh.colors.dtype == np.float32
    for arr in (mesh.positions, mesh.indices, mesh.colors):
        assert not arr.flags.writeable


def test_mesh_counts_for_indexed_and_non_indexed_meshes():
    indexed = Mesh(positions=np.zeros((4, 3)), indices=[0, 1, 2, 0, 2, 3])
    assert indexed.vertex_count == 4
    assert indexed.element_count == 6
    assert indexed.primitive_count == 2

    flat = Mesh(positions=np.zeros((6, 3)))
    assert flat.element_count == 6
    assert flat.primitive_count == 2

    lines = Mesh(positions=np.zeros((2, 3)), indices=[0, 1], primitive="lines")
    assert lines.primitive_count == 1


def test_mesh_rejects_out_of_range_index():
    with pytest.raises(ValueError):
        Mesh(positions=_triangle(), indices=[0, 1, 3])


def test_mesh_rejects_index_count_not_multiple_of_primitive_size():
    with pytest.raises(ValueError):
        Mesh(positions=_triangle(), indices=[0, 1])
    with pytest.raises(ValueError):
        Mesh(positions=_triangle(), indices=[0, 1, 2], primitive="lines")
    with pytest.raises(ValueError):
        Mesh(positions=np.zeros((4, 3)))


def test_mesh_rejects_attribute_row_mismatch_and_bad_widths():
    with pytest.raises(ValueError):
        Mesh(positions=_triangle(), colors=np.ones((2, 3)))
    with pytest.raises(ValueError):
        Mesh(positions=_triangle(), colors=np.ones((3, 5)))
    with pytest.raises(ValueError):
        Mesh(positions=_triangle(), texcoords=np.ones((3, 3)))
    with pytest.raises(ValueError):
        Mesh(positions=np.zeros((3, 4)))


def test_mesh_rejects_unknown_primitive():
    with pytest.raises(ValueError):
        Mesh(positions=_triangle(), primitive="points")  # type: ignore[arg-type]
