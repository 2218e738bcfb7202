"""
どこで: `src/polygallery/core/primitives/cube.py`。
何を: 面ごとに単色で塗り分けた立方体メッシュ（24 頂点 / 36 インデックス）を生成する。
なぜ: 面ごとに色を持たせるには頂点を面単位で複製する必要があるため。
"""

from __future__ import annotations

import numpy as np

from polygallery.core.mesh import Mesh

# 面の並び: front, back, top, bottom, right, left（各 4 頂点）。
_CUBE_POSITIONS = np.array(
    [
        [-1.0, -1.0, 1.0], [1.0, -1.0, 1.0], [1.0, 1.0, 1.0], [-1.0, 1.0, 1.0],
        [-1.0, -1.0, -1.0], [-1.0, 1.0, -1.0], [1.0, 1.0, -1.0], [1.0, -1.0, -1.0],
        [-1.0, 1.0, -1.0], [-1.0, 1.0, 1.0], [1.0, 1.0, 1.0], [1.0, 1.0, -1.0],
        [-1.0, -1.0, -1.0], [1.0, -1.0, -1.0], [1.0, -1.0, 1.0], [-1.0, -1.0, 1.0],
        [1.0, -1.0, -1.0], [1.0, 1.0, -1.0], [1.0, 1.0, 1.0], [1.0, -1.0, 1.0],
        [-1.0, -1.0, -1.0], [-1.0, -1.0, 1.0], [-1.0, 1.0, 1.0], [-1.0, 1.0, -1.0],
    ],
    dtype=np.float32,
)

CUBE_FACE_PALETTE: tuple[tuple[float, float, float, float], ...] = (
    (0.9, 0.1, 0.1, 1.0),  # red
    (0.1, 0.9, 0.1, 1.0),  # green
    (0.1, 0.1, 0.9, 1.0),  # blue
    (0.9, 0.9, 0.1, 1.0),  # yellow
    (0.9, 0.1, 0.9, 1.0),  # purple
    (0.1, 0.9, 0.9, 1.0),  # cyan
)


def quad_face_indices(face_count: int) -> np.ndarray:
    """4 頂点 1 面の並びを 2 三角形ずつに分割したインデックス列を返す。"""
    base = np.arange(face_count, dtype=np.uint32)[:, None] * 4
    pattern = np.array([0, 1, 2, 0, 2, 3], dtype=np.uint32)
    return (base + pattern).reshape(-1)


def cube_mesh() -> Mesh:
    """面ごとに単色の立方体メッシュを返す。

    Returns
    -------
    Mesh
        24 頂点、36 インデックス（TRIANGLES）、RGBA 頂点色。
    """
    colors = np.repeat(np.asarray(CUBE_FACE_PALETTE, dtype=np.float32), 4, axis=0)
    return Mesh(
        positions=_CUBE_POSITIONS.copy(),
        indices=quad_face_indices(6),
        colors=colors,
        primitive="triangles",
    )


__all__ = ["CUBE_FACE_PALETTE", "cube_mesh", "quad_face_indices"]
