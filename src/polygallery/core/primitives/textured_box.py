"""
どこで: `src/polygallery/core/primitives/textured_box.py`。
何を: テクスチャ座標と面法線を持つ立方体メッシュを生成する。
なぜ: アルベド/ラフネス/法線マップを貼る立方体では、面ごとに UV と法線を独立させる必要があるため。
"""

from __future__ import annotations

import numpy as np

from polygallery.core.mesh import Mesh
from polygallery.core.primitives.cube import quad_face_indices

_CORNERS = np.array(
    [
        [-1, -1, -1], [1, -1, -1], [1, 1, -1], [-1, 1, -1],
        [-1, -1, 1], [1, -1, 1], [1, 1, 1], [-1, 1, 1],
    ],
    dtype=np.float32,
)

# front, right, back, left, top, bottom
_FACES = np.array(
    [
        [0, 1, 2, 3],
        [1, 5, 6, 2],
        [5, 4, 7, 6],
        [4, 0, 3, 7],
        [3, 2, 6, 7],
        [4, 5, 1, 0],
    ],
    dtype=np.intp,
)

_FACE_NORMALS = np.array(
    [[0, 0, -1], [1, 0, 0], [0, 0, 1], [-1, 0, 0], [0, 1, 0], [0, -1, 0]],
    dtype=np.float32,
)

# 面内 4 頂点 j に対する (j % 2, j // 2)。
_QUAD_UV = np.array([[0, 0], [1, 0], [0, 1], [1, 1]], dtype=np.float32)


def textured_box_mesh() -> Mesh:
    """UV と法線付きの立方体メッシュ（24 頂点 / 36 インデックス）を返す。"""
    face_count = _FACES.shape[0]
    return Mesh(
        positions=_CORNERS[_FACES.reshape(-1)],
        indices=quad_face_indices(face_count),
        texcoords=np.tile(_QUAD_UV, (face_count, 1)),
        normals=np.repeat(_FACE_NORMALS, 4, axis=0),
        primitive="triangles",
    )


__all__ = ["textured_box_mesh"]
