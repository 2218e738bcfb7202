"""
どこで: `src/polygallery/core/primitives/icosahedron.py`。
何を: 正二十面体メッシュを生成する（面ごとの HSV 色 / 頂点ごとのランダム色）。
なぜ: 面単位の決定的な配色を既定とし、旧来の頂点ランダム配色も比較用に残すため。
"""

from __future__ import annotations

from typing import Literal

import numpy as np

from polygallery.core.colorize import face_color
from polygallery.core.mesh import Mesh

PHI = (1.0 + 5.0**0.5) / 2.0

ICOSAHEDRON_VERTICES = np.array(
    [
        [-1.0, PHI, 0.0], [1.0, PHI, 0.0], [-1.0, -PHI, 0.0], [1.0, -PHI, 0.0],
        [0.0, -1.0, PHI], [0.0, 1.0, PHI], [0.0, -1.0, -PHI], [0.0, 1.0, -PHI],
        [PHI, 0.0, -1.0], [PHI, 0.0, 1.0], [-PHI, 0.0, -1.0], [-PHI, 0.0, 1.0],
    ],
    dtype=np.float64,
)
ICOSAHEDRON_VERTICES.setflags(write=False)

ICOSAHEDRON_FACES = np.array(
    [
        [0, 11, 5], [0, 5, 1], [0, 1, 7], [0, 7, 10], [0, 10, 11],
        [1, 5, 9], [5, 11, 4], [11, 10, 2], [10, 7, 6], [7, 1, 8],
        [3, 9, 4], [3, 4, 2], [3, 2, 6], [3, 6, 8], [3, 8, 9],
        [4, 9, 5], [2, 4, 11], [6, 2, 10], [8, 6, 7], [9, 8, 1],
    ],
    dtype=np.uint32,
)
ICOSAHEDRON_FACES.setflags(write=False)

Coloring = Literal["face_hsv", "vertex_random"]


def _face_hsv_mesh() -> Mesh:
    # 面ごとに色を持たせるため、インデックスを展開して 60 頂点にする。
    positions = ICOSAHEDRON_VERTICES[ICOSAHEDRON_FACES.reshape(-1)]
    colors = np.empty((positions.shape[0], 4), dtype=np.float32)
    for i, (a, b, c) in enumerate(ICOSAHEDRON_FACES):
        rgba = face_color(
            ICOSAHEDRON_VERTICES[a], ICOSAHEDRON_VERTICES[b], ICOSAHEDRON_VERTICES[c]
        )
        colors[3 * i : 3 * i + 3] = rgba
    return Mesh(
        positions=positions,
        indices=np.arange(positions.shape[0], dtype=np.uint32),
        colors=colors,
        primitive="triangles",
    )


def _vertex_random_mesh(rng: np.random.Generator) -> Mesh:
    colors = np.ones((ICOSAHEDRON_VERTICES.shape[0], 4), dtype=np.float32)
    colors[:, :3] = rng.random((ICOSAHEDRON_VERTICES.shape[0], 3))
    return Mesh(
        positions=ICOSAHEDRON_VERTICES,
        indices=ICOSAHEDRON_FACES.reshape(-1),
        colors=colors,
        primitive="triangles",
    )


def icosahedron_mesh(
    coloring: Coloring = "face_hsv",
    *,
    rng: np.random.Generator | None = None,
) -> Mesh:
    """正二十面体メッシュを返す。

    Parameters
    ----------
    coloring : {"face_hsv", "vertex_random"}, optional
        "face_hsv" は面重心の向きから決めた色を面ごとに塗る（60 頂点、決定的）。
        "vertex_random" は元の 12 頂点にランダム色を置く（補間でグラデーションになる）。
    rng : numpy.random.Generator | None, optional
        "vertex_random" で使う乱数生成器。None の場合は新規に生成する。

    Raises
    ------
    ValueError
        未対応の coloring が指定された場合。
    """
    if coloring == "face_hsv":
        return _face_hsv_mesh()
    if coloring == "vertex_random":
        return _vertex_random_mesh(np.random.default_rng() if rng is None else rng)
    raise ValueError(f"未対応の coloring: {coloring!r}")


__all__ = [
    "ICOSAHEDRON_FACES",
    "ICOSAHEDRON_VERTICES",
    "PHI",
    "Coloring",
    "icosahedron_mesh",
]
