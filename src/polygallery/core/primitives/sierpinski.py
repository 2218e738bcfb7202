"""
どこで: `src/polygallery/core/primitives/sierpinski.py`。
何を: 角の 4 小四面体だけを再帰的に残すシェルピンスキー四面体メッシュを生成する。
なぜ: 中央の八面体セルを除くことでフラクタルの見た目を得るため。
"""

from __future__ import annotations

import numpy as np

from polygallery.core.mesh import Mesh

MAX_SIERPINSKI_DEPTH = 7
"""生成コストは 4^depth で増えるため、depth はこの値までに制限する。"""

ROOT_TETRAHEDRON = np.array(
    [
        [0.0, 1.0, 0.0],
        [-0.8165, -0.3333, -0.4714],
        [0.8165, -0.3333, -0.4714],
        [0.0, -0.3333, 0.9428],
    ],
    dtype=np.float64,
)
ROOT_TETRAHEDRON.setflags(write=False)

# 四面体 (a, b, c, d) の 4 面: (a,b,c), (a,c,d), (a,d,b), (b,d,c)。
_TETRA_FACES = np.array([[0, 1, 2], [0, 2, 3], [0, 3, 1], [1, 3, 2]], dtype=np.intp)


def subdivide_corners(tetrahedra: np.ndarray) -> np.ndarray:
    """各四面体を角の 4 小四面体に分割する。

    Parameters
    ----------
    tetrahedra : np.ndarray
        shape (T, 4, 3) の四面体列（各行は角 a, b, c, d）。

    Returns
    -------
    np.ndarray
        shape (4T, 4, 3)。親ごとに (a,ab,ac,ad), (ab,b,bc,bd), (ac,bc,c,cd), (ad,bd,cd,d) の順で並ぶ。
    """
    a, b, c, d = (tetrahedra[:, i] for i in range(4))
    ab = (a + b) * 0.5
    ac = (a + c) * 0.5
    ad = (a + d) * 0.5
    bc = (b + c) * 0.5
    bd = (b + d) * 0.5
    cd = (c + d) * 0.5
    children = np.stack(
        [
            np.stack([a, ab, ac, ad], axis=1),
            np.stack([ab, b, bc, bd], axis=1),
            np.stack([ac, bc, c, cd], axis=1),
            np.stack([ad, bd, cd, d], axis=1),
        ],
        axis=1,
    )
    return children.reshape(-1, 4, 3)


def sierpinski_tetrahedra(depth: int) -> np.ndarray:
    """depth 回分割した後の四面体列 shape (4^depth, 4, 3) を返す。"""
    if isinstance(depth, bool) or not isinstance(depth, (int, np.integer)):
        raise ValueError(f"depth は整数である必要がある: got={depth!r}")
    if not 0 <= int(depth) <= MAX_SIERPINSKI_DEPTH:
        raise ValueError(f"depth は 0..{MAX_SIERPINSKI_DEPTH} である必要がある: got={depth}")

    tetrahedra = ROOT_TETRAHEDRON[None, :, :].copy()
    for _ in range(int(depth)):
        tetrahedra = subdivide_corners(tetrahedra)
    return tetrahedra


def sierpinski_mesh(depth: int, *, rng: np.random.Generator | None = None) -> Mesh:
    """シェルピンスキー四面体を非インデックスの三角形列として返す。

    Parameters
    ----------
    depth : int
        再帰深さ（0..MAX_SIERPINSKI_DEPTH）。三角形数は 4^(depth+1)。
    rng : numpy.random.Generator | None, optional
        面色の乱数生成器。None の場合は新規に生成する。

    Returns
    -------
    Mesh
        indices=None、positions と colors（RGB、面単位で同色）が同じ頂点数を持つ。
    """
    tetrahedra = sierpinski_tetrahedra(depth)
    # (T, 4 面, 3 頂点, 3) → (T*12, 3)
    positions = tetrahedra[:, _TETRA_FACES].reshape(-1, 3)

    face_count = positions.shape[0] // 3
    generator = np.random.default_rng() if rng is None else rng
    face_colors = generator.random((face_count, 3)).astype(np.float32)
    colors = np.repeat(face_colors, 3, axis=0)

    return Mesh(positions=positions, indices=None, colors=colors, primitive="triangles")


__all__ = [
    "MAX_SIERPINSKI_DEPTH",
    "ROOT_TETRAHEDRON",
    "sierpinski_mesh",
    "sierpinski_tetrahedra",
    "subdivide_corners",
]
