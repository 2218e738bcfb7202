"""
どこで: `src/polygallery/core/primitives/hypercube.py`。
何を: 4 次元超立方体（tesseract）の頂点と辺トポロジを生成する。
なぜ: トポロジは不変なので 1 度だけ生成し、毎フレームの射影結果と組み合わせて使うため。
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from polygallery.core.mesh import Mesh

HYPERCUBE_VERTEX_COUNT = 16
# 16 頂点 × 次数 4 / 2。
HYPERCUBE_EDGE_COUNT = 32


@lru_cache(maxsize=1)
def hypercube_vertices() -> np.ndarray:
    """(±1, ±1, ±1, ±1) の全 16 組を返す（x→y→z→w の入れ子順、各 -1, +1）。

    Notes
    -----
    結果はキャッシュして共有するため writeable=False。
    """
    out = np.empty((HYPERCUBE_VERTEX_COUNT, 4), dtype=np.float64)
    i = 0
    for x in (-1.0, 1.0):
        for y in (-1.0, 1.0):
            for z in (-1.0, 1.0):
                for w in (-1.0, 1.0):
                    out[i] = (x, y, z, w)
                    i += 1
    out.setflags(write=False)
    return out


def hypercube_edges(vertices: np.ndarray | None = None) -> np.ndarray:
    """符号パターンがちょうど 1 成分だけ異なる頂点対を辺として返す。

    Returns
    -------
    np.ndarray
        uint32 型 shape (2E,) の (i, j) ペア列（i < j、i の昇順→j の昇順）。GL_LINES 用。
    """
    if vertices is None:
        return _default_edges()
    signs = np.ascontiguousarray(np.sign(np.asarray(vertices, dtype=np.float64)))
    if signs.ndim != 2 or signs.shape[1] != 4:
        raise ValueError(f"vertices は shape (N,4) である必要がある: got={signs.shape}")
    return _hamming1_pairs_numba(signs)


@lru_cache(maxsize=1)
def _default_edges() -> np.ndarray:
    signs = np.ascontiguousarray(np.sign(hypercube_vertices()))
    edges = _hamming1_pairs_numba(signs)
    edges.setflags(write=False)
    return edges


@njit(cache=True)  # type: ignore[misc]
def _hamming1_pairs_numba(signs: np.ndarray) -> np.ndarray:
    """ハミング距離 1 の (i, j) ペアを平坦な uint32 配列で返す（Numba 版）。"""
    n = signs.shape[0]
    dims = signs.shape[1]

    count = 0
    for i in range(n):
        for j in range(i + 1, n):
            diff = 0
            for k in range(dims):
                if signs[i, k] != signs[j, k]:
                    diff += 1
            if diff == 1:
                count += 1

    out = np.empty((count * 2,), dtype=np.uint32)
    cursor = 0
    for i in range(n):
        for j in range(i + 1, n):
            diff = 0
            for k in range(dims):
                if signs[i, k] != signs[j, k]:
                    diff += 1
            if diff == 1:
                out[cursor] = i
                out[cursor + 1] = j
                cursor += 2
    return out


def hypercube_mesh(positions3d: np.ndarray) -> Mesh:
    """射影済み 3D 座標と不変の辺リストから LINES メッシュを作る。"""
    return Mesh(positions=positions3d, indices=hypercube_edges(), primitive="lines")


__all__ = [
    "HYPERCUBE_EDGE_COUNT",
    "HYPERCUBE_VERTEX_COUNT",
    "hypercube_edges",
    "hypercube_mesh",
    "hypercube_vertices",
]
