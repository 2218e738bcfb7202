# どこで: `src/polygallery/core/transform4d.py`。
# 何を: 4 次元の平面回転（XY / XZ / XW）と 4D→3D 透視射影を提供する。
# なぜ: tesseract の毎フレーム変換を GPU から独立した純粋関数としてテストできるようにするため。

from __future__ import annotations

import math

import numpy as np

PROJECTION_DISTANCE = 2.0
# strict=False の射影で分母をこの大きさまで持ち上げる。
_MIN_DENOM = 1e-6


def _plane_rotation(i: int, j: int, angle: float) -> np.ndarray:
    c = math.cos(angle)
    s = math.sin(angle)
    m = np.eye(4, dtype=np.float64)
    m[i, i] = c
    m[i, j] = -s
    m[j, i] = s
    m[j, j] = c
    return m


def rotate_xy(angle: float) -> np.ndarray:
    """X-Y 平面の回転（Z, W は恒等）。"""
    return _plane_rotation(0, 1, angle)


def rotate_xz(angle: float) -> np.ndarray:
    """X-Z 平面の回転（Y, W は恒等）。"""
    return _plane_rotation(0, 2, angle)


def rotate_xw(angle: float) -> np.ndarray:
    """X-W 平面の回転（Y, Z は恒等）。"""
    return _plane_rotation(0, 3, angle)


def rotate_vertices(vertices: np.ndarray, xy: float, xz: float, xw: float) -> np.ndarray:
    """全頂点に XY → XZ → XW の順で回転を適用する。

    Parameters
    ----------
    vertices : np.ndarray
        shape (N, 4) の 4D 頂点列。
    xy, xz, xw : float
        各平面の回転角（ラジアン）。

    Returns
    -------
    np.ndarray
        shape (N, 4) の float64 配列。
    """
    v = np.asarray(vertices, dtype=np.float64)
    if v.ndim != 2 or v.shape[1] != 4:
        raise ValueError(f"vertices は shape (N,4) である必要がある: got={v.shape}")
    # 列ベクトル規約: v' = XW @ XZ @ XY @ v。行ベクトル列に対しては転置を右から掛ける。
    combined = rotate_xw(xw) @ rotate_xz(xz) @ rotate_xy(xy)
    return v @ combined.T


def project_to_3d(
    vertices: np.ndarray,
    *,
    distance: float = PROJECTION_DISTANCE,
    strict: bool = True,
) -> np.ndarray:
    """4D 点列を `w_factor = d / (d + w)` で 3D に透視射影する。

    Parameters
    ----------
    strict : bool
        True なら `w == -d` の点で ValueError。False なら分母を符号付きで `1e-6` に持ち上げ、
        有限値を返す（毎フレームの描画経路で使う）。

    Returns
    -------
    np.ndarray
        float32 型 shape (N, 3)。各行は `(x, y, z) * w_factor`。

    Raises
    ------
    ValueError
        `strict=True` で `w == -d` の点（射影が無限遠になる）が含まれる場合。
    """
    v = np.asarray(vertices, dtype=np.float64)
    if v.ndim != 2 or v.shape[1] != 4:
        raise ValueError(f"vertices は shape (N,4) である必要がある: got={v.shape}")
    denom = distance + v[:, 3]
    if strict:
        if np.any(denom == 0.0):
            raise ValueError(f"w == {-distance} の点は射影できない")
    else:
        near_pole = np.abs(denom) < _MIN_DENOM
        denom = np.where(near_pole, np.where(denom < 0.0, -_MIN_DENOM, _MIN_DENOM), denom)
    w_factor = distance / denom
    return (v[:, :3] * w_factor[:, None]).astype(np.float32)


def project_hypercube(vertices: np.ndarray, angles: tuple[float, float, float]) -> np.ndarray:
    """回転（XY→XZ→XW）と射影をまとめて行う。毎フレーム呼ばれるため例外を送出しない。"""
    xy, xz, xw = angles
    return project_to_3d(rotate_vertices(vertices, xy, xz, xw), strict=False)


__all__ = [
    "PROJECTION_DISTANCE",
    "project_hypercube",
    "project_to_3d",
    "rotate_vertices",
    "rotate_xw",
    "rotate_xy",
    "rotate_xz",
]
