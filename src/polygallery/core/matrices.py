# どこで: `src/polygallery/core/matrices.py`。
# 何を: カメラ/モデル用の 4x4 行列（透視投影・平行移動・回転・look-at）を提供する。
# なぜ: 行列の規約（行優先・列ベクトル）と GL への受け渡し方法を一箇所に集約するため。

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def normalize(v: Sequence[float]) -> np.ndarray:
    """ベクトルを単位長にして返す（零ベクトルはそのまま返す）。"""
    arr = np.asarray(v, dtype=np.float64)
    n = float(np.linalg.norm(arr))
    if n == 0.0:
        return arr
    return arr / n


def aspect_ratio(width: float, height: float) -> float:
    """描画面の縦横比 width / height を返す。"""
    if width <= 0 or height <= 0:
        raise ValueError(f"描画面サイズは正である必要がある: got=({width}, {height})")
    return float(width) / float(height)


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """透視投影行列を返す（fovy はラジアン、OpenGL の NDC 規約）。"""
    f = 1.0 / math.tan(fovy / 2.0)
    nf = 1.0 / (near - far)
    return np.array(
        [
            [f / aspect, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [0.0, 0.0, (far + near) * nf, 2.0 * far * near * nf],
            [0.0, 0.0, -1.0, 0.0],
        ],
        dtype=np.float32,
    )


def translation(x: float, y: float, z: float) -> np.ndarray:
    m = np.eye(4, dtype=np.float32)
    m[:3, 3] = (x, y, z)
    return m


def rotation(angle: float, axis: Sequence[float]) -> np.ndarray:
    """任意軸まわりの回転行列（Rodrigues）。"""
    x, y, z = normalize(axis)
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    return np.array(
        [
            [x * x * t + c, x * y * t - z * s, x * z * t + y * s, 0.0],
            [y * x * t + z * s, y * y * t + c, y * z * t - x * s, 0.0],
            [z * x * t - y * s, z * y * t + x * s, z * z * t + c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    )


def rotation_y(angle: float) -> np.ndarray:
    return rotation(angle, (0.0, 1.0, 0.0))


def look_at(
    eye: Sequence[float],
    center: Sequence[float],
    up: Sequence[float],
) -> np.ndarray:
    """eye から center を向くビュー行列を返す。"""
    eye_v = np.asarray(eye, dtype=np.float64)
    forward = normalize(np.asarray(center, dtype=np.float64) - eye_v)
    side = normalize(np.cross(forward, np.asarray(up, dtype=np.float64)))
    upward = np.cross(side, forward)

    m = np.eye(4, dtype=np.float64)
    m[0, :3] = side
    m[1, :3] = upward
    m[2, :3] = -forward
    m[:3, 3] = (-side @ eye_v, -upward @ eye_v, forward @ eye_v)
    return m.astype(np.float32)


def to_gl_bytes(matrix: np.ndarray) -> bytes:
    """行優先の行列を ModernGL の uniform 用（列優先）バイト列にする。"""
    return np.ascontiguousarray(np.asarray(matrix, dtype="f4").T).tobytes()


__all__ = [
    "aspect_ratio",
    "look_at",
    "normalize",
    "perspective",
    "rotation",
    "rotation_y",
    "to_gl_bytes",
    "translation",
]
