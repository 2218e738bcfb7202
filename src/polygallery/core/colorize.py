# どこで: `src/polygallery/core/colorize.py`。
# 何を: 面の向き（重心方向）から HSV 経由で RGBA を決める面カラーライザ。
# なぜ: 乱数に頼らず、同じ面には常に同じ色を割り当てるため。

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

FACE_SATURATION = 0.9
FACE_VALUE = 0.9

# 1.0 未満で最大の float64。h を [0, 1) に収めるための上限。
_HUE_MAX = float(np.nextafter(1.0, 0.0))


def hsv_to_rgb(h: float, s: float, v: float) -> tuple[float, float, float]:
    """HSV を RGB に変換する（h は [0, 1)、6 セクタ式）。"""
    c = v * s
    x = c * (1.0 - abs(((h * 6.0) % 2.0) - 1.0))
    m = v - c

    if h < 1.0 / 6.0:
        r1, g1, b1 = c, x, 0.0
    elif h < 2.0 / 6.0:
        r1, g1, b1 = x, c, 0.0
    elif h < 3.0 / 6.0:
        r1, g1, b1 = 0.0, c, x
    elif h < 4.0 / 6.0:
        r1, g1, b1 = 0.0, x, c
    elif h < 5.0 / 6.0:
        r1, g1, b1 = x, 0.0, c
    else:
        r1, g1, b1 = c, 0.0, x

    return (r1 + m, g1 + m, b1 + m)


def face_hue(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> float:
    """3 頂点の重心方向から色相 h ∈ [0, 1) を求める。

    Notes
    -----
    重心を単位長に正規化し、`h = (x + 1 + y + 1) / 4` を [0, 1) にクランプする。
    重心が原点に一致する退化面は方向を持たないため h=0.5（x=y=0 相当）とする。
    """
    verts = np.asarray([a, b, c], dtype=np.float64)
    if verts.shape != (3, 3):
        raise ValueError(f"face_hue は 3 頂点 × 3 成分を受け取る: got={verts.shape}")
    center = verts.mean(axis=0)
    norm = float(np.linalg.norm(center))
    if norm == 0.0:
        return 0.5
    center = center / norm
    h = (float(center[0]) + 1.0 + float(center[1]) + 1.0) / 4.0
    return min(max(h, 0.0), _HUE_MAX)


def face_color(
    a: Sequence[float],
    b: Sequence[float],
    c: Sequence[float],
    *,
    saturation: float = FACE_SATURATION,
    value: float = FACE_VALUE,
) -> tuple[float, float, float, float]:
    """面の RGBA（alpha は常に 1.0）を返す。"""
    r, g, bl = hsv_to_rgb(face_hue(a, b, c), saturation, value)
    return (r, g, bl, 1.0)


__all__ = ["FACE_SATURATION", "FACE_VALUE", "face_color", "face_hue", "hsv_to_rgb"]
