# どこで: `src/polygallery/core/mesh.py`。
# 何を: 生成済みメッシュ（頂点属性配列 + インデックス列）のモデルと検証ロジック。
# なぜ: 生成器と GPU 転送の間の契約を 1 箇所で検証し、以降は不変として扱うため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np

Primitive = Literal["triangles", "lines"]

_VERTS_PER_PRIMITIVE: dict[str, int] = {"triangles": 3, "lines": 2}


def _as_attribute(
    value: np.ndarray | None,
    *,
    name: str,
    widths: tuple[int, ...],
    rows: int,
) -> np.ndarray | None:
    if value is None:
        return None
    arr = np.asarray(value)
    if arr.ndim != 2 or arr.shape[1] not in widths:
        raise ValueError(f"{name} は shape (N,{'|'.join(map(str, widths))}) である必要がある: got={arr.shape}")
    if arr.shape[0] != rows:
        raise ValueError(f"{name} の行数は positions と一致する必要がある: {arr.shape[0]} != {rows}")
    if arr.dtype != np.float32:
        arr = arr.astype(np.float32)
    return arr


@dataclass(frozen=True, slots=True)
class Mesh:
    """生成済みメッシュ。

    Parameters
    ----------
    positions : np.ndarray
        float32 型 shape (N, 3) の頂点位置。
    indices : np.ndarray | None
        uint32 型 shape (K,) の頂点インデックス列。None の場合は非インデックス描画。
    colors : np.ndarray | None
        float32 型 shape (N, 3) または (N, 4) の頂点色。
    texcoords : np.ndarray | None
        float32 型 shape (N, 2) のテクスチャ座標。
    normals : np.ndarray | None
        float32 型 shape (N, 3) の法線。
    primitive : {"triangles", "lines"}
        インデックス（または頂点列）を組み立てるプリミティブ種別。

    Notes
    -----
    不変性を契約とし、配列は writeable=False で保持する。
    全インデックスが頂点数未満であること、要素数がプリミティブ頂点数の倍数であることを検証する。
    """

    positions: np.ndarray
    indices: np.ndarray | None = None
    colors: np.ndarray | None = None
    texcoords: np.ndarray | None = None
    normals: np.ndarray | None = None
    primitive: Primitive = "triangles"

    def __post_init__(self) -> None:
        """形状と整合性を検証し、不変条件を満たす形に固定する。"""
        if self.primitive not in _VERTS_PER_PRIMITIVE:
            raise ValueError(f"未対応の primitive: {self.primitive!r}")

        positions = np.asarray(self.positions)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(f"positions は shape (N,3) である必要がある: got={positions.shape}")
        if positions.dtype != np.float32:
            positions = positions.astype(np.float32)
        n = int(positions.shape[0])

        colors = _as_attribute(self.colors, name="colors", widths=(3, 4), rows=n)
        texcoords = _as_attribute(self.texcoords, name="texcoords", widths=(2,), rows=n)
        normals = _as_attribute(self.normals, name="normals", widths=(3,), rows=n)

        step = _VERTS_PER_PRIMITIVE[self.primitive]
        indices: np.ndarray | None = None
        if self.indices is not None:
            raw = np.asarray(self.indices)
            if raw.ndim != 1:
                raise ValueError("indices は 1 次元配列である必要がある")
            if raw.size and (int(raw.min()) < 0 or int(raw.max()) >= n):
                raise ValueError(f"indices は 0..{n - 1} の範囲である必要がある")
            indices = raw.astype(np.uint32)
            if indices.size % step != 0:
                raise ValueError(f"{self.primitive} の indices 数は {step} の倍数である必要がある: got={indices.size}")
        elif n % step != 0:
            raise ValueError(f"{self.primitive} の頂点数は {step} の倍数である必要がある: got={n}")

        for arr in (positions, indices, colors, texcoords, normals):
            if arr is not None:
                arr.setflags(write=False)

        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "indices", indices)
        object.__setattr__(self, "colors", colors)
        object.__setattr__(self, "texcoords", texcoords)
        object.__setattr__(self, "normals", normals)

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def element_count(self) -> int:
        """1 回の draw call で送る要素数（インデックス数、または頂点数）。"""
        if self.indices is not None:
            return int(self.indices.size)
        return self.vertex_count

    @property
    def primitive_count(self) -> int:
        return self.element_count // _VERTS_PER_PRIMITIVE[self.primitive]


__all__ = ["Mesh", "Primitive"]
