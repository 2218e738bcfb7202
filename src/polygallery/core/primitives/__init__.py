# どこで: `src/polygallery/core/primitives/__init__.py`。
# 何を: 各形状のメッシュ生成関数をまとめて公開する。
# なぜ: shape カタログ側から生成器を 1 箇所で import できるようにするため。

from __future__ import annotations

from polygallery.core.primitives.cube import cube_mesh
from polygallery.core.primitives.hypercube import (
    hypercube_edges,
    hypercube_mesh,
    hypercube_vertices,
)
from polygallery.core.primitives.icosahedron import icosahedron_mesh
from polygallery.core.primitives.sierpinski import MAX_SIERPINSKI_DEPTH, sierpinski_mesh
from polygallery.core.primitives.textured_box import textured_box_mesh

__all__ = [
    "MAX_SIERPINSKI_DEPTH",
    "cube_mesh",
    "hypercube_edges",
    "hypercube_mesh",
    "hypercube_vertices",
    "icosahedron_mesh",
    "sierpinski_mesh",
    "textured_box_mesh",
]
