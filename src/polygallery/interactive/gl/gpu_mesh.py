"""
どこで: `src/polygallery/interactive/gl/gpu_mesh.py`。
何を: Mesh の VBO/IBO/VAO の確保・更新・解放を担当し、1 draw call で描画できる GpuMesh を管理。
なぜ: GPU 転送の詳細を ShapeRenderer から切り離し、確保失敗時の後始末を一元化するため。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import moderngl
import numpy as np

from polygallery.core.mesh import Mesh
from polygallery.interactive.gl.errors import ResourceAllocationError

# 転送できる Mesh の属性名。
MESH_ATTRIBUTES: tuple[str, ...] = ("positions", "colors", "texcoords", "normals")


class GpuMesh:
    """
    Mesh を GPU に置き、描画に必要なバッファ一式を保持する
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        mesh: Mesh,
        attributes: Mapping[str, str],
        *,
        dynamic_positions: bool = False,
    ) -> None:
        """
        ctx: moderngl コンテキスト
        program: attributes の名前を持つリンク済みシェーダプログラム
        attributes: Mesh の属性名 -> シェーダの in 変数名
        dynamic_positions: True なら positions を毎フレーム `update_positions()` で差し替える
        """
        unknown = set(attributes) - set(MESH_ATTRIBUTES)
        if unknown:
            raise ValueError(f"未知の Mesh 属性: {sorted(unknown)}")
        if "positions" not in attributes:
            raise ValueError("attributes には positions の割り当てが必要")

        self.ctx = ctx
        self.program = program
        self.mesh = mesh
        self.mode = ctx.LINES if mesh.primitive == "lines" else ctx.TRIANGLES
        self.element_count: int = mesh.element_count
        self.vbos: dict[str, Any] = {}
        self.ibo: Any | None = None
        self.vao: Any | None = None

        try:
            content = []
            for field, attr_name in attributes.items():
                data = getattr(mesh, field)
                if data is None:
                    raise ValueError(f"Mesh.{field} が None のため {attr_name} に割り当てられない")
                dynamic = dynamic_positions and field == "positions"
                vbo = ctx.buffer(np.ascontiguousarray(data, dtype=np.float32).tobytes(), dynamic=dynamic)
                self.vbos[field] = vbo
                content.append((vbo, f"{int(data.shape[1])}f", attr_name))

            if mesh.indices is not None:
                self.ibo = ctx.buffer(np.ascontiguousarray(mesh.indices, dtype=np.uint32).tobytes())
            self.vao = ctx.vertex_array(
                program,
                content,
                index_buffer=self.ibo,
                index_element_size=4,
            )
        except moderngl.Error as exc:
            self.release()
            raise ResourceAllocationError(f"メッシュ用バッファの確保に失敗しました: {exc}") from exc
        except Exception:
            self.release()
            raise

    # ---------- バッファ操作 ----------
    def update_positions(self, positions: np.ndarray) -> None:
        """頂点位置を書き換える（行数は変えられない）。"""
        vbo = self.vbos["positions"]
        data = np.ascontiguousarray(positions, dtype=np.float32)
        if data.shape != self.mesh.positions.shape:
            raise ValueError(
                f"positions の shape は {self.mesh.positions.shape} のまま更新する必要がある: got={data.shape}"
            )
        vbo.write(data.tobytes())

    def render(self) -> None:
        """1 回の draw call で全要素を描画する。"""
        if self.vao is None:
            raise RuntimeError("解放済みの GpuMesh は描画できない")
        self.vao.render(mode=self.mode, vertices=self.element_count)

    def release(self) -> None:
        """GPU のメモリを解放する（終了時に使う）"""
        if self.vao is not None:
            self.vao.release()
            self.vao = None
        if self.ibo is not None:
            self.ibo.release()
            self.ibo = None
        for vbo in self.vbos.values():
            vbo.release()
        self.vbos.clear()


__all__ = ["MESH_ATTRIBUTES", "GpuMesh"]
