# どこで: `src/polygallery/interactive/runtime/shape_renderer.py`。
# 何を: 1 つの shape のライフサイクル（setup → start → tick → teardown）と 1 フレーム分の描画を担う。
# なぜ: shape ごとに描画ループを書かず、ShapeConfig の差分だけで全 shape を同じ手順で描くため。

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np

from polygallery.core.matrices import to_gl_bytes
from polygallery.core.phase import AnimationPhaseController
from polygallery.interactive.gl.errors import GalleryGLError, ShaderBuildError
from polygallery.interactive.gl.gpu_mesh import GpuMesh
from polygallery.interactive.gl.shader import build_program
from polygallery.interactive.gl.textures import TextureSet
from polygallery.interactive.runtime.frame_task import FrameTask

if TYPE_CHECKING:
    from polygallery.interactive.shapes import ShapeConfig, TesseractAnimator

_logger = logging.getLogger(__name__)


class RenderState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    RUNNING = "running"
    TORN_DOWN = "torn_down"


def write_uniform(program: Any, name: str, value: Any) -> None:
    """uniform に値を書き込む。4x4 行列は列優先のバイト列で渡す。"""
    if isinstance(value, np.ndarray):
        if value.shape == (4, 4):
            program[name].write(to_gl_bytes(value))
            return
        program[name].value = tuple(float(v) for v in value.reshape(-1))
        return
    program[name].value = value


class ShapeRenderer:
    """1 shape 分の GPU リソースとフレームループ。

    Notes
    -----
    状態遷移: UNINITIALIZED -(setup)-> READY -(start)-> RUNNING -(teardown)-> TORN_DOWN。
    setup が GL 系エラーで失敗した場合は UNINITIALIZED のまま `error` を保持し、何も描かない。
    teardown はどの状態からでも呼べる。
    """

    def __init__(
        self,
        config: ShapeConfig,
        *,
        context_factory: Callable[[], Any],
        surface_size: tuple[int, int],
    ) -> None:
        self.config = config
        self._context_factory = context_factory
        self._surface_size = (int(surface_size[0]), int(surface_size[1]))
        self.state = RenderState.UNINITIALIZED
        self.error: Exception | None = None

        self.ctx: Any | None = None
        self.program: Any | None = None
        self.gpu_mesh: GpuMesh | None = None
        self.textures: TextureSet | None = None
        self.animator: TesseractAnimator | None = None
        self._task: FrameTask | None = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def phases(self) -> AnimationPhaseController | None:
        """位相を持つ shape（tesseract）ならその AnimationPhaseController を返す。"""
        if self.animator is None:
            return None
        return self.animator.phases

    # ---------- ライフサイクル ----------
    def setup(self) -> bool:
        """GPU リソースを確保する。成功したら True を返す。

        GL 系エラーは呼び出し元へ送出せず、ログと `error` に残す。
        """
        if self.state is not RenderState.UNINITIALIZED:
            raise RuntimeError(f"setup は UNINITIALIZED からのみ呼べる: state={self.state.value}")

        config = self.config
        try:
            ctx = self._context_factory()
            self.ctx = ctx
            self.program = build_program(
                ctx,
                config.vertex_shader,
                config.fragment_shader,
                required=config.required_names(),
            )
            mesh = config.build_mesh()
            if config.animator_factory is not None:
                self.animator = config.animator_factory()
            self.gpu_mesh = GpuMesh(
                ctx,
                self.program,
                mesh,
                config.attributes,
                dynamic_positions=self.animator is not None,
            )
            # 射影行列は描画面サイズにのみ依存するため、ここで一度だけ書き込む。
            write_uniform(self.program, config.projection_uniform, config.camera.projection(self._surface_size))
            for name, value in config.static_uniforms.items():
                write_uniform(self.program, name, value)
            if config.texture_paths:
                self.textures = TextureSet(ctx, config.texture_paths)
        except GalleryGLError as exc:
            self.error = exc
            if isinstance(exc, ShaderBuildError):
                _logger.error("shape のマウントに失敗しました: name=%s error=%s\n%s", self.name, exc, exc.log)
            else:
                _logger.error("shape のマウントに失敗しました: name=%s error=%s", self.name, exc)
            self._release_resources()
            return False

        self.state = RenderState.READY
        return True

    def start(self) -> bool:
        """フレームループを開始する。READY 以外では何もしない。"""
        if self.state is not RenderState.READY:
            return False
        self._task = FrameTask(self.render_frame)
        self._task.arm()
        self.state = RenderState.RUNNING
        return True

    def tick(self, t: float) -> bool:
        """フレームを 1 つ進める。描画したら True を返す。"""
        task = self._task
        if task is None:
            return False
        return task.run(t)

    def render_frame(self, t: float) -> None:
        """1 フレームを描画する（draw call はちょうど 1 回）。"""
        ctx = self.ctx
        program = self.program
        gpu_mesh = self.gpu_mesh
        assert ctx is not None and program is not None and gpu_mesh is not None

        ctx.clear(*self.config.clear_color, 1.0, depth=1.0)
        ctx.enable(ctx.DEPTH_TEST)
        ctx.depth_func = "<="

        if self.animator is not None:
            gpu_mesh.update_positions(self.animator.positions(t))
        if self.textures is not None:
            self.textures.poll()
            self.textures.use()

        for name, value in self.config.frame_uniforms(t).items():
            write_uniform(program, name, value)

        gpu_mesh.render()

    def teardown(self) -> None:
        """フレームループを止め、GPU リソースを解放する（冪等）。"""
        if self.state is RenderState.TORN_DOWN:
            return
        if self._task is not None:
            self._task.cancel()
        self._release_resources()
        self.state = RenderState.TORN_DOWN

    def _release_resources(self) -> None:
        # 解放失敗は残りの解放を止めない。
        for label, resource in (
            ("textures", self.textures),
            ("mesh", self.gpu_mesh),
            ("program", self.program),
        ):
            if resource is None:
                continue
            try:
                resource.release()
            except Exception:
                _logger.exception("GPU リソースの解放に失敗しました: name=%s resource=%s", self.name, label)
        self.textures = None
        self.gpu_mesh = None
        self.program = None


__all__ = ["RenderState", "ShapeRenderer", "write_uniform"]
