# どこで: `src/polygallery/interactive/shapes.py`。
# 何を: ギャラリーに並ぶ shape（メッシュ生成器・シェーダ・カメラ・uniform）の定義と、そのマウント/アンマウントを提供する。
# なぜ: 形状ごとの差分をデータ（ShapeConfig）に寄せ、描画ループを共通の ShapeRenderer 1 つで済ませるため。

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any

import numpy as np

from polygallery.core.matrices import (
    aspect_ratio,
    look_at,
    normalize,
    perspective,
    rotation,
    rotation_y,
    translation,
)
from polygallery.core.mesh import Mesh
from polygallery.core.phase import AnimationPhaseController
from polygallery.core.primitives import (
    cube_mesh,
    hypercube_edges,
    hypercube_mesh,
    hypercube_vertices,
    icosahedron_mesh,
    sierpinski_mesh,
    textured_box_mesh,
)
from polygallery.core.runtime_config import RuntimeConfig
from polygallery.core.transform4d import project_hypercube
from polygallery.interactive.gl import shader_sources
from polygallery.interactive.runtime.shape_renderer import ShapeRenderer

_logger = logging.getLogger(__name__)

UniformValue = Any

# 色付き shape 共通の uniform 名。
_MODEL_VIEW = "uModelViewMatrix"
_PROJECTION = "uProjectionMatrix"


@dataclass(frozen=True, slots=True)
class CameraSpec:
    """透視投影のパラメータ（fov は度）。"""

    fov_degrees: float = 45.0
    near: float = 0.1
    far: float = 100.0

    def projection(self, surface_size: tuple[int, int]) -> np.ndarray:
        """描画面サイズから透視投影行列を作る（マウント時に 1 回だけ呼ぶ）。"""
        width, height = surface_size
        return perspective(math.radians(self.fov_degrees), aspect_ratio(width, height), self.near, self.far)


class TesseractAnimator:
    """4D 超立方体の位相を持ち、毎フレームの 3D 射影座標を返す。

    Notes
    -----
    頂点と辺はマウント時に 1 回だけ作り、以降は不変。
    毎フレーム変わるのは `positions(t)` が返す 16 頂点の射影座標だけ。
    """

    def __init__(self, phases: AnimationPhaseController | None = None) -> None:
        self.vertices = hypercube_vertices()
        self.edges = hypercube_edges()
        self.phases = phases if phases is not None else AnimationPhaseController()

    def positions(self, t: float) -> np.ndarray:
        return project_hypercube(self.vertices, self.phases.angles(t))


def _tesseract_rest_mesh() -> Mesh:
    return hypercube_mesh(project_hypercube(hypercube_vertices(), (0.0, 0.0, 0.0)))


@dataclass(frozen=True, slots=True)
class ShapeConfig:
    """1 つの shape を描くのに必要なものを束ねる。

    Parameters
    ----------
    name : str
        表示名（ウィンドウタイトルに使う）。
    vertex_shader, fragment_shader : str
        GLSL ソース。
    build_mesh : Callable[[], Mesh]
        マウントのたびに呼ぶメッシュ生成器。
    attributes : Mapping[str, str]
        Mesh の属性名 -> シェーダの in 変数名。
    camera : CameraSpec
        透視投影のパラメータ。
    projection_uniform : str
        投影行列を書き込む uniform 名。
    frame_uniforms : Callable[[float], Mapping[str, UniformValue]]
        時刻 t から毎フレーム書き込む uniform を返す。
    static_uniforms : Mapping[str, UniformValue]
        マウント時に 1 回だけ書き込む uniform。
    texture_paths : tuple[Path | None, ...]
        テクスチャユニット 0.. に対応する画像パス。空なら TextureSet を作らない。
    animator_factory : Callable[[], TesseractAnimator] | None
        頂点位置を毎フレーム更新する shape のみ指定する。
    clear_color : tuple[float, float, float]
        毎フレームのクリア色。
    """

    name: str
    vertex_shader: str
    fragment_shader: str
    build_mesh: Callable[[], Mesh]
    attributes: Mapping[str, str]
    camera: CameraSpec
    projection_uniform: str
    frame_uniforms: Callable[[float], Mapping[str, UniformValue]]
    static_uniforms: Mapping[str, UniformValue] = field(default_factory=dict)
    texture_paths: tuple[Path | None, ...] = ()
    animator_factory: Callable[[], TesseractAnimator] | None = None
    clear_color: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def required_names(self) -> tuple[str, ...]:
        """リンク後のプログラムに存在しなければならない attribute / uniform 名。"""
        names = [
            *self.attributes.values(),
            self.projection_uniform,
            *self.static_uniforms,
            *self.frame_uniforms(0.0),
        ]
        return tuple(dict.fromkeys(names))


class Shape:
    """ShapeConfig をマウント/アンマウントできる単位として包む。"""

    def __init__(self, config: ShapeConfig) -> None:
        self.config = config

    @property
    def name(self) -> str:
        return self.config.name

    def mount(
        self,
        surface_size: tuple[int, int],
        context_factory: Callable[[], Any],
    ) -> ShapeRenderer:
        """GPU リソースを確保して描画を開始し、アンマウント用のハンドルを返す。

        Notes
        -----
        GL 系の失敗は ShapeRenderer 内でログに残り、ハンドルは「何も描かない」状態で返る。
        """
        _logger.info("mount: %s", self.name)
        renderer = ShapeRenderer(self.config, context_factory=context_factory, surface_size=surface_size)
        if renderer.setup():
            renderer.start()
        return renderer

    def unmount(self, handle: ShapeRenderer) -> None:
        _logger.info("unmount: %s", self.name)
        handle.teardown()


# ---------- 各 shape の uniform ----------


def _spinning_model_view(t: float, *, distance: float, axis: Sequence[float]) -> dict[str, np.ndarray]:
    return {_MODEL_VIEW: translation(0.0, 0.0, -distance) @ rotation(t, axis)}


def _static_model_view(t: float, *, distance: float) -> dict[str, np.ndarray]:
    return {_MODEL_VIEW: translation(0.0, 0.0, -distance)}


def _textured_frame_uniforms(t: float) -> dict[str, np.ndarray]:
    return {"u_modelMatrix": rotation_y(t)}


_TEXTURED_EYE = (0.0, 0.0, 5.0)


def _textured_static_uniforms() -> dict[str, UniformValue]:
    light = normalize((1.0, 1.0, -1.0))
    return {
        "u_viewMatrix": look_at(_TEXTURED_EYE, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
        "u_lightDirection": tuple(float(c) for c in light),
        "u_viewPosition": _TEXTURED_EYE,
        "u_albedoMap": 0,
        "u_roughnessMap": 1,
        "u_normalMap": 2,
    }


def default_catalogue(cfg: RuntimeConfig) -> list[Shape]:
    """ギャラリーの shape 一覧を表示順に返す。"""
    background = cfg.background_color
    color_attributes = {"positions": "aVertexPosition", "colors": "aVertexColor"}

    cube = ShapeConfig(
        name="Cube",
        vertex_shader=shader_sources.COLOR_VERTEX_SHADER,
        fragment_shader=shader_sources.COLOR_FRAGMENT_SHADER,
        build_mesh=cube_mesh,
        attributes=color_attributes,
        camera=CameraSpec(fov_degrees=45.0),
        projection_uniform=_PROJECTION,
        frame_uniforms=partial(_spinning_model_view, distance=6.0, axis=(-1.0, 1.0, 0.0)),
        clear_color=background,
    )
    icosahedron = ShapeConfig(
        name="Icosahedron",
        vertex_shader=shader_sources.COLOR_VERTEX_SHADER,
        fragment_shader=shader_sources.COLOR_FRAGMENT_SHADER,
        build_mesh=icosahedron_mesh,
        attributes=color_attributes,
        camera=CameraSpec(fov_degrees=45.0),
        projection_uniform=_PROJECTION,
        frame_uniforms=partial(_spinning_model_view, distance=6.0, axis=(0.0, 1.0, 0.0)),
        clear_color=background,
    )
    sierpinski = ShapeConfig(
        name="Sierpinski Pyramid",
        vertex_shader=shader_sources.SIERPINSKI_VERTEX_SHADER,
        fragment_shader=shader_sources.SIERPINSKI_FRAGMENT_SHADER,
        build_mesh=partial(sierpinski_mesh, cfg.sierpinski_depth),
        attributes=color_attributes,
        camera=CameraSpec(fov_degrees=25.0),
        projection_uniform=_PROJECTION,
        frame_uniforms=partial(_spinning_model_view, distance=4.6, axis=(0.3, 0.3, 0.0)),
        clear_color=background,
    )
    tesseract = ShapeConfig(
        name="Tesseract",
        vertex_shader=shader_sources.WIREFRAME_VERTEX_SHADER,
        fragment_shader=shader_sources.WIREFRAME_FRAGMENT_SHADER,
        build_mesh=_tesseract_rest_mesh,
        attributes={"positions": "aVertexPosition"},
        camera=CameraSpec(fov_degrees=45.0),
        projection_uniform=_PROJECTION,
        frame_uniforms=partial(_static_model_view, distance=15.0),
        animator_factory=TesseractAnimator,
        clear_color=background,
    )
    textured_cube = ShapeConfig(
        name="Textured Cube",
        vertex_shader=shader_sources.TEXTURED_VERTEX_SHADER,
        fragment_shader=shader_sources.TEXTURED_FRAGMENT_SHADER,
        build_mesh=textured_box_mesh,
        attributes={"positions": "a_position", "texcoords": "a_texcoord", "normals": "a_normal"},
        camera=CameraSpec(fov_degrees=45.0),
        projection_uniform="u_projectionMatrix",
        frame_uniforms=_textured_frame_uniforms,
        static_uniforms=_textured_static_uniforms(),
        texture_paths=tuple(cfg.texture_paths),
        clear_color=(0.5, 0.5, 0.5),
    )
    return [Shape(c) for c in (cube, icosahedron, sierpinski, tesseract, textured_cube)]


__all__ = [
    "CameraSpec",
    "Shape",
    "ShapeConfig",
    "TesseractAnimator",
    "default_catalogue",
]
