from __future__ import annotations

import math

import numpy as np
import pytest

from polygallery.core.matrices import aspect_ratio, perspective
from polygallery.core.phase import DEFAULT_SPEEDS
from polygallery.interactive.runtime.shape_renderer import RenderState
from polygallery.interactive.shapes import CameraSpec, TesseractAnimator, default_catalogue


def test_catalogue_order(gallery_config):
    names = [shape.name for shape in default_catalogue(gallery_config)]
    assert names == ["Cube", "Icosahedron", "Sierpinski Pyramid", "Tesseract", "Textured Cube"]


def test_catalogue_uses_configured_depth(gallery_config):
    sierpinski = default_catalogue(gallery_config)[2]
    assert sierpinski.config.build_mesh().primitive_count == 4 ** (gallery_config.sierpinski_depth + 1)


def test_required_names_cover_attributes_and_uniforms(gallery_config):
    cube = default_catalogue(gallery_config)[0]
    assert cube.config.required_names() == (
        "aVertexPosition",
        "aVertexColor",
        "uProjectionMatrix",
        "uModelViewMatrix",
    )

    textured = default_catalogue(gallery_config)[4]
    names = textured.config.required_names()
    assert len(names) == len(set(names))
    for name in ("a_texcoord", "u_viewMatrix", "u_modelMatrix", "u_albedoMap", "u_lightDirection"):
        assert name in names


def test_camera_projection_uses_surface_aspect():
    camera = CameraSpec(fov_degrees=45.0, near=0.1, far=100.0)
    np.testing.assert_allclose(
        camera.projection((640, 480)),
        perspective(math.radians(45.0), aspect_ratio(640, 480), 0.1, 100.0),
    )
    with pytest.raises(ValueError):
        camera.projection((0, 480))


def test_tesseract_animator_starts_at_rest_pose():
    animator = TesseractAnimator()
    assert animator.phases.speed("xy") == DEFAULT_SPEEDS["xy"]

    positions = animator.positions(0.0)
    assert positions.shape == (16, 3)
    # 角度 0 では回転なし。w=±1 が 2/(2±1) 倍に縮尺される。
    scale = 2.0 / (2.0 + animator.vertices[:, 3])
    np.testing.assert_allclose(positions, animator.vertices[:, :3] * scale[:, None], rtol=1e-6)


def test_mount_and_unmount(gallery_config, dummy_ctx):
    shape = default_catalogue(gallery_config)[1]
    handle = shape.mount((640, 480), lambda: dummy_ctx)
    assert handle.state is RenderState.RUNNING

    shape.unmount(handle)
    assert handle.state is RenderState.TORN_DOWN
