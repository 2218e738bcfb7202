# どこで: `src/polygallery/interactive/gl/context.py`。
# 何を: pyglet ウィンドウの GL コンテキストを moderngl.Context として取得する。
# なぜ: コンテキスト取得失敗を ContextUnavailable に揃え、shape 側が「描画しない」で済むようにするため。

from __future__ import annotations

import logging
from typing import Any

import moderngl

from polygallery.interactive.gl.errors import ContextUnavailable

_logger = logging.getLogger(__name__)

REQUIRED_GL_VERSION = 330


def create_render_context(window: Any) -> moderngl.Context:
    """window をカレントにし、その GL コンテキストを moderngl で包んで返す。

    Raises
    ------
    ContextUnavailable
        GL 3.3 core を満たすコンテキストが得られない場合。
    """
    try:
        window.switch_to()
        ctx = moderngl.create_context(require=REQUIRED_GL_VERSION)
    except Exception as exc:
        raise ContextUnavailable(f"OpenGL {REQUIRED_GL_VERSION} コンテキストを取得できません: {exc}") from exc
    _logger.debug("GL context: %s", ctx.info.get("GL_VERSION"))
    return ctx


__all__ = ["REQUIRED_GL_VERSION", "create_render_context"]
