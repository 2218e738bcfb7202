# どこで: `src/polygallery/interactive/gl/textures.py`。
# 何を: albedo / roughness / normal の 3 テクスチャを非同期に読み込み、テクスチャユニットへ束ねる。
# なぜ: 画像デコードでフレームループを止めず、読み込み完了前もプレースホルダで描画を続けるため。

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from pathlib import Path
from typing import Any

import moderngl
import numpy as np

from polygallery.interactive.gl.errors import ResourceAllocationError

_logger = logging.getLogger(__name__)

# 読み込み完了前に束ねる 1x1 のマゼンタ。
PLACEHOLDER_RGBA = bytes((255, 0, 255, 255))


def load_rgba(path: str | Path) -> np.ndarray:
    """画像を RGBA8 で読み込み、GL の原点（左下）に合わせて上下反転した配列を返す。

    Returns
    -------
    np.ndarray
        uint8 型 shape (height, width, 4)。
    """
    from PIL import Image

    with Image.open(path) as image:
        data = np.array(image.convert("RGBA"), dtype=np.uint8)
    return np.ascontiguousarray(data[::-1])


class TextureSet:
    """テクスチャユニット 0..n-1 に対応するテクスチャ群。

    Notes
    -----
    デコードはワーカースレッド 1 本で行い、GPU への転送は `poll()`（フレームスレッド）で行う。
    moderngl のコンテキストはスレッド間で共有できないため、ワーカーは numpy 配列だけを返す。
    """

    def __init__(self, ctx: Any, paths: Sequence[str | Path | None]) -> None:
        self.ctx = ctx
        self._textures: list[Any] = []
        self._pending: dict[int, Future[np.ndarray]] = {}
        self._paths = [None if p is None else Path(p) for p in paths]
        self._executor: ThreadPoolExecutor | None = None

        try:
            for _ in self._paths:
                self._textures.append(ctx.texture((1, 1), 4, PLACEHOLDER_RGBA))
        except moderngl.Error as exc:
            self.release()
            raise ResourceAllocationError(f"テクスチャの確保に失敗しました: {exc}") from exc

        if any(p is not None for p in self._paths):
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="polygallery-texture")
            for unit, path in enumerate(self._paths):
                if path is not None:
                    self._pending[unit] = self._executor.submit(load_rgba, path)

    @property
    def pending(self) -> bool:
        return bool(self._pending)

    def wait(self, timeout: float | None = None) -> None:
        """未完了の読み込みを待つ（転送は行わない）。"""
        wait_futures(list(self._pending.values()), timeout=timeout)

    def poll(self) -> None:
        """完了した読み込みを GPU に転送し、プレースホルダと差し替える。"""
        for unit, future in list(self._pending.items()):
            if not future.done():
                continue
            del self._pending[unit]
            try:
                data = future.result()
            except Exception as exc:
                _logger.warning(
                    "テクスチャの読み込みに失敗しました（プレースホルダを使い続けます）: path=%s error=%s",
                    self._paths[unit],
                    exc,
                )
                continue
            height, width = int(data.shape[0]), int(data.shape[1])
            try:
                texture = self.ctx.texture((width, height), 4, data.tobytes())
            except moderngl.Error as exc:
                _logger.warning("テクスチャの転送に失敗しました: path=%s error=%s", self._paths[unit], exc)
                continue
            texture.build_mipmaps()
            self._textures[unit].release()
            self._textures[unit] = texture
            _logger.info("テクスチャを読み込みました: unit=%d path=%s size=%dx%d", unit, self._paths[unit], width, height)

    def use(self) -> None:
        """各テクスチャを自分のユニット番号に束ねる。"""
        for unit, texture in enumerate(self._textures):
            texture.use(location=unit)

    def release(self) -> None:
        for future in self._pending.values():
            future.cancel()
        self._pending.clear()
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        for texture in self._textures:
            texture.release()
        self._textures.clear()


__all__ = ["PLACEHOLDER_RGBA", "TextureSet", "load_rgba"]
