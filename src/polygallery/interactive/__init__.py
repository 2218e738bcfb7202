# どこで: `src/polygallery/interactive/__init__.py`。
# 何を: moderngl / pyglet / imgui に依存する描画・ウィンドウ層のパッケージ定義。
# なぜ: GPU/ウィンドウ依存をこの層に閉じ込め、core をヘッドレスに保つため。

from __future__ import annotations

__all__ = []
