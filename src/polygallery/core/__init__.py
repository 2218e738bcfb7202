# どこで: `src/polygallery/core/__init__.py`。
# 何を: GPU に依存しない幾何計算（メッシュ生成 / 4D 変換 / 位相管理 / 行列 / 設定）のパッケージ定義。
# なぜ: ヘッドレスでテストできる層を interactive から切り離しておくため。

from __future__ import annotations

__all__ = []
