# どこで: `src/polygallery/interactive/gl/__init__.py`。
# 何を: ModernGL 上のシェーダ構築・GPU バッファ・テクスチャ・コンテキスト取得をまとめるパッケージ定義。
# なぜ: GL 呼び出しの詳細をレンダラー本体から切り離すため。

from __future__ import annotations

__all__ = []
