# どこで: `src/polygallery/__init__.py`。
# 何を: ルート `polygallery` パッケージを定義する。
# なぜ: import 起点を `polygallery` に統一するため。

from __future__ import annotations

from polygallery.api import run

__all__ = ["run"]
