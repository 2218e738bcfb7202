# どこで: `tests/conftest.py`。
# 何を: テスト収集より前に pyglet の shadow window 生成を止める。
# なぜ: `pyglet.window` の import がディスプレイ接続を要求し、ヘッドレス環境で収集ごと落ちるのを防ぐため。

from __future__ import annotations

import pyglet

pyglet.options["shadow_window"] = False
