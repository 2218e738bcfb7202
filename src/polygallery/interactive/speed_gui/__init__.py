# どこで: `src/polygallery/interactive/speed_gui/__init__.py`。
# 何を: 回転速度 GUI の公開入口（SpeedControlGUI / window 生成）をまとめる。
# なぜ: 呼び出し側が pyimgui の初期化手順を知らずに済むようにするため。

from __future__ import annotations

from .gui import SpeedControlGUI
from .window import create_speed_gui_window

__all__ = ["SpeedControlGUI", "create_speed_gui_window"]
