"""
どこで: `src/polygallery/api/runner.py`。公開 API のランナー実装。
何を: pyglet + ModernGL でギャラリーウィンドウ（と任意で速度 GUI）を開き、shape を切り替えながら描画する。
なぜ: `main.py` から 1 関数でギャラリーを起動できる経路を用意するため。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pyglet

from polygallery.core.runtime_config import runtime_config, set_config_path
from polygallery.interactive.runtime.frame_clock import RealTimeClock
from polygallery.interactive.runtime.gallery_window_system import GalleryWindowSystem
from polygallery.interactive.runtime.window_loop import MultiWindowLoop, WindowTask
from polygallery.interactive.shapes import default_catalogue

_logger = logging.getLogger(__name__)


def run(
    *,
    config_path: str | Path | None = None,
    start_index: int | None = None,
    speed_gui: bool = True,
    fps: float | None = None,
) -> None:
    """ギャラリーウィンドウを生成し、ウィンドウが閉じられるまで描画する。

    Parameters
    ----------
    config_path : str | Path | None
        設定ファイル（config.yaml）のパス。指定した場合は探索結果より優先する。
    start_index : int | None
        最初に表示する shape の番号。None の場合は `gallery.start_index`。
    speed_gui : bool
        True の場合、別ウィンドウで tesseract の回転速度スライダーを開く。
    fps : float | None
        目標フレームレート。None の場合は `gallery.fps`。`<=0` はスロットリング無し。

    Returns
    -------
    None
        どちらかのウィンドウを閉じると制御を返す。
    """

    set_config_path(config_path)
    cfg = runtime_config()

    # True にすると速度 GUI のドラッグが抜ける事がある。
    pyglet.options["vsync"] = False

    catalogue = default_catalogue(cfg)
    # 描画と速度変更の両方が同じ時計を参照する。
    clock = RealTimeClock()
    index = cfg.start_index if start_index is None else int(start_index)
    frame_rate = cfg.fps if fps is None else float(fps)

    # --- サブシステムの組み立て ---
    gallery = GalleryWindowSystem(
        catalogue,
        canvas_size=cfg.canvas_size,
        clock=clock,
        start_index=index,
    )
    gallery.window.set_location(*cfg.window_pos_gallery)

    # `closers` は teardown 用（close 順もここで管理する）。
    closers: list[Callable[[], None]] = [gallery.close]
    tasks = [WindowTask(window=gallery.window, draw_frame=gallery.draw_frame)]

    try:
        if speed_gui:
            # 速度 GUI は依存が重い（pyimgui）ので、使うときだけ遅延 import する。
            from polygallery.interactive.runtime.speed_gui_system import SpeedGUIWindowSystem

            gui = SpeedGUIWindowSystem(phases_source=lambda: gallery.phases, time_source=clock.t)
            gui.window.set_location(*cfg.window_pos_speed_gui)
            closers.append(gui.close)
            tasks.append(WindowTask(window=gui.window, draw_frame=gui.draw_frame))

        _logger.info("gallery start: shapes=%d start=%s fps=%s", len(catalogue), catalogue[index].name, frame_rate)
        MultiWindowLoop(tasks, fps=frame_rate).run()
    finally:
        # 作成順の逆で閉じることで、後に作ったサブシステム（GUI など）から先に破棄できる。
        for close in reversed(closers):
            close()
