"""
どこで: リポジトリ直下 `main.py`。
何を: コマンドライン引数を解釈し、ギャラリーを起動する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

from __future__ import annotations

import argparse
import logging
import sys

sys.path.append("src")

from polygallery import run


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(
        config_path=args.config,
        start_index=args.start,
        speed_gui=not args.no_speed_gui,
        fps=args.fps,
    )
    return 0


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="polygallery")
    p.add_argument("--config", default=None, help="config.yaml のパス（探索より優先）")
    p.add_argument("--start", type=int, default=None, help="最初に表示する shape の番号（0 始まり）")
    p.add_argument("--fps", type=float, default=None, help="目標フレームレート（<=0 でスロットリング無し）")
    p.add_argument("--no-speed-gui", action="store_true", help="回転速度 GUI を開かない")
    return p.parse_args(argv)


if __name__ == "__main__":
    raise SystemExit(main())
