"""
どこで: `api.letterbox_runner.cli`
何を: `pyxi-letterbox` コマンド（argparse）。引数を `run_letterbox` へ渡す。
なぜ: ウィンドウサイズ/比率/帯色をコマンドラインから試せるようにするため。
"""

from __future__ import annotations

import argparse
from typing import Sequence


def _parse_size(text: str) -> tuple[int, int]:
    try:
        w, h = text.lower().split("x")
        return int(w), int(h)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyxi-letterbox",
        description="Force a camera aspect ratio with letterbox/pillarbox bars.",
    )
    parser.add_argument("--size", type=_parse_size, default=None, help="window size, e.g. 1280x720")
    parser.add_argument("--ratio", default=None, help="forced aspect ratio, e.g. 21:9")
    parser.add_argument("--blend", type=float, default=None, help="0 = full screen, 1 = forced ratio")
    parser.add_argument("--bar-color", default=None, help="bar color, e.g. #000000")
    parser.add_argument("--content-color", default=None, help="content color, e.g. #3A6EA5")
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument("--init-only", action="store_true", help="resolve options and exit")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    from api.letterbox import run_letterbox

    run_letterbox(
        window_size=args.size,
        force_aspect_ratio=args.ratio,
        blend=args.blend,
        bar_color=args.bar_color,
        content_color=args.content_color,
        fps=args.fps,
        init_only=args.init_only,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
