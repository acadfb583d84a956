#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import os
import sys
import time

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo's src/ to sys.path.
SRC_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from chessrules.engine.game import Game
from chessrules.engine.move import parse_move
from chessrules.engine.perft import perft


def main() -> None:
    parser = argparse.ArgumentParser(description="Run perft from the start position")
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument(
        "--moves",
        type=str,
        nargs="*",
        default=[],
        help="Moves to play from the start position first, e.g. e2e4 e7e5",
    )
    args = parser.parse_args()

    game = Game.new()
    for m in args.moves:
        mv = parse_move(m)
        if not game.try_move(mv.from_sq, mv.to_sq):
            parser.error(f"illegal move: {m}")
    board = game.board
    start = time.perf_counter()
    nodes = perft(board, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
