from __future__ import annotations

import pytest

from chessrules.engine.board import Board
from chessrules.engine.perft import legal_moves, perft


def test_perft_depth_zero_is_one() -> None:
    assert perft(Board.startpos(), 0) == 1


def test_perft_rejects_negative_depth() -> None:
    with pytest.raises(ValueError):
        perft(Board.startpos(), -1)


@pytest.mark.parametrize("depth, nodes", [(1, 20), (2, 400), (3, 8902)])
def test_perft_startpos(depth: int, nodes: int) -> None:
    b = Board.startpos()
    assert perft(b, depth) == nodes
    assert b == Board.startpos()


def test_legal_moves_are_in_scan_order() -> None:
    moves = list(legal_moves(Board.startpos()))
    assert len(moves) == 20
    keys = [(m.from_sq, m.to_sq) for m in moves]
    assert keys == sorted(keys)
