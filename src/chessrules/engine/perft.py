from __future__ import annotations

from typing import Iterator

from .board import Board
from .legality import generate_legal_moves
from .move import BOARD_SIZE, Move


def legal_moves(board: Board) -> Iterator[Move]:
    """Yield every legal move for the side to move, in board scan order."""
    side = board.side_to_move
    for from_sq in range(BOARD_SIZE):
        if board.squares[from_sq].color != side:
            continue
        for to_sq in generate_legal_moves(board, from_sq, side):
            yield Move(from_sq, to_sq)


def perft(board: Board, depth: int) -> int:
    """Compute perft node count for `board` at `depth`.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Children are produced by copy-apply, so `board` itself is never mutated.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for m in legal_moves(board):
        if depth == 1:
            nodes += 1
            continue
        child = board.copy()
        child.make_move(m)
        nodes += perft(child, depth - 1)
    return nodes
