"""Attack detection.

Attacks are pure geometry: a piece attacks a square if its movement pattern
reaches it, regardless of whether moving there would expose its own king.
"""

from __future__ import annotations

import logging
from typing import Optional

from .board import Board, Color, PieceKind, pawn_direction
from .move import BOARD_SIZE, col_of, on_board, row_of, to_index


logger = logging.getLogger(__name__)


def _step(delta: int) -> int:
    if delta > 0:
        return 1
    if delta < 0:
        return -1
    return 0


def path_clear(board: Board, from_sq: int, to_sq: int) -> bool:
    """Return True if every square strictly between ``from_sq`` and ``to_sq`` is empty.

    Walks one unit step at a time along the row/column/diagonal joining the
    two squares; callers are expected to have checked that they are aligned.
    """
    to_row, to_col = row_of(to_sq), col_of(to_sq)
    row_step = _step(to_row - row_of(from_sq))
    col_step = _step(to_col - col_of(from_sq))
    row = row_of(from_sq) + row_step
    col = col_of(from_sq) + col_step
    while row != to_row or col != to_col:
        if not board.squares[to_index(row, col)].is_empty:
            return False
        row += row_step
        col += col_step
    return True


def is_straight(d_row: int, d_col: int) -> bool:
    return (d_row == 0) != (d_col == 0)


def is_diagonal(d_row: int, d_col: int) -> bool:
    return d_row != 0 and abs(d_row) == abs(d_col)


def is_knight_jump(d_row: int, d_col: int) -> bool:
    return (abs(d_row), abs(d_col)) in ((1, 2), (2, 1))


def is_adjacent(d_row: int, d_col: int) -> bool:
    return abs(d_row) <= 1 and abs(d_col) <= 1 and (d_row, d_col) != (0, 0)


def attacks(board: Board, from_sq: int, target: int) -> bool:
    """Return True if the occupant of ``from_sq`` attacks ``target``."""
    piece = board.squares[from_sq]
    d_row = row_of(target) - row_of(from_sq)
    d_col = col_of(target) - col_of(from_sq)
    kind = piece.kind

    if kind == PieceKind.PAWN:
        return d_row == pawn_direction(piece.color) and abs(d_col) == 1
    if kind == PieceKind.KNIGHT:
        return is_knight_jump(d_row, d_col)
    if kind == PieceKind.KING:
        return is_adjacent(d_row, d_col)
    if kind == PieceKind.ROOK:
        return is_straight(d_row, d_col) and path_clear(board, from_sq, target)
    if kind == PieceKind.BISHOP:
        return is_diagonal(d_row, d_col) and path_clear(board, from_sq, target)
    if kind == PieceKind.QUEEN:
        return (is_straight(d_row, d_col) or is_diagonal(d_row, d_col)) and path_clear(
            board, from_sq, target
        )
    return False


def square_is_attacked(board: Board, target: int, by_color: Color) -> bool:
    """Return True if any piece of ``by_color`` attacks ``target``."""
    if not on_board(target):
        return False
    for sq in range(BOARD_SIZE):
        if board.squares[sq].color == by_color and sq != target and attacks(board, sq, target):
            return True
    return False


def find_king(board: Board, color: Color) -> Optional[int]:
    """Return the square of ``color``'s king, or None if there is none."""
    for sq in range(BOARD_SIZE):
        piece = board.squares[sq]
        if piece.kind == PieceKind.KING and piece.color == color:
            return sq
    return None


def king_in_check(board: Board, color: Color) -> bool:
    """Return True if ``color``'s king is attacked by the opponent.

    A missing king means the board was corrupted; it is logged and reported
    as "not in check" rather than raised.
    """
    king_sq = find_king(board, color)
    if king_sq is None:
        logger.error("no %s king on board", color.name.lower())
        return False
    return square_is_attacked(board, king_sq, color.opposite)
