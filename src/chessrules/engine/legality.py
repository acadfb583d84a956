"""Move legality: per-piece movement rules and the self-check filter."""

from __future__ import annotations

from typing import Callable, Dict, List

from .attacks import (
    attacks,
    is_adjacent,
    is_knight_jump,
    king_in_check,
    path_clear,
)
from .board import (
    BLACK_KING_HOME,
    BLACK_PAWN_ROW,
    EMPTY,
    WHITE_KING_HOME,
    WHITE_PAWN_ROW,
    Board,
    Color,
    Piece,
    PieceKind,
    pawn_direction,
    rook_home,
)
from .move import BOARD_SIZE, col_of, on_board, row_of, to_index


Rule = Callable[[Board, int, int, Piece], bool]


def _pawn_rule(board: Board, from_sq: int, to_sq: int, mover: Piece) -> bool:
    direction = pawn_direction(mover.color)
    start_row = WHITE_PAWN_ROW if mover.color == Color.WHITE else BLACK_PAWN_ROW
    from_row, from_col = row_of(from_sq), col_of(from_sq)
    d_row = row_of(to_sq) - from_row
    d_col = col_of(to_sq) - from_col
    target = board.squares[to_sq]

    if d_col == 0 and d_row == direction:
        return target.is_empty
    if d_col == 0 and d_row == 2 * direction and from_row == start_row:
        middle = to_index(from_row + direction, from_col)
        return board.squares[middle].is_empty and target.is_empty
    if abs(d_col) == 1 and d_row == direction:
        if not target.is_empty:
            return True
        ep = board.en_passant
        return ep is not None and ep.square == to_sq and ep.color != mover.color
    return False


def _knight_rule(board: Board, from_sq: int, to_sq: int, mover: Piece) -> bool:
    return is_knight_jump(row_of(to_sq) - row_of(from_sq), col_of(to_sq) - col_of(from_sq))


def _slider_rule(board: Board, from_sq: int, to_sq: int, mover: Piece) -> bool:
    # Rook, bishop and queen move exactly the way they attack.
    return attacks(board, from_sq, to_sq)


def _king_rule(board: Board, from_sq: int, to_sq: int, mover: Piece) -> bool:
    d_row = row_of(to_sq) - row_of(from_sq)
    d_col = col_of(to_sq) - col_of(from_sq)
    if is_adjacent(d_row, d_col):
        return not would_leave_king_in_check(board, from_sq, to_sq)
    if d_row == 0 and abs(d_col) == 2:
        return _castle_allowed(board, from_sq, kingside=d_col > 0, color=mover.color)
    return False


_RULES: Dict[PieceKind, Rule] = {
    PieceKind.PAWN: _pawn_rule,
    PieceKind.KNIGHT: _knight_rule,
    PieceKind.BISHOP: _slider_rule,
    PieceKind.ROOK: _slider_rule,
    PieceKind.QUEEN: _slider_rule,
    PieceKind.KING: _king_rule,
}


def _castle_allowed(board: Board, king_sq: int, *, kingside: bool, color: Color) -> bool:
    home = WHITE_KING_HOME if color == Color.WHITE else BLACK_KING_HOME
    if king_sq != home or board.rights.king_moved(color):
        return False
    if board.rights.rook_moved(color, kingside=kingside):
        return False
    rook_sq = rook_home(color, kingside=kingside)
    if board.squares[rook_sq] != Piece(PieceKind.ROOK, color):
        return False
    if not path_clear(board, king_sq, rook_sq):
        return False
    # Origin, intermediate and destination square must all be safe.
    step = 1 if kingside else -1
    row, col = row_of(king_sq), col_of(king_sq)
    return all(
        _king_safe_on(board, king_sq, to_index(row, col + i * step)) for i in range(3)
    )


def _king_safe_on(board: Board, king_sq: int, probe_sq: int) -> bool:
    """Return True if the king on ``king_sq`` would be unattacked standing on ``probe_sq``."""
    king = board.squares[king_sq]
    saved = board.squares[probe_sq]
    board.squares[king_sq] = EMPTY
    board.squares[probe_sq] = king
    try:
        return not king_in_check(board, king.color)
    finally:
        board.squares[probe_sq] = saved
        board.squares[king_sq] = king


def is_pseudo_legal(board: Board, from_sq: int, to_sq: int) -> bool:
    """Return True if the move obeys the moving piece's rules, ignoring self-check.

    The single exception is a one-step king move, which already rejects
    destinations that are attacked.
    """
    if not (on_board(from_sq) and on_board(to_sq)):
        return False
    mover = board.squares[from_sq]
    if mover.is_empty:
        return False
    if board.squares[to_sq].color == mover.color:
        return False
    return _RULES[mover.kind](board, from_sq, to_sq, mover)


def would_leave_king_in_check(board: Board, from_sq: int, to_sq: int) -> bool:
    """Return True if moving ``from_sq`` to ``to_sq`` leaves the mover's king attacked.

    The move is played on ``board`` and taken back before returning; both
    squares always get their original occupants back.
    """
    if not (on_board(from_sq) and on_board(to_sq)):
        return False
    mover = board.squares[from_sq]
    captured = board.squares[to_sq]
    board.squares[to_sq] = mover
    board.squares[from_sq] = EMPTY
    try:
        return king_in_check(board, mover.color)
    finally:
        board.squares[from_sq] = mover
        board.squares[to_sq] = captured


def is_fully_legal(board: Board, from_sq: int, to_sq: int) -> bool:
    return is_pseudo_legal(board, from_sq, to_sq) and not would_leave_king_in_check(
        board, from_sq, to_sq
    )


def generate_legal_moves(board: Board, from_sq: int, side: Color) -> List[int]:
    """Return the destinations reachable from ``from_sq`` for ``side``, ascending.

    Empty when ``from_sq`` is off the board or not occupied by ``side``.
    """
    if not on_board(from_sq) or side == Color.NONE:
        return []
    if board.squares[from_sq].color != side:
        return []
    return [to_sq for to_sq in range(BOARD_SIZE) if is_fully_legal(board, from_sq, to_sq)]


def side_has_any_legal_move(board: Board, side: Color) -> bool:
    if side == Color.NONE:
        return False
    return any(
        is_fully_legal(board, from_sq, to_sq)
        for from_sq in range(BOARD_SIZE)
        if board.squares[from_sq].color == side
        for to_sq in range(BOARD_SIZE)
    )
