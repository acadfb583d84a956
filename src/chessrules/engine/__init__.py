"""Position & legality engine.

Pure, deterministic, and free of I/O apart from logging.
"""

from __future__ import annotations

from .attacks import find_king, king_in_check, square_is_attacked
from .board import EMPTY, Board, CastlingRights, Color, EnPassantTarget, Piece, PieceKind
from .game import Game, GameStatus
from .legality import (
    generate_legal_moves,
    is_fully_legal,
    is_pseudo_legal,
    side_has_any_legal_move,
    would_leave_king_in_check,
)
from .move import Move, col_of, parse_square, row_of, square_name, to_index

__all__ = [
    "EMPTY",
    "Board",
    "CastlingRights",
    "Color",
    "EnPassantTarget",
    "Game",
    "GameStatus",
    "Move",
    "Piece",
    "PieceKind",
    "col_of",
    "find_king",
    "generate_legal_moves",
    "is_fully_legal",
    "is_pseudo_legal",
    "king_in_check",
    "parse_square",
    "row_of",
    "side_has_any_legal_move",
    "square_is_attacked",
    "square_name",
    "to_index",
    "would_leave_king_in_check",
]
