from __future__ import annotations

import pytest

from chessrules.engine.board import Board, Color, Piece, PieceKind
from chessrules.engine.move import Move, parse_move
from chessrules.engine.move import parse_square as sq


def test_make_move_toggles_side_and_moves_piece() -> None:
    b = Board.startpos()
    b.make_move(parse_move("g1f3"))
    assert b.side_to_move == Color.BLACK
    assert b.piece_at(sq("f3")) == Piece(PieceKind.KNIGHT, Color.WHITE)
    assert b.piece_at(sq("g1")).is_empty
    b.make_move(parse_move("b8c6"))
    assert b.side_to_move == Color.WHITE


def test_rook_flags_only_from_home_corner() -> None:
    b = Board.empty()
    b.place(sq("e1"), Piece.from_symbol("K"))
    b.place(sq("e8"), Piece.from_symbol("k"))
    b.place(sq("d4"), Piece.from_symbol("R"))
    b.place(sq("a1"), Piece.from_symbol("R"))
    b.make_move(parse_move("d4d5"))
    assert not b.rights.white_queenside_rook_moved
    assert not b.rights.white_kingside_rook_moved
    b.side_to_move = Color.WHITE
    b.make_move(parse_move("a1a2"))
    assert b.rights.white_queenside_rook_moved
    assert not b.rights.white_kingside_rook_moved


def test_king_move_marks_flag() -> None:
    b = Board.startpos()
    b.make_move(parse_move("e2e4"))
    b.make_move(parse_move("e7e5"))
    b.make_move(parse_move("e1e2"))
    assert b.rights.white_king_moved
    assert not b.rights.black_king_moved


def test_capture_replaces_occupant() -> None:
    b = Board.startpos()
    for m in ("e2e4", "d7d5", "e4d5"):
        b.make_move(parse_move(m))
    assert b.piece_at(sq("d5")) == Piece(PieceKind.PAWN, Color.WHITE)
    assert sum(1 for p in b.squares if p.color == Color.BLACK) == 15


def test_make_move_from_empty_square_raises() -> None:
    b = Board.startpos()
    with pytest.raises(ValueError):
        b.make_move(Move(sq("e4"), sq("e5")))
