from __future__ import annotations

import pytest

from chessrules.engine.board import EMPTY, Board, Color, Piece, PieceKind
from chessrules.engine.move import col_of, parse_square, row_of, square_name, to_index


def test_startpos_layout() -> None:
    b = Board.startpos()
    assert b.piece_at(parse_square("e1")) == Piece(PieceKind.KING, Color.WHITE)
    assert b.piece_at(parse_square("d8")) == Piece(PieceKind.QUEEN, Color.BLACK)
    assert b.piece_at(parse_square("a1")) == Piece(PieceKind.ROOK, Color.WHITE)
    for col in range(8):
        assert b.piece_at(to_index(6, col)) == Piece(PieceKind.PAWN, Color.WHITE)
        assert b.piece_at(to_index(1, col)) == Piece(PieceKind.PAWN, Color.BLACK)
    for sq in range(16, 48):
        assert b.piece_at(sq).is_empty
    assert b.side_to_move == Color.WHITE
    assert b.en_passant is None
    assert not b.rights.king_moved(Color.WHITE)
    assert not b.rights.rook_moved(Color.BLACK, kingside=True)


def test_initialize_resets_everything() -> None:
    b = Board.startpos()
    b.place(parse_square("e4"), Piece(PieceKind.QUEEN, Color.BLACK))
    b.side_to_move = Color.BLACK
    b.rights.mark_king_moved(Color.WHITE)
    b.initialize()
    assert b == Board.startpos()


def test_square_helpers() -> None:
    assert parse_square("a8") == 0
    assert parse_square("h8") == 7
    assert parse_square("a1") == 56
    assert parse_square("h1") == 63
    assert parse_square("e2") == 52
    assert square_name(36) == "e4"
    assert row_of(52) == 6 and col_of(52) == 4
    with pytest.raises(ValueError):
        parse_square("i9")
    with pytest.raises(ValueError):
        square_name(64)


def test_piece_at_out_of_range_is_empty() -> None:
    b = Board.startpos()
    assert b.piece_at(-1) == EMPTY
    assert b.piece_at(64) == EMPTY


def test_piece_empty_invariant() -> None:
    with pytest.raises(ValueError):
        Piece(PieceKind.NONE, Color.WHITE)
    with pytest.raises(ValueError):
        Piece(PieceKind.PAWN, Color.NONE)
    assert Piece() == EMPTY


def test_piece_symbols() -> None:
    assert Piece(PieceKind.KNIGHT, Color.WHITE).symbol == "N"
    assert Piece(PieceKind.KNIGHT, Color.BLACK).symbol == "n"
    assert Piece.from_symbol("q") == Piece(PieceKind.QUEEN, Color.BLACK)
    assert Piece.from_symbol(".") == EMPTY
    with pytest.raises(ValueError):
        Piece.from_symbol("x")


def test_copy_is_independent() -> None:
    b = Board.startpos()
    c = b.copy()
    c.place(parse_square("e2"), EMPTY)
    c.rights.mark_king_moved(Color.WHITE)
    assert not b.piece_at(parse_square("e2")).is_empty
    assert not b.rights.king_moved(Color.WHITE)


def test_render_has_rank_eight_on_top() -> None:
    lines = Board.startpos().render().splitlines()
    assert lines[0] == "8 r n b q k b n r"
    assert lines[7] == "1 R N B Q K B N R"
    assert lines[8] == "  a b c d e f g h"
