from __future__ import annotations

from typing import Dict

from chessrules.engine.board import Board, Color, Piece, PieceKind
from chessrules.engine.game import Game
from chessrules.engine.move import parse_square as sq


def _game(pieces: Dict[str, str], side: Color = Color.WHITE) -> Game:
    b = Board.empty(side_to_move=side)
    for name, symbol in pieces.items():
        b.place(sq(name), Piece.from_symbol(symbol))
    return Game(board=b)


def test_white_pawn_push_promotes_to_queen() -> None:
    game = _game({"a7": "P", "e1": "K", "h5": "k"})
    assert game.try_move(sq("a7"), sq("a8"))
    assert game.piece_at(sq("a8")) == Piece(PieceKind.QUEEN, Color.WHITE)
    assert game.piece_at(sq("a7")).is_empty


def test_white_pawn_capture_promotes_to_queen() -> None:
    game = _game({"a7": "P", "b8": "r", "e1": "K", "h5": "k"})
    assert game.try_move(sq("a7"), sq("b8"))
    assert game.piece_at(sq("b8")) == Piece(PieceKind.QUEEN, Color.WHITE)


def test_black_pawn_promotes_on_rank_one() -> None:
    game = _game({"d2": "p", "h8": "K", "a5": "k"}, side=Color.BLACK)
    assert game.try_move(sq("d2"), sq("d1"))
    assert game.piece_at(sq("d1")) == Piece(PieceKind.QUEEN, Color.BLACK)


def test_promotion_can_give_check() -> None:
    game = _game({"e7": "P", "a1": "K", "h8": "k"})
    assert game.try_move(sq("e7"), sq("e8"))
    assert game.status().in_check
