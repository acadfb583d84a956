from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .attacks import king_in_check
from .board import Board, Color, Piece
from .legality import generate_legal_moves, is_fully_legal, side_has_any_legal_move
from .move import Move, on_board


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameStatus:
    """Check / mobility report for one side.

    The two booleans are what the engine computes; ``checkmate`` and
    ``stalemate`` are derived labels for callers that want them.
    """

    in_check: bool
    has_moves: bool

    @property
    def checkmate(self) -> bool:
        return self.in_check and not self.has_moves

    @property
    def stalemate(self) -> bool:
        return not self.in_check and not self.has_moves


@dataclass
class Game:
    """Game wrapper around a board, as seen by a rendering/input shell.

    Responsibility: answer square selections with legal destinations, apply
    legal moves, report status for the side to move.
    """

    board: Board = field(default_factory=Board.startpos)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    def initialize(self) -> None:
        self.board.initialize()

    @property
    def side_to_move(self) -> Color:
        return self.board.side_to_move

    def piece_at(self, sq: int) -> Piece:
        return self.board.piece_at(sq)

    def select(self, sq: int, side_to_move: Optional[Color] = None) -> List[int]:
        """Return the legal destinations for the piece on ``sq``.

        ``side_to_move`` defaults to the board's; a square holding a piece of
        any other color yields an empty list.
        """
        side = self.board.side_to_move if side_to_move is None else side_to_move
        return generate_legal_moves(self.board, sq, side)

    def try_move(self, from_sq: int, to_sq: int) -> bool:
        """Apply the move if it is legal for the side to move.

        Returns:
            bool: True when the move was legal and has been applied; False
            otherwise, in which case the game is left untouched.
        """
        if not (on_board(from_sq) and on_board(to_sq)):
            return False
        mover = self.board.squares[from_sq]
        if mover.color != self.board.side_to_move:
            return False
        if not is_fully_legal(self.board, from_sq, to_sq):
            return False
        move = Move(from_sq, to_sq)
        self.board.make_move(move)
        self._log_status()
        return True

    def status(self, side: Optional[Color] = None) -> GameStatus:
        s = self.board.side_to_move if side is None else side
        return GameStatus(
            in_check=king_in_check(self.board, s),
            has_moves=side_has_any_legal_move(self.board, s),
        )

    def _log_status(self) -> None:
        if not logger.isEnabledFor(logging.INFO):
            return
        side = self.board.side_to_move
        st = self.status(side)
        name = side.name.lower()
        if st.in_check:
            logger.info("%s is in check", name)
        if not st.has_moves:
            logger.info("%s has no legal moves", name)
