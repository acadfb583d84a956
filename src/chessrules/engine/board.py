from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import List, Optional

from .move import BOARD_SIZE, Move, col_of, on_board, row_of, square_name, to_index


logger = logging.getLogger(__name__)


class Color(IntEnum):
    NONE = 0
    WHITE = 1
    BLACK = 2

    @property
    def opposite(self) -> "Color":
        if self == Color.WHITE:
            return Color.BLACK
        if self == Color.BLACK:
            return Color.WHITE
        return Color.NONE


class PieceKind(IntEnum):
    NONE = 0
    PAWN = 1
    ROOK = 2
    KNIGHT = 3
    BISHOP = 4
    QUEEN = 5
    KING = 6


KIND_TO_CHAR = {
    PieceKind.PAWN: "p",
    PieceKind.ROOK: "r",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}
CHAR_TO_KIND = {v: k for k, v in KIND_TO_CHAR.items()}

BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

# Row 0 is Black's back rank; White advances toward row 0.
WHITE_HOME_ROW = 7
BLACK_HOME_ROW = 0
WHITE_PAWN_ROW = 6
BLACK_PAWN_ROW = 1

WHITE_KING_HOME = to_index(WHITE_HOME_ROW, 4)
BLACK_KING_HOME = to_index(BLACK_HOME_ROW, 4)


@dataclass(frozen=True)
class Piece:
    """Occupant of a square. ``EMPTY`` is the (NONE, NONE) piece."""

    kind: PieceKind = PieceKind.NONE
    color: Color = Color.NONE

    def __post_init__(self) -> None:
        if (self.kind == PieceKind.NONE) != (self.color == Color.NONE):
            raise ValueError(f"invalid piece: kind={self.kind.name} color={self.color.name}")

    @property
    def is_empty(self) -> bool:
        return self.kind == PieceKind.NONE

    @property
    def symbol(self) -> str:
        """One-character symbol: uppercase for White, lowercase for Black, ``.`` if empty."""
        if self.is_empty:
            return "."
        ch = KIND_TO_CHAR[self.kind]
        return ch.upper() if self.color == Color.WHITE else ch

    @classmethod
    def from_symbol(cls, ch: str) -> "Piece":
        """Inverse of :attr:`symbol`, e.g. ``"N"`` -> white knight.

        Raises:
            ValueError: If ``ch`` is not a piece symbol.
        """
        if ch == ".":
            return cls()
        kind = CHAR_TO_KIND.get(ch.lower())
        if kind is None or len(ch) != 1:
            raise ValueError(f"invalid piece symbol: {ch!r}")
        return cls(kind, Color.WHITE if ch.isupper() else Color.BLACK)


EMPTY = Piece()


@dataclass(frozen=True)
class EnPassantTarget:
    """Square skipped by the last two-row pawn advance and the color that made it."""

    square: int
    color: Color


@dataclass
class CastlingRights:
    """Has-moved flags for both kings and all four rooks.

    Flags only ever go from False to True.
    """

    white_king_moved: bool = False
    white_queenside_rook_moved: bool = False
    white_kingside_rook_moved: bool = False
    black_king_moved: bool = False
    black_queenside_rook_moved: bool = False
    black_kingside_rook_moved: bool = False

    def king_moved(self, color: Color) -> bool:
        return self.white_king_moved if color == Color.WHITE else self.black_king_moved

    def rook_moved(self, color: Color, *, kingside: bool) -> bool:
        if color == Color.WHITE:
            return self.white_kingside_rook_moved if kingside else self.white_queenside_rook_moved
        return self.black_kingside_rook_moved if kingside else self.black_queenside_rook_moved

    def mark_king_moved(self, color: Color) -> None:
        if color == Color.WHITE:
            self.white_king_moved = True
        else:
            self.black_king_moved = True

    def mark_rook_moved(self, color: Color, *, kingside: bool) -> None:
        if color == Color.WHITE:
            if kingside:
                self.white_kingside_rook_moved = True
            else:
                self.white_queenside_rook_moved = True
        elif kingside:
            self.black_kingside_rook_moved = True
        else:
            self.black_queenside_rook_moved = True


def home_row(color: Color) -> int:
    return WHITE_HOME_ROW if color == Color.WHITE else BLACK_HOME_ROW


def pawn_direction(color: Color) -> int:
    """Row delta of a single pawn step for ``color``."""
    return -1 if color == Color.WHITE else 1


def rook_home(color: Color, *, kingside: bool) -> int:
    return to_index(home_row(color), 7 if kingside else 0)


def _empty_squares() -> List[Piece]:
    return [EMPTY] * BOARD_SIZE


@dataclass
class Board:
    """Complete game state: squares, side to move, castling flags, en passant.

    Notes:
    - Squares are 0..63, row-major, row 0 = rank 8 (a8=0 .. h1=63).
    - A board is an explicit value owned by its caller; any number of
      independent boards can exist side by side.
    """

    squares: List[Piece] = field(default_factory=_empty_squares)
    side_to_move: Color = Color.WHITE
    rights: CastlingRights = field(default_factory=CastlingRights)
    en_passant: Optional[EnPassantTarget] = None

    def __post_init__(self) -> None:
        if len(self.squares) != BOARD_SIZE:
            raise ValueError(f"board must have {BOARD_SIZE} squares")

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board initialized to the standard chess starting position."""
        board = cls()
        board.initialize()
        return board

    @classmethod
    def empty(cls, side_to_move: Color = Color.WHITE) -> "Board":
        """Create a board without pieces, for building positions by hand."""
        return cls(side_to_move=side_to_move)

    def initialize(self) -> None:
        """Reset to the starting arrangement with all rights intact and no en passant."""
        self.squares = _empty_squares()
        for col, kind in enumerate(BACK_RANK):
            self.squares[to_index(BLACK_HOME_ROW, col)] = Piece(kind, Color.BLACK)
            self.squares[to_index(BLACK_PAWN_ROW, col)] = Piece(PieceKind.PAWN, Color.BLACK)
            self.squares[to_index(WHITE_PAWN_ROW, col)] = Piece(PieceKind.PAWN, Color.WHITE)
            self.squares[to_index(WHITE_HOME_ROW, col)] = Piece(kind, Color.WHITE)
        self.side_to_move = Color.WHITE
        self.rights = CastlingRights()
        self.en_passant = None

    def copy(self) -> "Board":
        return Board(
            squares=list(self.squares),
            side_to_move=self.side_to_move,
            rights=replace(self.rights),
            en_passant=self.en_passant,
        )

    def piece_at(self, sq: int) -> Piece:
        """Return the occupant of ``sq``, or ``EMPTY`` when ``sq`` is off the board."""
        if not on_board(sq):
            return EMPTY
        return self.squares[sq]

    def place(self, sq: int, piece: Piece) -> None:
        if not on_board(sq):
            raise ValueError(f"invalid square index: {sq}")
        self.squares[sq] = piece

    def make_move(self, move: Move) -> None:
        """Apply an already validated ``move`` in place.

        Handles en passant bookkeeping and captures, the rook half of a
        castle, has-moved flags, auto-promotion to a queen, and the turn
        change. No legality check is performed here.

        Raises:
            ValueError: If ``move.from_sq`` is empty.
        """
        from_sq, to_sq = move.from_sq, move.to_sq
        mover = self.squares[from_sq]
        if mover.is_empty:
            raise ValueError(f"no piece to move from {square_name(from_sq)}")
        color = mover.color
        from_row, from_col = row_of(from_sq), col_of(from_sq)
        to_row, to_col = row_of(to_sq), col_of(to_sq)

        self.en_passant = None

        if mover.kind == PieceKind.PAWN:
            if abs(to_row - from_row) == 2:
                skipped = to_index((to_row + from_row) // 2, to_col)
                self.en_passant = EnPassantTarget(skipped, color)
            if to_col != from_col and self.squares[to_sq].is_empty:
                # En passant: the captured pawn stands behind the destination
                cap_row = to_row - pawn_direction(color)
                if 0 <= cap_row < 8:
                    self.squares[to_index(cap_row, to_col)] = EMPTY

        if mover.kind == PieceKind.KING and abs(to_col - from_col) == 2:
            kingside = to_col > from_col
            rook_from = rook_home(color, kingside=kingside)
            rook_to = to_index(from_row, to_col - 1 if kingside else to_col + 1)
            self.squares[rook_to] = self.squares[rook_from]
            self.squares[rook_from] = EMPTY
            self.rights.mark_rook_moved(color, kingside=kingside)

        self.squares[to_sq] = mover
        self.squares[from_sq] = EMPTY

        if mover.kind == PieceKind.KING:
            self.rights.mark_king_moved(color)
        elif mover.kind == PieceKind.ROOK:
            if from_sq == rook_home(color, kingside=False):
                self.rights.mark_rook_moved(color, kingside=False)
            elif from_sq == rook_home(color, kingside=True):
                self.rights.mark_rook_moved(color, kingside=True)

        if mover.kind == PieceKind.PAWN and to_row == home_row(color.opposite):
            self.squares[to_sq] = Piece(PieceKind.QUEEN, color)

        self.side_to_move = self.side_to_move.opposite
        logger.debug("applied %s", move.to_str())

    def render(self) -> str:
        """ASCII diagram with rank 8 on top, e.g. for terminals and logs."""
        lines: List[str] = []
        for row in range(8):
            cells = " ".join(self.squares[to_index(row, col)].symbol for col in range(8))
            lines.append(f"{8 - row} {cells}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
