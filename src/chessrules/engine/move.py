from __future__ import annotations

from dataclasses import dataclass


BOARD_SIZE = 64


@dataclass(frozen=True)
class Move:
    """Engine-internal move representation.

    Attributes:
        from_sq (int): Origin square index (0..63).
        to_sq (int): Destination square index (0..63).

    Castling and en passant carry no extra flag; they are inferred from the
    moving piece and the geometry when the move is applied.
    """

    from_sq: int
    to_sq: int

    def to_str(self) -> str:
        """Serialize the move as two square names, e.g. ``"e2e4"``."""
        return square_name(self.from_sq) + square_name(self.to_sq)


def row_of(idx: int) -> int:
    return idx // 8


def col_of(idx: int) -> int:
    return idx % 8


def to_index(row: int, col: int) -> int:
    return row * 8 + col


def on_board(idx: int) -> bool:
    return 0 <= idx < BOARD_SIZE


def parse_square(s: str) -> int:
    """Convert a square name into an index.

    Row 0 holds rank 8, so ``"a8"`` is 0 and ``"h1"`` is 63.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        int: Square index.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    col = ord(s[0]) - ord("a")
    row = 8 - int(s[1])
    return to_index(row, col)


def square_name(idx: int) -> str:
    """Convert a square index into its name.

    Raises:
        ValueError: If ``idx`` is outside the valid square range.
    """
    if not on_board(idx):
        raise ValueError(f"invalid square index: {idx}")
    return chr(ord("a") + col_of(idx)) + str(8 - row_of(idx))


def parse_move(s: str) -> Move:
    """Parse a move written as two square names, e.g. ``"e2e4"``."""
    if len(s) != 4:
        raise ValueError(f"invalid move length: {s!r}")
    return Move(parse_square(s[0:2]), parse_square(s[2:4]))
