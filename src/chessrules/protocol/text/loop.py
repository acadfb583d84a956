from __future__ import annotations

import sys
from typing import Callable, Iterable, List, Optional

from ...engine.game import Game
from ...engine.move import parse_square, square_name


Writer = Callable[[str], None]


def parse_square_arg(token: str) -> Optional[int]:
    """Accept a square as an index (``"52"``) or a name (``"e2"``).

    Returns None when the token is neither; out-of-range indices are passed
    through so the engine can answer them with its usual negative result.
    """
    try:
        return int(token)
    except ValueError:
        pass
    try:
        return parse_square(token.lower())
    except ValueError:
        return None


class TextShell:
    """Line-oriented command adapter around the engine.

    Notes:
    - Core remains pure; I/O is isolated here.
    - Commands: new, board, select <sq>, move <from> <to>, status, help, quit.
    """

    def __init__(self) -> None:
        self.game: Game = Game.new()

    # ---- Command handlers ----
    def cmd_new(self, write: Writer) -> None:
        self.game.initialize()
        write("ok new game")

    def cmd_board(self, write: Writer) -> None:
        for line in self.game.board.render().splitlines():
            write(line)
        write(f"{self.game.side_to_move.name.lower()} to move")

    def cmd_select(self, args: List[str], write: Writer) -> None:
        if len(args) != 1:
            write("error usage: select <square>")
            return
        sq = parse_square_arg(args[0])
        if sq is None:
            write(f"error invalid square {args[0]!r}")
            return
        moves = self.game.select(sq)
        write("moves " + " ".join(square_name(m) for m in moves))

    def cmd_move(self, args: List[str], write: Writer) -> None:
        if len(args) == 1 and len(args[0]) == 4:
            args = [args[0][:2], args[0][2:]]
        if len(args) != 2:
            write("error usage: move <from> <to>")
            return
        from_sq = parse_square_arg(args[0])
        to_sq = parse_square_arg(args[1])
        if from_sq is None or to_sq is None:
            write("error invalid square")
            return
        if not self.game.try_move(from_sq, to_sq):
            write("illegal")
            return
        write("ok")
        self._write_notices(write)

    def cmd_status(self, write: Writer) -> None:
        st = self.game.status()
        side = self.game.side_to_move.name.lower()
        write(f"status {side} in_check={str(st.in_check).lower()} has_moves={str(st.has_moves).lower()}")

    def cmd_help(self, write: Writer) -> None:
        write("commands: new, board, select <sq>, move <from> <to>, status, help, quit")

    def _write_notices(self, write: Writer) -> None:
        st = self.game.status()
        side = self.game.side_to_move.name.capitalize()
        if st.in_check:
            write(f"{side} is in check!")
        if st.checkmate:
            write(f"checkmate: {side} has no legal moves")
        elif st.stalemate:
            write(f"stalemate: {side} has no legal moves")

    def handle(self, line: str, write: Writer) -> bool:
        """Dispatch one input line. Returns False once the session should end."""
        parts = line.strip().split()
        if not parts:
            return True
        cmd, args = parts[0].lower(), parts[1:]

        if cmd == "quit":
            return False
        if cmd == "new":
            self.cmd_new(write)
        elif cmd == "board":
            self.cmd_board(write)
        elif cmd == "select":
            self.cmd_select(args, write)
        elif cmd == "move":
            self.cmd_move(args, write)
        elif cmd == "status":
            self.cmd_status(write)
        elif cmd == "help":
            self.cmd_help(write)
        else:
            write(f"error unknown command {cmd!r}")
        return True


def _default_writer(line: str) -> None:
    # Ensure newline termination and immediate flush
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_text(lines: Optional[Iterable[str]] = None, write: Writer = _default_writer) -> None:
    shell = TextShell()
    for raw in sys.stdin if lines is None else lines:
        if not shell.handle(raw, write):
            break
