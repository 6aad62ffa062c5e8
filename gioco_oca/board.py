"""Game board: layout of the squares and its text rendering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

MIN_SIZE = 50
MAX_SIZE = 90
ROW_LENGTH = 24
GOOSE_DISTANCE = 9

RESET = "\033[0m"
HIGHLIGHT = "\033[38;5;208m"
SEPARATOR = "|"
_BLANK_CELL = "   "


class Square(IntEnum):
    """Kind of a square on the board."""

    EMPTY = 0
    GOOSE = 1
    BRIDGE = 2
    INN = 3
    WELL = 4
    MAZE = 5
    PRISON = 6
    SKELETON = 7


# Positions of the special squares on a standard board of MAX_SIZE squares.
_STANDARD_PLACES = (
    (Square.BRIDGE, 6),
    (Square.INN, 19),
    (Square.WELL, 31),
    (Square.MAZE, 42),
    (Square.PRISON, 52),
    (Square.SKELETON, 58),
)

_LABELS = {
    Square.GOOSE: ("OC", "\033[1;33m"),
    Square.BRIDGE: ("PO", "\033[1;32m"),
    Square.INN: ("LO", "\033[1;34m"),
    Square.WELL: ("PO", "\033[0;33;31m"),
    Square.MAZE: ("LB", "\033[1;91m"),
    Square.PRISON: ("PR", "\033[1;35m"),
    Square.SKELETON: ("SC", "\033[1;36m"),
}


def proportion(a: int, b: int, c: int) -> int:
    """Return a * c / b truncated toward zero, or 0 when b is 0."""
    if b == 0:
        return 0
    product = a * c
    quotient = abs(product) // abs(b)
    return quotient if (product >= 0) == (b > 0) else -quotient


@dataclass(frozen=True)
class Board:
    """An immutable sequence of squares."""

    squares: tuple[Square, ...]

    @property
    def size(self) -> int:
        return len(self.squares)

    def square(self, index: int) -> Square:
        """Return the square at a 0-based index; off the board counts as empty."""
        if 0 <= index < len(self.squares):
            return self.squares[index]
        return Square.EMPTY

    def render(self, current: int) -> str:
        """Render the board in serpentine rows, highlighting index ``current``."""
        parts = [RESET]
        size = self.size
        pos = 1
        while pos <= size:
            end = min(pos + ROW_LENGTH - 1, size)
            parts.append(self._row(range(pos, end + 1), current, 0))
            pos = end + 1
            if pos <= size:
                end = min(pos + ROW_LENGTH - 1, size)
                padding = ROW_LENGTH - (end - pos + 1)
                parts.append(self._row(range(end, pos - 1, -1), current, padding))
                pos = end + 1
        parts.append("\n")
        return "".join(parts)

    def _row(self, positions: range, current: int, padding: int) -> str:
        cells = "".join(self._cell(pos, current) for pos in positions)
        return f"\n{_BLANK_CELL * padding}{cells}{SEPARATOR}{RESET}\n{RESET}"

    def _cell(self, pos: int, current: int) -> str:
        square = self.square(pos - 1)
        highlighted = current == pos - 1
        if square is Square.EMPTY:
            body = f"{HIGHLIGHT}{pos:02d}" if highlighted else f"{pos:02d}"
        else:
            label, colour = _LABELS[square]
            body = f"{HIGHLIGHT if highlighted else colour}{label}"
        return f"{SEPARATOR}{RESET}{body}{RESET}"


def generate_board(size: int) -> Board:
    """Build a board of ``size`` squares with special and goose squares placed."""
    if not MIN_SIZE <= size <= MAX_SIZE:
        raise ValueError(f"board size must be between {MIN_SIZE} and {MAX_SIZE}, got {size}")

    squares = [Square.EMPTY] * size
    for kind, standard in _STANDARD_PLACES:
        squares[proportion(size, MAX_SIZE, standard) - 1] = kind

    # The last square is never special.
    distance = 0
    for pos in range(size - 1):
        distance += 1
        if distance == GOOSE_DISTANCE:
            if squares[pos] is not Square.EMPTY:
                squares[pos + 1] = squares[pos]
            squares[pos] = Square.GOOSE
            distance = 0

    return Board(tuple(squares))