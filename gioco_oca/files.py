"""Lookup of menu and save files, and console input/output."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

START_SCREEN = 1
MAIN_MENU = 2
GAME_MENU = 3
LOAD_MENU = 4
HELP_MENU = 5
LEADERBOARD = 6
LEADERBOARD_DATA = 6
RULES = 7
MANUAL = 8
IN_GAME_MENU = 9

MAX_SLOTS = 5
SUBMENU_PROMPT = "Premi 0 per andare indietro o 1 per uscire-> "

_MAX_CHOICE_DIGITS = 2
_DIGITS = "0123456789"
_CLEAR_SCREEN = "\033[2J\033[H"
_PAUSE_PROMPT = "Premere INVIO per continuare . . ."


class FileError(Exception):
    """A resource file could not be found or opened."""


def parse_number(text: str) -> int:
    """Convert a non-empty string of decimal digits to an int."""
    if not text or any(ch not in _DIGITS for ch in text):
        raise ValueError(f"not a decimal number: {text!r}")
    return int(text)


def parse_choice(line: str) -> int | None:
    """Parse a menu choice of at most two digits; return None if invalid."""
    text = line.rstrip("\r\n")
    if len(text) > _MAX_CHOICE_DIGITS:
        return None
    try:
        return parse_number(text)
    except ValueError:
        return None


@dataclass
class Resources:
    """Locates menu texts and save slots through their index files."""

    root: Path = Path("..")
    workdir: Path = Path(".")

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        self.workdir = Path(self.workdir)

    @property
    def menu_index(self) -> Path:
        return self.root / "menu" / "lista_menu.txt"

    @property
    def slot_index(self) -> Path:
        return self.root / "file" / "lista_file_bin.txt"

    def menu_path(self, line: int) -> Path:
        """Path of the menu file listed on ``line`` (1-based) of the menu index."""
        return self._lookup(self.menu_index, line)

    def slot_path(self, slot: int) -> Path:
        """Path of the data file listed on ``slot`` (1-based) of the slot index."""
        return self._lookup(self.slot_index, slot)

    def read_menu(self, line: int) -> str:
        """Text of the menu file listed on ``line`` of the menu index."""
        path = self.menu_path(line)
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise FileError(f"cannot read {path}") from exc

    def _lookup(self, index: Path, line: int) -> Path:
        try:
            text = index.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise FileError(f"cannot read {index}") from exc
        entries = [entry.rstrip("\r") for entry in text.split("\n")]
        if not 1 <= line <= len(entries) or not entries[line - 1]:
            raise FileError(f"no entry on line {line} of {index}")
        return self.workdir / entries[line - 1]


@dataclass
class Console:
    """Line-oriented terminal input and output."""

    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def read_line(self) -> str:
        """Read one line without its line ending; raise EOFError at end of input."""
        line = self.stdin.readline()
        if not line:
            raise EOFError("input closed")
        return line.rstrip("\r\n")

    def read_int(self) -> int | None:
        """Read a menu choice; None when the line is not a valid choice."""
        return parse_choice(self.read_line())

    def choose(self, text: str, minimum: int, maximum: int) -> int:
        """Show ``text`` until a choice between minimum and maximum is entered."""
        while True:
            self.clear()
            self.write(text)
            choice = self.read_int()
            if choice is not None and minimum <= choice <= maximum:
                return choice

    def clear(self) -> None:
        self.write(_CLEAR_SCREEN)

    def pause(self) -> None:
        """Wait for the user to press enter."""
        self.write(_PAUSE_PROMPT)
        self.read_line()