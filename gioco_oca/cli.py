"""Command-line entry point: the main menu of the game."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from random import Random

from .files import (
    LEADERBOARD,
    MAIN_MENU,
    START_SCREEN,
    SUBMENU_PROMPT,
    Console,
    FileError,
    Resources,
)
from .menu import game_menu, help_menu, load_menu

FILE_ERROR_PROMPT = "Errore nel file provare a buildare a aprire il progetto in .exe "

_EXIT = 0
_NEW_GAME = 1
_LOAD = 2
_HELP = 3
_LEADERBOARD = 4
_CLOSE = 1


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="gioco-oca", description="Il gioco dell'oca.")
    parser.add_argument("--root", default="..", help="directory holding menu/ and file/")
    parser.add_argument("--workdir", default=".", help="base of the paths listed in the index files")
    parser.add_argument("--seed", type=int, default=None, help="seed for the dice")
    return parser.parse_args(argv)


def _show_leaderboard(console: Console, resources: Resources) -> bool:
    """Show the leaderboard; return True if the user chose to close the program."""
    text = resources.read_menu(LEADERBOARD)
    while True:
        console.clear()
        console.write(text)
        console.write(SUBMENU_PROMPT)
        choice = console.read_int()
        if choice == _EXIT:
            return False
        if choice == _CLOSE:
            return True


def _run(console: Console, resources: Resources, rng: Random) -> int:
    console.write(resources.read_menu(START_SCREEN))
    console.pause()
    while True:
        choice = console.choose(resources.read_menu(MAIN_MENU), _EXIT, _LEADERBOARD)
        if choice == _NEW_GAME:
            game_menu(console, resources, rng)
        elif choice == _LOAD:
            load_menu(console, resources, rng)
        elif choice == _HELP:
            help_menu(console, resources)
        elif choice == _LEADERBOARD:
            if _show_leaderboard(console, resources):
                return 0
        else:
            return 0


def main(argv: list[str] | None = None) -> int:
    """Run the game from the main menu; return the process exit status."""
    args = _parse_args(argv)
    resources = Resources(Path(args.root), Path(args.workdir))
    console = Console()
    rng = Random(args.seed)
    try:
        return _run(console, resources, rng)
    except FileError:
        console.write(f"{FILE_ERROR_PROMPT}\n")
        try:
            console.pause()
        except EOFError:
            pass
        return 1
    except EOFError:
        console.write("\n")
        return 0


if __name__ == "__main__":
    sys.exit(main())