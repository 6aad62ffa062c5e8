"""Interactive menus: new game, loading, saving, help and the in-game menu."""

from __future__ import annotations

import time
from enum import Enum
from random import Random

from .board import generate_board
from .files import (
    GAME_MENU,
    HELP_MENU,
    IN_GAME_MENU,
    LOAD_MENU,
    MANUAL,
    MAX_SLOTS,
    RULES,
    SUBMENU_PROMPT,
    Console,
    FileError,
    Resources,
)
from .game import START, Game, Player
from .leaderboard import load_game, update_leaderboard

SLOT_ERROR = "Slot non corretto"

_EXIT = 0

_CLASSIC_GAME = 1
_CUSTOM_GAME = 2

_SAVE = 1
_SAVE_AND_EXIT = 2
_ABANDON = 3
_CONTINUE = 4

_RULES_CHOICE = 1
_MANUAL_CHOICE = 2

_MIN_SIZE = 50
_MAX_SIZE = 90
_MIN_PLAYERS = 2
_MAX_PLAYERS = 4
_CLASSIC_SIZE = 90
_CLASSIC_PLAYERS = 4
_NAME_LENGTH = 5
_BAR_WIDTH = 50


class Outcome(Enum):
    """What the player decided in the in-game menu."""

    CONTINUE = "continue"
    ABANDON = "abandon"


def _new_game(names: list[str], size: int, rng: Random | None) -> Game:
    """Build a game on a fresh board; pick the first turn when an rng is given."""
    if not _MIN_SIZE <= size <= _MAX_SIZE:
        raise ValueError(f"board size must be between {_MIN_SIZE} and {_MAX_SIZE}")
    if not _MIN_PLAYERS <= len(names) <= _MAX_PLAYERS:
        raise ValueError(f"players must be between {_MIN_PLAYERS} and {_MAX_PLAYERS}")
    players = [Player(name=name, position=-1, throws=0, block=0) for name in names]
    game = Game(board=generate_board(size), players=players, turn=START)
    if rng is not None:
        game.fix_turn(rng)
    return game


def _read_player_names(console: Console, count: int) -> list[str]:
    """Ask for each player's name until it is exactly five characters long."""
    names = []
    for number in range(1, count + 1):
        while True:
            console.clear()
            console.write(f"NOME DA INSERIRE DI {_NAME_LENGTH} CARATTERI\n")
            console.write(f"Inserire il nome del giocatore({number}): ")
            line = console.read_line()
            if line is None:
                raise EOFError("no more input")
            line = line.rstrip("\r\n")
            if len(line) == _NAME_LENGTH:
                names.append(line)
                break
    return names


def _loading_bar(console: Console, delay: float = 0.001) -> None:
    """Draw a progress bar going from empty to full."""
    time.sleep(delay)
    for progress in range(101):
        filled = progress * _BAR_WIDTH // 100
        blanks = max(0, _BAR_WIDTH - 1 - filled)
        console.write(
            f"\033[0;32m[{'=' * filled}{' ' * blanks}] {float(progress):.1f}%\033[0m\r"
        )
        time.sleep(delay)
    console.write("\n\033[0;32mLoading completo!\033[0m\n")


def _new_classic_game(console: Console, rng: Random | None = None) -> Game:
    """Set up the standard game: four players on a 90-square board."""
    names = _read_player_names(console, _CLASSIC_PLAYERS)
    game = _new_game(names, _CLASSIC_SIZE, None)
    _loading_bar(console)
    if rng is not None:
        game.fix_turn(rng)
    return game


def _new_custom_game(console: Console, rng: Random | None = None) -> Game:
    """Ask for board size and number of players, then set up the game."""
    console.clear()
    console.write("---PARTITA PERSONALIZZATA---\n")
    while True:
        console.write(
            f"Inserire la dimensione delle caselle minimo {_MIN_SIZE} massimo {_MAX_SIZE}: "
        )
        size = console.read_int()
        if size is not None and _MIN_SIZE <= size <= _MAX_SIZE:
            break
    while True:
        console.clear()
        console.write(
            f"Inserire il numero di giocatori minimo {_MIN_PLAYERS} massimo {_MAX_PLAYERS}: "
        )
        count = console.read_int()
        if count is not None and _MIN_PLAYERS <= count <= _MAX_PLAYERS:
            break
    names = _read_player_names(console, count)
    game = _new_game(names, size, None)
    _loading_bar(console)
    if rng is not None:
        game.fix_turn(rng)
    return game


def play(game: Game, console: Console, resources: Resources, rng: Random) -> Player | None:
    """Run the game until someone wins or it is abandoned; return the winner, if any."""
    game.fix_turn(rng)
    while True:
        player = game.current_player
        if player.block >= 0:
            if in_game_menu(game, console, resources) is Outcome.ABANDON:
                return None
            game.take_turn(console, rng)
            if game.finished:
                winner = game.current_player
                console.write(game.winner_message())
                console.pause()
                return winner
        else:
            game.handle_blocked_turn(console, rng)
        game.advance_turn()


def in_game_menu(game: Game, console: Console, resources: Resources) -> Outcome:
    """Show the board and ask whether to continue, save or leave the game."""
    text = resources.read_menu(IN_GAME_MENU)
    position = game.current_player.position
    while True:
        console.clear()
        console.write(game.render(position))
        console.write(text)
        choice = console.read_int()
        if choice in (_SAVE, _SAVE_AND_EXIT):
            console.clear()
            console.write(resources.read_menu(LOAD_MENU))
            save_game(game, console, resources)
            if choice == _SAVE_AND_EXIT:
                return Outcome.ABANDON
        elif choice == _ABANDON:
            return Outcome.ABANDON
        elif choice == _CONTINUE:
            return Outcome.CONTINUE


def save_game(game: Game, console: Console, resources: Resources) -> int:
    """Ask for a slot and write the game into it; return the slot used."""
    while True:
        slot = console.read_int()
        if slot is not None and 1 <= slot <= MAX_SLOTS:
            break
    path = resources.slot_path(slot)
    try:
        path.write_bytes(game.to_bytes())
    except OSError as exc:
        raise FileError(f"cannot write {path}") from exc
    return slot


def game_menu(console: Console, resources: Resources, rng: Random | None = None) -> None:
    """Start a classic or a custom game.

    A classic game returns to the caller when it ends; a custom game comes
    back to this menu.
    """
    rng = rng if rng is not None else Random()
    text = resources.read_menu(GAME_MENU)
    while True:
        choice = console.choose(text, _EXIT, _CUSTOM_GAME)
        if choice == _EXIT:
            return
        if choice == _CLASSIC_GAME:
            game = _new_classic_game(console, None)
            update_leaderboard(resources, play(game, console, resources, rng))
            return
        game = _new_custom_game(console, None)
        update_leaderboard(resources, play(game, console, resources, rng))


def load_menu(console: Console, resources: Resources, rng: Random | None = None) -> None:
    """Pick a save slot and resume the game stored there."""
    rng = rng if rng is not None else Random()
    text = resources.read_menu(LOAD_MENU)
    while True:
        slot = console.choose(text, _EXIT, MAX_SLOTS)
        if slot == _EXIT:
            return
        game = load_game(resources, slot)
        if game is None:
            console.write(f"\n{SLOT_ERROR}\n")
            console.pause()
            continue
        update_leaderboard(resources, play(game, console, resources, rng))
        return


def help_menu(console: Console, resources: Resources) -> None:
    """Show the rules or the manual until the user goes back."""
    text = resources.read_menu(HELP_MENU)
    while True:
        choice = console.choose(text, _EXIT, _MANUAL_CHOICE)
        if choice == _RULES_CHOICE:
            _show_page(console, resources.read_menu(RULES))
        elif choice == _MANUAL_CHOICE:
            _show_page(console, resources.read_menu(MANUAL))
        else:
            return


def _show_page(console: Console, text: str) -> None:
    while True:
        console.clear()
        console.write(text)
        console.write(SUBMENU_PROMPT)
        if console.read_int() == _EXIT:
            return