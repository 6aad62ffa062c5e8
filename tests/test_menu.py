import io
from random import Random

import pytest

from gioco_oca.board import Board, Square
from gioco_oca.files import Console, FileError, Resources
from gioco_oca.game import START, Game, Player
from gioco_oca.leaderboard import Leaderboard
from gioco_oca.menu import (
    Outcome,
    game_menu,
    help_menu,
    in_game_menu,
    load_menu,
    play,
    save_game,
)

MENUS = {
    1: "START SCREEN",
    2: "MAIN MENU",
    3: "GAME MENU",
    4: "LOAD MENU",
    5: "HELP MENU",
    6: "LEADERBOARD TABLE",
    7: "RULES TEXT",
    8: "MANUAL TEXT",
    9: "IN GAME MENU",
}


def make_resources(root):
    (root / "menu").mkdir()
    (root / "file").mkdir()
    lines = []
    for number, text in MENUS.items():
        rel = f"menu/m{number}.txt"
        (root / rel).write_text(text + "\n")
        lines.append(rel)
    (root / "menu" / "lista_menu.txt").write_text("\n".join(lines) + "\n")
    slots = [f"file/slot{n}.bin" for n in range(1, 6)] + ["file/classifica.bin"]
    (root / "file" / "lista_file_bin.txt").write_text("\n".join(slots) + "\n")
    return Resources(root, root)


def make_console(text):
    return Console(io.StringIO(text), io.StringIO())


def output(console):
    return console.stdout.getvalue()


def empty_game(turn=0, position=-1):
    board = Board(tuple([Square.EMPTY] * 50))
    players = [Player("alice", position), Player("bobby", position)]
    return Game(board, players, turn)


def test_in_game_menu_continue(tmp_path):
    resources = make_resources(tmp_path)
    console = make_console("4\n")
    assert in_game_menu(empty_game(), console, resources) is Outcome.CONTINUE
    assert "IN GAME MENU" in output(console)
    assert "Tabellone" in output(console)


def test_in_game_menu_abandon(tmp_path):
    resources = make_resources(tmp_path)
    console = make_console("3\n")
    assert in_game_menu(empty_game(), console, resources) is Outcome.ABANDON


def test_in_game_menu_reprompts_on_invalid_choice(tmp_path):
    resources = make_resources(tmp_path)
    console = make_console("9\nxx\n4\n")
    assert in_game_menu(empty_game(), console, resources) is Outcome.CONTINUE
    assert output(console).count("IN GAME MENU") == 3


def test_in_game_menu_save_then_continue(tmp_path):
    resources = make_resources(tmp_path)
    game = empty_game()
    console = make_console("1\n2\n4\n")
    assert in_game_menu(game, console, resources) is Outcome.CONTINUE
    saved = (tmp_path / "file" / "slot2.bin").read_bytes()
    assert Game.from_bytes(saved) == game
    assert "LOAD MENU" in output(console)


def test_in_game_menu_save_and_exit(tmp_path):
    resources = make_resources(tmp_path)
    game = empty_game()
    console = make_console("2\n1\n")
    assert in_game_menu(game, console, resources) is Outcome.ABANDON
    assert Game.from_bytes((tmp_path / "file" / "slot1.bin").read_bytes()) == game


def test_in_game_menu_missing_file(tmp_path):
    resources = make_resources(tmp_path)
    (tmp_path / "menu" / "m9.txt").unlink()
    with pytest.raises(FileError):
        in_game_menu(empty_game(), make_console("4\n"), resources)


def test_save_game_skips_invalid_slots(tmp_path):
    resources = make_resources(tmp_path)
    game = empty_game()
    assert save_game(game, make_console("0\n7\nx\n3\n"), resources) == 3
    assert (tmp_path / "file" / "slot3.bin").read_bytes() == game.to_bytes()


def test_save_game_without_index(tmp_path):
    resources = Resources(tmp_path / "missing", tmp_path)
    with pytest.raises(FileError):
        save_game(empty_game(), make_console("1\n"), resources)


def test_play_abandoned_returns_none(tmp_path):
    resources = make_resources(tmp_path)
    game = empty_game(turn=START)
    assert play(game, make_console("3\n"), resources, Random(1)) is None
    assert game.turn in range(len(game.players))
    assert not game.finished


def test_play_spends_blocked_turn(tmp_path):
    resources = make_resources(tmp_path)
    game = empty_game(turn=0)
    game.players[0].block = -1
    assert play(game, make_console("3\n"), resources, Random(1)) is None
    assert game.players[0].block == 0
    assert game.turn == 1


def test_play_until_win(tmp_path):
    resources = make_resources(tmp_path)
    game = empty_game(turn=START, position=37)
    console = make_console("4\n" * 5000)
    winner = play(game, console, resources, Random(7))
    assert game.finished
    assert winner in game.players
    assert winner.position == game.board.size - 1
    assert winner.throws >= 1
    assert f"Hai vinto giocatore {winner.name}" in output(console)


def test_game_menu_exit(tmp_path):
    resources = make_resources(tmp_path)
    console = make_console("0\n")
    assert game_menu(console, resources, Random(1)) is None
    assert output(console).count("GAME MENU") == 1


def test_game_menu_classic_abandoned(tmp_path):
    resources = make_resources(tmp_path)
    console = make_console("1\naaaaa\nbbbbb\nccccc\nddddd\n3\n")
    game_menu(console, resources, Random(1))
    text = output(console)
    assert "Inserire il nome del giocatore(4)" in text
    assert "ddddd" in text
    assert not (tmp_path / "file" / "classifica.bin").exists()


def test_load_menu_empty_slot(tmp_path):
    resources = make_resources(tmp_path)
    console = make_console("1\n\n0\n")
    load_menu(console, resources, Random(1))
    assert "Slot non corretto" in output(console)
    assert output(console).count("LOAD MENU") == 2


def test_load_menu_resumes_saved_game(tmp_path):
    resources = make_resources(tmp_path)
    game = empty_game()
    (tmp_path / "file" / "slot2.bin").write_bytes(game.to_bytes())
    console = make_console("2\n3\n")
    load_menu(console, resources, Random(1))
    assert "alice" in output(console)
    assert "Slot non corretto" not in output(console)


def test_load_menu_win_updates_leaderboard(tmp_path):
    resources = make_resources(tmp_path)
    game = empty_game(turn=START, position=37)
    (tmp_path / "file" / "slot2.bin").write_bytes(game.to_bytes())
    console = make_console("2\n" + "4\n" * 5000)
    load_menu(console, resources, Random(3))
    board = Leaderboard.from_bytes((tmp_path / "file" / "classifica.bin").read_bytes())
    assert len(board.entries) == 1
    assert board.entries[0].name in {"alice", "bobby"}
    assert board.entries[0].throws >= 1
    assert "CLASSIFICA VINCITORI" in (tmp_path / "menu" / "m6.txt").read_text()


def test_help_menu_pages(tmp_path):
    resources = make_resources(tmp_path)
    console = make_console("1\n1\n0\n2\n0\n0\n")
    help_menu(console, resources)
    text = output(console)
    assert text.count("RULES TEXT") == 2
    assert text.count("MANUAL TEXT") == 1
    assert "Premi 0 per andare indietro o 1 per uscire-> " in text


def test_help_menu_missing_rules(tmp_path):
    resources = make_resources(tmp_path)
    (tmp_path / "menu" / "m7.txt").unlink()
    with pytest.raises(FileError):
        help_menu(make_console("1\n0\n0\n"), resources)