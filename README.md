# gioco_oca

The Game of the Goose (*il gioco dell'oca*) for two to four players, played
in the terminal. The screens and messages are in Italian.

## Playing

After installing the package, start the game with:

    gioco-oca

Options:

- `--root DIR`: directory that holds `menu/lista_menu.txt` and
  `file/lista_file_bin.txt` (default `..`);
- `--workdir DIR`: directory the paths listed in those index files are
  relative to (default `.`);
- `--seed N`: seed for the dice, for repeatable games.

The main menu offers:

- **new game**: a classic game on a 90-square board with four players, or a
  custom game where you choose a board of 50 to 90 squares and 2 to 4 players;
- **load game**: resume a game from one of five save slots;
- **help**: the rules and the user manual;
- **leaderboard**: the winners who finished in the fewest throws (at most nine).

Each player enters a name of exactly five characters. The first player is
drawn at random. On every turn two dice are thrown and the pawn moves forward.
The squares have these effects:

- goose (`OC`): move forward again by the same throw. A first throw of 3 and 6
  onto a goose lands on square 26; any other first throw onto a goose lands on
  square 53;
- bridge (`PO`): move forward again by the throw;
- inn (`LO`): miss the next three turns;
- well and prison: stay blocked until another player lands on the same
  square and frees you. In prison you may also escape by throwing a 5 on your
  turn;
- labyrinth (`LB`): jump to a square computed from 33 and the board size
  (square 34 on a 90-square board);
- skeleton (`SC`): go back to the start.

The special squares are placed in proportion to the board size, and a goose
square follows every nine squares. If a throw passes the last square, the
pawn bounces back by the squares left over. The first player to reach the
last square wins.

Before each turn the in-game menu shows the board and lets you save, save and
quit, give up, or carry on. A winner enters the leaderboard if they are not in
it yet, or if they beat their own record, provided their throw count places
them within the nine places.

## Data files

The game reads everything through two index files under `--root`, one path
per line, each path taken relative to `--workdir`.

`menu/lista_menu.txt`, by line:

1. start screen
2. main menu
3. new game menu
4. load/save slot menu
5. help menu
6. leaderboard text (rewritten by the game after each win)
7. rules
8. manual
9. in-game menu

`file/lista_file_bin.txt`, by line: lines 1 to 5 are the save slots, line 6
is the binary leaderboard data. Games are saved as fixed-size binary records.
A missing, empty or malformed slot is reported as `Slot non corretto`.

If a menu or index file cannot be read, the program prints an error and exits
with status 1.

## Using the package from Python

- `gioco_oca.board`: `Square`, `Board`, `generate_board(size)` and
  `proportion(a, b, c)`;
- `gioco_oca.game`: `Player` and `Game`, with `Game.to_bytes()` /
  `Game.from_bytes(data)`, `take_turn`, `handle_blocked_turn`, `render`;
- `gioco_oca.leaderboard`: `Entry`, `Leaderboard` (`record`, `render`,
  `to_bytes`, `from_bytes`), `update_leaderboard(resources, winner)` and
  `load_game(resources, slot)`;
- `gioco_oca.files`: `Resources`, `Console`, `FileError`, `parse_number`,
  `parse_choice`;
- `gioco_oca.menu`: `play`, `in_game_menu`, `save_game`, `game_menu`,
  `load_menu`, `help_menu` and `Outcome`;
- `gioco_oca.cli`: `main(argv=None)`.

## What it does not do

The package ships no menu screens, rules or manual texts and no index files;
you provide them as described above.

## Development

Install the test dependencies and run the tests with:

    pip install -e .[test]
    pytest