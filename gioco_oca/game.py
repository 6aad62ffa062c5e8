"""Players, game state and the rules applied on each turn."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from random import Random

from .board import HIGHLIGHT, MAX_SIZE, MIN_SIZE, RESET, Board, Square, proportion
from .files import Console

MIN_PLAYERS = 2
MAX_PLAYERS = 4
NAME_LENGTH = 5

START = -1
INTERRUPTED = -1
DIE_FACES = 6
BLOCKED_FOREVER = -(2**31)
INN_BLOCK = -3
MAZE_TARGET = 33
SKELETON_TARGET = 0

_GOOSE_SPECIAL_FIRST = (3, 6)
_GOOSE_SPECIAL_POSITION = 25
_GOOSE_DEFAULT_POSITION = 52
_PRISON_ESCAPES = (5, 7)

_HEADER = struct.Struct(f"<{MAX_SIZE}i3i")
_PLAYER = struct.Struct(f"<3i{NAME_LENGTH + 1}s2x")
RECORD_SIZE = _HEADER.size + MAX_PLAYERS * _PLAYER.size

_THROW = "Il numero di casella di cui spostarsi e': "
_WINNER = "Hai vinto giocatore "
_POSITION_1 = "La posizione del giocatore "
_POSITION_2 = " e' "


def roll(rng: Random, limit: int) -> int:
    """Return a random number between 1 and ``limit`` inclusive."""
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    return rng.randint(1, limit)


def bounce(size: int, position: int) -> int:
    """Position reached when a throw overshoots the end of a board of ``size``."""
    overshoot = position - size
    return (size - 1) - overshoot - 1


@dataclass
class Player:
    """A player's name, board index, throw count and blocking state."""

    name: str
    position: int = -1
    throws: int = 0
    block: int = 0

    @property
    def is_blocked(self) -> bool:
        return self.block < 0


@dataclass
class Game:
    """The state of a match: board, players and whose turn it is."""

    board: Board
    players: list[Player]
    turn: int = START
    finished: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if not MIN_PLAYERS <= len(self.players) <= MAX_PLAYERS:
            raise ValueError(
                f"a game needs {MIN_PLAYERS} to {MAX_PLAYERS} players, got {len(self.players)}"
            )

    @property
    def current_player(self) -> Player:
        return self.players[self.turn]

    @property
    def winner(self) -> Player | None:
        return self.current_player if self.finished else None

    # --- persistence -----------------------------------------------------

    def to_bytes(self) -> bytes:
        """Serialize the game as a fixed-size save record."""
        squares = list(self.board.squares) + [Square.EMPTY] * (MAX_SIZE - self.board.size)
        parts = [_HEADER.pack(*squares, self.board.size, len(self.players), self.turn)]
        for player in self.players:
            name = player.name.encode("latin-1", errors="replace")[:NAME_LENGTH]
            parts.append(_PLAYER.pack(player.position, player.throws, player.block, name))
        empty = _PLAYER.pack(0, 0, 0, b"")
        parts.extend(empty for _ in range(MAX_PLAYERS - len(self.players)))
        return b"".join(parts)

    @classmethod
    def from_bytes(cls, data: bytes) -> Game:
        """Rebuild a game from a save record; raise ValueError if it is malformed."""
        if len(data) != RECORD_SIZE:
            raise ValueError(f"save record must be {RECORD_SIZE} bytes, got {len(data)}")
        *squares, size, count, turn = _HEADER.unpack_from(data)
        if not MIN_SIZE <= size <= MAX_SIZE:
            raise ValueError(f"invalid board size {size}")
        if not MIN_PLAYERS <= count <= MAX_PLAYERS:
            raise ValueError(f"invalid player count {count}")
        board = Board(tuple(Square(value) for value in squares[:size]))
        players = []
        for offset in range(_HEADER.size, _HEADER.size + count * _PLAYER.size, _PLAYER.size):
            position, throws, block, raw = _PLAYER.unpack_from(data, offset)
            name = raw.split(b"\0", 1)[0].decode("latin-1")
            players.append(Player(name, position, throws, block))
        return cls(board, players, turn)

    # --- turn order --------------------------------------------------------

    def fix_turn(self, rng: Random) -> None:
        """Pick the starting player at random if the game has not started."""
        if self.turn == START:
            self.turn = roll(rng, len(self.players)) - 1

    def advance_turn(self) -> int:
        """Pass the turn to the next player; return the turn number before wrapping."""
        following = self.turn + 1
        self.turn = following if following < len(self.players) else 0
        return following

    # --- turn handling ---------------------------------------------------------

    def handle_blocked_turn(self, console: Console, rng: Random) -> None:
        """Spend the turn of a blocked current player."""
        player = self.current_player
        if self.board.square(player.position) is Square.PRISON:
            self._show(console, player.position)
            self.free_from_prison(player, console, rng)
        else:
            player.block += 1

    def take_turn(self, console: Console, rng: Random) -> None:
        """Throw two dice for the current player and apply the squares reached."""
        turn = self.turn
        size = self.board.size
        first = roll(rng, DIE_FACES)
        second = roll(rng, DIE_FACES)
        throw = first + second
        console.write(f"\n{_THROW}{throw}\n")
        console.pause()

        player = self.players[turn]
        position = player.position + throw
        player.position = position
        player.throws += 1

        back = 0
        square = self.board.square(position)
        blocked = player.block
        while True:
            if position > size:
                position = bounce(size, position)
                player.position = position
                back = (position - size) + 1
                square = self.board.square(position)
            elif position == size - 1:
                self.finished = True
            elif square is not Square.EMPTY:
                if back < 0:
                    self._show(console, position)
                    previous = position
                    first, second = 0, back
                    self.apply_special(console, first, second, square)
                    position = player.position
                    back = position - previous
                else:
                    self._show(console, position)
                    square = self.board.square(position)
                    self.apply_special(console, first, second, square)
                    position = player.position
                square = self.board.square(position)
                blocked = player.block
            if (
                square is Square.EMPTY
                or blocked < 0
                or self.finished
                or position == -1
            ):
                break

    def apply_special(self, console: Console, first: int, second: int, square: Square) -> None:
        """Apply the effect of ``square`` to the current player."""
        if square is Square.GOOSE:
            self._goose(console, first, second)
        elif square is Square.BRIDGE:
            self._bridge(console, first + second)
        elif square is Square.INN:
            self._inn(console)
        elif square in (Square.WELL, Square.PRISON):
            self._trap(console)
        elif square is Square.MAZE:
            self._maze(console)
        elif square is Square.SKELETON:
            self._skeleton(console)

    def free_from_prison(self, player: Player, console: Console, rng: Random) -> bool:
        """Try a lucky throw to leave the prison; return True if it succeeded."""
        throw = roll(rng, DIE_FACES)
        if throw in _PRISON_ESCAPES:
            player.block = 0
            console.write(f"\nBravo! sei libero lancio fortunato di: {throw}\n")
            console.pause()
            return True
        console.write("Peccato! lancio sfortunato ritenta!\n")
        console.pause()
        return False

    # --- display -----------------------------------------------------------------

    def render(self, position: int) -> str:
        """Board and player positions, highlighting board index ``position``."""
        lines = ["Tabellone\n", self.board.render(position)]
        lines.append(f" ====TURNO DEL GIOCATORE {self.turn + 1}====\n")
        for index, player in enumerate(self.players):
            if index == self.turn:
                lines.append(
                    f"{HIGHLIGHT}{_POSITION_1}{RESET}"
                    f"{HIGHLIGHT}{player.name}{RESET}"
                    f"{HIGHLIGHT}{_POSITION_2}{RESET}"
                    f"{HIGHLIGHT}{player.position + 1}{RESET}\n"
                )
            else:
                lines.append(f"{_POSITION_1}{player.name}{_POSITION_2}{player.position + 1}\n")
        lines.append("\n")
        return "".join(lines)

    def winner_message(self) -> str:
        """Announcement of the winner, or an empty string if nobody has won."""
        winner = self.winner
        return f"\n{_WINNER}{winner.name}\n" if winner else ""

    # --- special squares ---------------------------------------------------------

    def _show(self, console: Console, position: int) -> None:
        console.clear()
        console.write(self.render(position))

    def _notify(self, console: Console, text: str) -> None:
        console.write(f"\n{text}\n")
        console.pause()

    def _goose(self, console: Console, first: int, second: int) -> None:
        self._notify(console, "Sei finito su un oca\nAvanza ancora")
        player = self.current_player
        if player.throws == 1:
            special = (first, second) in (_GOOSE_SPECIAL_FIRST, _GOOSE_SPECIAL_FIRST[::-1])
            player.position = _GOOSE_SPECIAL_POSITION if special else _GOOSE_DEFAULT_POSITION
        else:
            player.position += first + second

    def _bridge(self, console: Console, throw: int) -> None:
        console.write("Sei finito sulla casella ponte")
        console.pause()
        self.current_player.position += throw

    def _inn(self, console: Console) -> None:
        self._notify(console, "Sei arrivato sulla locanda sei bloccato!")
        self.current_player.block = INN_BLOCK

    def _trap(self, console: Console) -> None:
        self._notify(console, "Sei bloccato ")
        self.current_player.block = BLOCKED_FOREVER
        self._free_other(console)

    def _free_other(self, console: Console) -> None:
        current = self.current_player
        for index, other in enumerate(self.players):
            if index == self.turn:
                continue
            if other.is_blocked and other.position == current.position:
                other.block = 0
                self._notify(console, "Sei bloccato! mai hai liberato l'altro giocatore")
                return

    def _maze(self, console: Console) -> None:
        self._notify(console, f"oh no! sei sul labririnto torna alla: {MAZE_TARGET}")
        self.current_player.position = proportion(MAZE_TARGET, self.board.size, MAX_SIZE)

    def _skeleton(self, console: Console) -> None:
        self._notify(console, f"oh no! sei sullo scheletro torna alla: {SKELETON_TARGET}")
        self.current_player.position = SKELETON_TARGET - 1