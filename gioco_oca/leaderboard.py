"""Winners' leaderboard: binary storage, ranking rules and text rendering."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .files import LEADERBOARD, LEADERBOARD_DATA, FileError, Resources
from .game import NAME_LENGTH, Game, Player

CAPACITY = 9
END_OF_LIST = -1

_RECORD = struct.Struct(f"<{NAME_LENGTH + 1}s2xi")

_TITLE = (
    "+----------------------------------+\n"
    "|     CLASSIFICA VINCITORI         |\n"
    "+----------------------------------+"
)
_LAYOUT = "+-------+----------------+--------+"
_NAME_WIDTH = 15


@dataclass(frozen=True)
class Entry:
    """A ranked winner and the number of throws it took to win."""

    name: str
    throws: int


@dataclass
class Leaderboard:
    """Winners ordered by number of throws, fewest first."""

    entries: list[Entry] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, data: bytes) -> Leaderboard:
        """Read records up to the end-of-list marker; a trailing partial record is ignored."""
        entries = []
        whole = len(data) - len(data) % _RECORD.size
        for raw, throws in _RECORD.iter_unpack(data[:whole]):
            if throws == END_OF_LIST:
                break
            name = raw.split(b"\0", 1)[0].decode("latin-1")
            entries.append(Entry(name, throws))
        return cls(entries)

    def to_bytes(self) -> bytes:
        """Serialize the entries followed by the end-of-list marker."""
        parts = [
            _RECORD.pack(entry.name.encode("latin-1", errors="replace")[:NAME_LENGTH], entry.throws)
            for entry in self.entries
        ]
        parts.append(_RECORD.pack(b"", END_OF_LIST))
        return b"".join(parts)

    def record(self, name: str, throws: int) -> bool:
        """Enter a winner; return True if the leaderboard changed.

        A name already present is entered again only if it now took fewer throws.
        """
        if throws < 0:
            raise ValueError(f"throws must not be negative, got {throws}")
        entry = Entry(name[:NAME_LENGTH], throws)
        if not self.entries:
            self.entries.append(entry)
            return True
        match = next((e for e in self.entries if e.name == entry.name), None)
        if match is not None and match.throws <= entry.throws:
            return False
        return self._insert(entry)

    def _insert(self, entry: Entry) -> bool:
        place = next(
            (i for i, e in enumerate(self.entries[:CAPACITY]) if e.throws > entry.throws),
            None,
        )
        if place is None:
            if len(self.entries) >= CAPACITY:
                return False
            place = len(self.entries)
        self.entries.insert(place, entry)
        del self.entries[CAPACITY:]
        return True

    def render(self) -> str:
        """The leaderboard as a text table."""
        lines = [_TITLE, _LAYOUT]
        lines.extend(
            f"| {rank:3d}   | {entry.name:<{_NAME_WIDTH}} | {entry.throws:3d}   |"
            for rank, entry in enumerate(self.entries, start=1)
        )
        lines.append(_LAYOUT)
        return "\n".join(lines) + "\n"


def update_leaderboard(resources: Resources, winner: Player | None) -> Leaderboard | None:
    """Record ``winner`` in the stored leaderboard and rewrite its text version.

    Nothing is done when there is no winner. Raise FileError when a file cannot
    be found, read or written.
    """
    if winner is None or winner.throws < 0:
        return None
    data_path = resources.slot_path(LEADERBOARD_DATA)
    try:
        data = data_path.read_bytes()
    except FileNotFoundError:
        data = b""
    except OSError as exc:
        raise FileError(f"cannot read {data_path}") from exc

    board = Leaderboard.from_bytes(data)
    if board.record(winner.name, winner.throws) or not data:
        try:
            data_path.write_bytes(board.to_bytes())
        except OSError as exc:
            raise FileError(f"cannot write {data_path}") from exc

    text_path = resources.menu_path(LEADERBOARD)
    try:
        text_path.write_text(board.render(), encoding="utf-8")
    except OSError as exc:
        raise FileError(f"cannot write {text_path}") from exc
    return board


def load_game(resources: Resources, slot: int) -> Game | None:
    """The game saved in ``slot``, or None if the slot is missing, empty or unreadable."""
    try:
        data = resources.slot_path(slot).read_bytes()
    except (FileError, OSError):
        return None
    if not data:
        return None
    try:
        return Game.from_bytes(data)
    except ValueError:
        return None