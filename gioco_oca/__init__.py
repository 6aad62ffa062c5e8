"""The Game of the Goose played in the terminal, with save slots and a leaderboard."""

__version__ = "1.0.0"