"""
Core types shared by every game engine.

- Status: arena-facing phase of a game (ongoing / win / lose / draw / checkmate)
- State: per-player result of a finished or running game
- Position, Move: coordinates and single-ply records
"""

from __future__ import annotations

from enum import Enum, auto
from typing import NamedTuple


class Status(str, Enum):
    """Game phase as reported to the arena."""

    ONGOING = "ongoing"
    WIN = "win"
    LOSE = "lose"
    DRAW = "draw"
    CHECKMATE = "checkmate"

    @property
    def terminal(self) -> bool:
        return self is not Status.ONGOING


class State(Enum):
    WIN = auto()
    TIE = auto()
    LOSS = auto()
    NEUTRAL = auto()


class Position(NamedTuple):
    """(row, col), 0-indexed."""

    row: int
    col: int


class Move(NamedTuple):
    """A single ply. Kept as history only; legality never reads it back."""

    start: Position
    end: Position
    piece: int
