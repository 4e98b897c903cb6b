"""
Configuration and game registry.
"""

import logging
import os
from typing import Optional

from game_arena.games import (
    Checkers,
    Chess,
    ConnectFour,
    Game2048,
    Ludo,
    Memory,
    Minesweeper,
    Reversi,
    SnakeLadders,
    TicTacToe,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Game Registry
# ---------------------------------------------------------------------------

GAMES = {
    "chess": Chess,
    "checkers": Checkers,
    "tic-tac-toe": TicTacToe,
    "connect-four": ConnectFour,
    "memory": Memory,
    "snake-ladders": SnakeLadders,
    "ludo": Ludo,
    "reversi": Reversi,
    "minesweeper": Minesweeper,
    "2048": Game2048,
}

# Games whose layout depends on a random generator take a `seed`
SEEDED_GAMES = frozenset({"memory", "snake-ladders", "ludo", "minesweeper", "2048"})

# How each game names its players in the arena envelope
PLAYER_LABELS = {
    "chess": {1: "white", 2: "black"},
    "checkers": {1: "white", 2: "black"},
    "reversi": {1: "black", 2: "white"},
    "tic-tac-toe": {1: "player1", 2: "player2"},
    "connect-four": {1: "player1", 2: "player2"},
    "memory": {1: "player1"},
    "minesweeper": {1: "player1"},
    "2048": {1: "player1"},
    "snake-ladders": {1: "player", 2: "ai"},
    "ludo": {1: "red", 2: "blue", 3: "green", 4: "yellow"},
}

DEFAULT_GAME = "chess"


# ---------------------------------------------------------------------------
# Default Settings
# ---------------------------------------------------------------------------

def _env(name: str, default, cast=str):
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return cast(value)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a valid %s, using %r", name, value, cast.__name__, default)
        return default


class Config:
    """Arena and coach configuration with environment overrides."""

    def __init__(
        self,
        game_name: str = DEFAULT_GAME,
        seed: Optional[int] = None,
        coach_model: Optional[str] = None,
        coach_timeout: Optional[float] = None,
        coach_max_tokens: int = 500,
        coach_temperature: float = 0.7,
    ):
        if game_name not in GAMES:
            available = ", ".join(GAMES.keys())
            raise ValueError(f"Unknown game: {game_name}. Available: {available}")

        self.game_name = game_name
        self.seed = seed
        self.coach_model = coach_model or _env("GAME_ARENA_COACH_MODEL", "gpt-4o-mini")
        self.coach_timeout = (
            coach_timeout if coach_timeout is not None
            else _env("GAME_ARENA_COACH_TIMEOUT", 30.0, float)
        )
        self.coach_max_tokens = coach_max_tokens
        self.coach_temperature = coach_temperature


# Default configuration
DEFAULT_CONFIG = Config()
