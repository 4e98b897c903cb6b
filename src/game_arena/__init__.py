"""
Game Arena - rule engines for ten board and puzzle games behind one arena.

Every game follows the same Board-State Machine shape: a fixed board, a
legality oracle, a move applier, a terminal-state detector and a
click-driven controller. The arena drives whichever game is active and
can ask an LLM coach for advice.

Quick Start:
    from game_arena import Arena

    arena = Arena("reversi")
    arena.handle(2, 3)
    print(arena.snapshot()["status"])

Modules:
    core   - Status, State, Position, Move
    games  - one rule engine per game
    coach  - advisory text with offline fallback
    api    - Arena: game switch, reset, dispatch, snapshot
"""

from game_arena.api import Arena
from game_arena.coach import Coach
from game_arena.core import Move, Position, State, Status
from game_arena.utils.factory import create_game

__version__ = "1.0.0"

__all__ = [
    # Main API
    "Arena",
    "Coach",
    "create_game",
    # Types
    "Status",
    "State",
    "Position",
    "Move",
]
