"""
Core module - fundamental types shared by the games and the arena.
"""

from game_arena.core.types import Status, State, Position, Move

__all__ = [
    "Status",
    "State",
    "Position",
    "Move",
]
