"""
Factory functions for creating games.
"""

from typing import Optional

from game_arena.games.game_base import GameBase
from game_arena.utils.config import GAMES, SEEDED_GAMES


def create_game(game_name: str, seed: Optional[int] = None) -> GameBase:
    """
    Create a game instance in its initial state.

    Args:
        game_name: Key from GAMES registry (e.g., "tic-tac-toe")
        seed: Random seed for games with shuffled/random layouts

    Returns:
        Fresh game instance
    """
    if game_name not in GAMES:
        available = ", ".join(GAMES.keys())
        raise ValueError(f"Unknown game: {game_name}. Available: {available}")

    game_class = GAMES[game_name]
    if game_name in SEEDED_GAMES:
        return game_class(seed=seed)
    return game_class()
