"""
GameState - the turn/game envelope a controller writes and the arena reads.

Optimized for fast copying.
"""

from __future__ import annotations

from typing import List, Optional, Union

import numpy as np

from game_arena.core.types import Position, Status


class GameState:
    """
    Lightweight game state container.

    The board is a fixed-shape NumPy array whose encoding is owned by
    the game that created it (see each game module's docstring):
        0 = empty
        non-zero = piece / disc / tile, game specific

    `valid_moves` holds highlighted Positions for cell-driven games and
    action names ("roll", "left", ...) for games without a target cell.
    """
    __slots__ = ('board', 'current_player', 'status', 'selected', 'valid_moves', 'score')

    def __init__(
        self,
        board: np.ndarray,
        current_player: int,
        status: Status = Status.ONGOING,
        selected: Optional[Position] = None,
        valid_moves: Optional[List[Union[Position, str]]] = None,
        score: int = 0,
    ):
        self.board = board
        self.current_player = current_player
        self.status = status
        self.selected = selected
        self.valid_moves = valid_moves if valid_moves is not None else []
        self.score = score

    def copy(self) -> "GameState":
        """Fast copy - board.copy() is optimized for contiguous int arrays."""
        return GameState(
            self.board.copy(),
            self.current_player,
            self.status,
            self.selected,
            list(self.valid_moves),
            self.score,
        )

    def clear_selection(self) -> None:
        self.selected = None
        self.valid_moves = []
