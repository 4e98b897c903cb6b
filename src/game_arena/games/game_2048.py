"""
2048 implementation.

Uses int32 board of 4x4 tile values, 0 = empty. A move slides every row
(or column) toward one edge; equal neighbours merge once per move.
"""

from __future__ import annotations

import copy
from typing import List, Optional, Tuple

import numpy as np

from game_arena.core.types import Status
from game_arena.games.game_base import GameBase
from game_arena.games.game_state import GameState

GRID_SIZE = 4
WIN_TILE = 2048
FOUR_PROBABILITY = 0.1

DIRECTIONS = ("up", "down", "left", "right")


def slide_line(line: np.ndarray) -> Tuple[np.ndarray, int]:
    """
    Slide one row toward index 0 and merge.

    Non-empty tiles are compacted, then scanned left to right; two equal
    neighbours merge and the merged tile cannot merge again this move,
    so [2, 2, 2, 2] becomes [4, 4, 0, 0].

    Returns (new_line, points gained).
    """
    tiles = [int(v) for v in line if v != 0]
    merged: List[int] = []
    gained = 0
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged.append(tiles[i] * 2)
            gained += tiles[i] * 2
            i += 2
        else:
            merged.append(tiles[i])
            i += 1
    out = np.zeros_like(line)
    out[:len(merged)] = merged
    return out, gained


def slide_board(board: np.ndarray, direction: str) -> Tuple[np.ndarray, int]:
    """Apply `slide_line` to every row/column for `direction`. Returns (board, gained)."""
    if direction not in DIRECTIONS:
        raise ValueError(f"Unknown direction: {direction}")

    # Orient the board so every move becomes a slide to the left
    if direction == "left":
        view = board
    elif direction == "right":
        view = board[:, ::-1]
    elif direction == "up":
        view = board.T
    else:
        view = board.T[:, ::-1]

    result = view.copy()
    gained = 0
    for i in range(result.shape[0]):
        result[i], points = slide_line(result[i])
        gained += points

    if direction == "left":
        out = result
    elif direction == "right":
        out = result[:, ::-1]
    elif direction == "up":
        out = result.T
    else:
        out = result[:, ::-1].T
    return np.ascontiguousarray(out), gained


def can_merge(board: np.ndarray) -> bool:
    """True if any two row- or column-adjacent tiles share a value."""
    return bool(np.any(board[:, :-1] == board[:, 1:]) or np.any(board[:-1, :] == board[1:, :]))


class Game2048(GameBase):
    """Single-player 2048 on a 4x4 grid."""

    __slots__ = ('state', 'winner', 'rng')

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)
        self.reset()

    def reset(self) -> None:
        self.state = GameState(np.zeros((GRID_SIZE, GRID_SIZE), dtype=np.int32), current_player=1)
        self.winner = 0
        self.spawn_tile()
        self.spawn_tile()
        self._update_status()

    def game_id(self) -> str:
        return "2048"

    def num_players(self) -> int:
        return 1

    def deep_clone(self) -> "Game2048":
        g = Game2048.__new__(Game2048)
        g.state = self.state.copy()
        g.winner = self.winner
        g.rng = copy.deepcopy(self.rng)
        return g

    def set_state(self, game_state: GameState) -> None:
        self.state = game_state
        self.winner = 0
        self._update_status()

    def spawn_tile(self) -> bool:
        """Drop a 2 (90%) or 4 (10%) on a random empty cell."""
        empty = np.argwhere(self.state.board == 0)
        if len(empty) == 0:
            return False
        r, c = empty[self.rng.integers(len(empty))]
        self.state.board[r, c] = 4 if self.rng.random() < FOUR_PROBABILITY else 2
        return True

    def valid_moves(self) -> List[str]:
        """Directions that would change the board."""
        if self.is_over():
            return []
        board = self.state.board
        return [d for d in DIRECTIONS if not np.array_equal(slide_board(board, d)[0], board)]

    def apply_move(self, move: str, *, validated: bool = False) -> None:
        if self.is_over():
            raise RuntimeError("Cannot apply move: the game is already over.")

        board, gained = slide_board(self.state.board, move)
        if not validated and np.array_equal(board, self.state.board):
            raise ValueError(f"Sliding {move} changes nothing")

        self.state.board = board
        self.state.score += gained
        self.spawn_tile()
        self._update_status()

    def handle(self, *action) -> bool:
        """Slide in a direction; moves that change nothing are ignored."""
        if self.is_over() or not action:
            return False
        direction = str(action[0]).lower()
        if direction not in DIRECTIONS:
            return False
        board, _ = slide_board(self.state.board, direction)
        if np.array_equal(board, self.state.board):
            return False
        self.apply_move(direction, validated=True)
        return True

    def _update_status(self) -> None:
        board = self.state.board
        if np.any(board >= WIN_TILE):
            self.state.status = Status.WIN
            self.winner = 1
        elif np.all(board != 0) and not can_merge(board):
            self.state.status = Status.LOSE
        else:
            self.state.status = Status.ONGOING
        self.state.valid_moves = self.valid_moves()

    def action_help(self) -> str:
        return "up | down | left | right"

    def state_string(self) -> str:
        board = self.state.board
        lines = ["╭──────┬──────┬──────┬──────╮"]
        for i in range(GRID_SIZE):
            cells = [f"{int(v):^6}" if v else " " * 6 for v in board[i]]
            lines.append("│" + "│".join(cells) + "│")
            if i < GRID_SIZE - 1:
                lines.append("├──────┼──────┼──────┼──────┤")
        lines.append("╰──────┴──────┴──────┴──────╯")
        lines.append(f"\nScore: {self.state.score}")
        return "\n".join(lines)
