"""
Snake & Ladders implementation.

The board is a position vector, one int8 square number per player
(0 = off the board, 100 = finish). Player 1 is the human, player 2 is
scripted and simply rolls.
"""

from __future__ import annotations

import copy
from typing import List, Optional, Tuple

import numpy as np

from game_arena.core.types import Status
from game_arena.games.game_base import GameBase
from game_arena.games.game_state import GameState

BOARD_SIZE = 10
FINAL_SQUARE = BOARD_SIZE * BOARD_SIZE

SNAKES = {99: 54, 95: 75, 87: 24, 62: 19, 48: 26, 36: 6, 16: 4}
LADDERS = {2: 38, 7: 14, 8: 31, 15: 26, 21: 42, 28: 84, 51: 67, 71: 91, 78: 98, 80: 100}

PLAYER_NAMES = {1: "You", 2: "AI"}


def resolve_square(square: int) -> int:
    """Follow a snake or ladder starting on `square`, if any."""
    return SNAKES.get(square, LADDERS.get(square, square))


def square_to_cell(square: int) -> Optional[Tuple[int, int]]:
    """Grid (row, col) of a square on the boustrophedon board; None before square 1."""
    if square < 1:
        return None
    row = BOARD_SIZE - 1 - (square - 1) // BOARD_SIZE
    offset = (square - 1) % BOARD_SIZE
    row_from_bottom = BOARD_SIZE - 1 - row
    col = offset if row_from_bottom % 2 == 0 else BOARD_SIZE - 1 - offset
    return row, col


class SnakeLadders(GameBase):
    """Two-player race: you against a scripted roller."""

    __slots__ = ('state', 'winner', 'dice', 'message', 'rng')

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)
        self.reset()

    def reset(self) -> None:
        self.state = GameState(np.zeros(2, dtype=np.int8), current_player=1)
        self.winner = 0
        self.dice: Optional[int] = None
        self.message = "Roll the dice to start!"
        self._refresh()

    def game_id(self) -> str:
        return "snake-ladders"

    def num_players(self) -> int:
        return 2

    def human_players(self) -> Tuple[int, ...]:
        return (1,)

    def deep_clone(self) -> "SnakeLadders":
        g = SnakeLadders.__new__(SnakeLadders)
        g.state = self.state.copy()
        g.winner = self.winner
        g.dice = self.dice
        g.message = self.message
        g.rng = copy.deepcopy(self.rng)
        return g

    def set_state(self, game_state: GameState) -> None:
        self.state = game_state
        self._refresh()

    def position(self, player: int) -> int:
        return int(self.state.board[player - 1])

    def valid_moves(self) -> List[str]:
        return [] if self.is_over() else ["roll"]

    def roll(self, value: Optional[int] = None) -> bool:
        """
        Roll for the player to act and move them.

        Overshooting the final square forfeits the move. The turn always
        passes unless the roll wins the game.
        """
        if self.is_over():
            return False
        if value is None:
            value = int(self.rng.integers(1, 7))
        elif not 1 <= value <= 6:
            return False

        player = self.state.current_player
        name = PLAYER_NAMES[player]
        self.dice = value
        target = self.position(player) + value

        if target > FINAL_SQUARE:
            self.message = f"{name} need exact number to win!"
            self.state.current_player = 3 - player
            self._refresh()
            return True

        landed = resolve_square(target)
        if target in SNAKES:
            self.message = f"{name} hit a snake! Going down from {target} to {landed}"
        elif target in LADDERS:
            self.message = f"{name} found a ladder! Climbing from {target} to {landed}"
        else:
            self.message = f"{name} moved to {landed}"
        self.state.board[player - 1] = landed

        if landed >= FINAL_SQUARE:
            self.winner = player
            self.state.status = Status.WIN if player == 1 else Status.LOSE
            self.message = f"{name} wins!"
        else:
            self.state.current_player = 3 - player
        self._refresh()
        return True

    def handle(self, *action) -> bool:
        """`"roll"`, only on the human's turn."""
        if not action or action[0] != "roll":
            return False
        if self.state.current_player not in self.human_players():
            return False
        return self.roll()

    def advance_until_human_turn(self) -> int:
        turns = 0
        while not self.is_over() and self.state.current_player not in self.human_players():
            self.roll()
            turns += 1
        return turns

    def _refresh(self) -> None:
        self.state.valid_moves = self.valid_moves()

    def action_help(self) -> str:
        return "roll - roll the dice"

    def state_string(self) -> str:
        grid = [["." for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
        for square, mark in [(s, "S") for s in SNAKES] + [(s, "L") for s in LADDERS]:
            r, c = square_to_cell(square)
            grid[r][c] = mark
        for player, mark in ((2, "A"), (1, "Y")):
            cell = square_to_cell(self.position(player))
            if cell is not None:
                grid[cell[0]][cell[1]] = mark

        lines = [" ".join(row) for row in grid]
        lines.append(f"\nYou: {self.position(1)}  AI: {self.position(2)}  Dice: {self.dice or '-'}")
        lines.append(self.message)
        return "\n".join(lines)
