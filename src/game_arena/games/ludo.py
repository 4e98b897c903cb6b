"""
Ludo implementation (simplified track).

Board is a 4x4 int8 matrix: one row per colour, one column per token.
    -1     = token still in base
    0..55  = steps along the track
    56     = home

Red (player 1) is the human; blue, green and yellow are scripted. A
token leaves base only on a 6, must reach home exactly, and a 6 grants
another turn. There is no capturing.
"""

from __future__ import annotations

import copy
from typing import List, Optional, Tuple

import numpy as np

from game_arena.core.types import Position, Status
from game_arena.games.game_base import GameBase
from game_arena.games.game_state import GameState

COLOURS = ("red", "blue", "green", "yellow")
TOKENS = 4
BASE = -1
HOME = 56
ENTRY_ROLL = 6


class Ludo(GameBase):
    """Four-player ludo race; red is human."""

    __slots__ = ('state', 'winner', 'dice', 'message', 'rng')

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)
        self.reset()

    def reset(self) -> None:
        self.state = GameState(np.full((len(COLOURS), TOKENS), BASE, dtype=np.int8), current_player=1)
        self.winner = 0
        self.dice: Optional[int] = None
        self.message = "red's turn - Roll the dice!"
        self._refresh()

    def game_id(self) -> str:
        return "ludo"

    def num_players(self) -> int:
        return len(COLOURS)

    def human_players(self) -> Tuple[int, ...]:
        return (1,)

    def deep_clone(self) -> "Ludo":
        g = Ludo.__new__(Ludo)
        g.state = self.state.copy()
        g.winner = self.winner
        g.dice = self.dice
        g.message = self.message
        g.rng = copy.deepcopy(self.rng)
        return g

    def set_state(self, game_state: GameState) -> None:
        self.state = game_state
        self.dice = None
        self._refresh()

    def colour(self, player: Optional[int] = None) -> str:
        return COLOURS[(player or self.state.current_player) - 1]

    def tokens(self, player: int) -> np.ndarray:
        return self.state.board[player - 1]

    def movable_tokens(self) -> List[int]:
        """Tokens of the player to act that the current dice value can move."""
        if self.dice is None or self.is_over():
            return []
        movable = []
        for i, pos in enumerate(self.tokens(self.state.current_player)):
            if pos == BASE:
                if self.dice == ENTRY_ROLL:
                    movable.append(i)
            elif pos + self.dice <= HOME:
                movable.append(i)
        return movable

    def valid_moves(self) -> list:
        if self.is_over():
            return []
        if self.dice is None:
            return ["roll"]
        return self.movable_tokens()

    def roll(self, value: Optional[int] = None) -> bool:
        """Roll for the player to act; pass the turn if nothing can move."""
        if self.is_over() or self.dice is not None:
            return False
        if value is None:
            value = int(self.rng.integers(1, 7))
        elif not 1 <= value <= 6:
            return False

        self.dice = value
        if self.movable_tokens():
            self.message = f"{self.colour()} rolled {value}. Select a token to move."
        else:
            self.message = f"{self.colour()} can't move. Next player's turn."
            self._next_turn(extra=False)
        self._refresh()
        return True

    def move_token(self, token: int) -> bool:
        if token not in self.movable_tokens():
            return False

        player = self.state.current_player
        row = self.tokens(player)
        row[token] = 0 if row[token] == BASE else row[token] + self.dice

        if np.all(row == HOME):
            self.winner = player
            self.state.status = Status.WIN if player in self.human_players() else Status.LOSE
            self.message = f"{self.colour()} wins!"
        else:
            self._next_turn(extra=self.dice == ENTRY_ROLL)
            self.message = f"{self.colour()}'s turn - Roll the dice!"
        self._refresh()
        return True

    def _next_turn(self, extra: bool) -> None:
        if not extra:
            self.state.current_player = self.state.current_player % len(COLOURS) + 1
        self.dice = None

    def handle(self, *action) -> bool:
        """`"roll"` or a token index 0-3. Human turns only."""
        if not action or self.state.current_player not in self.human_players():
            return False
        if action[0] == "roll":
            return self.roll()
        try:
            token = int(action[0])
        except (TypeError, ValueError):
            return False
        return self.move_token(token)

    def advance_until_human_turn(self) -> int:
        """Scripted colours roll, then move their first movable token."""
        actions = 0
        while not self.is_over() and self.state.current_player not in self.human_players():
            if self.dice is None:
                self.roll()
            else:
                self.move_token(self.movable_tokens()[0])
            actions += 1
        return actions

    def _refresh(self) -> None:
        """Envelope moves: "roll" before the dice is cast, then the movable tokens."""
        if self.dice is None:
            self.state.valid_moves = self.valid_moves()
            return
        row = self.state.current_player - 1
        self.state.valid_moves = [Position(row, t) for t in self.movable_tokens()]

    def action_help(self) -> str:
        return "roll - roll the dice; 0-3 - move that token"

    def state_string(self) -> str:
        lines = []
        for player, colour in enumerate(COLOURS, start=1):
            cells = ["base" if p == BASE else "home" if p == HOME else f"{int(p):>4}" for p in self.tokens(player)]
            marker = ">" if player == self.state.current_player else " "
            lines.append(f"{marker} {colour:<7}" + " ".join(f"{c:>4}" for c in cells))
        lines.append(f"\nDice: {self.dice or '-'}  {self.message}")
        return "\n".join(lines)
