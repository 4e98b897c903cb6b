"""
Memory (pairs) implementation.

Uses int8 board of 4x4 card faces, 8 faces each appearing twice. Which
cards are face up lives beside the board:
    matched  - bool mask of cards already paired
    flipped  - flat indices of the (at most two) cards pending comparison

Legality is temporal, not spatial: any face-down card may be turned,
but never a third while two are pending. A mismatched pair stays up
until the "hide" action.
"""

from __future__ import annotations

import copy
from typing import List, Optional

import numpy as np

from game_arena.core.types import Position, Status
from game_arena.games.game_base import GameBase
from game_arena.games.game_state import GameState

GRID_SIZE = 4
PAIRS = GRID_SIZE * GRID_SIZE // 2

MATCH_POINTS = 10
TURN_PENALTY = 2

FACES = "ABCDEFGH"


class Memory(GameBase):
    """Single-player memory match on a 4x4 grid."""

    __slots__ = ('state', 'winner', 'matched', 'flipped', 'turns', 'rng')

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)
        self.reset()

    def reset(self) -> None:
        faces = np.repeat(np.arange(PAIRS, dtype=np.int8), 2)
        self.rng.shuffle(faces)
        self.state = GameState(faces.reshape(GRID_SIZE, GRID_SIZE), current_player=1)
        self.matched = np.zeros((GRID_SIZE, GRID_SIZE), dtype=bool)
        self.flipped: List[int] = []
        self.turns = 0
        self.winner = 0
        self._refresh()

    def game_id(self) -> str:
        return "memory"

    def num_players(self) -> int:
        return 1

    def deep_clone(self) -> "Memory":
        g = Memory.__new__(Memory)
        g.state = self.state.copy()
        g.matched = self.matched.copy()
        g.flipped = list(self.flipped)
        g.turns = self.turns
        g.winner = self.winner
        g.rng = copy.deepcopy(self.rng)
        return g

    @property
    def pending(self) -> bool:
        """True while a mismatched pair is face up awaiting `hide`."""
        return len(self.flipped) == 2

    def can_flip(self, index: int) -> bool:
        if self.is_over() or self.pending:
            return False
        if not 0 <= index < GRID_SIZE * GRID_SIZE:
            return False
        return index not in self.flipped and not self.matched.flat[index]

    def valid_moves(self) -> List[int]:
        """Flat indices of cards that may be turned now."""
        return [i for i in range(GRID_SIZE * GRID_SIZE) if self.can_flip(i)]

    def flip(self, index: int) -> bool:
        if not self.can_flip(index):
            return False

        self.flipped.append(index)
        if len(self.flipped) == 2:
            self._compare()
        self._refresh()
        return True

    def _compare(self) -> None:
        first, second = self.flipped
        faces = self.state.board.flat
        prior_turns = self.turns
        self.turns += 1
        if faces[first] != faces[second]:
            return

        self.matched.flat[first] = True
        self.matched.flat[second] = True
        self.flipped = []
        matched_cards = int(np.count_nonzero(self.matched))
        self.state.score = max(0, matched_cards * MATCH_POINTS - prior_turns * TURN_PENALTY)
        if self.matched.all():
            self.state.status = Status.WIN
            self.winner = 1

    def hide(self) -> bool:
        """Turn a pending mismatched pair face down again."""
        if not self.pending:
            return False
        self.flipped = []
        self._refresh()
        return True

    def handle(self, *action) -> bool:
        """`index`, `row, col`, or `"hide"`."""
        if not action:
            return False
        if action[0] == "hide":
            return self.hide()
        try:
            if len(action) >= 2:
                r, c = int(action[0]), int(action[1])
                if not (0 <= r < GRID_SIZE and 0 <= c < GRID_SIZE):
                    return False
                index = r * GRID_SIZE + c
            else:
                index = int(action[0])
        except (TypeError, ValueError):
            return False
        return self.flip(index)

    def _refresh(self) -> None:
        self.state.selected = (
            Position(*divmod(self.flipped[0], GRID_SIZE)) if self.flipped else None
        )
        self.state.valid_moves = [Position(*divmod(i, GRID_SIZE)) for i in self.valid_moves()]

    def face_up(self) -> np.ndarray:
        mask = self.matched.copy()
        for i in self.flipped:
            mask.flat[i] = True
        return mask

    def action_help(self) -> str:
        return "index (0-15) or row,col - turn a card; 'hide' - turn a mismatched pair back"

    def state_string(self) -> str:
        board = self.state.board
        up = self.face_up()
        lines = []
        for i in range(GRID_SIZE):
            lines.append(" ".join(
                FACES[int(board[i, j])] if up[i, j] else "?" for j in range(GRID_SIZE)
            ))
        lines.append(
            f"\nPairs: {int(np.count_nonzero(self.matched)) // 2}/{PAIRS}  "
            f"Turns: {self.turns}  Score: {self.state.score}"
        )
        return "\n".join(lines)
