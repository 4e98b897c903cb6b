"""
Checkers implementation.

Board encoding (int8):
    0 = empty
    Positive = Player 1 (white): 1=Man, 2=King
    Negative = Player 2 (black): -1=Man, -2=King

White men start on rows 5-7 and move toward row 0, black men on rows
0-2 moving toward row 7. Pieces sit on dark squares ((row + col) odd).

Simplifications: one capture per move (no multi-jump chaining) and
captures are never mandatory. The side to move with no legal move loses.
"""

from __future__ import annotations

from typing import List

import numpy as np

from game_arena.core.types import Position, Status
from game_arena.games.game_base import PieceGame, owner_of
from game_arena.games.game_rules import DIAGONAL, in_bounds
from game_arena.games.game_state import GameState

EMPTY = 0
MAN = 1
KING = 2

FORWARD = {
    1: ((-1, -1), (-1, 1)),
    2: ((1, -1), (1, 1)),
}

CELL_STRINGS = {0: ".", 1: "w", 2: "W", -1: "b", -2: "B"}


class Checkers(PieceGame):
    """8x8 checkers with single jumps."""

    __slots__ = ('state', 'winner', 'history')

    def __init__(self):
        self.reset()

    @staticmethod
    def _initial_board() -> np.ndarray:
        board = np.zeros((8, 8), dtype=np.int8)
        dark = (np.add.outer(np.arange(8), np.arange(8)) % 2) == 1
        board[:3][dark[:3]] = -MAN
        board[5:][dark[5:]] = MAN
        return board

    def reset(self) -> None:
        self.state = GameState(self._initial_board(), current_player=1)
        self.winner = 0
        self.history = []

    def game_id(self) -> str:
        return "checkers"

    def deep_clone(self) -> "Checkers":
        g = Checkers.__new__(Checkers)
        g.state = self.state.copy()
        g.winner = self.winner
        g.history = list(self.history)
        return g

    def set_state(self, game_state: GameState) -> None:
        self.state = game_state
        self.winner = 0
        self.history = []
        self._update_status(3 - game_state.current_player)

    def legal_targets(self, r: int, c: int) -> List[Position]:
        """Diagonal steps onto empty squares, plus a jump over an adjacent enemy."""
        board = self.state.board
        if not in_bounds(board, r, c):
            return []
        piece = int(board[r, c])
        if piece == EMPTY:
            return []

        player = owner_of(piece)
        directions = DIAGONAL if abs(piece) == KING else FORWARD[player]

        moves = []
        for dr, dc in directions:
            nr, nc = r + dr, c + dc
            if not in_bounds(board, nr, nc):
                continue
            neighbour = int(board[nr, nc])
            if neighbour == EMPTY:
                moves.append(Position(nr, nc))
            elif owner_of(neighbour) != player:
                jr, jc = nr + dr, nc + dc
                if in_bounds(board, jr, jc) and board[jr, jc] == EMPTY:
                    moves.append(Position(jr, jc))
        return moves

    def _relocate(self, board: np.ndarray, fr: int, fc: int, tr: int, tc: int) -> None:
        piece = int(board[fr, fc])
        if abs(tr - fr) == 2:
            board[(fr + tr) // 2, (fc + tc) // 2] = EMPTY
        last_row = 0 if piece > 0 else 7
        if tr == last_row:
            piece = KING if piece > 0 else -KING
        board[tr, tc] = piece
        board[fr, fc] = EMPTY

    def _update_status(self, mover: int) -> None:
        if self.has_moves(3 - mover):
            self.state.status = Status.ONGOING
        else:
            self.state.status = Status.WIN
            self.winner = mover

    def state_string(self) -> str:
        board = self.state.board
        lines = ["    0 1 2 3 4 5 6 7", "  ╭─────────────────╮"]
        for i in range(8):
            row = " ".join(CELL_STRINGS[int(board[i, j])] for j in range(8))
            lines.append(f"{i} │ {row} │")
        lines.append("  ╰─────────────────╯")
        side = "White" if self.state.current_player == 1 else "Black"
        lines.append(f"\nTo move: {side}  Status: {self.state.status.value}")
        return "\n".join(lines)
