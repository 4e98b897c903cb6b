"""
Connect Four implementation.

Uses int8 board of 6 rows x 7 columns, row 0 at the top:
    0 = empty
    1 = player 1 disc
    2 = player 2 disc

A move is a column; gravity decides the row.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from game_arena.core.types import Move, Position, Status
from game_arena.games.game_base import GameBase
from game_arena.games.game_rules import connected
from game_arena.games.game_state import GameState

CELL_STRINGS = {0: ".", 1: "X", 2: "O"}

WIN_LENGTH = 4


class ConnectFour(GameBase):
    """Hot-seat Connect Four on a 6x7 board."""

    __slots__ = ('state', 'winner', 'history')

    ROWS = 6
    COLS = 7

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.state = GameState(np.zeros((self.ROWS, self.COLS), dtype=np.int8), current_player=1)
        self.winner = 0
        self.history = []
        self._refresh_valid_moves()

    def game_id(self) -> str:
        return "connect-four"

    def num_players(self) -> int:
        return 2

    def deep_clone(self) -> "ConnectFour":
        g = ConnectFour.__new__(ConnectFour)
        g.state = self.state.copy()
        g.winner = self.winner
        g.history = list(self.history)
        return g

    def set_state(self, game_state: GameState) -> None:
        self.state = game_state
        self.history = []
        board = game_state.board
        self.winner = 0
        for r, c in np.argwhere(board != 0):
            if connected(board, int(r), int(c), WIN_LENGTH):
                self.winner = int(board[r, c])
                break
        self._update_status()

    def accepts(self, col: int) -> bool:
        """A column accepts a drop iff its top cell is empty."""
        return 0 <= col < self.COLS and bool(self.state.board[0, col] == 0)

    def landing_row(self, col: int) -> Optional[int]:
        """Lowest empty row in `col`, or None if the column is full or off the board."""
        if not self.accepts(col):
            return None
        empty = np.flatnonzero(self.state.board[:, col] == 0)
        return int(empty[-1])

    def valid_moves(self) -> np.ndarray:
        """Columns that accept a drop."""
        if self.is_over():
            return np.zeros(0, dtype=np.int64)
        return np.flatnonzero(self.state.board[0] == 0)

    def apply_move(self, move, *, validated: bool = False) -> None:
        if self.is_over():
            raise RuntimeError("Cannot apply move: the game is already over.")

        col = int(np.ravel(move)[0])
        row = self.landing_row(col)
        if row is None:
            raise ValueError(f"Column {col} does not accept a disc")

        player = self.state.current_player
        board = self.state.board
        board[row, col] = player
        self.history.append(Move(Position(row, col), Position(row, col), player))

        if connected(board, row, col, WIN_LENGTH):
            self.winner = player

        self.state.current_player = 3 - player
        self._update_status()

    def handle(self, *action) -> bool:
        """
        Drop into a column. Accepts `col` or a cell click `(row, col)`;
        full or unknown columns are ignored.
        """
        if self.is_over():
            return False
        try:
            col = int(action[-1])
        except (IndexError, TypeError, ValueError):
            return False
        if not self.accepts(col):
            return False
        self.apply_move((col,), validated=True)
        return True

    def _update_status(self) -> None:
        if self.winner != 0:
            self.state.status = Status.WIN
        elif np.all(self.state.board[0] != 0):
            self.state.status = Status.DRAW
        else:
            self.state.status = Status.ONGOING
        self._refresh_valid_moves()

    def _refresh_valid_moves(self) -> None:
        """Legal destinations: the landing cell of every open column."""
        if self.is_over():
            self.state.valid_moves = []
            return
        self.state.valid_moves = [
            Position(self.landing_row(int(col)), int(col)) for col in self.valid_moves()
        ]

    def action_help(self) -> str:
        return "col - drop a disc into column 0-6"

    def state_string(self) -> str:
        board = self.state.board
        lines = [" " + " ".join(str(c) for c in range(self.COLS))]
        for i in range(self.ROWS):
            lines.append("│" + " ".join(CELL_STRINGS[int(board[i, j])] for j in range(self.COLS)) + "│")
        lines.append("╰" + "─" * (2 * self.COLS - 1) + "╯")
        return "\n".join(lines)
