"""
TicTacToe game implementation.

Uses int8 board:
    0 = empty
    1 = player 1 (X)
    2 = player 2 (O)
"""

from __future__ import annotations

import numpy as np

from game_arena.core.types import Move, Position, Status
from game_arena.games.game_base import GameBase
from game_arena.games.game_rules import board_full, connected, in_bounds
from game_arena.games.game_state import GameState

# Cell strings: each cell value maps to its display string
CELL_STRINGS = {0: " ", 1: "X", 2: "O"}

WIN_LENGTH = 3


class TicTacToe(GameBase):
    """Hot-seat TicTacToe."""

    __slots__ = ('state', 'winner', 'history')

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.state = GameState(np.zeros((3, 3), dtype=np.int8), current_player=1)
        self.state.valid_moves = self._empty_cells()
        self.winner = 0  # 0=none, 1=player1, 2=player2
        self.history = []

    def game_id(self) -> str:
        return "tic-tac-toe"

    def num_players(self) -> int:
        return 2

    def deep_clone(self) -> "TicTacToe":
        g = TicTacToe.__new__(TicTacToe)
        g.state = self.state.copy()
        g.winner = self.winner
        g.history = list(self.history)
        return g

    def set_state(self, game_state: GameState) -> None:
        self.state = game_state
        self.history = []
        # Recompute winner from state
        self.winner = self._compute_winner()
        self._update_status()

    def _empty_cells(self) -> list:
        return [Position(int(r), int(c)) for r, c in np.argwhere(self.state.board == 0)]

    def valid_moves(self) -> np.ndarray:
        """Return empty cell positions as array of shape (N, 2)."""
        if self.is_over():
            return np.zeros((0, 2), dtype=np.int64)
        return np.argwhere(self.state.board == 0)

    def apply_move(self, move, *, validated: bool = False) -> None:
        if self.is_over():
            raise RuntimeError("Cannot apply move: the game is already over.")

        r, c = int(move[0]), int(move[1])
        board = self.state.board

        if not validated:
            if not in_bounds(board, r, c):
                raise ValueError(f"Cell ({r},{c}) is off the board")
            if board[r, c] != 0:
                raise ValueError(f"Cell ({r},{c}) is occupied")

        player = self.state.current_player
        board[r, c] = player
        self.history.append(Move(Position(r, c), Position(r, c), player))

        if connected(board, r, c, WIN_LENGTH):
            self.winner = player

        self.state.current_player = 3 - player  # Toggle 1↔2
        self._update_status()

    def handle(self, *action) -> bool:
        """Click on (row, col); occupied or off-board cells are ignored."""
        if self.is_over():
            return False
        try:
            r, c = int(action[0]), int(action[1])
        except (IndexError, TypeError, ValueError):
            return False
        if not in_bounds(self.state.board, r, c) or self.state.board[r, c] != 0:
            return False
        self.apply_move((r, c), validated=True)
        return True

    def _update_status(self) -> None:
        if self.winner != 0:
            self.state.status = Status.WIN
        elif board_full(self.state.board):
            self.state.status = Status.DRAW
        else:
            self.state.status = Status.ONGOING
        self.state.valid_moves = [] if self.is_over() else self._empty_cells()

    def _compute_winner(self) -> int:
        """Recompute winner from current board state."""
        board = self.state.board
        for r, c in np.argwhere(board != 0):
            if connected(board, int(r), int(c), WIN_LENGTH):
                return int(board[r, c])
        return 0

    def action_help(self) -> str:
        return "row,col - place your mark on an empty cell"

    def state_string(self) -> str:
        board = self.state.board
        lines = ["╭───┬───┬───╮"]
        for i in range(3):
            row = "│ " + " │ ".join(CELL_STRINGS[int(board[i, j])] for j in range(3)) + " │"
            lines.append(row)
            if i < 2:
                lines.append("├───┼───┼───┤")
        lines.append("╰───┴───┴───╯")
        return "\n".join(lines)
