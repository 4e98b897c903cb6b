"""
Reversi (Othello) implementation.

Uses int8 board:
    0 = empty
    1 = player 1 (black, moves first)
    2 = player 2 (white)

The legality oracle works on cells, not pieces: an empty cell is legal
when placing there would flank at least one run of opponent discs.
"""

from __future__ import annotations

from typing import List

import numpy as np

from game_arena.core.types import Move, Position, Status
from game_arena.games.game_base import GameBase
from game_arena.games.game_rules import ALL_DIRS, in_bounds, walk
from game_arena.games.game_state import GameState

CELL_STRINGS = {0: ".", 1: "●", 2: "○"}

SIZE = 8


def flanked(board: np.ndarray, r: int, c: int, player: int) -> List[Position]:
    """
    Opponent discs that a disc of `player` placed at (r, c) would flip.

    A direction contributes only when its run of opponent discs is closed
    by one of the player's own discs before an empty cell or the edge.
    """
    opponent = 3 - player
    flips: List[Position] = []
    for dr, dc in ALL_DIRS:
        run: List[Position] = []
        for nr, nc in walk(board, r, c, dr, dc):
            cell = board[nr, nc]
            if cell == opponent:
                run.append(Position(nr, nc))
                continue
            if cell == player:
                flips.extend(run)
            break
    return flips


def legal_cells(board: np.ndarray, player: int) -> List[Position]:
    """Every empty cell where `player` may place a disc."""
    return [
        Position(int(r), int(c))
        for r, c in np.argwhere(board == 0)
        if flanked(board, int(r), int(c), player)
    ]


class Reversi(GameBase):
    """Hot-seat Reversi on an 8x8 board."""

    __slots__ = ('state', 'winner', 'history')

    def __init__(self):
        self.reset()

    @staticmethod
    def _initial_board() -> np.ndarray:
        board = np.zeros((SIZE, SIZE), dtype=np.int8)
        board[3, 3] = board[4, 4] = 2
        board[3, 4] = board[4, 3] = 1
        return board

    def reset(self) -> None:
        self.state = GameState(self._initial_board(), current_player=1)
        self.winner = 0
        self.history = []
        self._refresh()

    def game_id(self) -> str:
        return "reversi"

    def num_players(self) -> int:
        return 2

    def deep_clone(self) -> "Reversi":
        g = Reversi.__new__(Reversi)
        g.state = self.state.copy()
        g.winner = self.winner
        g.history = list(self.history)
        return g

    def set_state(self, game_state: GameState) -> None:
        self.state = game_state
        self.winner = 0
        self.history = []
        game_state.status = Status.ONGOING
        mover = game_state.current_player
        if not legal_cells(game_state.board, mover):
            # Mover is stuck: the opponent plays on, or nobody can and the game ends
            self._pass_turn(mover)
        self._refresh()

    def disc_counts(self) -> tuple:
        board = self.state.board
        return int(np.count_nonzero(board == 1)), int(np.count_nonzero(board == 2))

    def legal_targets(self, r: int, c: int) -> List[Position]:
        """Cell legality for the player to act: [(r, c)] if placeable, else []."""
        board = self.state.board
        if not in_bounds(board, r, c) or board[r, c] != 0:
            return []
        if flanked(board, r, c, self.state.current_player):
            return [Position(r, c)]
        return []

    def valid_moves(self) -> np.ndarray:
        if self.is_over():
            return np.zeros((0, 2), dtype=np.int64)
        cells = legal_cells(self.state.board, self.state.current_player)
        return np.array(cells, dtype=np.int64).reshape(-1, 2)

    def apply_move(self, move, *, validated: bool = False) -> None:
        if self.is_over():
            raise RuntimeError("Cannot apply move: the game is already over.")

        r, c = int(move[0]), int(move[1])
        board = self.state.board
        player = self.state.current_player

        if not validated and not self.legal_targets(r, c):
            raise ValueError(f"Cell ({r},{c}) flanks nothing for player {player}")

        flips = flanked(board, r, c, player)
        board[r, c] = player
        for fr, fc in flips:
            board[fr, fc] = player
        self.history.append(Move(Position(r, c), Position(r, c), player))

        self._pass_turn(player)
        self._refresh()

    def _pass_turn(self, mover: int) -> None:
        """
        Hand the turn to the opponent if they can move, back to the mover
        if only the mover can, and end the game if neither can.
        """
        board = self.state.board
        opponent = 3 - mover
        if legal_cells(board, opponent):
            self.state.current_player = opponent
        elif legal_cells(board, mover):
            self.state.current_player = mover
        else:
            self._finish()

    def _finish(self) -> None:
        black, white = self.disc_counts()
        if black > white:
            self.state.status = Status.WIN
            self.winner = 1
        elif black < white:
            self.state.status = Status.LOSE
            self.winner = 2
        else:
            self.state.status = Status.DRAW
            self.winner = 0

    def _refresh(self) -> None:
        self.state.score = self.disc_counts()[0]
        if self.is_over():
            self.state.valid_moves = []
        else:
            self.state.valid_moves = legal_cells(self.state.board, self.state.current_player)

    def handle(self, *action) -> bool:
        """Place a disc on (row, col); cells that flank nothing are ignored."""
        if self.is_over():
            return False
        try:
            r, c = int(action[0]), int(action[1])
        except (IndexError, TypeError, ValueError):
            return False
        if not self.legal_targets(r, c):
            return False
        self.apply_move((r, c), validated=True)
        return True

    def action_help(self) -> str:
        return "row,col - place a disc that flanks an opponent run"

    def state_string(self) -> str:
        board = self.state.board
        lines = ["    0 1 2 3 4 5 6 7", "  ╭─────────────────╮"]
        for i in range(SIZE):
            row = " ".join(CELL_STRINGS[int(board[i, j])] for j in range(SIZE))
            lines.append(f"{i} │ {row} │")
        lines.append("  ╰─────────────────╯")
        black, white = self.disc_counts()
        lines.append(f"\nBlack: {black}  White: {white}  To move: {self.state.current_player}")
        return "\n".join(lines)
