"""
Chess implementation.

Board encoding (int8):
    0 = empty
    Positive = Player 1 (white): 1=Pawn, 2=Knight, 3=Bishop, 4=Rook, 5=Queen, 6=King
    Negative = Player 2 (black): same magnitudes, negated

White starts on rows 6-7 and moves toward row 0.

Rules are deliberately simplified: no castling, no en passant, and moves
are not filtered for check. "Checkmate" means the side to move has no
legal move at all.
"""

from __future__ import annotations

from typing import List

import numpy as np

from game_arena.core.types import Position, Status
from game_arena.games.game_base import PieceGame, owner_of
from game_arena.games.game_rules import ALL_DIRS, DIAGONAL, ORTHOGONAL, in_bounds, walk
from game_arena.games.game_state import GameState


# Piece type constants
EMPTY = 0
PAWN = 1
KNIGHT = 2
BISHOP = 3
ROOK = 4
QUEEN = 5
KING = 6

# Pawns reaching the last rank always become this piece
PROMOTION_PIECE = QUEEN

KNIGHT_STEPS = ((-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1))
KING_STEPS = ALL_DIRS

SLIDES = {
    ROOK: ORTHOGONAL,
    BISHOP: DIAGONAL,
    QUEEN: ALL_DIRS,
}

BACK_RANK = (ROOK, KNIGHT, BISHOP, QUEEN, KING, BISHOP, KNIGHT, ROOK)

CELL_STRINGS = {
    0: ".",
    1: "P", -1: "p",
    2: "N", -2: "n",
    3: "B", -3: "b",
    4: "R", -4: "r",
    5: "Q", -5: "q",
    6: "K", -6: "k",
}


class Chess(PieceGame):
    """8x8 chess with pseudo-legal move generation."""

    __slots__ = ('state', 'winner', 'history')

    def __init__(self):
        self.reset()

    @staticmethod
    def _initial_board() -> np.ndarray:
        """Create starting position."""
        board = np.zeros((8, 8), dtype=np.int8)
        board[0] = [-p for p in BACK_RANK]
        board[1] = -PAWN
        board[6] = PAWN
        board[7] = BACK_RANK
        return board

    def reset(self) -> None:
        self.state = GameState(self._initial_board(), current_player=1)
        self.winner = 0
        self.history = []

    def game_id(self) -> str:
        return "chess"

    def deep_clone(self) -> "Chess":
        g = Chess.__new__(Chess)
        g.state = self.state.copy()
        g.winner = self.winner
        g.history = list(self.history)
        return g

    def set_state(self, game_state: GameState) -> None:
        self.state = game_state
        self.winner = 0
        self.history = []
        self._update_status(3 - game_state.current_player)

    # -- legality oracle ------------------------------------------------------

    def legal_targets(self, r: int, c: int) -> List[Position]:
        board = self.state.board
        if not in_bounds(board, r, c):
            return []
        piece = int(board[r, c])
        if piece == EMPTY:
            return []

        player = owner_of(piece)
        kind = abs(piece)

        if kind == PAWN:
            return self._pawn_targets(board, r, c, player)
        if kind == KNIGHT:
            return self._step_targets(board, r, c, player, KNIGHT_STEPS)
        if kind == KING:
            return self._step_targets(board, r, c, player, KING_STEPS)
        return self._slide_targets(board, r, c, player, SLIDES[kind])

    @staticmethod
    def _pawn_targets(board: np.ndarray, r: int, c: int, player: int) -> List[Position]:
        """Forward 1 (or 2 from the start row) onto empty squares, capture diagonally."""
        moves = []
        dr = -1 if player == 1 else 1
        start_row = 6 if player == 1 else 1
        nr = r + dr

        if in_bounds(board, nr, c) and board[nr, c] == EMPTY:
            moves.append(Position(nr, c))
            jr = r + 2 * dr
            if r == start_row and in_bounds(board, jr, c) and board[jr, c] == EMPTY:
                moves.append(Position(jr, c))

        for dc in (-1, 1):
            nc = c + dc
            if in_bounds(board, nr, nc):
                target = int(board[nr, nc])
                if target != EMPTY and owner_of(target) != player:
                    moves.append(Position(nr, nc))
        return moves

    @staticmethod
    def _step_targets(board: np.ndarray, r: int, c: int, player: int, steps) -> List[Position]:
        """Single-step pieces (knight, king): empty square or enemy capture."""
        moves = []
        for dr, dc in steps:
            nr, nc = r + dr, c + dc
            if in_bounds(board, nr, nc) and owner_of(int(board[nr, nc])) != player:
                moves.append(Position(nr, nc))
        return moves

    @staticmethod
    def _slide_targets(board: np.ndarray, r: int, c: int, player: int, directions) -> List[Position]:
        """Sliding pieces: walk until the edge, an own piece, or a capture."""
        moves = []
        for dr, dc in directions:
            for nr, nc in walk(board, r, c, dr, dc):
                target = int(board[nr, nc])
                if target == EMPTY:
                    moves.append(Position(nr, nc))
                    continue
                if owner_of(target) != player:
                    moves.append(Position(nr, nc))
                break
        return moves

    # -- move applier -------------------------------------------------------

    def _relocate(self, board: np.ndarray, fr: int, fc: int, tr: int, tc: int) -> None:
        piece = int(board[fr, fc])
        last_rank = 0 if piece > 0 else 7
        if abs(piece) == PAWN and tr == last_rank:
            piece = PROMOTION_PIECE if piece > 0 else -PROMOTION_PIECE
        board[tr, tc] = piece
        board[fr, fc] = EMPTY

    # -- terminal-state detector ----------------------------------------------

    def is_checkmate(self, player: int) -> bool:
        """
        True if `player` still has a king but no legal move.

        Whether the king is actually attacked is never checked. A side
        whose king has been captured is not considered checkmated.
        """
        king = KING if player == 1 else -KING
        if not np.any(self.state.board == king):
            return False
        return not self.has_moves(player)

    def _update_status(self, mover: int) -> None:
        if self.is_checkmate(3 - mover):
            self.state.status = Status.CHECKMATE
            self.winner = mover
        else:
            self.state.status = Status.ONGOING

    def state_string(self) -> str:
        """Pretty-print the board, white at the bottom."""
        board = self.state.board
        lines = ["    0 1 2 3 4 5 6 7", "  ╭─────────────────╮"]
        for i in range(8):
            row = " ".join(CELL_STRINGS[int(board[i, j])] for j in range(8))
            lines.append(f"{i} │ {row} │")
        lines.append("  ╰─────────────────╯")
        side = "White" if self.state.current_player == 1 else "Black"
        lines.append(f"\nTo move: {side}  Status: {self.state.status.value}")
        return "\n".join(lines)
