"""
GameBase - abstract base class for all arena games.

Every game is a Board-State Machine: a fixed-shape board, a legality
oracle, a move applier, a terminal-state detector and a controller that
wires them together behind `handle()`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

import numpy as np

from game_arena.core.types import Move, Position, State, Status
from game_arena.games.game_rules import in_bounds
from game_arena.games.game_state import GameState


class GameBase(ABC):
    """
    Abstract base class for all arena games.

    IMPORTANT ARCHITECTURE NOTE:
    -----------------------------
    - Only the game itself writes its GameState. The arena reads it.
    - `handle()` is the controller entry point: it accepts raw user input,
      ignores anything illegal and returns whether the state changed.
    - `apply_move()` is the programmatic entry point: it raises on misuse.
    """

    @abstractmethod
    def game_id(self) -> str:
        """Return a stable identifier (e.g. 'tic-tac-toe')."""
        pass

    @abstractmethod
    def num_players(self) -> int:
        """Return number of players in the game."""
        pass

    def human_players(self) -> Tuple[int, ...]:
        """Players driven by user input. Everyone else is scripted."""
        return tuple(range(1, self.num_players() + 1))

    @abstractmethod
    def reset(self) -> None:
        """Rebuild the fixed initial layout and return to no-selection."""
        pass

    @abstractmethod
    def deep_clone(self) -> "GameBase":
        """Deep copy of game + state."""
        pass

    def get_state(self) -> GameState:
        """Return the current game state."""
        return self.state

    def set_state(self, game_state: GameState) -> None:
        """Replace the current game state."""
        self.state = game_state

    def current_player(self) -> int:
        """Return ID of player to act."""
        return self.state.current_player

    def status(self) -> Status:
        return self.state.status

    def is_over(self) -> bool:
        """Return True if the game has ended."""
        return self.state.status.terminal

    def get_result(self, agent_id: int) -> State:
        """
        Return payoff for the player:
            WIN / TIE / NEUTRAL / LOSS
        """
        if self.winner == agent_id:
            return State.WIN
        if self.winner != 0:
            return State.LOSS
        if self.state.status is Status.DRAW:
            return State.TIE
        if self.state.status is Status.LOSE:
            return State.LOSS
        return State.NEUTRAL

    @abstractmethod
    def valid_moves(self) -> Sequence:
        """
        Return all legal actions for the player to act.
        Example (TicTacToe): [(row, col), ...]
        """
        pass

    @abstractmethod
    def handle(self, *action) -> bool:
        """
        Feed one user action (cell click, column, direction, ...).

        Illegal or malformed input leaves the state untouched and returns
        False. Never raises for bad input.
        """
        pass

    def transition(self, *action) -> "GameBase":
        """Pure (state, event) -> state: return a new game with the action handled."""
        game = self.deep_clone()
        game.handle(*action)
        return game

    def advance_until_human_turn(self) -> int:
        """
        Play scripted turns until a human is to act or the game ends.

        Returns the number of scripted actions taken. Games without
        scripted players take none.
        """
        return 0

    @abstractmethod
    def action_help(self) -> str:
        """One-line description of the actions `handle()` accepts."""
        pass

    @abstractmethod
    def state_string(self) -> str:
        """Pretty string representation of the state."""
        pass


def owner_of(piece: int) -> int:
    """Signed encoding: positive pieces belong to player 1, negative to player 2."""
    if piece > 0:
        return 1
    if piece < 0:
        return 2
    return 0


class PieceGame(GameBase):
    """
    Select-then-move controller for games with movable pieces.

    States: no-selection -> awaiting-destination -> (move) -> no-selection,
    or terminal once the detector fires. Subclasses provide the legality
    oracle, the move applier and the terminal-state detector.
    """

    ROWS = 8
    COLS = 8

    # -- hooks ------------------------------------------------------------

    @abstractmethod
    def legal_targets(self, r: int, c: int) -> List[Position]:
        """Destinations the piece at (r, c) may move to this ply."""
        pass

    @abstractmethod
    def _relocate(self, board: np.ndarray, fr: int, fc: int, tr: int, tc: int) -> None:
        """Move applier: mutate `board` for an already validated move."""
        pass

    @abstractmethod
    def _update_status(self, mover: int) -> None:
        """Terminal-state detector, run after `mover` has moved."""
        pass

    # -- oracle helpers -------------------------------------------------------

    def num_players(self) -> int:
        return 2

    def pieces_of(self, player: int) -> np.ndarray:
        board = self.state.board
        return np.argwhere(board > 0) if player == 1 else np.argwhere(board < 0)

    def has_moves(self, player: int) -> bool:
        return any(self.legal_targets(int(r), int(c)) for r, c in self.pieces_of(player))

    def valid_moves(self) -> np.ndarray:
        """
        Return all legal moves as Nx4 int32 array.
        Each row: [from_r, from_c, to_r, to_c]
        """
        moves = []
        for r, c in self.pieces_of(self.state.current_player):
            for tr, tc in self.legal_targets(int(r), int(c)):
                moves.append((r, c, tr, tc))

        if not moves:
            return np.zeros((0, 4), dtype=np.int32)
        return np.array(moves, dtype=np.int32)

    def is_valid_move(self, move) -> bool:
        """Check whether `move` is a legal [fr, fc, tr, tc] for the player to act."""
        try:
            fr, fc, tr, tc = (int(v) for v in move)
        except (TypeError, ValueError):
            return False

        board = self.state.board
        if not in_bounds(board, fr, fc):
            return False
        if owner_of(int(board[fr, fc])) != self.state.current_player:
            return False
        return (tr, tc) in self.legal_targets(fr, fc)

    # -- move applier entry -------------------------------------------------

    def apply_move(self, move, *, validated: bool = False) -> None:
        """Apply move: [from_r, from_c, to_r, to_c].

        Args:
            move: The move to apply.
            validated:  If True, skip validation (caller guarantees legality).

        Raises:
            RuntimeError: if the game is already over.
            ValueError: if move is invalid for current player.
        """
        if self.is_over():
            raise RuntimeError("Cannot apply move: the game is already over.")

        fr, fc, tr, tc = (int(v) for v in move)
        if not validated and not self.is_valid_move((fr, fc, tr, tc)):
            raise ValueError(
                f"Invalid move {(fr, fc, tr, tc)} for player {self.state.current_player}"
            )

        board = self.state.board
        mover = self.state.current_player
        piece = int(board[fr, fc])

        self._relocate(board, fr, fc, tr, tc)
        self.history.append(Move(Position(fr, fc), Position(tr, tc), piece))

        self.state.current_player = 3 - mover
        self.state.clear_selection()
        self._update_status(mover)

    # -- controller ---------------------------------------------------------

    def handle(self, *action) -> bool:
        """Click on (row, col)."""
        if self.is_over():
            return False
        try:
            r, c = int(action[0]), int(action[1])
        except (IndexError, TypeError, ValueError):
            return False

        state = self.state
        target = Position(r, c)

        if state.selected is not None and target in state.valid_moves:
            sr, sc = state.selected
            self.apply_move((sr, sc, r, c), validated=True)
            return True

        if in_bounds(state.board, r, c) and owner_of(int(state.board[r, c])) == state.current_player:
            state.selected = target
            state.valid_moves = self.legal_targets(r, c)
            return True

        if state.selected is not None:
            state.clear_selection()
            return True
        return False

    def action_help(self) -> str:
        return "row,col - select one of your pieces, then a highlighted destination"
