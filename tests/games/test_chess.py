"""
Tests for game_arena.games.chess

Tests the chess oracle, move applier, checkmate detector and the
select-then-move controller.
"""

import numpy as np
import pytest

from game_arena.core.types import Position, State, Status
from game_arena.games.chess import KING, KNIGHT, PAWN, QUEEN, ROOK, Chess
from game_arena.games.game_state import GameState


@pytest.fixture
def game() -> Chess:
    """Fresh chess game."""
    return Chess()


def empty_board() -> np.ndarray:
    return np.zeros((8, 8), dtype=np.int8)


def boxed_in_black_board() -> np.ndarray:
    """
    Black king in the corner, walled in by its own blocked pawns.

    Black pawns fill columns 0-1 from row 1 to row 7 plus (0, 1), so no
    black piece has a pseudo-legal move. White has a king and a rook.
    """
    board = empty_board()
    board[0, 0] = -KING
    board[0, 1] = -PAWN
    board[1:, 0] = -PAWN
    board[1:, 1] = -PAWN
    board[7, 7] = KING
    board[5, 5] = ROOK
    return board


class TestInitialization:
    """Initial layout tests."""

    def test_initial_layout(self, game: Chess):
        """White on rows 6-7, black on rows 0-1, white to move."""
        board = game.get_state().board
        assert np.all(board[6] == PAWN)
        assert np.all(board[1] == -PAWN)
        assert board[7, 4] == KING
        assert board[0, 4] == -KING
        assert np.all(board[2:6] == 0)
        assert game.current_player() == 1
        assert game.status() is Status.ONGOING

    def test_metadata(self, game: Chess):
        assert game.game_id() == "chess"
        assert game.num_players() == 2

    def test_twenty_opening_moves(self, game: Chess):
        """16 pawn moves plus 4 knight moves."""
        assert len(game.valid_moves()) == 20

    def test_reset_restores_layout(self, game: Chess):
        """reset() after play rebuilds the initial board."""
        fresh = game.get_state().board.copy()
        game.handle(6, 4)
        game.handle(4, 4)
        game.reset()
        assert np.array_equal(game.get_state().board, fresh)
        assert game.get_state().selected is None
        assert game.history == []


class TestLegalTargets:
    """Legality oracle tests."""

    def test_pawn_single_and_double_step(self, game: Chess):
        assert game.legal_targets(6, 4) == [Position(5, 4), Position(4, 4)]

    def test_pawn_double_step_only_from_start_row(self, game: Chess):
        game.apply_move((6, 4, 5, 4))
        game.apply_move((1, 0, 2, 0))
        assert game.legal_targets(5, 4) == [Position(4, 4)]

    def test_pawn_captures_diagonally(self):
        game = Chess()
        board = empty_board()
        board[6, 4] = PAWN
        board[5, 3] = -KNIGHT
        board[7, 7] = KING
        board[0, 0] = -KING
        game.set_state(GameState(board, current_player=1))
        targets = game.legal_targets(6, 4)
        assert Position(5, 3) in targets
        assert Position(5, 5) not in targets

    def test_blocked_pieces_have_no_targets(self, game: Chess):
        """Rooks, bishops, queen and king are boxed in at the start."""
        for c in (0, 2, 3, 4, 5, 7):
            assert game.legal_targets(7, c) == []

    def test_knight_jumps_over_pieces(self, game: Chess):
        assert sorted(game.legal_targets(7, 1)) == [Position(5, 0), Position(5, 2)]

    def test_empty_and_off_board_cells(self, game: Chess):
        assert game.legal_targets(4, 4) == []
        assert game.legal_targets(9, 9) == []
        assert game.legal_targets(-1, 0) == []

    def test_rook_slides_until_blocked(self):
        game = Chess()
        board = empty_board()
        board[4, 4] = ROOK
        board[4, 6] = PAWN
        board[2, 4] = -PAWN
        board[7, 7] = KING
        board[0, 0] = -KING
        game.set_state(GameState(board, current_player=1))
        targets = set(game.legal_targets(4, 4))
        assert Position(4, 5) in targets
        assert Position(4, 6) not in targets
        assert Position(3, 4) in targets
        assert Position(2, 4) in targets
        assert Position(1, 4) not in targets

    def test_oracle_is_idempotent(self, game: Chess):
        """Asking twice gives the same answer and changes nothing."""
        before = game.get_state().board.copy()
        assert game.legal_targets(6, 3) == game.legal_targets(6, 3)
        assert np.array_equal(game.get_state().board, before)

    def test_never_targets_own_piece(self, game: Chess):
        board = game.get_state().board
        for _, _, tr, tc in game.valid_moves():
            assert board[tr, tc] <= 0


class TestApplyMove:
    """Move applier tests."""

    def test_move_toggles_player_and_records_history(self, game: Chess):
        game.apply_move((6, 4, 4, 4))
        board = game.get_state().board
        assert board[4, 4] == PAWN
        assert board[6, 4] == 0
        assert game.current_player() == 2
        assert len(game.history) == 1
        assert game.history[0].piece == PAWN

    def test_invalid_move_raises(self, game: Chess):
        with pytest.raises(ValueError):
            game.apply_move((6, 4, 3, 4))

    def test_opponent_piece_raises(self, game: Chess):
        with pytest.raises(ValueError):
            game.apply_move((1, 4, 3, 4))

    def test_promotion_to_queen(self):
        game = Chess()
        board = empty_board()
        board[1, 0] = PAWN
        board[7, 7] = KING
        board[0, 7] = -KING
        game.set_state(GameState(board, current_player=1))
        game.apply_move((1, 0, 0, 0))
        assert game.get_state().board[0, 0] == QUEEN
        assert game.status() is Status.ONGOING

    def test_black_promotion(self):
        game = Chess()
        board = empty_board()
        board[6, 3] = -PAWN
        board[0, 0] = -KING
        board[7, 7] = KING
        game.set_state(GameState(board, current_player=2))
        game.apply_move((6, 3, 7, 3))
        assert game.get_state().board[7, 3] == -QUEEN

    def test_apply_after_game_over_raises(self):
        game = Chess()
        game.set_state(GameState(boxed_in_black_board(), current_player=2))
        with pytest.raises(RuntimeError):
            game.apply_move((0, 0, 0, 1))


class TestCheckmate:
    """Terminal-state detector tests."""

    def test_no_moves_with_king_is_checkmate(self):
        game = Chess()
        game.set_state(GameState(boxed_in_black_board(), current_player=1))
        assert game.status() is Status.ONGOING

        game.handle(5, 5)
        game.handle(5, 4)

        assert game.status() is Status.CHECKMATE
        assert game.is_over() is True
        assert game.winner == 1
        assert game.get_result(1) == State.WIN
        assert game.get_result(2) == State.LOSS

    def test_missing_king_is_never_checkmate(self):
        """A side whose king is gone is not checkmated, even with no moves."""
        game = Chess()
        board = empty_board()
        board[7, 7] = KING
        board[5, 5] = ROOK
        game.set_state(GameState(board, current_player=1))
        game.apply_move((5, 5, 5, 4))
        assert game.is_checkmate(2) is False
        assert game.status() is Status.ONGOING

    def test_opening_is_not_checkmate(self, game: Chess):
        assert game.is_checkmate(1) is False
        assert game.is_checkmate(2) is False


class TestController:
    """Select-then-move controller tests."""

    def test_select_own_piece(self, game: Chess):
        assert game.handle(6, 4) is True
        state = game.get_state()
        assert state.selected == (6, 4)
        assert state.valid_moves == [Position(5, 4), Position(4, 4)]

    def test_select_then_move(self, game: Chess):
        game.handle(6, 4)
        assert game.handle(4, 4) is True
        state = game.get_state()
        assert state.board[4, 4] == PAWN
        assert state.current_player == 2
        assert state.selected is None
        assert state.valid_moves == []

    def test_reselect_other_own_piece(self, game: Chess):
        game.handle(6, 4)
        assert game.handle(7, 1) is True
        state = game.get_state()
        assert state.selected == (7, 1)
        assert sorted(state.valid_moves) == [Position(5, 0), Position(5, 2)]

    def test_illegal_destination_clears_selection(self, game: Chess):
        game.handle(6, 4)
        before = game.get_state().board.copy()
        assert game.handle(3, 3) is True
        state = game.get_state()
        assert state.selected is None
        assert state.current_player == 1
        assert np.array_equal(state.board, before)

    def test_opponent_piece_without_selection_ignored(self, game: Chess):
        assert game.handle(1, 4) is False
        assert game.get_state().selected is None

    def test_malformed_input_ignored(self, game: Chess):
        assert game.handle() is False
        assert game.handle("e4") is False
        assert game.handle(None, 3) is False

    def test_terminal_accepts_nothing(self):
        game = Chess()
        game.set_state(GameState(boxed_in_black_board(), current_player=2))
        assert game.is_over()
        assert game.handle(0, 0) is False

    def test_transition_leaves_source_untouched(self, game: Chess):
        nxt = game.transition(6, 4)
        assert nxt.get_state().selected == (6, 4)
        assert game.get_state().selected is None


class TestStateString:
    def test_contains_pieces(self, game: Chess):
        text = game.state_string()
        assert "K" in text
        assert "k" in text
        assert "White" in text
