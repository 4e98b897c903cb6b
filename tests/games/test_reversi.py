"""
Tests for game_arena.games.reversi
"""

import numpy as np
import pytest

from game_arena.core.types import Position, State, Status
from game_arena.games.game_state import GameState
from game_arena.games.reversi import Reversi, flanked, legal_cells


@pytest.fixture
def game() -> Reversi:
    """Fresh Reversi game."""
    return Reversi()


class TestInitialization:
    def test_four_centre_discs(self, game: Reversi):
        board = game.get_state().board
        assert board[3, 3] == board[4, 4] == 2
        assert board[3, 4] == board[4, 3] == 1
        assert game.disc_counts() == (2, 2)
        assert game.get_state().score == 2

    def test_four_opening_moves(self, game: Reversi):
        expected = [Position(2, 3), Position(3, 2), Position(4, 5), Position(5, 4)]
        assert game.get_state().valid_moves == expected
        assert [tuple(m) for m in game.valid_moves().tolist()] == expected


class TestFlanking:
    """Legality oracle tests."""

    def test_open_run_flips_nothing(self):
        board = np.zeros((8, 8), dtype=np.int8)
        board[0, 1] = board[0, 2] = 2
        assert flanked(board, 0, 0, 1) == []

    def test_closed_run_flips_all(self):
        board = np.zeros((8, 8), dtype=np.int8)
        board[0, 1] = board[0, 2] = 2
        board[0, 3] = 1
        assert flanked(board, 0, 0, 1) == [Position(0, 1), Position(0, 2)]

    def test_gap_breaks_run(self):
        board = np.zeros((8, 8), dtype=np.int8)
        board[0, 1] = 2
        board[0, 3] = 1
        assert flanked(board, 0, 0, 1) == []

    def test_occupied_cell_is_not_legal(self, game: Reversi):
        assert game.legal_targets(3, 3) == []
        assert game.legal_targets(0, 0) == []
        assert game.legal_targets(2, 3) == [Position(2, 3)]

    def test_legal_cells_for_white(self, game: Reversi):
        assert len(legal_cells(game.get_state().board, 2)) == 4


class TestApplyMove:
    def test_move_flips_and_passes_turn(self, game: Reversi):
        assert game.handle(2, 3) is True
        board = game.get_state().board
        assert board[2, 3] == 1
        assert board[3, 3] == 1
        assert game.disc_counts() == (4, 1)
        assert game.get_state().score == 4
        assert game.current_player() == 2

    def test_cell_that_flanks_nothing_ignored(self, game: Reversi):
        before = game.get_state().board.copy()
        assert game.handle(0, 0) is False
        assert np.array_equal(game.get_state().board, before)
        assert game.current_player() == 1

    def test_apply_invalid_raises(self, game: Reversi):
        with pytest.raises(ValueError):
            game.apply_move((0, 0))


class TestPassAndEnd:
    """Pass rule and final status tests."""

    def test_turn_stays_when_opponent_cannot_move(self):
        board = np.zeros((8, 8), dtype=np.int8)
        board[0, 1], board[0, 2] = 2, 1
        board[7, 1] = 2
        board[7, 2:] = 1
        game = Reversi()
        game.set_state(GameState(board, current_player=1))

        assert game.handle(0, 0) is True

        assert game.status() is Status.ONGOING
        assert game.current_player() == 1
        assert game.get_state().valid_moves == [Position(7, 0)]

    def test_set_state_passes_for_stuck_mover(self):
        """A loaded position where only the other side can move hands it the turn."""
        board = np.zeros((8, 8), dtype=np.int8)
        board[0, :3] = 1
        board[7, 1] = 2
        board[7, 2:] = 1
        game = Reversi()
        game.set_state(GameState(board, current_player=2))

        assert game.status() is Status.ONGOING
        assert game.current_player() == 1
        assert game.get_state().valid_moves == [Position(7, 0)]

    def test_game_ends_when_neither_can_move(self):
        board = np.zeros((8, 8), dtype=np.int8)
        board[0, 1], board[0, 2] = 2, 1
        game = Reversi()
        game.set_state(GameState(board, current_player=1))

        game.handle(0, 0)

        assert game.status() is Status.WIN
        assert game.winner == 1
        assert game.get_state().score == 3
        assert game.get_result(1) == State.WIN
        assert game.handle(5, 5) is False

    def test_white_majority_is_a_loss(self):
        board = np.zeros((8, 8), dtype=np.int8)
        board[0, :3] = 2
        board[7, 7] = 1
        game = Reversi()
        game.set_state(GameState(board, current_player=1))
        assert game.status() is Status.LOSE
        assert game.winner == 2

    def test_equal_discs_is_a_draw(self):
        board = np.zeros((8, 8), dtype=np.int8)
        board[0, 0] = 1
        board[7, 7] = 2
        game = Reversi()
        game.set_state(GameState(board, current_player=1))
        assert game.status() is Status.DRAW
        assert game.get_result(1) == State.TIE
