"""
Tests for game_arena.games.game_rules
"""

import numpy as np

from game_arena.games.game_rules import (
    board_full,
    connected,
    in_bounds,
    neighbours,
    run_length,
    walk,
)


class TestBounds:
    def test_in_bounds(self):
        board = np.zeros((6, 7), dtype=np.int8)
        assert in_bounds(board, 0, 0)
        assert in_bounds(board, 5, 6)
        assert not in_bounds(board, 6, 0)
        assert not in_bounds(board, 0, 7)
        assert not in_bounds(board, -1, 3)

    def test_neighbour_counts(self):
        board = np.zeros((8, 8), dtype=np.int8)
        assert len(neighbours(board, 0, 0)) == 3
        assert len(neighbours(board, 0, 4)) == 5
        assert len(neighbours(board, 4, 4)) == 8


class TestWalk:
    def test_walk_stops_at_edge(self):
        board = np.zeros((4, 4), dtype=np.int8)
        assert list(walk(board, 0, 0, 1, 1)) == [(1, 1), (2, 2), (3, 3)]
        assert list(walk(board, 0, 0, -1, 0)) == []

    def test_run_length(self):
        board = np.array([[1, 1, 1, 2]], dtype=np.int8)
        assert run_length(board, 0, 0, 0, 1, 1) == 2
        assert run_length(board, 0, 3, 0, -1, 1) == 3
        assert run_length(board, 0, 3, 0, 1, 2) == 0


class TestConnected:
    def test_line_through_middle_cell(self):
        """Runs on both sides of the placed cell add up."""
        board = np.zeros((6, 7), dtype=np.int8)
        board[5, 1:5] = 1
        assert connected(board, 5, 2, 4)
        assert not connected(board, 5, 2, 5)

    def test_diagonals(self):
        board = np.zeros((3, 3), dtype=np.int8)
        board[0, 2] = board[1, 1] = board[2, 0] = 2
        assert connected(board, 1, 1, 3)

    def test_empty_cell_never_connected(self):
        board = np.zeros((3, 3), dtype=np.int8)
        assert not connected(board, 1, 1, 1)


class TestBoardFull:
    def test_board_full(self):
        assert board_full(np.ones((3, 3), dtype=np.int8))
        assert not board_full(np.zeros((3, 3), dtype=np.int8))
