"""
Tests for game_arena.games.snake_ladders
"""

import numpy as np
import pytest

from game_arena.core.types import State, Status
from game_arena.games.game_state import GameState
from game_arena.games.snake_ladders import (
    FINAL_SQUARE,
    LADDERS,
    SNAKES,
    SnakeLadders,
    resolve_square,
    square_to_cell,
)


@pytest.fixture
def game() -> SnakeLadders:
    """Snake & Ladders with a fixed dice generator."""
    return SnakeLadders(seed=4)


def at(you: int, ai: int, player: int = 1) -> SnakeLadders:
    game = SnakeLadders(seed=4)
    game.set_state(GameState(np.array([you, ai], dtype=np.int8), current_player=player))
    return game


class TestBoard:
    def test_tables(self):
        assert SNAKES[99] == 54
        assert LADDERS[80] == FINAL_SQUARE
        assert all(head > tail for head, tail in SNAKES.items())
        assert all(foot < top for foot, top in LADDERS.items())

    def test_resolve_square(self):
        assert resolve_square(2) == 38
        assert resolve_square(16) == 4
        assert resolve_square(50) == 50

    def test_square_to_cell_snakes_back_and_forth(self):
        assert square_to_cell(0) is None
        assert square_to_cell(1) == (9, 0)
        assert square_to_cell(10) == (9, 9)
        assert square_to_cell(11) == (8, 9)
        assert square_to_cell(100) == (0, 0)


class TestRoll:
    def test_ladder_climbs(self, game: SnakeLadders):
        game.roll(2)
        assert game.position(1) == 38
        assert "ladder" in game.message
        assert game.current_player() == 2

    def test_snake_slides(self):
        game = at(14, 0)
        game.roll(2)
        assert game.position(1) == 4

    def test_plain_square(self):
        game = at(30, 0)
        game.roll(3)
        assert game.position(1) == 33

    def test_overshoot_forfeits_move(self):
        game = at(98, 0)
        game.roll(5)
        assert game.position(1) == 98
        assert game.current_player() == 2
        assert game.status() is Status.ONGOING

    def test_exact_roll_wins(self):
        game = at(97, 0)
        game.roll(3)
        assert game.status() is Status.WIN
        assert game.winner == 1
        assert game.get_result(1) == State.WIN
        assert game.roll(1) is False
        assert game.get_state().valid_moves == []

    def test_scripted_player_winning_is_a_loss(self):
        game = at(10, 94, player=2)
        game.roll(6)
        assert game.status() is Status.LOSE
        assert game.winner == 2
        assert game.get_result(1) == State.LOSS

    def test_dice_out_of_range_refused(self, game: SnakeLadders):
        assert game.roll(7) is False
        assert game.roll(0) is False
        assert game.position(1) == 0

    def test_random_roll_is_a_die_face(self, game: SnakeLadders):
        game.roll()
        assert 1 <= game.dice <= 6


class TestController:
    def test_human_roll(self, game: SnakeLadders):
        assert game.handle("roll") is True
        assert game.dice is not None

    def test_only_roll_is_accepted(self, game: SnakeLadders):
        assert game.handle() is False
        assert game.handle(3, 3) is False

    def test_scripted_turn_ignores_input(self):
        game = at(10, 10, player=2)
        assert game.handle("roll") is False

    def test_advance_plays_scripted_turn(self, game: SnakeLadders):
        game.handle("roll")
        assert game.current_player() == 2

        played = game.advance_until_human_turn()

        assert played == 1
        assert game.current_player() == 1

    def test_advance_is_noop_on_human_turn(self, game: SnakeLadders):
        assert game.advance_until_human_turn() == 0

    def test_envelope_offers_roll(self, game: SnakeLadders):
        """The state carries the roll action while the race is on."""
        assert game.get_state().valid_moves == ["roll"]
        game.handle("roll")
        game.advance_until_human_turn()
        assert game.get_state().valid_moves == ["roll"]
