"""
Games module - rule engines for every arena game.
"""

from game_arena.games.game_state import GameState
from game_arena.games.game_base import GameBase, PieceGame
from game_arena.games.game_rules import in_bounds, board_full, connected, neighbours, walk
from game_arena.games.chess import Chess
from game_arena.games.checkers import Checkers
from game_arena.games.tic_tac_toe import TicTacToe
from game_arena.games.connect_four import ConnectFour
from game_arena.games.reversi import Reversi
from game_arena.games.memory import Memory
from game_arena.games.minesweeper import Minesweeper
from game_arena.games.game_2048 import Game2048
from game_arena.games.snake_ladders import SnakeLadders
from game_arena.games.ludo import Ludo

__all__ = [
    "GameState",
    "GameBase",
    "PieceGame",
    "Chess",
    "Checkers",
    "TicTacToe",
    "ConnectFour",
    "Reversi",
    "Memory",
    "Minesweeper",
    "Game2048",
    "SnakeLadders",
    "Ludo",
    "in_bounds",
    "board_full",
    "connected",
    "neighbours",
    "walk",
]
