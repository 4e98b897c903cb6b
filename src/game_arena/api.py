"""
Public API for the game arena.

Usage:
    from game_arena import Arena

    arena = Arena("chess")
    arena.handle(6, 4)      # select the e-pawn
    arena.handle(4, 4)      # push it two squares
    print(arena.snapshot())
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from game_arena.coach import Coach
from game_arena.games.game_base import GameBase
from game_arena.utils.config import DEFAULT_CONFIG, GAMES, PLAYER_LABELS, Config
from game_arena.utils.factory import create_game

logger = logging.getLogger(__name__)


def _to_builtin(value: Any) -> Any:
    """NumPy scalars/arrays and Position tuples -> plain Python for the envelope."""
    if hasattr(value, "tolist"):
        return value.tolist()
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return {k: _to_builtin(v) for k, v in value._asdict().items()}
    return value


class Arena:
    """
    Owns exactly one active game at a time.

    The arena never writes game fields itself: every change goes through
    the active game's `handle()`. Scripted turns (ludo, snake & ladders)
    are played synchronously right after a human action when
    `auto_advance` is on.
    """

    def __init__(
        self,
        game_name: Optional[str] = None,
        config: Config = DEFAULT_CONFIG,
        coach: Optional[Coach] = None,
        auto_advance: bool = True,
    ):
        self.config = config
        self.coach = coach or Coach(config)
        self.auto_advance = auto_advance
        self.game_name = game_name or config.game_name
        self.game: GameBase = create_game(self.game_name, seed=config.seed)
        self._advance()

    def switch(self, game_name: str) -> GameBase:
        """Discard the active game and start a fresh one of another kind."""
        if game_name not in GAMES:
            available = ", ".join(GAMES.keys())
            raise ValueError(f"Unknown game: {game_name}. Available: {available}")
        logger.info("Switching game %s -> %s", self.game_name, game_name)
        self.game_name = game_name
        self.game = create_game(game_name, seed=self.config.seed)
        self._advance()
        return self.game

    def reset(self) -> GameBase:
        """Rebuild the active game from its initial layout."""
        logger.info("Resetting %s", self.game_name)
        self.game.reset()
        self._advance()
        return self.game

    def handle(self, *action) -> bool:
        """Forward one user action to the active game."""
        changed = self.game.handle(*action)
        if changed:
            logger.debug("%s handled %s -> %s", self.game_name, action, self.game.status().value)
            self._advance()
        return changed

    def _advance(self) -> None:
        if not self.auto_advance:
            return
        scripted = self.game.advance_until_human_turn()
        if scripted:
            logger.debug("%s: %d scripted actions", self.game_name, scripted)

    def player_label(self, player: Optional[int] = None) -> str:
        player = player or self.game.current_player()
        return PLAYER_LABELS[self.game_name].get(player, f"player{player}")

    def snapshot(self) -> Dict[str, Any]:
        """JSON-friendly copy of the active game's envelope."""
        state = self.game.get_state()
        return {
            "game": self.game_name,
            "board": _to_builtin(state.board),
            "currentPlayer": self.player_label(state.current_player),
            "status": state.status.value,
            "selectedPiece": _to_builtin(state.selected) if state.selected is not None else None,
            "validMoves": [_to_builtin(p) for p in state.valid_moves],
            "score": int(state.score),
        }

    def summary(self) -> Dict[str, Any]:
        """The slice of the envelope the coach is told about."""
        snap = self.snapshot()
        return {key: snap[key] for key in ("currentPlayer", "status", "score")}

    def ask_coach(self, message: str) -> str:
        return self.coach.advise(message, self.game_name, self.summary())


__all__ = [
    "Arena",
]
