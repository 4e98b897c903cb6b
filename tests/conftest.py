"""
Shared test fixtures for game_arena tests.

Design principles:
- Game-agnostic fixtures where possible
- Seeded randomness only
- No network: the OpenAI client is always a mock
"""

from types import SimpleNamespace
from typing import Callable
from unittest.mock import MagicMock

import pytest

from game_arena.api import Arena
from game_arena.coach import Coach
from game_arena.games.game_base import GameBase
from game_arena.utils.config import GAMES, Config
from game_arena.utils.factory import create_game


# =============================================================================
# Coach Fixtures
# =============================================================================

def _completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def make_completion() -> Callable:
    """Build a chat-completions style response object."""
    return _completion


@pytest.fixture
def fake_client() -> MagicMock:
    """OpenAI client mock answering with a fixed tip."""
    client = MagicMock()
    client.chat.completions.create.return_value = _completion("Take the center.")
    return client


@pytest.fixture
def failing_client() -> MagicMock:
    """OpenAI client mock whose every request fails."""
    client = MagicMock()
    client.chat.completions.create.side_effect = TimeoutError("timed out")
    return client


@pytest.fixture
def config() -> Config:
    return Config(seed=7, coach_model="test-model", coach_timeout=5.0)


@pytest.fixture
def coach(config: Config, fake_client: MagicMock) -> Coach:
    return Coach(config, client=fake_client)


# =============================================================================
# Game Fixtures (Game-Agnostic)
# =============================================================================

@pytest.fixture(params=sorted(GAMES))
def any_game(request) -> GameBase:
    """Every registered game, freshly created with a fixed seed."""
    return create_game(request.param, seed=3)


@pytest.fixture
def arena(config: Config, coach: Coach) -> Arena:
    return Arena("chess", config=config, coach=coach)
