"""
Coach - advisory text for the active game.

Sends the player's message plus a short game summary to an OpenAI chat
model and returns the reply. Any failure (missing key, network error,
timeout, empty payload) falls back to a canned per-game tip, so the
games never depend on the coach being reachable.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from openai import OpenAI

from game_arena.utils.config import DEFAULT_CONFIG, Config

logger = logging.getLogger(__name__)


GAME_STRATEGIES = {
    "chess": """Chess Strategy Guide:
- Opening: Control center (e4, d4), develop knights before bishops, castle early
- Middlegame: Create pawn structures, coordinate pieces, look for tactics
- Endgame: Activate king, push passed pawns, use piece activity
- Key principles: Piece development, king safety, pawn structure, piece activity""",
    "checkers": """Checkers Strategy Guide:
- Control the center squares for maximum mobility
- Advance pieces toward kinged position
- Maintain back row pieces to prevent opponent kings
- Force exchanges when ahead, avoid when behind
- Create multiple jump opportunities""",
    "tic-tac-toe": """Tic-Tac-Toe Strategy Guide:
- Always take center if available (best opening)
- If opponent takes center, take a corner
- Block opponent's winning moves immediately
- Create "forks" (two ways to win)
- Perfect play always results in a draw""",
    "connect-four": """Connect Four Strategy Guide:
- Control the center column - most flexible position
- Build vertical and diagonal threats
- Force opponent to block, then create secondary threats
- Watch for diagonal winning opportunities
- Plan 2-3 moves ahead""",
    "memory": """Memory Match Strategy Guide:
- Start from corners and edges (easier to remember)
- Create mental grid sections
- Focus on revealing new cards rather than random guessing
- When you find a card, remember its pair location
- Take your time - accuracy beats speed""",
    "snake-ladders": """Snake & Ladders Strategy Guide:
- This is primarily a luck-based game
- Memorize ladder and snake positions
- Key ladders: 2→38, 28→84, 80→100
- Dangerous snakes: 99→54, 87→24
- Stay patient and hope for good rolls""",
    "ludo": """Ludo Strategy Guide:
- Get all tokens out early (need 6 to start)
- Spread tokens across the board
- Use safe squares strategically
- Block opponent paths when possible
- Balance offense (advancing) and defense (staying safe)""",
    "reversi": """Reversi/Othello Strategy Guide:
- PRIORITY: Secure corners - they cannot be flipped
- Avoid edges early - they give opponent corner access
- Control mobility - limit opponent's valid moves
- In endgame, maximize disc count
- Sometimes fewer discs early = more options later""",
    "minesweeper": """Minesweeper Strategy Guide:
- Start with corners - they reveal more information
- Use number logic: if a 1 has one unrevealed adjacent, that's the mine
- Flag certain mines, but don't over-flag
- Look for patterns: 1-2-1, 1-2-2-1
- When stuck, guess near edges (fewer adjacent cells)""",
    "2048": """2048 Strategy Guide:
- CRITICAL: Keep highest tile in a corner
- Only move in 2-3 directions (avoid scattering)
- Build in descending order toward corner
- Never move away from your corner
- Chain merges for big combos""",
}

DEFAULT_STRATEGY = "Focus on strategic play and think ahead."

FALLBACK_TIPS = {
    "chess": "Focus on controlling the center and developing your pieces. Castle early for king safety!",
    "checkers": "Try to advance toward the king row while keeping some pieces back for defense.",
    "tic-tac-toe": "Always take the center if available, or a corner for the best strategic position.",
    "connect-four": "Control the center column and look for diagonal winning opportunities!",
    "memory": "Create a mental grid and remember card positions systematically.",
    "snake-ladders": "Good luck! Remember the key ladders at 2, 28, and 80.",
    "ludo": "Spread your tokens and use safe squares strategically!",
    "reversi": "Focus on securing corners - they can't be flipped!",
    "minesweeper": "Use number logic carefully. If a 1 has one unrevealed neighbor, that's the mine!",
    "2048": "Keep your highest tile in a corner and only move in 2-3 directions!",
}

DEFAULT_TIP = "Think strategically and plan your moves ahead!"


def fallback_tip(game_type: str) -> str:
    return FALLBACK_TIPS.get(game_type, DEFAULT_TIP)


def build_system_prompt(game_type: str, game_state: Mapping[str, Any]) -> str:
    """System prompt: role, strategy guide, and a summary of the current game."""
    strategy = GAME_STRATEGIES.get(game_type, DEFAULT_STRATEGY)
    return f"""You are an expert {game_type.replace("-", " ")} coach AI assistant. You provide strategic advice, move suggestions, and analysis to help players improve their game.

{strategy}

Current game state:
- Current player/turn: {game_state.get("currentPlayer") or "N/A"}
- Game status: {game_state.get("status") or "playing"}
- Score: {game_state.get("score") or 0}

Instructions:
1. Be concise but helpful (under 150 words unless detailed analysis requested)
2. Provide specific, actionable advice
3. Reference the strategy guide above when relevant
4. Be encouraging and supportive
5. If asked for best move, give a clear recommendation with reasoning"""


class Coach:
    """Chat-completions client with a local fallback. Never raises from `advise`."""

    def __init__(self, config: Config = DEFAULT_CONFIG, client: Optional[OpenAI] = None):
        self.config = config
        self._client = client

    @property
    def client(self) -> OpenAI:
        # Built lazily so a missing API key only surfaces when advice is requested
        if self._client is None:
            self._client = OpenAI(timeout=self.config.coach_timeout, max_retries=0)
        return self._client

    def advise(self, message: str, game_type: str, game_state: Optional[Mapping[str, Any]] = None) -> str:
        """Return advisory text for `message`, or the game's fallback tip on any failure."""
        summary = game_state or {}
        try:
            response = self.client.chat.completions.create(
                model=self.config.coach_model,
                messages=[
                    {"role": "system", "content": build_system_prompt(game_type, summary)},
                    {"role": "user", "content": message},
                ],
                max_tokens=self.config.coach_max_tokens,
                temperature=self.config.coach_temperature,
                timeout=self.config.coach_timeout,
            )
            content = response.choices[0].message.content
            if not content or not content.strip():
                raise ValueError("Coach returned an empty response")
            return content.strip()
        except Exception:
            logger.warning("Coach request failed for %s; using fallback tip", game_type, exc_info=True)
            return fallback_tip(game_type)

    def respond(self, payload: Mapping[str, Any]) -> Dict[str, str]:
        """Endpoint-shaped call: `{message, gameType, gameState}` -> `{"response": text}`."""
        game_type = str(payload.get("gameType") or payload.get("game") or "")
        game_state = payload.get("gameState")
        if not isinstance(game_state, Mapping):
            game_state = {}
        message = str(payload.get("message") or "")
        return {"response": self.advise(message, game_type, game_state)}
