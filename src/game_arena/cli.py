"""
Command-line interface for playing arena games in a terminal.
"""

import argparse
import logging
from typing import List, Union

from game_arena.api import Arena
from game_arena.utils.config import Config, DEFAULT_GAME, GAMES

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play board and puzzle games with an optional LLM coach"
    )
    parser.add_argument(
        "--game", "-g",
        choices=list(GAMES.keys()),
        default=DEFAULT_GAME,
        help=f"Game to play (default: {DEFAULT_GAME})",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for shuffled/random games (default: unseeded)",
    )
    parser.add_argument(
        "--model", "-m",
        type=str,
        default=None,
        help="Coach model (default: $GAME_ARENA_COACH_MODEL or gpt-4o-mini)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output",
    )
    return parser.parse_args(argv)


def parse_action(raw: str) -> List[Union[int, str]]:
    """Split 'a,b c' into tokens, converting integers."""
    tokens = [t for t in raw.replace(",", " ").split() if t]
    action: List[Union[int, str]] = []
    for token in tokens:
        try:
            action.append(int(token))
        except ValueError:
            action.append(token.lower())
    return action


def _print_game(arena: Arena) -> None:
    print(arena.game.state_string())
    print(f"[{arena.game_name}] to move: {arena.player_label()}  status: {arena.game.status().value}")


def play(arena: Arena) -> None:
    """Read actions from stdin until the user quits."""
    print("Commands: ? (legal actions), reset, switch <game>, coach <question>, quit")
    _print_game(arena)

    while True:
        try:
            raw = input("> ").strip()
        except EOFError:
            break
        if not raw:
            continue

        command, _, rest = raw.partition(" ")
        command = command.lower()

        if command in ("quit", "exit"):
            break
        if command == "?":
            print(arena.game.action_help())
            print(f"Legal now: {arena.snapshot()['validMoves'] or arena.game.valid_moves()}")
            continue
        if command == "reset":
            arena.reset()
        elif command == "switch":
            try:
                arena.switch(rest.strip())
            except ValueError as e:
                print(e)
                continue
        elif command == "coach":
            print(f"Coach: {arena.ask_coach(rest.strip() or 'Any advice?')}")
            continue
        elif not arena.handle(*parse_action(raw)):
            print(f"Ignored. {arena.game.action_help()}")
            continue

        _print_game(arena)
        if arena.game.is_over():
            print("=" * 40)
            print(f"GAME OVER: {arena.game.status().value}")
            print("=" * 40)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = Config(game_name=args.game, seed=args.seed, coach_model=args.model)
    arena = Arena(config=config)

    try:
        play(arena)
    except KeyboardInterrupt:
        print("\nInterrupted - bye")
    except Exception:
        logger.exception("Fatal error in play loop")
        raise


if __name__ == "__main__":
    main()
