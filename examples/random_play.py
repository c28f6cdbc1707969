"""Play headless games with random inputs and log score summaries.

Run with::

    PYTHONPATH=src python examples/random_play.py

Pass ``--help`` to see options for the number of games, the step limit per
game and periodic summary logging.
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass

from blockdrop.config import GameConfig
from blockdrop.engine import BoardEngine, Command


LOGGER = logging.getLogger(__name__)

PLAYER_COMMANDS = [
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.SOFT_DROP,
    Command.ROTATE,
    Command.MIRROR,
]


@dataclass
class GameResult:
    seed: int
    score: int
    lines: int
    pieces: int
    steps: int
    game_over: bool


def play_game(seed: int, max_steps: int) -> GameResult:
    """Alternate a random player command with a gravity tick."""

    engine = BoardEngine(GameConfig(seed=seed))
    chooser = random.Random(seed)
    state = engine.spawn(engine.initial_state())
    steps = 0
    while steps < max_steps and not state.game_over:
        state = engine.apply(state, chooser.choice(PLAYER_COMMANDS))
        state = engine.apply(state, Command.TICK)
        steps += 1
    return GameResult(
        seed=seed,
        score=state.score,
        lines=state.lines,
        pieces=state.pieces,
        steps=steps,
        game_over=state.game_over,
    )


def _format_summary(results: list[GameResult], limit: int = 10) -> str:
    if not results:
        return "No games played."
    parts: list[str] = []
    for result in results[:limit]:
        parts.append(
            f"seed={result.seed}: score={result.score}, lines={result.lines}, "
            f"pieces={result.pieces}, steps={result.steps}"
        )
    return "; ".join(parts)


def log_summary(results: list[GameResult], *, limit: int, index: int) -> list[GameResult]:
    """Log the best ``limit`` results of a batch and return them."""

    ranked = sorted(results, key=lambda r: r.score, reverse=True)
    limit = max(0, limit)
    limited = ranked[:limit] if limit else []
    LOGGER.info("Batch %d results: %s", index, _format_summary(limited, limit=limit))
    return limited


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--games", type=int, default=20, help="Number of games to play.")
    parser.add_argument("--max-steps", type=int, default=2000, help="Step limit per game.")
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first game.")
    parser.add_argument(
        "--log-interval",
        type=int,
        default=10,
        help="Emit a summary every N games (0 logs only at the end).",
    )
    parser.add_argument(
        "--summary-limit",
        type=int,
        default=5,
        help="Maximum number of games to include in summaries.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    batch: list[GameResult] = []
    for game_idx in range(1, args.games + 1):
        batch.append(play_game(args.seed + game_idx - 1, args.max_steps))
        should_log = False
        if args.log_interval > 0 and game_idx % args.log_interval == 0:
            should_log = True
        elif game_idx == args.games:
            should_log = True
        if should_log and batch:
            log_summary(batch, limit=args.summary_limit, index=game_idx)
            batch = []


if __name__ == "__main__":
    main()
