"""Command line entry point.

Run with: `python -m blockdrop`

By default a pygame window is opened.  ``--ascii`` instead plays a headless
game driven only by gravity and prints the resulting frame, useful as a
minimal smoke test of the engine without a display.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .config import GRAVITY_MS, GameConfig
from .engine import Command
from .session import GameSession
from .utils import format_ascii


def run_ascii(config: GameConfig, ticks: int) -> GameSession:
    """Play ``ticks`` gravity ticks and print the final frame."""

    session = GameSession(config)
    session.start()
    for _ in range(ticks):
        if session.state.game_over:
            break
        session.dispatch(Command.TICK)
    view = session.view()
    print(format_ascii(view.grid))
    print(f"Score: {view.score}{'  GAME OVER' if view.game_over else ''}")
    return session


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockdrop", description=__doc__)
    parser.add_argument("--ascii", action="store_true", help="Run headless and print the board.")
    parser.add_argument("--ticks", type=int, default=40, help="Gravity ticks to play in ASCII mode.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for piece selection.")
    parser.add_argument(
        "--gravity-ms",
        type=int,
        default=GRAVITY_MS,
        help="Milliseconds between automatic downward moves.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    config = GameConfig(seed=args.seed, gravity_ms=args.gravity_ms)
    if args.ascii:
        run_ascii(config, args.ticks)
        return

    from .run_pygame import main as run_window

    run_window(config)


if __name__ == "__main__":
    main()
