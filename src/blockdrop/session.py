"""Single owner of the live game state.

The session wires the engine to its two stimuli, key presses and the gravity
clock.  Both paths go through :meth:`GameSession.dispatch`, which holds a
re-entrant lock so hosts that fire timer and input callbacks on separate
threads still apply commands one at a time and in arrival order.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .clock import GravityClock
from .config import GameConfig
from .engine import BoardEngine, Command
from .game_state import GameState
from .utils import RenderView, snapshot


LOGGER = logging.getLogger(__name__)


class GameSession:
    """Serialize commands against one :class:`GameState`."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        engine: Optional[BoardEngine] = None,
    ) -> None:
        self.config = config or (engine.config if engine else GameConfig())
        self.engine = engine or BoardEngine(self.config)
        self.clock = GravityClock(self.config.gravity_ms)
        self._lock = threading.RLock()
        self.state: GameState = self.engine.initial_state()

    def start(self) -> GameState:
        """Begin a new game with an empty board and a freshly spawned piece."""

        with self._lock:
            self.state = self.engine.spawn(self.engine.initial_state())
            self.clock.resume()
            LOGGER.info("Game started")
            if self.state.game_over:
                self._on_game_over()
            return self.state

    def dispatch(self, command: Command) -> GameState:
        """Apply ``command`` and return the resulting state.

        Raises:
            TypeError: If ``command`` is not a :class:`Command`.
        """

        if not isinstance(command, Command):
            raise TypeError(f"Expected Command, got {type(command).__name__}")
        with self._lock:
            self._apply(command)
            return self.state

    def advance(self, dt_ms: float) -> int:
        """Feed elapsed time to the gravity clock and run the due ticks.

        Returns the number of ticks applied.  Ticks still pending when a new
        piece spawns are dropped because the clock restarts for that piece.
        """

        with self._lock:
            due = self.clock.advance(dt_ms)
            applied = 0
            for _ in range(due):
                applied += 1
                if self._apply(Command.TICK):
                    break
            return applied

    def view(self) -> RenderView:
        with self._lock:
            return snapshot(self.state)

    def _apply(self, command: Command) -> bool:
        """Apply ``command``; return ``True`` if the gravity clock restarted."""

        previous = self.state
        state = self.engine.apply(previous, command)
        if command is Command.RESET and state is not previous:
            LOGGER.info("Game reset after scoring %d", previous.score)
            state = self.engine.spawn(state)
            self.state = state
            self.clock.resume()
            if state.game_over:
                self._on_game_over()
            return True

        self.state = state
        if state.lines > previous.lines:
            LOGGER.info(
                "Cleared %d row(s). Score: %d",
                state.lines - previous.lines,
                state.score,
            )
        if state.game_over and not previous.game_over:
            self._on_game_over()
            return True
        spawned = state.pieces != previous.pieces or (
            previous.current_piece is None and state.current_piece is not None
        )
        if spawned:
            LOGGER.debug("Spawned %s at %s", state.current_piece.kind.value, state.position)
            self.clock.restart()
        return spawned

    def _on_game_over(self) -> None:
        LOGGER.info("Game over. Score: %d", self.state.score)
        self.clock.pause()
