"""Gravity timer driving the periodic tick."""

from __future__ import annotations

from .config import GRAVITY_MS


class GravityClock:
    """Convert elapsed milliseconds into due gravity ticks.

    The clock only accumulates time; the owner decides what a tick does.
    Calling :meth:`restart` discards the time accumulated towards the next
    tick, which keeps a freshly spawned piece from dropping early.
    """

    def __init__(self, interval_ms: float = GRAVITY_MS) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.interval_ms = interval_ms
        self.elapsed = 0.0
        self.paused = False

    def advance(self, dt_ms: float) -> int:
        """Add ``dt_ms`` and return how many ticks are now due."""

        if self.paused or dt_ms <= 0:
            return 0
        self.elapsed += dt_ms
        due = int(self.elapsed // self.interval_ms)
        self.elapsed -= due * self.interval_ms
        return due

    def restart(self) -> None:
        self.elapsed = 0.0

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False
        self.restart()
