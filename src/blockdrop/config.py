"""Configuration for a game session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# Dimensions of the default playfield.
WIDTH = 10
HEIGHT = 20

# Milliseconds between automatic downward moves
GRAVITY_MS = 1000
# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the pygame loop at
FPS = 60


@dataclass(frozen=True)
class GameConfig:
    """Tunable settings shared by the engine and its adapters.

    Raises:
        ValueError: If the board is too small to hold the widest piece or a
            timing/size value is not positive.
    """

    width: int = WIDTH
    height: int = HEIGHT
    gravity_ms: int = GRAVITY_MS
    seed: Optional[int] = None
    cell_size: int = CELL_SIZE
    fps: int = FPS

    def __post_init__(self) -> None:
        if self.width < 5:
            raise ValueError("Board must be at least 5 columns wide")
        if self.height < 2:
            raise ValueError("Board must be at least 2 rows high")
        if self.gravity_ms <= 0:
            raise ValueError("gravity_ms must be positive")
        if self.cell_size <= 0 or self.fps <= 0:
            raise ValueError("cell_size and fps must be positive")
