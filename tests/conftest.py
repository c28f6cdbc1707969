from __future__ import annotations

from typing import Iterable, Optional, Sequence

import pytest

from blockdrop.config import GameConfig
from blockdrop.engine import BoardEngine
from blockdrop.pieces import ShapeType


class ScriptedRng:
    """Stand-in for ``random.Random`` that hands out a fixed piece order."""

    def __init__(self, kinds: Iterable[ShapeType]) -> None:
        self._kinds = list(kinds)

    def choice(self, seq: Sequence[ShapeType]) -> ShapeType:
        if self._kinds:
            return self._kinds.pop(0)
        return seq[0]


@pytest.fixture
def make_engine():
    """Return a factory building engines that spawn ``kinds`` in order.

    Once the script runs out every further spawn is an ``I`` piece.
    """

    def _make(*kinds: ShapeType, config: Optional[GameConfig] = None) -> BoardEngine:
        return BoardEngine(config, rng=ScriptedRng(kinds))

    return _make
