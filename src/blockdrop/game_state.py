"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from .board import Board
from .pieces import Piece


class Position(NamedTuple):
    """Top-left corner of a piece's bounding box; ``y`` may be negative."""

    x: int
    y: int


@dataclass(frozen=True)
class GameState:
    """Snapshot of a game session.

    The engine never mutates a state; every transition builds a new one with
    :func:`dataclasses.replace`.  ``current_piece`` is ``None`` while no piece
    is falling, either before the first spawn or after the game has ended.
    """

    board: Board = field(default_factory=Board)
    current_piece: Optional[Piece] = None
    position: Position = Position(0, 0)
    score: int = 0
    game_over: bool = False
    pieces: int = 0
    lines: int = 0
