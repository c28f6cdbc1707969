"""Falling-block puzzle engine with thin input, clock and render adapters."""

from .board import Board
from .clock import GravityClock
from .config import GameConfig
from .controls import command_for_key
from .engine import BoardEngine, Command, score_for_lines
from .game_state import GameState, Position
from .pieces import Piece, ShapeType
from .session import GameSession
from .utils import RenderView, format_ascii, render_grid, snapshot

__all__ = [
    "Board",
    "BoardEngine",
    "Command",
    "GameConfig",
    "GameSession",
    "GameState",
    "GravityClock",
    "Piece",
    "Position",
    "RenderView",
    "ShapeType",
    "command_for_key",
    "format_ascii",
    "render_grid",
    "score_for_lines",
    "snapshot",
]
