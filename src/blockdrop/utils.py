"""Render projection helpers shared by the front-ends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .board import EMPTY, Grid
from .game_state import GameState
from .pieces import TOKEN_SHAPES


@dataclass(frozen=True)
class RenderView:
    """Read-only projection handed to renderers."""

    grid: Grid
    score: int
    game_over: bool


def render_grid(state: GameState) -> Grid:
    """Return a copy of the board grid with the active piece overlaid.

    The board itself is not modified.  Cells of the active piece above row
    ``0`` are omitted.
    """

    grid = state.board.grid.copy()
    piece = state.current_piece
    if piece is not None and not state.game_over:
        x, y = state.position
        for dr, dc in piece.cells():
            r, c = y + dr, x + dc
            if 0 <= r < state.board.height and 0 <= c < state.board.width:
                grid[r, c] = np.uint8(piece.color)
    return grid


def snapshot(state: GameState) -> RenderView:
    grid = render_grid(state)
    grid.setflags(write=False)
    return RenderView(grid=grid, score=state.score, game_over=state.game_over)


def format_ascii(grid: Grid) -> str:
    """Return ``grid`` as text, one line per row.

    Empty cells are drawn as ``.`` and filled cells with their shape letter.
    """

    lines: List[str] = []
    for row in grid:
        lines.append(
            "".join(
                "." if cell == EMPTY else TOKEN_SHAPES[int(cell)].value for cell in row
            )
        )
    return "\n".join(lines)
