"""Rules engine: collision, merging, line clearing and scoring.

:class:`BoardEngine` is a pure state-transition machine.  Every public
operation returns new values and never mutates its arguments, so the same
``apply(state, command)`` call can be driven from a timer loop, an event
queue or a test.  Invalid player commands are not errors: a move or rotation
that would collide simply yields the unchanged state.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Callable, Dict, Optional, Tuple
import random

from .board import Board
from .config import GameConfig
from .game_state import GameState, Position
from .pieces import CATALOG, Piece


class Command(str, Enum):
    """Discrete inputs accepted by :meth:`BoardEngine.apply`."""

    TICK = "tick"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE = "rotate"
    MIRROR = "mirror"
    RESET = "reset"


# Points awarded for the number of rows cleared by a single merge.
POINTS_TABLE: Dict[int, int] = {1: 10, 2: 30, 3: 50, 4: 80}


def score_for_lines(cleared: int) -> int:
    """Return the points for ``cleared`` rows; unlisted counts score ``0``."""

    return POINTS_TABLE.get(cleared, 0)


class BoardEngine:
    """Apply game rules to immutable :class:`GameState` snapshots."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self._handlers: Dict[Command, Callable[[GameState], GameState]] = {
            Command.TICK: self.tick,
            Command.MOVE_LEFT: lambda s: self._shift(s, -1, 0),
            Command.MOVE_RIGHT: lambda s: self._shift(s, 1, 0),
            Command.SOFT_DROP: lambda s: self._shift(s, 0, 1),
            Command.ROTATE: lambda s: self._transform(s, self.rotate),
            Command.MIRROR: lambda s: self._transform(s, self.mirror),
        }

    # ------------------------------------------------------------------
    # Pieces
    # ------------------------------------------------------------------
    def new_piece(self) -> Piece:
        """Return a piece drawn uniformly from the catalog."""

        return Piece.from_type(self.rng.choice(CATALOG))

    def spawn_position(self, piece: Piece) -> Position:
        """Return the spawn corner, which ignores the piece's width."""

        return Position(self.config.width // 2 - 1, 0)

    @staticmethod
    def rotate(piece: Piece) -> Piece:
        return piece.rotated()

    @staticmethod
    def mirror(piece: Piece) -> Piece:
        return piece.mirrored()

    # ------------------------------------------------------------------
    # Collision
    # ------------------------------------------------------------------
    @staticmethod
    def collides(piece: Piece, position: Position, board: Board) -> bool:
        """Return ``True`` if ``piece`` at ``position`` cannot occupy ``board``.

        Cells above row ``0`` never collide so a piece may hang partly above
        the visible board.
        """

        x, y = position
        for dr, dc in piece.cells():
            row, col = y + dr, x + dc
            if col < 0 or col >= board.width or row >= board.height:
                return True
            if row >= 0 and not board.is_empty(row, col):
                return True
        return False

    @staticmethod
    def is_spawn_blocked(piece: Piece, position: Position, board: Board) -> bool:
        """Return ``True`` if any cell of a fresh piece lands on a filled cell."""

        x, y = position
        return any(not board.is_empty(y + dr, x + dc) for dr, dc in piece.cells())

    def move(
        self, piece: Piece, position: Position, dx: int, dy: int, board: Board
    ) -> Tuple[Position, bool]:
        """Return the new position and whether the move succeeded."""

        candidate = Position(position.x + dx, position.y + dy)
        if self.collides(piece, candidate, board):
            return position, False
        return candidate, True

    # ------------------------------------------------------------------
    # Board updates
    # ------------------------------------------------------------------
    @staticmethod
    def merge(board: Board, piece: Piece, position: Position) -> Board:
        """Return a copy of ``board`` with ``piece`` stamped at ``position``."""

        merged = board.copy()
        merged.lock_piece(piece, position)
        return merged

    @staticmethod
    def clear_lines(board: Board) -> Tuple[Board, int]:
        """Return a copy of ``board`` without full rows and the rows removed."""

        cleared_board = board.copy()
        cleared = cleared_board.clear_full_rows()
        return cleared_board, cleared

    @staticmethod
    def score(cleared: int) -> int:
        return score_for_lines(cleared)

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------
    def initial_state(self) -> GameState:
        """Return an empty board with no active piece."""

        return GameState(board=Board(self.config.width, self.config.height))

    def reset(self, state: GameState) -> GameState:
        return self.initial_state()

    def spawn(self, state: GameState) -> GameState:
        """Activate a new piece, or end the game if its spawn cells are taken."""

        if state.game_over:
            return state
        piece = self.new_piece()
        position = self.spawn_position(piece)
        if self.is_spawn_blocked(piece, position, state.board):
            return replace(state, current_piece=None, game_over=True)
        return replace(state, current_piece=piece, position=position)

    def tick(self, state: GameState) -> GameState:
        """Advance gravity by one row.

        A piece that cannot fall is merged, full rows are cleared and scored,
        and the next piece is spawned.
        """

        if state.game_over:
            return state
        piece = state.current_piece
        if piece is None:
            return self.spawn(state)
        position, moved = self.move(piece, state.position, 0, 1, state.board)
        if moved:
            return replace(state, position=position)

        board = self.merge(state.board, piece, state.position)
        board, cleared = self.clear_lines(board)
        settled = replace(
            state,
            board=board,
            current_piece=None,
            score=state.score + self.score(cleared),
            pieces=state.pieces + 1,
            lines=state.lines + cleared,
        )
        return self.spawn(settled)

    def apply(self, state: GameState, command: Command) -> GameState:
        """Return the state produced by ``command``.

        After game over only :attr:`Command.RESET` is honoured, and a reset is
        ignored while the game is still running.
        """

        if command is Command.RESET:
            return self.reset(state) if state.game_over else state
        if state.game_over:
            return state
        return self._handlers[command](state)

    def _shift(self, state: GameState, dx: int, dy: int) -> GameState:
        if state.current_piece is None:
            return state
        position, moved = self.move(state.current_piece, state.position, dx, dy, state.board)
        return replace(state, position=position) if moved else state

    def _transform(
        self, state: GameState, transform: Callable[[Piece], Piece]
    ) -> GameState:
        if state.current_piece is None:
            return state
        candidate = transform(state.current_piece)
        if self.collides(candidate, state.position, state.board):
            return state
        return replace(state, current_piece=candidate)
