"""Piece definitions and shape transforms.

Every piece is a small boolean matrix taken from a fixed catalog together with
the colour token stored in the board when the piece is merged.  Pieces are
immutable values: rotating or mirroring returns a new :class:`Piece` and the
caller decides whether the candidate may replace the active one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, List, Sequence, Tuple

Shape = Tuple[Tuple[bool, ...], ...]


class ShapeType(str, Enum):
    """Enumeration of the shapes that may be drawn during play."""

    I = "I"
    O = "O"
    T = "T"
    L = "L"
    S = "S"


def _shape(rows: Sequence[Sequence[int]]) -> Shape:
    return tuple(tuple(bool(cell) for cell in row) for row in rows)


def rotate_shape(shape: Shape) -> Shape:
    """Return ``shape`` rotated 90 degrees clockwise.

    The matrix is transposed and each resulting row reversed, so the first
    column read bottom-up becomes the new top row.
    """

    return tuple(tuple(row) for row in zip(*shape[::-1]))


def mirror_shape(shape: Shape) -> Shape:
    """Return ``shape`` flipped horizontally."""

    return tuple(row[::-1] for row in shape)


# Spawn orientation of each shape, top row first.
SHAPES: Dict[ShapeType, Shape] = {
    ShapeType.I: _shape([[1, 1, 1, 1]]),
    ShapeType.O: _shape([[1, 1], [1, 1]]),
    ShapeType.T: _shape([[1, 1, 1], [0, 1, 0]]),
    ShapeType.L: _shape([[1, 1, 1], [1, 0, 0]]),
    ShapeType.S: _shape([[1, 1, 0], [0, 1, 1]]),
}

# J and Z exist but are never drawn by the engine.
DISABLED_SHAPES: Dict[str, Shape] = {
    "J": _shape([[1, 1, 1], [0, 0, 1]]),
    "Z": _shape([[0, 1, 1], [1, 1, 0]]),
}

# Colours follow catalog order, so S takes the fifth palette entry.
SHAPE_COLORS: Dict[ShapeType, str] = {
    ShapeType.I: "#00f0f0",
    ShapeType.O: "#f0f000",
    ShapeType.T: "#a000f0",
    ShapeType.L: "#f0a000",
    ShapeType.S: "#0000f0",
}

# Mapping from ``ShapeType`` to the colour token stored in the board grid.
# ``0`` is reserved for an empty cell.
COLOR_TOKENS: Dict[ShapeType, int] = {t: i + 1 for i, t in enumerate(ShapeType)}
TOKEN_SHAPES: Dict[int, ShapeType] = {v: t for t, v in COLOR_TOKENS.items()}
TOKEN_COLORS: Dict[int, str] = {COLOR_TOKENS[t]: c for t, c in SHAPE_COLORS.items()}

CATALOG: List[ShapeType] = list(ShapeType)


@dataclass(frozen=True)
class Piece:
    """A shape matrix together with its colour token."""

    kind: ShapeType
    shape: Shape
    color: int

    @classmethod
    def from_type(cls, kind: ShapeType) -> "Piece":
        """Return ``kind`` in its spawn orientation."""

        return cls(kind=kind, shape=SHAPES[kind], color=COLOR_TOKENS[kind])

    @property
    def width(self) -> int:
        return len(self.shape[0]) if self.shape else 0

    @property
    def height(self) -> int:
        return len(self.shape)

    def rotated(self) -> "Piece":
        return replace(self, shape=rotate_shape(self.shape))

    def mirrored(self) -> "Piece":
        return replace(self, shape=mirror_shape(self.shape))

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(row, col)`` offsets of the filled cells."""

        for r, row in enumerate(self.shape):
            for c, filled in enumerate(row):
                if filled:
                    yield r, c
