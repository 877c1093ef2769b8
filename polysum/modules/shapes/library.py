# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Shape Library
Static catalog of the nine polyominoes and their geometric properties.
Offsets are in local (x, y) space with y growing downward; every shape
is stored normalised so that min(x) == min(y) == 0.
"""

from __future__ import annotations

from pydantic import BaseModel

from polysum.models.piece import Coordinate, Shape


def _cells(*pairs: tuple[int, int]) -> tuple[Coordinate, ...]:
    return tuple(Coordinate(x=x, y=y) for x, y in pairs)


POLYOMINO_SHAPES: dict[Shape, tuple[Coordinate, ...]] = {
    # Tetrominoes
    Shape.I4: _cells((0, 0), (1, 0), (2, 0), (3, 0)),
    Shape.O4: _cells((0, 0), (1, 0), (0, 1), (1, 1)),
    Shape.T4: _cells((1, 0), (0, 1), (1, 1), (2, 1)),
    Shape.L4: _cells((0, 0), (0, 1), (0, 2), (1, 2)),
    Shape.S4: _cells((1, 0), (2, 0), (0, 1), (1, 1)),
    # Triominoes
    Shape.I3: _cells((0, 0), (1, 0), (2, 0)),
    Shape.L3: _cells((0, 0), (0, 1), (1, 1)),
    # Domino
    Shape.I2: _cells((0, 0), (1, 0)),
    # Monomino
    Shape.I1: _cells((0, 0)),
}

ALL_SHAPES: tuple[Shape, ...] = tuple(Shape)

SHAPE_SIZES: dict[Shape, int] = {
    shape: len(cells) for shape, cells in POLYOMINO_SHAPES.items()
}


class ShapeBounds(BaseModel):
    width: int
    height: int
    min_x: int
    max_x: int
    min_y: int
    max_y: int


def shape_of(name: Shape | str) -> tuple[Coordinate, ...]:
    """Canonical, unrotated cell offsets. The tuple is shared; do not rebuild it."""
    return POLYOMINO_SHAPES[Shape(name)]


def size_of(name: Shape | str) -> int:
    return SHAPE_SIZES[Shape(name)]


def bounds_of(name: Shape | str) -> ShapeBounds:
    coords = shape_of(name)
    min_x = min(c.x for c in coords)
    max_x = max(c.x for c in coords)
    min_y = min(c.y for c in coords)
    max_y = max(c.y for c in coords)
    return ShapeBounds(
        width=max_x - min_x + 1,
        height=max_y - min_y + 1,
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
    )
