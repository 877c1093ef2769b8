# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Transform Engine
Pure functions over coordinate sets: quarter-turn rotation, mirror flips,
normalisation and translation.

Composition contract for a piece orientation (rotation, flipped):
  1. flip horizontally if `flipped`
  2. rotate 90° exactly ((rotation % 360) + 360) % 360 // 90 times
  3. normalise so min(x) == min(y) == 0
The flip-before-rotate order determines which orientation a given
(rotation, flipped) pair names and must not be swapped.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable, NamedTuple

from polysum.models.piece import Coordinate, Shape
from polysum.modules.shapes.library import shape_of

ROTATION_VARIANTS: tuple[int, ...] = (0, 90, 180, 270)
FLIP_VARIANTS: tuple[bool, ...] = (False, True)


class Orientation(NamedTuple):
    """One distinct orientation of a shape and the (rotation, flipped) that yields it."""
    rotation: int
    flipped: bool
    coords: tuple[Coordinate, ...]


def rotate_90(coords: Iterable[Coordinate]) -> list[Coordinate]:
    """(x, y) -> (-y, x): a quarter turn about the origin in y-down space."""
    return [Coordinate(x=-c.y, y=c.x) for c in coords]


def flip_horizontal(coords: Iterable[Coordinate]) -> list[Coordinate]:
    return [Coordinate(x=-c.x, y=c.y) for c in coords]


def flip_vertical(coords: Iterable[Coordinate]) -> list[Coordinate]:
    return [Coordinate(x=c.x, y=-c.y) for c in coords]


def normalize(coords: Iterable[Coordinate]) -> list[Coordinate]:
    """Translate so min(x) == 0 and min(y) == 0. Idempotent."""
    coords = list(coords)
    if not coords:
        return coords
    min_x = min(c.x for c in coords)
    min_y = min(c.y for c in coords)
    if min_x == 0 and min_y == 0:
        return coords
    return [Coordinate(x=c.x - min_x, y=c.y - min_y) for c in coords]


def translate(coords: Iterable[Coordinate], dx: int, dy: int) -> list[Coordinate]:
    return [Coordinate(x=c.x + dx, y=c.y + dy) for c in coords]


def quarter_turns(rotation_deg: int) -> int:
    """Number of 90° steps for any integer degree value, always 0..3."""
    return ((rotation_deg % 360) + 360) % 360 // 90


def transformed_shape(
    coords: Iterable[Coordinate],
    rotation_deg: int = 0,
    flipped: bool = False,
) -> list[Coordinate]:
    transformed = list(coords)
    if flipped:
        transformed = flip_horizontal(transformed)
    for _ in range(quarter_turns(rotation_deg)):
        transformed = rotate_90(transformed)
    return normalize(transformed)


@lru_cache(maxsize=None)
def oriented_cells(shape: Shape, rotation_deg: int, flipped: bool) -> tuple[Coordinate, ...]:
    """Cached transformed_shape() of a catalog shape. Hot path for placement scans."""
    return tuple(transformed_shape(shape_of(shape), rotation_deg, flipped))


def sorted_cells(coords: Iterable[Coordinate]) -> list[Coordinate]:
    return sorted(coords, key=Coordinate.sort_key)


def coords_equal(a: Iterable[Coordinate], b: Iterable[Coordinate]) -> bool:
    """Set equality of coordinate collections, independent of order."""
    a, b = list(a), list(b)
    if len(a) != len(b):
        return False
    return sorted_cells(a) == sorted_cells(b)


def enumerate_distinct_transforms(coords: Iterable[Coordinate]) -> list[Orientation]:
    """
    All unique orientations over {flip} × {rotation}, flip-major.
    The first (rotation, flipped) pair producing a given cell set is kept,
    so an asymmetric shape yields 8 entries, O4 and I1 yield 1.
    """
    base = list(coords)
    seen: set[tuple[tuple[int, int], ...]] = set()
    orientations: list[Orientation] = []

    for flipped in FLIP_VARIANTS:
        for rotation in ROTATION_VARIANTS:
            cells = transformed_shape(base, rotation, flipped)
            key = tuple(c.sort_key() for c in sorted_cells(cells))
            if key in seen:
                continue
            seen.add(key)
            orientations.append(Orientation(rotation, flipped, tuple(cells)))

    return orientations


@lru_cache(maxsize=None)
def distinct_orientations(shape: Shape) -> tuple[Orientation, ...]:
    """Cached enumerate_distinct_transforms() of a catalog shape."""
    return tuple(enumerate_distinct_transforms(shape_of(shape)))
