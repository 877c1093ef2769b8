# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Shapes Module
Public API for the polyomino catalog.
"""

from polysum.modules.shapes.library import (
    ALL_SHAPES,
    POLYOMINO_SHAPES,
    SHAPE_SIZES,
    ShapeBounds,
    bounds_of,
    shape_of,
    size_of,
)

__all__ = [
    "ALL_SHAPES",
    "POLYOMINO_SHAPES",
    "SHAPE_SIZES",
    "ShapeBounds",
    "shape_of",
    "size_of",
    "bounds_of",
]
