# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Transforms Module
Public API for rotation, flipping and normalisation of coordinate sets.
"""

from polysum.modules.transforms.transform_engine import (
    FLIP_VARIANTS,
    ROTATION_VARIANTS,
    Orientation,
    coords_equal,
    distinct_orientations,
    enumerate_distinct_transforms,
    flip_horizontal,
    flip_vertical,
    normalize,
    oriented_cells,
    quarter_turns,
    rotate_90,
    sorted_cells,
    transformed_shape,
    translate,
)

__all__ = [
    "ROTATION_VARIANTS",
    "FLIP_VARIANTS",
    "Orientation",
    "rotate_90",
    "flip_horizontal",
    "flip_vertical",
    "normalize",
    "translate",
    "quarter_turns",
    "transformed_shape",
    "oriented_cells",
    "enumerate_distinct_transforms",
    "distinct_orientations",
    "coords_equal",
    "sorted_cells",
]
