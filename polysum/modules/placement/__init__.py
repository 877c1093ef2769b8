# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Placement Module
Public API for placement legality and origin enumeration.
"""

from polysum.modules.placement.validator import (
    BOUNDARY_REASON,
    MONOMINO_CAP_REASON,
    OVERLAP_REASON,
    can_place_piece,
    enumerate_valid_placements,
    is_valid_placement,
    occupied_cells,
    placed_piece_info,
)

__all__ = [
    "MONOMINO_CAP_REASON",
    "BOUNDARY_REASON",
    "OVERLAP_REASON",
    "occupied_cells",
    "is_valid_placement",
    "can_place_piece",
    "enumerate_valid_placements",
    "placed_piece_info",
]
