# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Quick Impossibility Checks
Cheap bag-level tests that prove a level unwinnable without any search.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Optional

from polysum.models.board import BOARD_CELLS
from polysum.models.level import GameLevel
from polysum.modules.scoring.board_model import monomino_count, total_cells
from polysum.modules.shapes.library import SHAPE_SIZES

# Fewest pieces that could cover the board (all tetrominoes)
MIN_COVER_PIECES = math.ceil(BOARD_CELLS / max(SHAPE_SIZES.values()))
# Most pieces that could cover the board (all single cells)
MAX_COVER_PIECES = BOARD_CELLS


class QuickCheckResult(NamedTuple):
    is_valid: bool
    reason: Optional[str] = None


def achievable_sum_range(level: GameLevel) -> tuple[int, int]:
    """Loose [min, max] bound on the sum of any covering subset of the bag."""
    values = sorted(p.value for p in level.bag)
    min_sum = sum(values[:MIN_COVER_PIECES])
    max_sum = sum(values[::-1][:MAX_COVER_PIECES])
    return min_sum, max_sum


def perform_quick_checks(level: GameLevel) -> QuickCheckResult:
    cells = total_cells(level.bag)
    if cells < BOARD_CELLS:
        return QuickCheckResult(
            False, f"Not enough pieces to cover board ({cells}/{BOARD_CELLS} cells)"
        )

    min_sum, max_sum = achievable_sum_range(level)
    if not min_sum <= level.target <= max_sum:
        return QuickCheckResult(
            False, f"Target {level.target} outside possible range [{min_sum}, {max_sum}]"
        )

    monominoes = monomino_count(level.bag)
    cap = level.constraints.monomino_cap
    if monominoes > cap:
        return QuickCheckResult(False, f"Too many monominoes ({monominoes}/{cap})")

    return QuickCheckResult(True)
