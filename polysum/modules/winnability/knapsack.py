# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Subset Existence Check
Multi-constraint 0/1 knapsack: is there a subset of the bag covering
exactly 25 cells, summing exactly to the target, with at most `cap`
monominoes? Geometry is ignored, so a yes only means "numerically
plausible".
"""

from __future__ import annotations

from functools import lru_cache

from polysum.models.board import BOARD_CELLS
from polysum.models.level import GameLevel
from polysum.models.piece import Piece
from polysum.modules.shapes.library import size_of


def find_valid_subset(
    pieces: list[Piece],
    target_cells: int,
    target_sum: int,
    monomino_cap: int,
) -> bool:
    sizes = [size_of(p.shape) for p in pieces]
    values = [p.value for p in pieces]
    monos = [p.is_monomino for p in pieces]

    @lru_cache(maxsize=None)
    def can_achieve(index: int, cells_left: int, sum_left: int, used_monos: int) -> bool:
        if cells_left == 0 and sum_left == 0:
            return True
        if index >= len(pieces) or cells_left < 0 or sum_left < 0:
            return False

        if can_achieve(index + 1, cells_left, sum_left, used_monos):
            return True

        if monos[index] and used_monos >= monomino_cap:
            return False
        return can_achieve(
            index + 1,
            cells_left - sizes[index],
            sum_left - values[index],
            used_monos + (1 if monos[index] else 0),
        )

    return can_achieve(0, target_cells, target_sum, 0)


def check_theoretical_possibility(level: GameLevel) -> bool:
    return find_valid_subset(
        level.bag, BOARD_CELLS, level.target, level.constraints.monomino_cap
    )
