# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Scoring Module
Public API for board mutation, scores and the win condition.
"""

from polysum.modules.scoring.board_model import (
    assert_board_consistent,
    coverage,
    empty_board,
    is_win,
    monomino_count,
    place_on_board,
    remove_from_board,
    sum_of_values,
    total_cells,
)
from polysum.modules.scoring.win_conditions import (
    analyze_win_condition,
    check_win_condition_progress,
)

__all__ = [
    # Board model
    "empty_board",
    "place_on_board",
    "remove_from_board",
    "coverage",
    "sum_of_values",
    "monomino_count",
    "total_cells",
    "is_win",
    "assert_board_consistent",
    # Win analysis
    "analyze_win_condition",
    "check_win_condition_progress",
]
