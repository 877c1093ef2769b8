# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Winnability Module
Public API for assessing whether a level can be won.
"""

from polysum.modules.winnability.checker import check_winnability
from polysum.modules.winnability.knapsack import check_theoretical_possibility, find_valid_subset
from polysum.modules.winnability.quick_checks import (
    QuickCheckResult,
    achievable_sum_range,
    perform_quick_checks,
)
from polysum.modules.winnability.solver import try_to_solve_puzzle

__all__ = [
    "check_winnability",
    "perform_quick_checks",
    "achievable_sum_range",
    "QuickCheckResult",
    "try_to_solve_puzzle",
    "find_valid_subset",
    "check_theoretical_possibility",
]
