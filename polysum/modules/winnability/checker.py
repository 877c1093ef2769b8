# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Winnability Checker
Diagnostic for vetting levels. Ordered checks, cheapest and most certain
first:

  1. Stored solution   -> winnable, certain
  2. Quick checks      -> not winnable, certain
  3. Bounded solver    -> winnable, certain (if a solution turns up)
  4. Subset existence  -> unknown if a numeric subset exists, else likely not

"unknown" is a legitimate answer: the budget ran out before either
outcome could be proven.
"""

from __future__ import annotations

import time

from polysum.config import get_settings
from polysum.models.level import GameLevel
from polysum.models.results import Confidence, WinnabilityResult
from polysum.modules.winnability.knapsack import check_theoretical_possibility
from polysum.modules.winnability.quick_checks import perform_quick_checks
from polysum.modules.winnability.solver import try_to_solve_puzzle
from polysum.utils.logger import get_logger

log = get_logger(__name__)

KNOWN_SOLUTION_REASON = "generated with known solution"
SEARCH_SOLUTION_REASON = "Solution found through search"
MAYBE_SOLVABLE_REASON = "Could not find solution (may still be solvable)"
IMPOSSIBLE_REASON = "Puzzle appears impossible based on constraints"


def check_winnability(level: GameLevel, attempt_budget: int | None = None) -> WinnabilityResult:
    """
    Args:
        level:          Level to assess
        attempt_budget: Solver placement attempts (default from settings)
    """
    start = time.perf_counter()
    budget = get_settings().solver_attempt_budget if attempt_budget is None else attempt_budget

    def _elapsed() -> float:
        return round((time.perf_counter() - start) * 1000, 3)

    if level.solution is not None:
        return WinnabilityResult(
            is_winnable=True,
            reason=KNOWN_SOLUTION_REASON,
            confidence=Confidence.CERTAIN,
            solution_pieces=list(level.solution.piece_ids),
            time_ms=_elapsed(),
        )

    quick = perform_quick_checks(level)
    if not quick.is_valid:
        log.debug("winnability_quick_reject", level_id=level.id, reason=quick.reason)
        return WinnabilityResult(
            is_winnable=False,
            reason=quick.reason,
            confidence=Confidence.CERTAIN,
            time_ms=_elapsed(),
        )

    solution = try_to_solve_puzzle(level, budget)
    if solution is not None:
        return WinnabilityResult(
            is_winnable=True,
            reason=SEARCH_SOLUTION_REASON,
            confidence=Confidence.CERTAIN,
            solution_pieces=solution,
            time_ms=_elapsed(),
        )

    possible = check_theoretical_possibility(level)
    result = WinnabilityResult(
        is_winnable=False,
        reason=MAYBE_SOLVABLE_REASON if possible else IMPOSSIBLE_REASON,
        confidence=Confidence.UNKNOWN if possible else Confidence.LIKELY,
        time_ms=_elapsed(),
    )
    log.info(
        "winnability_inconclusive",
        level_id=level.id,
        confidence=result.confidence.value,
        time_ms=result.time_ms,
    )
    return result
