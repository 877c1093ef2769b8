# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Win Condition Analysis
Progress metrics layered on top of is_win(). These are advisory numbers
for a HUD; the win itself is decided only by is_win().
"""

from __future__ import annotations

from polysum.models.board import BOARD_CELLS, Board
from polysum.models.piece import Piece
from polysum.models.results import WinProgress, WinState
from polysum.modules.scoring.board_model import coverage, sum_of_values


def analyze_win_condition(board: Board, placed_pieces: list[Piece], target: int) -> WinState:
    """
    completion_percentage: half from coverage, half from the sum (capped at target).
    progress_score:        2 points per covered cell + up to 50 for the sum.
    """
    covered = coverage(board)
    current_sum = sum_of_values(placed_pieces)
    has_full_coverage = covered == BOARD_CELLS
    has_correct_sum = current_sum == target

    sum_ratio = min(current_sum, target) / target if target > 0 else 0.0
    completion = min((covered / BOARD_CELLS) * 50 + sum_ratio * 50, 100.0)
    progress_score = round(covered * 2 + sum_ratio * 50)

    return WinState(
        is_won=has_full_coverage and has_correct_sum,
        has_full_coverage=has_full_coverage,
        has_correct_sum=has_correct_sum,
        completion_percentage=completion,
        progress_score=progress_score,
    )


def check_win_condition_progress(
    board: Board, placed_pieces: list[Piece], target: int
) -> WinProgress:
    covered = coverage(board)
    current_sum = sum_of_values(placed_pieces)

    blockers: list[str] = []
    if current_sum > target:
        blockers.append("Sum exceeds target - remove pieces to reduce")
    remaining = BOARD_CELLS - covered
    if remaining == 1:
        blockers.append("Very limited space remaining")

    return WinProgress(
        coverage_progress=covered / BOARD_CELLS * 100,
        sum_progress=min(current_sum / target * 100, 100.0) if target > 0 else 0.0,
        can_win=not blockers,
        blockers=blockers,
    )
