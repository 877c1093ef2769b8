# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Contextual Hints
Picks what to nudge the player towards from the current GameState.

  1. Phase     - early / mid / late from coverage and move count
  2. Phase hint - a piece worth placing next, positioned by suggest_placement()
  3. Sum       - close to the target, overshooting it, or far below it
  4. Strategy  - monomino saving, optional transform reminder
  5. Warnings  - target out of reach, too many pieces still unused
  6. Rank      - by priority (stable), top MAX_HINTS returned

Available pieces are the tray plus the held piece. Hints never change
state. Random hints (transform reminder, encouragement) are only drawn
when the caller passes an rng, so the default output is deterministic.
"""

from __future__ import annotations

import math
import random
import time
from enum import Enum
from typing import Optional

from polysum.models.board import BOARD_CELLS, Board
from polysum.models.game import GameState
from polysum.models.piece import Coordinate, Piece, PlacedPiece
from polysum.models.results import Hint, HintFrequency, HintPriority, HintType
from polysum.modules.placement.validator import enumerate_valid_placements
from polysum.modules.rules.suggestions import suggest_placement
from polysum.modules.scoring.board_model import coverage, monomino_count, sum_of_values
from polysum.modules.shapes.library import size_of
from polysum.modules.transforms.transform_engine import distinct_orientations

MAX_HINTS = 3
EARLY_MOVES = 3
MID_COVERAGE = 8
LATE_COVERAGE = 20
FINAL_FIT_CELLS = 5
CLOSE_TO_TARGET = 3
FAR_FROM_TARGET = 10
HIGH_VALUE = 4
EXTRA_LEFTOVER_SLACK = 3
TRANSFORM_REMINDER_CHANCE = 0.2
ENCOURAGEMENT_CHANCE = 0.1
ENCOURAGEMENT_MIN_MOVES = 5
SHOW_HINT_CHANCE = 0.3

PRIORITY_WEIGHT: dict[HintPriority, int] = {
    HintPriority.HIGH: 3,
    HintPriority.MEDIUM: 2,
    HintPriority.LOW: 1,
}

# Seconds between hints
HINT_INTERVALS: dict[HintFrequency, float] = {
    HintFrequency.RARE: 120.0,
    HintFrequency.NORMAL: 60.0,
    HintFrequency.FREQUENT: 30.0,
}

ENCOURAGEMENTS = (
    "You're doing great!",
    "Keep going, you've got this!",
    "Nice strategic thinking!",
    "Excellent progress so far!",
    "You're getting the hang of it!",
)


class GamePhase(str, Enum):
    EARLY = "early"
    MID = "mid"
    LATE = "late"


def game_phase(covered: int, move_count: int) -> Optional[GamePhase]:
    """A few moves in but barely any coverage has no phase."""
    if move_count < EARLY_MOVES and covered < MID_COVERAGE:
        return GamePhase.EARLY
    if MID_COVERAGE <= covered < LATE_COVERAGE:
        return GamePhase.MID
    if covered >= LATE_COVERAGE:
        return GamePhase.LATE
    return None


# ─── Phase Hints ─────────────────────────────────────────────────────────────

def _placement_hint(
    hint_id: str,
    title: str,
    message: str,
    piece: Piece,
    state: GameState,
    duration_ms: int,
    with_alternatives: bool,
) -> Optional[Hint]:
    suggestions = suggest_placement(piece, state.board, state.placed_pieces, state.level)
    if not suggestions:
        return None
    return Hint(
        id=hint_id,
        type=HintType.PLACEMENT,
        priority=HintPriority.HIGH,
        title=title,
        message=message,
        suggested_piece=piece,
        suggested_position=suggestions[0].position,
        alternative_positions=(
            [s.position for s in suggestions[1:]] if with_alternatives else []
        ),
        duration_ms=duration_ms,
    )


def _early_hints(state: GameState, available: list[Piece]) -> list[Hint]:
    hints: list[Hint] = []

    tetrominoes = [p for p in available if size_of(p.shape) == 4]
    if tetrominoes:
        largest = max(tetrominoes, key=lambda p: p.value)
        hint = _placement_hint(
            "early_large",
            "Start with larger pieces",
            "Place tetrominoes first to establish a foundation",
            largest, state, 8000, with_alternatives=True,
        )
        if hint is not None:
            hints.append(hint)

    if not state.placed_pieces:
        hints.append(Hint(
            id="center_start",
            type=HintType.STRATEGY,
            priority=HintPriority.MEDIUM,
            title="Consider center placement",
            message="Starting near the center gives you more flexibility",
            duration_ms=6000,
        ))
    return hints


def _mid_hints(state: GameState, available: list[Piece]) -> list[Hint]:
    hints: list[Hint] = []

    small = [p for p in available if size_of(p.shape) in (2, 3)]
    if small:
        hint = _placement_hint(
            "gap_fill",
            "Fill the gaps",
            "Use smaller pieces to fill spaces between larger ones",
            small[0], state, 7000, with_alternatives=False,
        )
        if hint is not None:
            hints.append(hint)

    hints.append(Hint(
        id="connection",
        type=HintType.STRATEGY,
        priority=HintPriority.MEDIUM,
        title="Connect your pieces",
        message="Try to place pieces adjacent to existing ones for better coverage",
        duration_ms=5000,
    ))
    return hints


def find_final_fit(
    board: Board,
    available: list[Piece],
    placed_pieces: list[PlacedPiece],
    monomino_cap: int,
) -> Optional[tuple[Piece, int, int]]:
    """
    First available piece that covers every remaining empty cell in one
    placement, trying each distinct orientation. Returns the piece in the
    orientation that fits and its (row, col) origin.
    """
    remaining = BOARD_CELLS - coverage(board)
    placed_monominoes = monomino_count(placed_pieces)

    for piece in available:
        if size_of(piece.shape) != remaining:
            continue
        for orientation in distinct_orientations(piece.shape):
            oriented = piece.model_copy(
                update={"rotation": orientation.rotation, "flipped": orientation.flipped}
            )
            origins = enumerate_valid_placements(
                oriented, board, placed_monominoes, monomino_cap
            )
            if origins:
                return oriented, origins[0].y, origins[0].x
    return None


def _late_hints(state: GameState, available: list[Piece]) -> list[Hint]:
    remaining = BOARD_CELLS - state.covered_cells
    if remaining == 0 or remaining > FINAL_FIT_CELLS:
        return []

    fit = find_final_fit(
        state.board, available, state.placed_pieces,
        state.level.constraints.monomino_cap,
    )
    if fit is None:
        return [Hint(
            id="recheck_placement",
            type=HintType.WARNING,
            priority=HintPriority.HIGH,
            title="Check your placements",
            message="You might need to rearrange pieces to complete the puzzle",
            duration_ms=8000,
        )]

    piece, row, col = fit
    return [Hint(
        id="final_fit",
        type=HintType.PLACEMENT,
        priority=HintPriority.HIGH,
        title="Perfect final piece",
        message=f"This piece should fit the remaining {remaining} cells perfectly",
        suggested_piece=piece,
        suggested_position=Coordinate(x=col, y=row),
        duration_ms=10000,
    )]


# ─── Sum / Strategy / Warnings ───────────────────────────────────────────────

def _sum_hints(state: GameState, available: list[Piece]) -> list[Hint]:
    difference = state.level.target - state.current_sum

    if difference != 0 and abs(difference) <= CLOSE_TO_TARGET:
        if difference < 0:
            return [Hint(
                id="sum_too_high",
                type=HintType.WARNING,
                priority=HintPriority.HIGH,
                title="Sum too high",
                message=f"Remove pieces worth {-difference} points to reach target",
                duration_ms=7000,
            )]
        exact = next((p for p in available if p.value == difference), None)
        if exact is not None:
            return [Hint(
                id="exact_sum",
                type=HintType.PLACEMENT,
                priority=HintPriority.HIGH,
                title="Perfect sum piece!",
                message=f"This piece has exactly the {difference} points you need",
                suggested_piece=exact,
                duration_ms=8000,
            )]
        return []

    if difference > FAR_FROM_TARGET and any(p.value >= HIGH_VALUE for p in available):
        return [Hint(
            id="high_value",
            type=HintType.STRATEGY,
            priority=HintPriority.MEDIUM,
            title="Use high-value pieces",
            message=f"You need {difference} more points - prioritize valuable pieces",
            duration_ms=6000,
        )]
    return []


def _strategy_hints(
    state: GameState, available: list[Piece], rng: Optional[random.Random]
) -> list[Hint]:
    hints: list[Hint] = []

    if state.monomino_count == 0 and any(p.is_monomino for p in available):
        hints.append(Hint(
            id="monomino_strategy",
            type=HintType.STRATEGY,
            priority=HintPriority.MEDIUM,
            title="Save monominoes for gaps",
            message="Use your single-cell pieces to fill small gaps at the end",
            duration_ms=5000,
        ))

    if rng is not None and rng.random() < TRANSFORM_REMINDER_CHANCE:
        hints.append(Hint(
            id="transform_reminder",
            type=HintType.STRATEGY,
            priority=HintPriority.LOW,
            title="Try rotating pieces",
            message="Rotate or flip pieces for a better fit",
            duration_ms=4000,
        ))
    return hints


def _warning_hints(state: GameState, available: list[Piece]) -> list[Hint]:
    hints: list[Hint] = []

    if state.current_sum + sum_of_values(available) < state.level.target:
        hints.append(Hint(
            id="impossible_sum",
            type=HintType.WARNING,
            priority=HintPriority.HIGH,
            title="Cannot reach target",
            message="Even with all pieces, you cannot reach the target sum",
            duration_ms=10000,
        ))

    max_leftovers = state.level.constraints.max_leftovers
    if len(available) > max_leftovers + EXTRA_LEFTOVER_SLACK:
        hints.append(Hint(
            id="too_many_pieces",
            type=HintType.WARNING,
            priority=HintPriority.MEDIUM,
            title="Use more pieces",
            message=f"You can only leave {max_leftovers} pieces unused",
            duration_ms=6000,
        ))
    return hints


def _encouragement_hints(move_count: int, rng: random.Random) -> list[Hint]:
    if move_count <= ENCOURAGEMENT_MIN_MOVES:
        return []
    return [Hint(
        id="encouragement",
        type=HintType.ENCOURAGEMENT,
        priority=HintPriority.LOW,
        title="Keep it up!",
        message=rng.choice(ENCOURAGEMENTS),
        duration_ms=3000,
    )]


# ─── Public API ──────────────────────────────────────────────────────────────

def generate_contextual_hints(
    state: GameState,
    move_count: int,
    rng: Optional[random.Random] = None,
) -> list[Hint]:
    """
    Up to MAX_HINTS hints for the position, highest priority first.
    Hints of equal priority keep the order they were produced in.
    """
    available = list(state.tray_pieces)
    if state.held_piece is not None:
        available.append(state.held_piece)

    hints: list[Hint] = []
    phase = game_phase(state.covered_cells, move_count)
    if phase == GamePhase.EARLY:
        hints.extend(_early_hints(state, available))
    elif phase == GamePhase.MID:
        hints.extend(_mid_hints(state, available))
    elif phase == GamePhase.LATE:
        hints.extend(_late_hints(state, available))

    hints.extend(_sum_hints(state, available))
    hints.extend(_strategy_hints(state, available, rng))
    hints.extend(_warning_hints(state, available))

    if rng is not None and rng.random() < ENCOURAGEMENT_CHANCE:
        hints.extend(_encouragement_hints(move_count, rng))

    hints.sort(key=lambda h: -PRIORITY_WEIGHT[h.priority])
    return hints[:MAX_HINTS]


def hint_cooldown_remaining(
    last_hint_at: Optional[float],
    frequency: HintFrequency,
    now: Optional[float] = None,
) -> float:
    """Seconds until the next hint may be shown; 0 when none is pending."""
    if last_hint_at is None or frequency == HintFrequency.NEVER:
        return 0.0
    now = time.monotonic() if now is None else now
    return max(0.0, HINT_INTERVALS[frequency] - (now - last_hint_at))


def should_show_hint(
    last_hint_at: Optional[float],
    frequency: HintFrequency,
    now: Optional[float] = None,
    rng: Optional[random.Random] = None,
) -> bool:
    """
    True once the frequency's interval has passed since the last hint,
    and then only with probability SHOW_HINT_CHANCE.
    """
    if frequency == HintFrequency.NEVER:
        return False
    now = time.monotonic() if now is None else now
    elapsed = math.inf if last_hint_at is None else now - last_hint_at
    if elapsed <= HINT_INTERVALS[frequency]:
        return False
    return (rng or random.Random()).random() < SHOW_HINT_CHANCE
