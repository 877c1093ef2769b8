# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Piece Value Assignment
Gives each piece of a complete tiling a value in 1..9 so the values sum
to exactly the target.

  1. Every piece starts at 1 (sum = N).
  2. Random pieces below 9 receive random increments, bounded by the
     remaining deficit and the 9 cap, until the sum equals the target.
  3. Low-value skew: a piece above 4 hands value to a partner below 4
     with probability SKEW_PROBABILITY. The transfer is
     min(source - 4, 4 - partner), so the total never changes and both
     stay inside 1..9.
"""

from __future__ import annotations

import random

from polysum.errors import UnreachableTargetError
from polysum.models.board import BOARD_CELLS
from polysum.models.piece import PlacedPiece
from polysum.utils.logger import get_logger

log = get_logger(__name__)

MIN_VALUE = 1
MAX_VALUE = 9
SKEW_PIVOT = 4
SKEW_PROBABILITY = 0.6


def target_range(piece_count: int) -> tuple[int, int]:
    """Inclusive (min, max) sum reachable by `piece_count` pieces."""
    return piece_count * MIN_VALUE, piece_count * MAX_VALUE


def assign_piece_values(
    pieces: list[PlacedPiece],
    target: int,
    rng: random.Random | None = None,
) -> list[PlacedPiece]:
    """
    Return copies of `pieces` with values summing to `target`.

    Raises:
        UnreachableTargetError: the pieces do not cover the board, or the
            target lies outside [N, 9N].
    """
    rng = rng or random.Random()

    covered = sum(len(p.occupied_cells) for p in pieces)
    if covered != BOARD_CELLS:
        raise UnreachableTargetError(
            f"Board must be fully covered ({covered}/{BOARD_CELLS} cells)"
        )

    n = len(pieces)
    low, high = target_range(n)
    if not low <= target <= high:
        raise UnreachableTargetError(
            f"Target sum {target} is not achievable with {n} pieces "
            f"(reachable range [{low}, {high}])"
        )

    values = [MIN_VALUE] * n
    current = sum(values)

    while current < target:
        i = rng.randrange(n)
        if values[i] >= MAX_VALUE:
            continue
        max_increase = min(MAX_VALUE - values[i], target - current)
        increase = rng.randint(1, max_increase)
        values[i] += increase
        current += increase

    transfers = 0
    for i in range(n):
        if values[i] <= SKEW_PIVOT or rng.random() >= SKEW_PROBABILITY:
            continue
        partners = [j for j in range(n) if j != i and values[j] < SKEW_PIVOT]
        if not partners:
            continue
        j = rng.choice(partners)
        transfer = min(values[i] - SKEW_PIVOT, SKEW_PIVOT - values[j])
        if transfer > 0:
            values[i] -= transfer
            values[j] += transfer
            transfers += 1

    if sum(values) != target:
        raise UnreachableTargetError(
            f"value assignment drifted: {sum(values)} != {target}"
        )

    log.debug(
        "piece_values_assigned",
        piece_count=n,
        target=target,
        skew_transfers=transfers,
    )
    return [p.model_copy(update={"value": v}) for p, v in zip(pieces, values)]
