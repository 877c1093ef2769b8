# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Placement Suggestions
Ranks every legal origin for a piece with a heuristic confidence score.
Purely advisory: a suggestion never changes what is valid.

Score (clamped to 0..100), starting from 50:
  +20 if the piece's value moves the sum closer to the target, -15 if further
  +5 per unit the average cell sits closer than distance 5 to the centre
  +3 per occupied 4-neighbour touching the piece
"""

from __future__ import annotations

from polysum.models.board import Board
from polysum.models.level import GameLevel
from polysum.models.piece import Coordinate, Piece, PlacedPiece
from polysum.models.results import PlacementSuggestion
from polysum.modules.placement.validator import enumerate_valid_placements, occupied_cells
from polysum.modules.rules.game_rules import without_piece
from polysum.modules.scoring.board_model import monomino_count, sum_of_values
from polysum.utils.grid_utils import distance_from_center, neighbours

BASE_CONFIDENCE = 50.0
CLOSER_BONUS = 20.0
FURTHER_PENALTY = 15.0
CENTER_WEIGHT = 5.0
ADJACENCY_BONUS = 3.0
ALTERNATIVES = 3


def placement_confidence(
    piece: Piece,
    position: Coordinate,
    board: Board,
    placed_pieces: list[PlacedPiece],
    target: int,
) -> float:
    confidence = BASE_CONFIDENCE

    current_sum = sum_of_values(placed_pieces)
    before = abs(target - current_sum)
    after = abs(target - (current_sum + piece.value))
    if after < before:
        confidence += CLOSER_BONUS
    elif after > before:
        confidence -= FURTHER_PENALTY

    cells = occupied_cells(piece, position.y, position.x)
    avg_distance = sum(distance_from_center(c.y, c.x) for c in cells) / len(cells)
    confidence += (5 - avg_distance) * CENTER_WEIGHT

    adjacent = sum(
        1
        for c in cells
        for r, k in neighbours(c.y, c.x)
        if board[r][k].piece_id is not None
    )
    confidence += adjacent * ADJACENCY_BONUS

    return min(max(confidence, 0.0), 100.0)


def placement_reason(confidence: float) -> str:
    if confidence >= 80:
        return "Excellent strategic position"
    if confidence >= 65:
        return "Good placement for sum and coverage"
    if confidence >= 50:
        return "Decent positioning option"
    return "Fallback placement choice"


def suggest_placement(
    piece: Piece,
    board: Board,
    placed_pieces: list[PlacedPiece],
    level: GameLevel,
    target: int | None = None,
    limit: int = 3,
) -> list[PlacementSuggestion]:
    """
    Best `limit` origins for `piece` in its current orientation, highest
    confidence first (ties keep row-major order). Each suggestion carries
    the next few ranked origins as alternatives.
    """
    target = level.target if target is None else target
    board, others = without_piece(piece, board, placed_pieces)

    positions = enumerate_valid_placements(
        piece, board, monomino_count(others), level.constraints.monomino_cap
    )
    scored = sorted(
        ((placement_confidence(piece, pos, board, others, target), pos) for pos in positions),
        key=lambda item: -item[0],
    )

    alternatives = [pos for _, pos in scored[limit:limit + ALTERNATIVES]]
    return [
        PlacementSuggestion(
            position=pos,
            confidence=confidence,
            reason=placement_reason(confidence),
            alternative_positions=alternatives,
        )
        for confidence, pos in scored[:limit]
    ]
