# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Game Rule Layer
Classifies a proposed move for the player:

  violations - the placement is rejected (severity error, with a hint)
  warnings   - the placement is legal but worth a second look

Validity is decided solely by is_valid_placement(); this layer only adds
wording and the non-blocking warnings on top.
"""

from __future__ import annotations

from polysum.models.board import Board
from polysum.models.level import GameLevel, LevelConstraints
from polysum.models.piece import Piece, PlacedPiece
from polysum.models.results import (
    GameRuleCheck,
    MoveFeedback,
    RuleViolation,
    Severity,
    ViolationType,
)
from polysum.modules.placement.validator import is_valid_placement
from polysum.modules.scoring.board_model import monomino_count, remove_from_board

VIOLATION_SUGGESTIONS: dict[ViolationType, str] = {
    ViolationType.MONOMINO_CAP: (
        "Remove an existing monomino before placing this one, or choose a different piece"
    ),
    ViolationType.BOUNDARY: "Try placing the piece closer to the center of the board",
    ViolationType.OVERLAP: "Find an empty area or remove overlapping pieces first",
}
DEFAULT_SUGGESTION = "Try a different position or piece transformation"


def without_piece(
    piece: Piece, board: Board, placed_pieces: list[PlacedPiece]
) -> tuple[Board, list[PlacedPiece]]:
    """
    View of the board as if `piece` were lifted off it. A piece being
    repositioned must not collide with its own cells or count against
    the monomino cap twice.
    """
    others = [p for p in placed_pieces if p.id != piece.id]
    if len(others) != len(placed_pieces):
        board = remove_from_board(board, piece.id)
    return board, others


def validate_game_rules(
    piece: Piece,
    row: int,
    col: int,
    board: Board,
    placed_pieces: list[PlacedPiece],
    level: GameLevel,
) -> GameRuleCheck:
    board, others = without_piece(piece, board, placed_pieces)
    constraints = level.constraints
    monominoes = monomino_count(others)

    violations: list[RuleViolation] = []
    warnings: list[RuleViolation] = []

    result = is_valid_placement(
        piece, row, col, board, monominoes, constraints.monomino_cap
    )
    if not result.valid:
        violations.append(RuleViolation(
            type=result.violation,
            severity=Severity.ERROR,
            message=result.reason or "Invalid placement",
            suggestion=VIOLATION_SUGGESTIONS.get(result.violation, DEFAULT_SUGGESTION),
            affected_cells=result.occupied_cells,
        ))

    if result.valid and piece.is_monomino and monominoes == constraints.monomino_cap - 1:
        warnings.append(RuleViolation(
            type=ViolationType.MONOMINO_CAP,
            severity=Severity.WARNING,
            message="This will be your last allowed monomino",
            suggestion="Consider if this is the best placement for your final monomino",
        ))

    total_placed = len(others) + (1 if result.valid else 0)
    remaining = len(level.bag) - total_placed
    if remaining > constraints.max_leftovers:
        warnings.append(RuleViolation(
            type=ViolationType.MAX_LEFTOVERS,
            severity=Severity.WARNING,
            message=(
                f"{remaining} pieces will remain unused "
                f"(limit: {constraints.max_leftovers})"
            ),
            suggestion="You may need to use more pieces to complete the puzzle",
        ))

    return GameRuleCheck(valid=not violations, violations=violations, warnings=warnings)


def validate_monomino_constraint(
    placed_pieces: list[Piece],
    new_piece: Piece,
    constraints: LevelConstraints,
) -> tuple[bool, str | None]:
    """Returns (valid, message)."""
    current = monomino_count(p for p in placed_pieces if p.id != new_piece.id)
    if new_piece.is_monomino and current >= constraints.monomino_cap:
        return False, (
            f"Cannot place more than {constraints.monomino_cap} monomino(s) per level"
        )
    return True, None


def generate_move_validation_feedback(check: GameRuleCheck) -> MoveFeedback:
    if check.violations:
        return MoveFeedback(message=check.violations[0].message, type="error")
    if check.warnings:
        return MoveFeedback(message=check.warnings[0].message, type="warning")
    return MoveFeedback(message="Valid placement!", type="success")
