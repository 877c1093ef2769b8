# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Result Models
Structured outcomes returned by the validator, the rule layer, the win
analysis and the winnability checker. None of these are raised; callers
inspect them and decide what to show.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from polysum.models.piece import Coordinate, Piece


class ViolationType(str, Enum):
    MONOMINO_CAP = "monomino_cap"
    BOUNDARY = "boundary"
    OVERLAP = "overlap"
    MAX_LEFTOVERS = "max_leftovers"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Confidence(str, Enum):
    CERTAIN = "certain"
    LIKELY = "likely"
    UNKNOWN = "unknown"


class PlacementResult(BaseModel):
    """
    Outcome of a single placement check. `occupied_cells` is always filled,
    even on failure, so a caller can draw a preview of the attempted spot.
    """
    model_config = ConfigDict(populate_by_name=True)

    valid: bool
    reason: Optional[str] = None
    violation: Optional[ViolationType] = None
    occupied_cells: list[Coordinate] = Field(default_factory=list, alias="occupiedCells")


class RuleViolation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: ViolationType
    severity: Severity
    message: str
    suggestion: Optional[str] = None
    affected_cells: list[Coordinate] = Field(default_factory=list, alias="affectedCells")


class GameRuleCheck(BaseModel):
    valid: bool
    violations: list[RuleViolation] = Field(default_factory=list)
    warnings: list[RuleViolation] = Field(default_factory=list)


class PlacementSuggestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    position: Coordinate
    confidence: float = Field(..., ge=0.0, le=100.0)
    reason: str
    alternative_positions: list[Coordinate] = Field(
        default_factory=list, alias="alternativePositions"
    )


class MoveFeedback(BaseModel):
    message: str
    type: str = Field(..., description="error | warning | success")


class WinState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_won: bool = Field(..., alias="isWon")
    has_full_coverage: bool = Field(..., alias="hasFullCoverage")
    has_correct_sum: bool = Field(..., alias="hasCorrectSum")
    completion_percentage: float = Field(..., alias="completionPercentage")
    progress_score: int = Field(..., alias="progressScore")


class WinProgress(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    coverage_progress: float = Field(..., alias="coverageProgress")
    sum_progress: float = Field(..., alias="sumProgress")
    can_win: bool = Field(..., alias="canWin")
    blockers: list[str] = Field(default_factory=list)


class WinnabilityResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_winnable: bool = Field(..., alias="isWinnable")
    reason: str
    confidence: Confidence
    solution_pieces: Optional[list[str]] = Field(None, alias="solutionPieces")
    time_ms: float = Field(0.0, alias="timeMs")


# ─── Contextual Hints ────────────────────────────────────────────────────────

class HintType(str, Enum):
    PLACEMENT = "placement"
    STRATEGY = "strategy"
    WARNING = "warning"
    ENCOURAGEMENT = "encouragement"


class HintPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class HintFrequency(str, Enum):
    NEVER = "never"
    RARE = "rare"
    NORMAL = "normal"
    FREQUENT = "frequent"


class Hint(BaseModel):
    """
    Advisory nudge for the current position. `id` names the kind of hint
    and is stable across calls, so a client can de-duplicate.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: HintType
    priority: HintPriority
    title: str
    message: str
    suggested_piece: Optional[Piece] = Field(None, alias="suggestedPiece")
    suggested_position: Optional[Coordinate] = Field(None, alias="suggestedPosition")
    alternative_positions: list[Coordinate] = Field(
        default_factory=list, alias="alternativePositions"
    )
    duration_ms: int = Field(5000, ge=0, alias="durationMs")
