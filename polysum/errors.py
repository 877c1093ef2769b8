# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Domain Exceptions
Raised by the rules engine for programmer errors and malformed data.
Rejected placements are never exceptions; they come back as
PlacementResult(valid=False).
"""


class PolySumError(Exception):
    """Base class for all rules-engine errors."""


class UnreachableTargetError(PolySumError, ValueError):
    """Raised when a target sum cannot be met by the tiling's piece count."""


class BoardInvariantError(PolySumError, AssertionError):
    """Raised when the board and the placed-piece collection disagree."""


class LevelDataError(PolySumError, ValueError):
    """Raised when level data is malformed (unknown shape, bad value, ...)."""


class PieceNotFoundError(PolySumError, KeyError):
    """Raised when a transition references a piece id absent from the state."""


class GeneratorInvariantError(PolySumError, AssertionError):
    """Raised when a generated level fails its own solution self-check."""
