# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Game State Models
A GameState is one immutable snapshot of play. Hosts replace their held
snapshot wholesale with whatever a transition returns.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from polysum.models.board import Board
from polysum.models.level import GameLevel
from polysum.models.piece import Piece, PlacedPiece
from polysum.models.results import PlacementResult


class GameState(BaseModel):
    """
    Board and placed pieces are two views of the same state. Every piece of
    the level lives in exactly one of tray_pieces, placed_pieces, held_piece.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    level: GameLevel
    board: Board
    placed_pieces: list[PlacedPiece] = Field(default_factory=list, alias="placedPieces")
    tray_pieces: list[Piece] = Field(default_factory=list, alias="trayPieces")
    held_piece: Optional[Piece] = Field(None, alias="heldPiece")

    # Derived scalars, recomputed on every transition
    current_sum: int = Field(0, alias="currentSum")
    covered_cells: int = Field(0, alias="coveredCells")
    monomino_count: int = Field(0, alias="monominoCount")
    is_won: bool = Field(False, alias="isWon")

    def find_placed(self, piece_id: str) -> PlacedPiece | None:
        for piece in self.placed_pieces:
            if piece.id == piece_id:
                return piece
        return None

    def find_tray(self, piece_id: str) -> Piece | None:
        for piece in self.tray_pieces:
            if piece.id == piece_id:
                return piece
        return None


# ─── API Request/Response Schemas ────────────────────────────────────────────

class PlacementRequest(BaseModel):
    """One inbound move: place, reposition, rotate and/or flip a piece."""
    model_config = ConfigDict(populate_by_name=True)

    piece_id: str = Field(..., alias="pieceId")
    row: Optional[int] = None
    col: Optional[int] = None
    rotate: bool = Field(False, alias="rotateFlag")
    flip: bool = Field(False, alias="flipFlag")


class GenerateLevelRequest(BaseModel):
    target: Optional[int] = Field(None, ge=1)
    decoy_count: Optional[int] = Field(None, ge=0)


class Session(BaseModel):
    """Session record held by the SessionStore."""
    session_id: str
    state: GameState
    move_count: int = 0
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class SessionSnapshot(BaseModel):
    """Response body for every session endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    state: GameState
    result: Optional[PlacementResult] = None
