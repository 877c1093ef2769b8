# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Level Models
The GameLevel is the only wire format of the rules engine. Field aliases
match the level JSON contract so saved and generated puzzles interoperate.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from polysum.models.board import BOARD_SIZE
from polysum.models.piece import Piece


class BoardDims(BaseModel):
    rows: Literal[5] = BOARD_SIZE
    cols: Literal[5] = BOARD_SIZE


class LevelConstraints(BaseModel):
    monomino_cap: int = Field(1, ge=0)
    max_leftovers: int = Field(5, ge=0)


class SolutionPlacement(BaseModel):
    """Where and how one solution piece sits in the generator's tiling."""
    model_config = ConfigDict(populate_by_name=True)

    piece_id: str = Field(..., alias="pieceId")
    row: int
    col: int
    rotation: int = 0
    flipped: bool = False


class LevelSolution(BaseModel):
    """
    Proof of winnability produced only by the level generator.
    `piece_ids` lists solution pieces only (decoys excluded).
    """
    model_config = ConfigDict(populate_by_name=True)

    piece_ids: list[str] = Field(..., alias="pieceIds")
    placements: list[SolutionPlacement] = Field(default_factory=list)
    final_sum: int = Field(..., alias="finalSum")
    cells_covered: int = Field(..., alias="cellsCovered")


class GameLevel(BaseModel):
    """A complete, immutable puzzle definition."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    board: BoardDims = Field(default_factory=BoardDims)
    target: int = Field(..., ge=1)
    constraints: LevelConstraints = Field(default_factory=LevelConstraints)
    bag: list[Piece] = Field(default_factory=list)
    solution: Optional[LevelSolution] = None

    @model_validator(mode="after")
    def _unique_piece_ids(self) -> GameLevel:
        ids = [p.id for p in self.bag]
        if len(ids) != len(set(ids)):
            dupes = sorted({i for i in ids if ids.count(i) > 1})
            raise ValueError(f"duplicate piece ids in bag: {dupes}")
        return self

    def get_piece(self, piece_id: str) -> Piece | None:
        for piece in self.bag:
            if piece.id == piece_id:
                return piece
        return None
