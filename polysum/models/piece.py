# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Piece Data Models
Pydantic models for shapes, grid coordinates and pieces as they move
between the tray, the board and the held slot.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Shape(str, Enum):
    I4 = "I4"
    O4 = "O4"
    T4 = "T4"
    L4 = "L4"
    S4 = "S4"
    I3 = "I3"
    L3 = "L3"
    I2 = "I2"
    I1 = "I1"


class Coordinate(BaseModel):
    """
    Grid-relative (x, y) pair. x is the column, y is the row (y-down).
    Used both as a cell offset inside a shape and as an absolute board cell.
    """
    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    def sort_key(self) -> tuple[int, int]:
        return (self.x, self.y)


class Piece(BaseModel):
    """A bag piece. Orientation is the player's current choice, not the solution's."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique within a level")
    shape: Shape
    value: int = Field(..., ge=1, le=9)
    rotation: int = Field(0, description="Degrees, one of 0/90/180/270")
    flipped: bool = False

    @field_validator("rotation")
    @classmethod
    def _quarter_turns_only(cls, v: int) -> int:
        if v % 90 != 0:
            raise ValueError(f"rotation must be a multiple of 90, got {v}")
        return v % 360

    @property
    def is_monomino(self) -> bool:
        return self.shape == Shape.I1

    def rotated(self) -> Piece:
        return self.model_copy(update={"rotation": (self.rotation + 90) % 360})

    def toggled_flip(self) -> Piece:
        return self.model_copy(update={"flipped": not self.flipped})

    def to_piece(self) -> Piece:
        """Strip placement data, returning a plain bag Piece."""
        return Piece(
            id=self.id,
            shape=self.shape,
            value=self.value,
            rotation=self.rotation,
            flipped=self.flipped,
        )


class PlacedPiece(Piece):
    """
    A piece on the board. `position` is the board cell of the local origin
    (0, 0) of the normalised, transformed shape; `occupied_cells` is cached.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    position: Coordinate
    occupied_cells: list[Coordinate] = Field(..., alias="occupiedCells")

    @model_validator(mode="after")
    def _cell_count_matches_shape(self) -> PlacedPiece:
        # Local import: the shape library depends on this module
        from polysum.modules.shapes.library import size_of

        if len(self.occupied_cells) != size_of(self.shape):
            raise ValueError(
                f"piece {self.id} ({self.shape.value}) covers "
                f"{len(self.occupied_cells)} cells, expected {size_of(self.shape)}"
            )
        return self
