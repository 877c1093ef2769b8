# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Board Models
The 5×5 board is a list of rows of frozen BoardCell records. Boards are
never mutated: every placement or removal builds a new outer structure
and shares the untouched cells.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from polysum.models.piece import Shape

BOARD_SIZE = 5
BOARD_CELLS = BOARD_SIZE * BOARD_SIZE


class BoardCell(BaseModel):
    """
    One board cell. `piece_id` is authoritative; `piece_value` and
    `piece_shape` are denormalised for display only.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    row: int = Field(..., ge=0, lt=BOARD_SIZE)
    col: int = Field(..., ge=0, lt=BOARD_SIZE)
    piece_id: Optional[str] = Field(None, alias="pieceId")
    piece_value: Optional[int] = Field(None, alias="pieceValue")
    piece_shape: Optional[Shape] = Field(None, alias="pieceShape")

    @property
    def is_empty(self) -> bool:
        return self.piece_id is None

    def cleared(self) -> BoardCell:
        return BoardCell(row=self.row, col=self.col)


# board[row][col]
Board = list[list[BoardCell]]
