# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Backtracking Tiler
Covers an empty 5×5 board completely with catalog shapes. This is the
first stage of reverse construction: a full tiling is built first and the
puzzle is derived from it, so every generated level is solvable.

Search:
  - Always fill the first empty cell in row-major order.
  - Candidate shapes are those no larger than the remaining empty area;
    with 1, 2 or 3 cells left only the shapes that can close the gap
    are tried.
  - Every distinct orientation of a shape is tried, in random order,
    anchored so its top-left-most cell lands on the target cell.
  - A monomino is skipped once the per-level cap is reached.
  - Each placement attempt counts against `max_steps`; exhausting the
    budget returns None and the caller retries with fresh randomness.

The search works on a private occupancy grid with strict push/pop, so
each explored branch is undone exactly once.
"""

from __future__ import annotations

import random
from typing import Optional

from pydantic import BaseModel

from polysum.config import get_settings
from polysum.models.board import BOARD_CELLS, BOARD_SIZE, Board
from polysum.models.piece import Coordinate, PlacedPiece, Shape
from polysum.modules.scoring.board_model import empty_board, place_on_board
from polysum.modules.shapes.library import ALL_SHAPES, SHAPE_SIZES
from polysum.modules.transforms.transform_engine import Orientation, distinct_orientations
from polysum.utils.logger import get_logger

log = get_logger(__name__)

# Shapes able to close a gap of exactly N cells
_ENDGAME_SHAPES: dict[int, tuple[Shape, ...]] = {
    1: (Shape.I1,),
    2: (Shape.I2, Shape.I1),
    3: (Shape.I3, Shape.L3, Shape.I2, Shape.I1),
}


class SolvedTiling(BaseModel):
    """A fully covered board and the pieces covering it, in placement order."""
    board: Board
    pieces: list[PlacedPiece]
    steps: int = 0


def _anchor(orientation: Orientation) -> Coordinate:
    """First cell of the orientation in row-major order."""
    return min(orientation.coords, key=lambda c: (c.y, c.x))


class _TilingSearch:
    def __init__(self, rng: random.Random, monomino_cap: int, max_steps: int) -> None:
        self.rng = rng
        self.monomino_cap = monomino_cap
        self.max_steps = max_steps
        self.grid: list[list[Optional[str]]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self.placed: list[PlacedPiece] = []
        self.empty = BOARD_CELLS
        self.monominoes = 0
        self.steps = 0

    def run(self) -> bool:
        return self._backtrack()

    def _first_empty(self) -> tuple[int, int]:
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if self.grid[r][c] is None:
                    return r, c
        raise RuntimeError("no empty cell on a board reported as not full")

    def _candidate_shapes(self) -> list[Shape]:
        if self.empty in _ENDGAME_SHAPES:
            shapes = list(_ENDGAME_SHAPES[self.empty])
        else:
            shapes = [s for s in ALL_SHAPES if SHAPE_SIZES[s] <= self.empty]
        if self.monominoes >= self.monomino_cap:
            shapes = [s for s in shapes if s != Shape.I1]
        self.rng.shuffle(shapes)
        return shapes

    def _cells_for(
        self, orientation: Orientation, row: int, col: int
    ) -> tuple[int, int, list[tuple[int, int]]] | None:
        anchor = _anchor(orientation)
        origin_row, origin_col = row - anchor.y, col - anchor.x
        cells: list[tuple[int, int]] = []
        for c in orientation.coords:
            r, k = origin_row + c.y, origin_col + c.x
            if not (0 <= r < BOARD_SIZE and 0 <= k < BOARD_SIZE):
                return None
            if self.grid[r][k] is not None:
                return None
            cells.append((r, k))
        return origin_row, origin_col, cells

    def _push(
        self, shape: Shape, orientation: Orientation, origin: tuple[int, int],
        cells: list[tuple[int, int]],
    ) -> None:
        piece_id = f"p{len(self.placed) + 1}"
        for r, k in cells:
            self.grid[r][k] = piece_id
        self.placed.append(PlacedPiece(
            id=piece_id,
            shape=shape,
            value=1,
            rotation=orientation.rotation,
            flipped=orientation.flipped,
            position=Coordinate(x=origin[1], y=origin[0]),
            occupied_cells=[Coordinate(x=k, y=r) for r, k in cells],
        ))
        self.empty -= len(cells)
        if shape == Shape.I1:
            self.monominoes += 1

    def _pop(self) -> None:
        piece = self.placed.pop()
        for cell in piece.occupied_cells:
            self.grid[cell.y][cell.x] = None
        self.empty += len(piece.occupied_cells)
        if piece.shape == Shape.I1:
            self.monominoes -= 1

    def _backtrack(self) -> bool:
        if self.empty == 0:
            return True

        row, col = self._first_empty()
        for shape in self._candidate_shapes():
            orientations = list(distinct_orientations(shape))
            self.rng.shuffle(orientations)

            for orientation in orientations:
                if self.steps >= self.max_steps:
                    return False
                self.steps += 1

                fit = self._cells_for(orientation, row, col)
                if fit is None:
                    continue
                origin_row, origin_col, cells = fit

                self._push(shape, orientation, (origin_row, origin_col), cells)
                if self._backtrack():
                    return True
                self._pop()

        return False


def generate_solved_board(
    rng: random.Random | None = None,
    monomino_cap: int | None = None,
    max_steps: int | None = None,
) -> SolvedTiling | None:
    """
    Produce a random complete tiling of the empty board.

    Args:
        rng:          Private random source (one per attempt)
        monomino_cap: Monominoes allowed in the tiling (default from settings)
        max_steps:    Placement-attempt budget (default from settings)

    Returns:
        SolvedTiling, or None if the budget ran out. None is retryable.
    """
    settings = get_settings()
    search = _TilingSearch(
        rng=rng or random.Random(),
        monomino_cap=settings.monomino_cap if monomino_cap is None else monomino_cap,
        max_steps=settings.tiling_max_steps if max_steps is None else max_steps,
    )

    if not search.run():
        log.warning("tiling_exhausted", steps=search.steps, max_steps=search.max_steps)
        return None

    board = empty_board()
    for piece in search.placed:
        board = place_on_board(board, piece, piece.position.y, piece.position.x)

    log.debug(
        "tiling_complete",
        piece_count=len(search.placed),
        steps=search.steps,
        monominoes=search.monominoes,
    )
    return SolvedTiling(board=board, pieces=list(search.placed), steps=search.steps)
