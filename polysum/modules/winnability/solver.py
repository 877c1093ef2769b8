# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Bounded Puzzle Solver
Backtracking search for a subset of the bag that tiles the board and sums
to the target. Same shape of search as the tiler (fill the first empty
cell, anchored orientations, push/pop on a private grid) but drawing from
the bag instead of the catalog, and bounded by an attempt budget.
"""

from __future__ import annotations

from typing import Optional

from polysum.models.board import BOARD_CELLS, BOARD_SIZE
from polysum.models.level import GameLevel
from polysum.models.piece import Piece, Shape
from polysum.modules.shapes.library import SHAPE_SIZES
from polysum.modules.transforms.transform_engine import distinct_orientations
from polysum.utils.logger import get_logger

log = get_logger(__name__)


class _BudgetExhausted(Exception):
    pass


class _BagSearch:
    def __init__(self, level: GameLevel, budget: int) -> None:
        self.pieces: list[Piece] = list(level.bag)
        self.target = level.target
        self.cap = level.constraints.monomino_cap
        self.budget = budget
        self.attempts = 0
        self.grid: list[list[Optional[str]]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self.used: list[bool] = [False] * len(self.pieces)
        self.chosen: list[str] = []
        self.current_sum = 0
        self.covered = 0
        self.monominoes = 0

    def _first_empty(self) -> tuple[int, int]:
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if self.grid[r][c] is None:
                    return r, c
        raise RuntimeError("no empty cell on a board reported as not full")

    def _cells(self, coords, row: int, col: int) -> list[tuple[int, int]] | None:
        anchor = min(coords, key=lambda c: (c.y, c.x))
        cells = []
        for c in coords:
            r, k = row + c.y - anchor.y, col + c.x - anchor.x
            if not (0 <= r < BOARD_SIZE and 0 <= k < BOARD_SIZE):
                return None
            if self.grid[r][k] is not None:
                return None
            cells.append((r, k))
        return cells

    def solve(self) -> bool:
        if self.covered == BOARD_CELLS:
            return self.current_sum == self.target
        # Every further piece adds at least 1
        if self.current_sum >= self.target:
            return False

        row, col = self._first_empty()
        tried: set[tuple[Shape, int]] = set()

        for i, piece in enumerate(self.pieces):
            if self.used[i]:
                continue
            # Identical pieces are interchangeable at this node
            key = (piece.shape, piece.value)
            if key in tried:
                continue
            tried.add(key)

            if piece.shape == Shape.I1 and self.monominoes >= self.cap:
                continue
            if self.covered + SHAPE_SIZES[piece.shape] > BOARD_CELLS:
                continue
            if self.current_sum + piece.value > self.target:
                continue

            for orientation in distinct_orientations(piece.shape):
                self.attempts += 1
                if self.attempts > self.budget:
                    raise _BudgetExhausted

                cells = self._cells(orientation.coords, row, col)
                if cells is None:
                    continue

                self._push(i, piece, cells)
                if self.solve():
                    return True
                self._pop(i, piece, cells)

        return False

    def _push(self, i: int, piece: Piece, cells: list[tuple[int, int]]) -> None:
        for r, k in cells:
            self.grid[r][k] = piece.id
        self.used[i] = True
        self.chosen.append(piece.id)
        self.current_sum += piece.value
        self.covered += len(cells)
        if piece.shape == Shape.I1:
            self.monominoes += 1

    def _pop(self, i: int, piece: Piece, cells: list[tuple[int, int]]) -> None:
        for r, k in cells:
            self.grid[r][k] = None
        self.used[i] = False
        self.chosen.pop()
        self.current_sum -= piece.value
        self.covered -= len(cells)
        if piece.shape == Shape.I1:
            self.monominoes -= 1


def try_to_solve_puzzle(level: GameLevel, attempt_budget: int) -> list[str] | None:
    """
    Search for a geometric solution within `attempt_budget` placement
    attempts.

    Returns:
        Ids of the pieces in the solution, or None if none was found in
        budget (which proves nothing either way).
    """
    search = _BagSearch(level, attempt_budget)
    try:
        found = search.solve()
    except _BudgetExhausted:
        log.debug("solver_budget_exhausted", level_id=level.id, attempts=search.attempts)
        return None

    log.debug("solver_finished", level_id=level.id, found=found, attempts=search.attempts)
    return list(search.chosen) if found else None
