# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Board / Scoring Model
Copy-on-write board operations and the scalar scores derived from a
(board, placed pieces) pair.

Placement stamps a piece after clearing every cell it previously held, so
repositioning never leaves stale references. Neither operation mutates
its input board; untouched rows and cells are shared with the result.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from polysum.errors import BoardInvariantError
from polysum.models.board import BOARD_CELLS, BOARD_SIZE, Board, BoardCell
from polysum.models.piece import Piece, PlacedPiece, Shape
from polysum.modules.placement.validator import occupied_cells
from polysum.modules.shapes.library import size_of
from polysum.utils.grid_utils import in_bounds
from polysum.utils.logger import get_logger

log = get_logger(__name__)


def empty_board(size: int = BOARD_SIZE) -> Board:
    return [[BoardCell(row=r, col=c) for c in range(size)] for r in range(size)]


def remove_from_board(board: Board, piece_id: str) -> Board:
    """Clear every cell holding `piece_id`. Rows are fresh lists; untouched cells are shared."""
    new_board: Board = []
    cleared = 0
    for row in board:
        if any(cell.piece_id == piece_id for cell in row):
            new_row = []
            for cell in row:
                if cell.piece_id == piece_id:
                    new_row.append(cell.cleared())
                    cleared += 1
                else:
                    new_row.append(cell)
            new_board.append(new_row)
        else:
            new_board.append(list(row))

    log.debug("piece_removed_from_board", piece_id=piece_id, cells_cleared=cleared)
    return new_board


def place_on_board(board: Board, piece: Piece, row: int, col: int) -> Board:
    """
    Stamp `piece` with its origin at (row, col) onto a copy of `board`.
    Any cells the piece already held are cleared first. Cells outside the
    board are skipped; validate with is_valid_placement() before calling.
    """
    new_board = remove_from_board(board, piece.id)
    for cell in occupied_cells(piece, row, col):
        if in_bounds(cell.y, cell.x, len(new_board)):
            new_board[cell.y][cell.x] = BoardCell(
                row=cell.y,
                col=cell.x,
                piece_id=piece.id,
                piece_value=piece.value,
                piece_shape=piece.shape,
            )

    log.debug("piece_stamped_on_board", piece_id=piece.id, row=row, col=col)
    return new_board


def coverage(board: Board) -> int:
    """Number of occupied cells, 0..25."""
    return sum(1 for row in board for cell in row if cell.piece_id is not None)


def sum_of_values(pieces: Iterable[Piece]) -> int:
    return sum(p.value for p in pieces)


def monomino_count(pieces: Iterable[Piece]) -> int:
    return sum(1 for p in pieces if p.shape == Shape.I1)


def total_cells(pieces: Iterable[Piece]) -> int:
    return sum(size_of(p.shape) for p in pieces)


def is_win(board: Board, placed_pieces: Iterable[Piece], target: int) -> bool:
    """Full coverage AND exact sum. Neither alone is a win."""
    return coverage(board) == BOARD_CELLS and sum_of_values(placed_pieces) == target


def assert_board_consistent(board: Board, placed_pieces: list[PlacedPiece]) -> None:
    """
    Verify that the board and the placed-piece collection describe the same
    state. Raises BoardInvariantError on the first disagreement; nothing is
    repaired, because either side could be the stale one.
    """
    by_id: dict[str, PlacedPiece] = {}
    for piece in placed_pieces:
        if piece.id in by_id:
            raise BoardInvariantError(f"piece {piece.id} is placed more than once")
        by_id[piece.id] = piece

    seen: Counter[str] = Counter()
    for row in board:
        for cell in row:
            if cell.piece_id is None:
                continue
            piece = by_id.get(cell.piece_id)
            if piece is None:
                raise BoardInvariantError(
                    f"cell ({cell.row}, {cell.col}) references piece "
                    f"{cell.piece_id} which is not placed"
                )
            if not any(c.x == cell.col and c.y == cell.row for c in piece.occupied_cells):
                raise BoardInvariantError(
                    f"cell ({cell.row}, {cell.col}) references piece {piece.id} "
                    f"which does not occupy it"
                )
            seen[cell.piece_id] += 1

    for piece in placed_pieces:
        if seen[piece.id] != len(piece.occupied_cells):
            raise BoardInvariantError(
                f"piece {piece.id} occupies {len(piece.occupied_cells)} cells "
                f"but the board shows {seen[piece.id]}"
            )
