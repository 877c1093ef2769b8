# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Placement Validator
Decides whether a piece may sit at a board origin and which cells it
would cover.

Coordinate mapping:
  board (row, col) corresponds to transform space (x=col, y=row), so the
  cells of a placement are the piece's oriented offsets translated by
  (dx=col, dy=row).

Rule order (deterministic):
  1. monomino cap   - an I1 is rejected once the cap is reached
  2. boundaries     - every cell is checked against the 5×5 bounds first
  3. overlap        - only then is every cell checked for an existing piece
The cells are returned on every outcome so a caller can draw a preview.
"""

from __future__ import annotations

from polysum.models.board import BOARD_SIZE, Board
from polysum.models.piece import Coordinate, Piece, PlacedPiece, Shape
from polysum.models.results import PlacementResult, ViolationType
from polysum.modules.transforms.transform_engine import oriented_cells, translate
from polysum.utils.grid_utils import in_bounds, iter_positions

MONOMINO_CAP_REASON = "Maximum {cap} monomino(s) allowed per level"
BOUNDARY_REASON = "Piece extends beyond board boundaries"
OVERLAP_REASON = "Cell already occupied by another piece"


def occupied_cells(piece: Piece, row: int, col: int) -> list[Coordinate]:
    """Absolute board cells covered by `piece` with its local origin at (row, col)."""
    return translate(oriented_cells(piece.shape, piece.rotation, piece.flipped), col, row)


def is_valid_placement(
    piece: Piece,
    row: int,
    col: int,
    board: Board,
    monomino_count: int = 0,
    monomino_cap: int = 1,
) -> PlacementResult:
    """
    Check a proposed placement against the board snapshot.

    Args:
        piece:          Piece with its current rotation / flip
        row, col:       Board cell for the piece's local origin
        board:          Current board (never modified)
        monomino_count: Monominoes already placed
        monomino_cap:   Per-level monomino limit

    Returns:
        PlacementResult; `violation` names the first rule broken.
    """
    cells = occupied_cells(piece, row, col)

    if piece.shape == Shape.I1 and monomino_count >= monomino_cap:
        return PlacementResult(
            valid=False,
            reason=MONOMINO_CAP_REASON.format(cap=monomino_cap),
            violation=ViolationType.MONOMINO_CAP,
            occupied_cells=cells,
        )

    if any(not in_bounds(c.y, c.x, BOARD_SIZE) for c in cells):
        return PlacementResult(
            valid=False,
            reason=BOUNDARY_REASON,
            violation=ViolationType.BOUNDARY,
            occupied_cells=cells,
        )

    if any(board[c.y][c.x].piece_id is not None for c in cells):
        return PlacementResult(
            valid=False,
            reason=OVERLAP_REASON,
            violation=ViolationType.OVERLAP,
            occupied_cells=cells,
        )

    return PlacementResult(valid=True, occupied_cells=cells)


def can_place_piece(
    piece: Piece,
    row: int,
    col: int,
    board: Board,
    monomino_count: int = 0,
    monomino_cap: int = 1,
) -> bool:
    return is_valid_placement(piece, row, col, board, monomino_count, monomino_cap).valid


def _fits(offsets: tuple[Coordinate, ...], row: int, col: int, board: Board) -> bool:
    # Allocation-free variant of the bounds + overlap checks
    for c in offsets:
        r, k = row + c.y, col + c.x
        if not (0 <= r < BOARD_SIZE and 0 <= k < BOARD_SIZE):
            return False
        if board[r][k].piece_id is not None:
            return False
    return True


def enumerate_valid_placements(
    piece: Piece,
    board: Board,
    monomino_count: int = 0,
    monomino_cap: int = 1,
) -> list[Coordinate]:
    """
    Scan all 25 origins in row-major order and keep the legal ones.
    Each result is Coordinate(x=col, y=row) of the piece origin.
    """
    if piece.shape == Shape.I1 and monomino_count >= monomino_cap:
        return []

    offsets = oriented_cells(piece.shape, piece.rotation, piece.flipped)
    return [
        Coordinate(x=col, y=row)
        for row, col in iter_positions(BOARD_SIZE)
        if _fits(offsets, row, col, board)
    ]


def placed_piece_info(piece: Piece, position: Coordinate) -> PlacedPiece:
    """Build the PlacedPiece record for `piece` with its origin at `position`."""
    return PlacedPiece(
        id=piece.id,
        shape=piece.shape,
        value=piece.value,
        rotation=piece.rotation,
        flipped=piece.flipped,
        position=position,
        occupied_cells=occupied_cells(piece, position.y, position.x),
    )
