# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Game State Transitions
Pure functions from one GameState snapshot to the next. Nothing is
mutated in place: every accepted move builds a fresh board, fresh piece
collections and freshly derived scalars, then checks that board and
placed pieces still agree before handing the snapshot back.

A rejected move returns the input state object unchanged together with
the PlacementResult explaining why.

Piece locations:
  tray_pieces    - available, not on the board
  placed_pieces  - on the board
  held_piece     - picked up, in the player's hand
Every bag piece is in exactly one of these.
"""

from __future__ import annotations

from typing import Literal, Optional

from polysum.errors import PieceNotFoundError
from polysum.models.board import Board
from polysum.models.game import GameState, PlacementRequest
from polysum.models.level import GameLevel
from polysum.models.piece import Coordinate, Piece, PlacedPiece
from polysum.models.results import PlacementResult
from polysum.modules.placement.validator import is_valid_placement, placed_piece_info
from polysum.modules.rules.game_rules import without_piece
from polysum.modules.scoring.board_model import (
    assert_board_consistent,
    coverage,
    empty_board,
    is_win,
    monomino_count,
    place_on_board,
    remove_from_board,
    sum_of_values,
)
from polysum.utils.logger import get_logger

log = get_logger(__name__)

Location = Literal["tray", "placed", "held"]


# ─── Internals ────────────────────────────────────────────────────────────────

def _snapshot(
    level: GameLevel,
    board: Board,
    placed: list[PlacedPiece],
    tray: list[Piece],
    held: Optional[Piece],
) -> GameState:
    """Recompute every derived scalar from scratch and verify consistency."""
    assert_board_consistent(board, placed)
    return GameState(
        level=level,
        board=board,
        placed_pieces=placed,
        tray_pieces=tray,
        held_piece=held,
        current_sum=sum_of_values(placed),
        covered_cells=coverage(board),
        monomino_count=monomino_count(placed),
        is_won=is_win(board, placed, level.target),
    )


def _locate(state: GameState, piece_id: str) -> tuple[Piece, Location]:
    placed = state.find_placed(piece_id)
    if placed is not None:
        return placed.to_piece(), "placed"
    if state.held_piece is not None and state.held_piece.id == piece_id:
        return state.held_piece, "held"
    tray = state.find_tray(piece_id)
    if tray is not None:
        return tray, "tray"
    raise PieceNotFoundError(piece_id)


def _without(pieces: list, piece_id: str) -> list:
    return [p for p in pieces if p.id != piece_id]


def find_piece(state: GameState, piece_id: str) -> Piece:
    """Current form of a piece wherever it is. Raises PieceNotFoundError."""
    return _locate(state, piece_id)[0]


# ─── Transitions ──────────────────────────────────────────────────────────────

def new_game_state(level: GameLevel) -> GameState:
    """Empty board, whole bag in the tray in bag order."""
    return _snapshot(level, empty_board(), [], list(level.bag), None)


def _transformed(piece: Piece, rotate: bool, flip: bool) -> Piece:
    """Flip first, then rotate, matching transformed_shape()."""
    if flip:
        piece = piece.toggled_flip()
    if rotate:
        piece = piece.rotated()
    return piece


def _place_located(
    state: GameState, piece: Piece, location: Location, row: int, col: int
) -> tuple[GameState, PlacementResult]:
    """
    Commit `piece` in the form given, which may differ from the stored one,
    with its origin at (row, col). A rejection returns the input state.
    """
    board, others = without_piece(piece, state.board, state.placed_pieces)

    result = is_valid_placement(
        piece, row, col, board,
        monomino_count(others), state.level.constraints.monomino_cap,
    )
    if not result.valid:
        log.debug(
            "placement_rejected",
            piece_id=piece.id, row=row, col=col, violation=result.violation.value,
        )
        return state, result

    record = placed_piece_info(piece, Coordinate(x=col, y=row))
    if location == "placed":
        placed = [record if p.id == piece.id else p for p in state.placed_pieces]
    else:
        placed = [*state.placed_pieces, record]

    new_state = _snapshot(
        state.level,
        place_on_board(board, piece, row, col),
        placed,
        _without(state.tray_pieces, piece.id),
        None if location == "held" else state.held_piece,
    )
    log.debug(
        "piece_placed",
        piece_id=piece.id, row=row, col=col,
        from_location=location, is_won=new_state.is_won,
    )
    return new_state, result


def place_piece(
    state: GameState, piece_id: str, row: int, col: int
) -> tuple[GameState, PlacementResult]:
    """
    Place a piece from the tray or the hand, or move an already placed
    piece. A reposition is validated against the board without the
    piece's own cells.
    """
    piece, location = _locate(state, piece_id)
    return _place_located(state, piece, location, row, col)


def return_piece_to_tray(state: GameState, piece_id: str) -> GameState:
    """Lift a placed or held piece back into the tray; a tray piece is a no-op."""
    piece, location = _locate(state, piece_id)
    if location == "tray":
        return state

    board = state.board
    if location == "placed":
        board = remove_from_board(board, piece_id)

    return _snapshot(
        state.level,
        board,
        _without(state.placed_pieces, piece_id),
        [*state.tray_pieces, piece],
        None if location == "held" else state.held_piece,
    )


def transform_piece(
    state: GameState, piece_id: str, rotate: bool = False, flip: bool = False
) -> tuple[GameState, PlacementResult]:
    """
    Rotate 90° clockwise and/or toggle the flip of a piece wherever it is.
    A placed piece keeps its origin and must still fit there; otherwise
    the transform is rejected and the state is unchanged.
    """
    piece, location = _locate(state, piece_id)
    transformed = _transformed(piece, rotate, flip)

    if location == "tray":
        tray = [transformed if p.id == piece_id else p for p in state.tray_pieces]
        new_state = _snapshot(
            state.level, state.board, state.placed_pieces, tray, state.held_piece
        )
        return new_state, PlacementResult(valid=True)

    if location == "held":
        new_state = _snapshot(
            state.level, state.board, state.placed_pieces, state.tray_pieces, transformed
        )
        return new_state, PlacementResult(valid=True)

    position = state.find_placed(piece_id).position
    board, others = without_piece(piece, state.board, state.placed_pieces)
    result = is_valid_placement(
        transformed, position.y, position.x, board,
        monomino_count(others), state.level.constraints.monomino_cap,
    )
    if not result.valid:
        log.debug(
            "transform_rejected",
            piece_id=piece_id, violation=result.violation.value,
        )
        return state, result

    record = placed_piece_info(transformed, position)
    new_state = _snapshot(
        state.level,
        place_on_board(board, transformed, position.y, position.x),
        [record if p.id == piece_id else p for p in state.placed_pieces],
        state.tray_pieces,
        state.held_piece,
    )
    return new_state, result


def pick_up_piece(state: GameState, piece_id: str) -> GameState:
    """
    Move a piece into the hand. Anything already held goes back to the
    tray first; a placed piece is lifted off the board.
    """
    piece, location = _locate(state, piece_id)
    if location == "held":
        return state

    tray = _without(state.tray_pieces, piece_id)
    if state.held_piece is not None:
        tray.append(state.held_piece)

    board = state.board
    placed = state.placed_pieces
    if location == "placed":
        board = remove_from_board(board, piece_id)
        placed = _without(placed, piece_id)

    return _snapshot(state.level, board, placed, tray, piece)


def return_held_piece(state: GameState) -> GameState:
    if state.held_piece is None:
        return state
    return _snapshot(
        state.level,
        state.board,
        state.placed_pieces,
        [*state.tray_pieces, state.held_piece],
        None,
    )


def reset_game(state: GameState) -> GameState:
    """Back to the level's starting position."""
    log.debug("game_reset", level_id=state.level.id)
    return new_game_state(state.level)


def apply_request(
    state: GameState, request: PlacementRequest
) -> tuple[GameState, Optional[PlacementResult]]:
    """
    Apply one inbound move as a single transition. With a target cell the
    transformed piece is validated there and committed in one snapshot, so
    a rejection leaves the input state untouched, transform included.
    Without a target cell only the transform is applied.
    """
    if request.row is None or request.col is None:
        if request.rotate or request.flip:
            return transform_piece(state, request.piece_id, request.rotate, request.flip)
        return state, None

    piece, location = _locate(state, request.piece_id)
    return _place_located(
        state,
        _transformed(piece, request.rotate, request.flip),
        location,
        request.row,
        request.col,
    )
