# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
Placement validator and board/scoring model tests.
Covers rule precedence, enumeration, copy-on-write stamping,
win exactness and the consistency check.
"""

import random

import pytest


# ─── Helpers ─────────────────────────────────────────────────────────────────

def _piece(pid: str, shape: str, value: int = 1, rotation: int = 0, flipped: bool = False):
    from polysum.models.piece import Piece
    return Piece(id=pid, shape=shape, value=value, rotation=rotation, flipped=flipped)


def _full_tiling():
    from polysum.modules.generation import generate_solved_board
    for seed in range(20):
        tiling = generate_solved_board(rng=random.Random(seed))
        if tiling is not None:
            return tiling
    pytest.fail("no tiling produced in 20 seeds")


# ─── Validator ───────────────────────────────────────────────────────────────

def test_valid_placement_on_empty_board():
    from polysum.models.piece import Coordinate
    from polysum.modules.placement import is_valid_placement
    from polysum.modules.scoring import empty_board

    result = is_valid_placement(_piece("a", "I2"), 1, 1, empty_board())
    assert result.valid
    assert result.reason is None
    assert result.occupied_cells == [Coordinate(x=1, y=1), Coordinate(x=2, y=1)]


def test_boundary_violation():
    from polysum.models.results import ViolationType
    from polysum.modules.placement import BOUNDARY_REASON, is_valid_placement
    from polysum.modules.scoring import empty_board

    result = is_valid_placement(_piece("a", "I2"), 0, 4, empty_board())
    assert not result.valid
    assert result.violation == ViolationType.BOUNDARY
    assert result.reason == BOUNDARY_REASON
    assert len(result.occupied_cells) == 2


def test_overlap_violation():
    from polysum.models.results import ViolationType
    from polysum.modules.placement import is_valid_placement
    from polysum.modules.scoring import empty_board, place_on_board

    board = place_on_board(empty_board(), _piece("a", "I1"), 0, 0)
    result = is_valid_placement(_piece("b", "I2"), 0, 0, board, monomino_count=1)
    assert result.violation == ViolationType.OVERLAP


def test_boundary_checked_before_overlap():
    from polysum.models.results import ViolationType
    from polysum.modules.placement import is_valid_placement
    from polysum.modules.scoring import empty_board, place_on_board

    # First cell of the domino overlaps, second is off the board
    board = place_on_board(empty_board(), _piece("a", "I1"), 0, 4)
    result = is_valid_placement(_piece("b", "I2"), 0, 4, board, monomino_count=1)
    assert result.violation == ViolationType.BOUNDARY


def test_monomino_cap_checked_first():
    from polysum.models.results import ViolationType
    from polysum.modules.placement import is_valid_placement
    from polysum.modules.scoring import empty_board

    result = is_valid_placement(
        _piece("m", "I1"), 9, 9, empty_board(), monomino_count=1, monomino_cap=1
    )
    assert result.violation == ViolationType.MONOMINO_CAP
    assert "1 monomino" in result.reason


def test_validation_is_deterministic():
    from polysum.modules.placement import is_valid_placement
    from polysum.modules.scoring import empty_board, place_on_board

    board = place_on_board(empty_board(), _piece("a", "O4"), 1, 1)
    piece = _piece("b", "T4", rotation=90)
    results = [is_valid_placement(piece, 2, 2, board) for _ in range(5)]
    assert all(r == results[0] for r in results)


def test_enumerate_valid_placements_on_empty_board():
    from polysum.modules.placement import enumerate_valid_placements
    from polysum.modules.scoring import empty_board

    board = empty_board()
    assert len(enumerate_valid_placements(_piece("a", "I1"), board)) == 25
    assert len(enumerate_valid_placements(_piece("b", "O4"), board)) == 16
    assert len(enumerate_valid_placements(_piece("c", "I4"), board)) == 10
    assert len(enumerate_valid_placements(_piece("d", "I4", rotation=90), board)) == 10


def test_enumerate_is_row_major_and_respects_cap():
    from polysum.models.piece import Coordinate
    from polysum.modules.placement import enumerate_valid_placements
    from polysum.modules.scoring import empty_board

    positions = enumerate_valid_placements(_piece("a", "I4"), empty_board())
    assert positions[:3] == [Coordinate(x=0, y=0), Coordinate(x=1, y=0), Coordinate(x=0, y=1)]
    assert enumerate_valid_placements(
        _piece("m", "I1"), empty_board(), monomino_count=1
    ) == []


# ─── Board Model ─────────────────────────────────────────────────────────────

def test_place_does_not_mutate_input():
    from polysum.modules.scoring import coverage, empty_board, place_on_board

    board = empty_board()
    new_board = place_on_board(board, _piece("a", "O4"), 0, 0)
    assert coverage(board) == 0
    assert coverage(new_board) == 4
    assert new_board[4] is not board[4]


def test_place_stamps_value_and_shape():
    from polysum.models.piece import Shape
    from polysum.modules.scoring import empty_board, place_on_board

    board = place_on_board(empty_board(), _piece("a", "I2", value=7), 3, 2)
    cell = board[3][3]
    assert (cell.piece_id, cell.piece_value, cell.piece_shape) == ("a", 7, Shape.I2)


def test_reposition_leaves_no_residue():
    from polysum.modules.scoring import coverage, empty_board, place_on_board

    piece = _piece("a", "L4")
    board = place_on_board(empty_board(), piece, 0, 0)
    board = place_on_board(board, piece, 2, 3)
    assert coverage(board) == 4
    assert all(board[r][0].piece_id is None for r in range(3))


def test_remove_from_board():
    from polysum.modules.scoring import coverage, empty_board, place_on_board, remove_from_board

    board = place_on_board(empty_board(), _piece("a", "T4"), 0, 0)
    board = place_on_board(board, _piece("b", "I1"), 4, 4)
    board = remove_from_board(board, "a")
    assert coverage(board) == 1
    assert board[4][4].piece_id == "b"


def test_scalar_helpers():
    from polysum.modules.scoring import monomino_count, sum_of_values, total_cells

    pieces = [_piece("a", "I1", 2), _piece("b", "I2", 3), _piece("c", "T4", 4)]
    assert sum_of_values(pieces) == 9
    assert monomino_count(pieces) == 1
    assert total_cells(pieces) == 7


def test_win_requires_coverage_and_sum():
    from polysum.models.board import BoardCell
    from polysum.modules.scoring import is_win, sum_of_values

    tiling = _full_tiling()
    total = sum_of_values(tiling.pieces)

    assert is_win(tiling.board, tiling.pieces, total)
    # coverage 25, sum == target - 1
    assert not is_win(tiling.board, tiling.pieces, total + 1)

    # coverage 24, sum == target
    holed = [list(row) for row in tiling.board]
    holed[0][0] = BoardCell(row=0, col=0)
    assert not is_win(holed, tiling.pieces, total)


def test_consistency_check_passes_for_tiling():
    from polysum.modules.scoring import assert_board_consistent

    tiling = _full_tiling()
    assert_board_consistent(tiling.board, tiling.pieces)


def test_consistency_check_flags_orphan_cell():
    from polysum.errors import BoardInvariantError
    from polysum.modules.scoring import assert_board_consistent, empty_board, place_on_board

    board = place_on_board(empty_board(), _piece("a", "I2"), 0, 0)
    with pytest.raises(BoardInvariantError):
        assert_board_consistent(board, [])


def test_consistency_check_flags_missing_cells():
    from polysum.errors import BoardInvariantError
    from polysum.models.piece import Coordinate
    from polysum.modules.placement import placed_piece_info
    from polysum.modules.scoring import assert_board_consistent, empty_board

    placed = placed_piece_info(_piece("a", "I2"), Coordinate(x=0, y=0))
    with pytest.raises(BoardInvariantError):
        assert_board_consistent(empty_board(), [placed])


# ─── Win Condition Analysis ──────────────────────────────────────────────────

def test_analyze_win_condition_on_empty_board():
    from polysum.modules.scoring import analyze_win_condition, empty_board

    state = analyze_win_condition(empty_board(), [], 30)
    assert not state.is_won
    assert state.completion_percentage == 0
    assert state.progress_score == 0


def test_analyze_win_condition_on_win():
    from polysum.modules.scoring import analyze_win_condition, sum_of_values

    tiling = _full_tiling()
    state = analyze_win_condition(tiling.board, tiling.pieces, sum_of_values(tiling.pieces))
    assert state.is_won and state.has_full_coverage and state.has_correct_sum
    assert state.completion_percentage == 100
    assert state.progress_score == 100


def test_progress_blockers():
    from polysum.modules.scoring import check_win_condition_progress, empty_board, place_on_board

    board = place_on_board(empty_board(), _piece("a", "I2", value=9), 0, 0)
    progress = check_win_condition_progress(board, [_piece("a", "I2", value=9)], 5)
    assert not progress.can_win
    assert any("exceeds" in b for b in progress.blockers)
    assert progress.sum_progress == 100
