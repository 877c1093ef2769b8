# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
Level generator tests.
Tiler, value assignment, bag building and full reverse construction.
Seeded Randoms keep every case reproducible.
"""

import random

import pytest


# ─── Helpers ─────────────────────────────────────────────────────────────────

def _tiling(seed: int = 0):
    from polysum.modules.generation import generate_solved_board
    for s in range(seed, seed + 20):
        tiling = generate_solved_board(rng=random.Random(s))
        if tiling is not None:
            return tiling
    pytest.fail("no tiling produced in 20 seeds")


def _stamp_solution(level):
    """Rebuild the solution board from the level's placements alone."""
    from polysum.modules.transforms import oriented_cells

    by_id = {p.id: p for p in level.bag}
    owner = {}
    for placement in level.solution.placements:
        piece = by_id[placement.piece_id]
        for c in oriented_cells(piece.shape, placement.rotation, placement.flipped):
            cell = (placement.row + c.y, placement.col + c.x)
            assert cell not in owner, f"{placement.piece_id} overlaps {owner.get(cell)}"
            assert 0 <= cell[0] < 5 and 0 <= cell[1] < 5
            owner[cell] = placement.piece_id
    return owner


# ─── Tiler ───────────────────────────────────────────────────────────────────

def test_tiling_covers_board_exactly():
    from polysum.modules.scoring import assert_board_consistent, coverage

    tiling = _tiling()
    assert coverage(tiling.board) == 25
    assert sum(len(p.occupied_cells) for p in tiling.pieces) == 25
    assert_board_consistent(tiling.board, tiling.pieces)


def test_tiling_respects_monomino_cap():
    from polysum.modules.scoring import monomino_count

    for seed in range(10):
        tiling = _tiling(seed * 20)
        assert monomino_count(tiling.pieces) <= 1


def test_tiling_ids_are_sequential():
    tiling = _tiling()
    assert [p.id for p in tiling.pieces] == [f"p{i}" for i in range(1, len(tiling.pieces) + 1)]


def test_tiling_piece_count_range():
    tiling = _tiling()
    assert 7 <= len(tiling.pieces) <= 13


def test_tiling_exhausted_budget_returns_none():
    from polysum.modules.generation import generate_solved_board
    assert generate_solved_board(rng=random.Random(1), max_steps=1) is None


def test_tiling_is_reproducible_with_seed():
    from polysum.modules.generation import generate_solved_board

    a = generate_solved_board(rng=random.Random(42))
    b = generate_solved_board(rng=random.Random(42))
    assert (a is None) == (b is None)
    if a is not None:
        assert a.pieces == b.pieces


# ─── Value Assignment ────────────────────────────────────────────────────────

@pytest.mark.parametrize("offset", [0, 5, 17])
def test_values_sum_to_target(offset):
    from polysum.modules.generation import assign_piece_values

    tiling = _tiling()
    target = len(tiling.pieces) + offset
    valued = assign_piece_values(tiling.pieces, target, random.Random(offset))
    assert sum(p.value for p in valued) == target
    assert all(1 <= p.value <= 9 for p in valued)
    assert [p.id for p in valued] == [p.id for p in tiling.pieces]


def test_values_at_range_extremes():
    from polysum.modules.generation import assign_piece_values

    tiling = _tiling()
    n = len(tiling.pieces)
    assert all(p.value == 1 for p in assign_piece_values(tiling.pieces, n))
    assert all(p.value == 9 for p in assign_piece_values(tiling.pieces, 9 * n))


def test_unreachable_target_raises():
    from polysum.errors import UnreachableTargetError
    from polysum.modules.generation import assign_piece_values

    tiling = _tiling()
    n = len(tiling.pieces)
    with pytest.raises(UnreachableTargetError):
        assign_piece_values(tiling.pieces, n - 1)
    with pytest.raises(UnreachableTargetError):
        assign_piece_values(tiling.pieces, 9 * n + 1)


def test_incomplete_coverage_raises():
    from polysum.errors import UnreachableTargetError
    from polysum.modules.generation import assign_piece_values

    tiling = _tiling()
    with pytest.raises(UnreachableTargetError):
        assign_piece_values(tiling.pieces[:-1], 20)


def test_target_range():
    from polysum.modules.generation import target_range
    assert target_range(7) == (7, 63)


# ─── Bag Builder ─────────────────────────────────────────────────────────────

def test_extract_bag_resets_orientation():
    from polysum.modules.generation import assign_piece_values, extract_puzzle_bag

    tiling = _tiling()
    valued = assign_piece_values(tiling.pieces, 30, random.Random(3))
    bag = extract_puzzle_bag(valued)
    assert all(p.rotation == 0 and not p.flipped for p in bag)
    assert [p.value for p in bag] == [p.value for p in valued]
    assert not any(hasattr(p, "position") for p in bag)


def test_decoys_never_add_second_monomino():
    from polysum.models.piece import Piece
    from polysum.modules.generation import add_decoy_pieces
    from polysum.modules.scoring import monomino_count

    bag = [Piece(id="p1", shape="I1", value=3), Piece(id="p2", shape="I4", value=2)]
    for seed in range(10):
        full = add_decoy_pieces(bag, count=50, rng=random.Random(seed))
        assert monomino_count(full) == 1
        assert len(full) == 52


def test_decoy_ids_and_values():
    from polysum.models.piece import Piece
    from polysum.modules.generation import add_decoy_pieces

    bag = [Piece(id="p1", shape="I4", value=2)]
    full = add_decoy_pieces(bag, count=4, rng=random.Random(5))
    decoys = [p for p in full if p.id.startswith("decoy")]
    assert sorted(p.id for p in decoys) == ["decoy1", "decoy2", "decoy3", "decoy4"]
    assert all(1 <= p.value <= 4 for p in decoys)
    assert len({p.id for p in full}) == len(full)


# ─── Level Generator ─────────────────────────────────────────────────────────

GENERATOR_CASES = [
    (13 + (i * 7) % 48, i % 6) for i in range(20)
]


@pytest.mark.parametrize("index,case", list(enumerate(GENERATOR_CASES)))
def test_generated_level_correctness(index, case):
    from polysum.modules.generation import generate_level_with_retries, validate_generated_puzzle
    from polysum.modules.scoring import monomino_count

    target, decoys = case
    level = generate_level_with_retries(target, decoys, seed=index * 100)
    assert level is not None

    assert level.target == target
    assert level.solution.final_sum == level.target
    assert level.solution.cells_covered == 25
    bag_ids = {p.id for p in level.bag}
    assert all(pid in bag_ids for pid in level.solution.piece_ids)
    assert monomino_count(level.bag) <= level.constraints.monomino_cap
    assert len(level.bag) == len(level.solution.piece_ids) + decoys
    assert level.constraints.max_leftovers == decoys + 2
    assert validate_generated_puzzle(level)


def test_solution_placements_tile_the_board():
    from polysum.modules.generation import generate_level_with_retries

    level = generate_level_with_retries(30, 3, seed=7)
    owner = _stamp_solution(level)
    assert len(owner) == 25
    values = {p.id: p.value for p in level.bag}
    assert sum(values[pid] for pid in level.solution.piece_ids) == 30


def test_generate_level_default_id_is_iso_date():
    from datetime import date
    from polysum.modules.generation import generate_level_with_retries

    level = generate_level_with_retries(25, 2, seed=11)
    assert level.id == date.today().isoformat()


def test_generate_level_unreachable_target_returns_none():
    from polysum.modules.generation import generate_level
    # 13 pieces at most, so 9 * 13 is the largest reachable target
    assert generate_level(target=200, decoy_count=0, rng=random.Random(0)) is None


def test_generate_level_parallel():
    from polysum.modules.generation import generate_level_parallel

    level = generate_level_parallel(40, 4, attempts=4, workers=2, seed=3, level_id="par")
    assert level is not None
    assert level.id == "par"
    assert level.solution.final_sum == 40


def test_generate_level_parallel_does_not_wait_for_slow_attempts(monkeypatch):
    import itertools
    import threading
    import time

    from polysum.modules.generation import generate_level_parallel, level_generator
    from polysum.utils.level_io import load_sample_level

    sample = load_sample_level()
    release = threading.Event()
    calls = itertools.count()
    lock = threading.Lock()

    def _fake_generate_level(target, decoy_count, rng=None, level_id=None):
        with lock:
            first = next(calls) == 0
        if first:
            return sample
        release.wait(timeout=10)
        return None

    monkeypatch.setattr(level_generator, "generate_level", _fake_generate_level)
    try:
        started = time.perf_counter()
        level = generate_level_parallel(30, 2, attempts=6, workers=3)
        elapsed = time.perf_counter() - started
    finally:
        release.set()

    assert level is sample
    assert elapsed < 5


def test_validate_generated_puzzle_rejects_bad_solution():
    from polysum.modules.generation import generate_level_with_retries, validate_generated_puzzle

    level = generate_level_with_retries(30, 3, seed=5)
    broken = level.model_copy(update={
        "solution": level.solution.model_copy(update={"final_sum": 31})
    })
    assert not validate_generated_puzzle(broken)
    assert not validate_generated_puzzle(level.model_copy(update={"solution": None}))
