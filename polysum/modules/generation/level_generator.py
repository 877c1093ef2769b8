# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Level Generator
Reverse construction of a guaranteed-solvable puzzle:

  1. Tile        - random complete tiling of the empty board
  2. Values      - values 1..9 summing exactly to the target
  3. Bag         - solution pieces reset to rotation 0 / unflipped
  4. Decoys      - extra random pieces, shuffled in with the solution
  5. Package     - GameLevel with the solution recorded as proof

Any failure (tiling budget exhausted, unreachable target) yields None and
never a partial level. Callers retry with fresh randomness or a different
target; generate_level_with_retries() and generate_level_parallel() do
exactly that.
"""

from __future__ import annotations

import random
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from datetime import date

from polysum.config import get_settings
from polysum.errors import GeneratorInvariantError, UnreachableTargetError
from polysum.models.board import BOARD_CELLS
from polysum.models.level import GameLevel, LevelConstraints, LevelSolution, SolutionPlacement
from polysum.modules.generation.bag_builder import add_decoy_pieces, extract_puzzle_bag
from polysum.modules.generation.tiler import generate_solved_board
from polysum.modules.generation.value_assigner import assign_piece_values
from polysum.modules.scoring.board_model import monomino_count
from polysum.utils.logger import get_logger

log = get_logger(__name__)


def generate_level(
    target: int | None = None,
    decoy_count: int | None = None,
    rng: random.Random | None = None,
    level_id: str | None = None,
) -> GameLevel | None:
    """
    Build one level in a single attempt.

    Args:
        target:      Exact sum the solution must reach (default from settings)
        decoy_count: Extra non-solution pieces (default from settings)
        rng:         Private random source; pass a seeded Random for replay
        level_id:    Level id (default: today's ISO date)

    Returns:
        GameLevel with `solution` set, or None if this attempt failed.
    """
    settings = get_settings()
    target = settings.default_target if target is None else target
    decoy_count = settings.default_decoy_count if decoy_count is None else decoy_count
    monomino_cap = settings.monomino_cap
    rng = rng or random.Random()

    tiling = generate_solved_board(rng=rng, monomino_cap=monomino_cap)
    if tiling is None:
        return None

    try:
        valued = assign_piece_values(tiling.pieces, target, rng)
    except UnreachableTargetError as exc:
        log.warning(
            "target_unreachable",
            target=target,
            piece_count=len(tiling.pieces),
            error=str(exc),
        )
        return None

    solution_bag = extract_puzzle_bag(valued)
    solution = LevelSolution(
        piece_ids=[p.id for p in solution_bag],
        placements=[
            SolutionPlacement(
                piece_id=p.id,
                row=p.position.y,
                col=p.position.x,
                rotation=p.rotation,
                flipped=p.flipped,
            )
            for p in valued
        ],
        final_sum=sum(p.value for p in valued),
        cells_covered=sum(len(p.occupied_cells) for p in valued),
    )

    full_bag = add_decoy_pieces(solution_bag, decoy_count, rng, monomino_cap)

    level = GameLevel(
        id=level_id or date.today().isoformat(),
        target=target,
        constraints=LevelConstraints(
            monomino_cap=monomino_cap,
            max_leftovers=decoy_count + 2,
        ),
        bag=full_bag,
        solution=solution,
    )

    if not validate_generated_puzzle(level):
        raise GeneratorInvariantError(
            f"generated level {level.id} failed its solution self-check"
        )

    log.info(
        "level_generated",
        level_id=level.id,
        target=target,
        solution_pieces=len(solution_bag),
        decoys=decoy_count,
        tiling_steps=tiling.steps,
    )
    return level


def generate_level_with_retries(
    target: int | None = None,
    decoy_count: int | None = None,
    max_attempts: int | None = None,
    seed: int | None = None,
    level_id: str | None = None,
) -> GameLevel | None:
    """Sequential retries, each attempt with its own Random (seed + attempt if seeded)."""
    max_attempts = max_attempts or get_settings().generator_max_attempts

    for attempt in range(max_attempts):
        rng = random.Random(None if seed is None else seed + attempt)
        level = generate_level(target, decoy_count, rng=rng, level_id=level_id)
        if level is not None:
            return level
        log.info("level_generation_retry", attempt=attempt + 1, max_attempts=max_attempts)

    log.warning("level_generation_failed", target=target, attempts=max_attempts)
    return None


def generate_level_parallel(
    target: int | None = None,
    decoy_count: int | None = None,
    attempts: int | None = None,
    workers: int | None = None,
    seed: int | None = None,
    level_id: str | None = None,
) -> GameLevel | None:
    """
    Race independent attempts on a thread pool; the first level wins.
    Every attempt owns its Random and its search state, nothing is shared.
    """
    settings = get_settings()
    attempts = attempts or settings.generator_max_attempts
    workers = workers or settings.generator_parallel_workers

    def _attempt(i: int) -> GameLevel | None:
        rng = random.Random(None if seed is None else seed + i)
        return generate_level(target, decoy_count, rng=rng, level_id=level_id)

    # Attempts still running after a win are abandoned, not awaited
    pool = ThreadPoolExecutor(max_workers=workers)
    try:
        pending = {pool.submit(_attempt, i) for i in range(attempts)}
        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                level = future.result()
                if level is not None:
                    log.debug("parallel_attempt_won", abandoned=len(pending))
                    return level
    finally:
        pool.shutdown(wait=False, cancel_futures=True)

    log.warning("level_generation_failed", target=target, attempts=attempts, parallel=True)
    return None


def validate_generated_puzzle(level: GameLevel) -> bool:
    """
    Check a generated level's stored solution: every solution id exists in
    the bag, the solution covers the board, hits the target, and the bag
    respects the monomino cap.
    """
    if level.solution is None:
        log.warning("generated_level_missing_solution", level_id=level.id)
        return False

    bag_ids = {p.id for p in level.bag}
    missing = [pid for pid in level.solution.piece_ids if pid not in bag_ids]
    if missing:
        log.error("solution_piece_missing", level_id=level.id, piece_ids=missing)
        return False

    if level.solution.cells_covered != BOARD_CELLS:
        log.error(
            "solution_coverage_mismatch",
            level_id=level.id,
            cells_covered=level.solution.cells_covered,
        )
        return False

    if level.solution.final_sum != level.target:
        log.error(
            "solution_sum_mismatch",
            level_id=level.id,
            final_sum=level.solution.final_sum,
            target=level.target,
        )
        return False

    monominoes = monomino_count(level.bag)
    if monominoes > level.constraints.monomino_cap:
        log.error(
            "bag_monomino_overflow",
            level_id=level.id,
            monominoes=monominoes,
            cap=level.constraints.monomino_cap,
        )
        return False

    return True
