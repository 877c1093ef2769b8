# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — /levels routes
Level generation, winnability checks and the bundled sample level.
Search-heavy work runs in a worker thread so the event loop stays free.
"""

from __future__ import annotations

import asyncio

from fastapi import APIRouter

from polysum.api.middleware.error_handler import GenerationFailedError
from polysum.models.game import GenerateLevelRequest
from polysum.models.level import GameLevel
from polysum.models.results import WinnabilityResult
from polysum.modules.generation import generate_level_with_retries
from polysum.modules.winnability import check_winnability
from polysum.utils.level_io import load_sample_level
from polysum.utils.logger import game_context, get_logger

router = APIRouter(prefix="/levels", tags=["levels"])
log = get_logger(__name__)


@router.post(
    "/generate",
    response_model=GameLevel,
    summary="Generate a new level",
    description=(
        "Builds a level by reverse construction: random full tiling, values "
        "summing to the target, decoys shuffled in. The stored solution "
        "proves the level winnable."
    ),
)
async def generate(request: GenerateLevelRequest) -> GameLevel:
    log.info("generate_request_received", target=request.target, decoys=request.decoy_count)

    level = await asyncio.to_thread(
        generate_level_with_retries, request.target, request.decoy_count
    )
    if level is None:
        raise GenerationFailedError(
            f"target={request.target} decoy_count={request.decoy_count}"
        )
    log.info("generate_request_completed", level_id=level.id, bag_size=len(level.bag))
    return level


@router.post(
    "/check",
    response_model=WinnabilityResult,
    summary="Assess whether a level can be won",
)
async def check(level: GameLevel) -> WinnabilityResult:
    with game_context(level_id=level.id):
        result = await asyncio.to_thread(check_winnability, level)
        log.info(
            "winnability_checked",
            is_winnable=result.is_winnable,
            confidence=result.confidence.value,
        )
    return result


@router.get("/sample", response_model=GameLevel, summary="Bundled sample level")
async def sample() -> GameLevel:
    return load_sample_level()
