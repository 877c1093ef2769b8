# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Bag Builder
Turns the valued solution into the player's bag and mixes in decoys.
"""

from __future__ import annotations

import random

from polysum.models.piece import Piece, PlacedPiece, Shape
from polysum.modules.scoring.board_model import monomino_count
from polysum.modules.shapes.library import ALL_SHAPES
from polysum.utils.logger import get_logger

log = get_logger(__name__)

DECOY_MIN_VALUE = 1
DECOY_MAX_VALUE = 4


def extract_puzzle_bag(pieces: list[PlacedPiece]) -> list[Piece]:
    """
    Fresh bag pieces in default orientation. The solution orientation is
    kept separately in the level's solution placements.
    """
    return [
        Piece(id=p.id, shape=p.shape, value=p.value, rotation=0, flipped=False)
        for p in pieces
    ]


def add_decoy_pieces(
    bag: list[Piece],
    count: int = 3,
    rng: random.Random | None = None,
    monomino_cap: int = 1,
) -> list[Piece]:
    """
    Append `count` random decoys (values 1..4) and shuffle the whole bag.
    A monomino decoy is only drawn while the bag is below the monomino cap,
    so the cap holds across solution and decoys together.
    """
    rng = rng or random.Random()
    monominoes = monomino_count(bag)
    taken_ids = {p.id for p in bag}

    decoys: list[Piece] = []
    serial = 0
    for _ in range(count):
        available = [s for s in ALL_SHAPES if s != Shape.I1 or monominoes < monomino_cap]
        shape = rng.choice(available)
        if shape == Shape.I1:
            monominoes += 1

        serial += 1
        while f"decoy{serial}" in taken_ids:
            serial += 1
        decoy_id = f"decoy{serial}"
        taken_ids.add(decoy_id)

        decoys.append(Piece(
            id=decoy_id,
            shape=shape,
            value=rng.randint(DECOY_MIN_VALUE, DECOY_MAX_VALUE),
        ))

    full_bag = [*bag, *decoys]
    rng.shuffle(full_bag)

    log.debug(
        "decoys_added",
        decoy_count=len(decoys),
        bag_size=len(full_bag),
        monominoes=monominoes,
    )
    return full_bag
