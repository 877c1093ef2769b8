# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Generation Module
Public API for reverse-construction level generation.
"""

from polysum.modules.generation.bag_builder import add_decoy_pieces, extract_puzzle_bag
from polysum.modules.generation.level_generator import (
    generate_level,
    generate_level_parallel,
    generate_level_with_retries,
    validate_generated_puzzle,
)
from polysum.modules.generation.tiler import SolvedTiling, generate_solved_board
from polysum.modules.generation.value_assigner import assign_piece_values, target_range

__all__ = [
    # Tiler
    "SolvedTiling",
    "generate_solved_board",
    # Values
    "assign_piece_values",
    "target_range",
    # Bag
    "extract_puzzle_bag",
    "add_decoy_pieces",
    # Level
    "generate_level",
    "generate_level_with_retries",
    "generate_level_parallel",
    "validate_generated_puzzle",
]
