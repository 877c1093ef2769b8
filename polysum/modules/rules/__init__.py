# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Rules Module
Public API for move classification, placement suggestions and
contextual hints.
"""

from polysum.modules.rules.game_rules import (
    generate_move_validation_feedback,
    validate_game_rules,
    validate_monomino_constraint,
    without_piece,
)
from polysum.modules.rules.hints import (
    GamePhase,
    find_final_fit,
    game_phase,
    generate_contextual_hints,
    hint_cooldown_remaining,
    should_show_hint,
)
from polysum.modules.rules.suggestions import (
    placement_confidence,
    placement_reason,
    suggest_placement,
)

__all__ = [
    "validate_game_rules",
    "validate_monomino_constraint",
    "generate_move_validation_feedback",
    "without_piece",
    "suggest_placement",
    "placement_confidence",
    "placement_reason",
    # Hints
    "GamePhase",
    "game_phase",
    "find_final_fit",
    "generate_contextual_hints",
    "hint_cooldown_remaining",
    "should_show_hint",
]
