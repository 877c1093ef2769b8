# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
Rule layer tests: violation classification, warnings, feedback
messages, placement suggestions and contextual hints.
"""


# ─── Helpers ─────────────────────────────────────────────────────────────────

def _piece(pid, shape, value=1, rotation=0):
    from polysum.models.piece import Piece
    return Piece(id=pid, shape=shape, value=value, rotation=rotation)


def _level(bag, target=20, max_leftovers=5):
    from polysum.models.level import GameLevel, LevelConstraints
    return GameLevel(
        id="rules",
        target=target,
        constraints=LevelConstraints(monomino_cap=1, max_leftovers=max_leftovers),
        bag=bag,
    )


def _place(board, placed, piece, row, col):
    from polysum.models.piece import Coordinate
    from polysum.modules.placement import placed_piece_info
    from polysum.modules.scoring import place_on_board

    return (
        place_on_board(board, piece, row, col),
        [*placed, placed_piece_info(piece, Coordinate(x=col, y=row))],
    )


# ─── validate_game_rules ─────────────────────────────────────────────────────

def test_valid_move_has_no_violations():
    from polysum.modules.rules import validate_game_rules
    from polysum.modules.scoring import empty_board

    piece = _piece("a", "T4")
    check = validate_game_rules(piece, 1, 1, empty_board(), [], _level([piece]))
    assert check.valid
    assert check.violations == []
    assert check.warnings == []


def test_boundary_violation_has_suggestion():
    from polysum.models.results import Severity, ViolationType
    from polysum.modules.rules import validate_game_rules
    from polysum.modules.scoring import empty_board

    piece = _piece("a", "I4")
    check = validate_game_rules(piece, 0, 3, empty_board(), [], _level([piece]))
    assert not check.valid
    (violation,) = check.violations
    assert violation.type == ViolationType.BOUNDARY
    assert violation.severity == Severity.ERROR
    assert "center" in violation.suggestion
    assert len(violation.affected_cells) == 4


def test_overlap_violation():
    from polysum.models.results import ViolationType
    from polysum.modules.rules import validate_game_rules
    from polysum.modules.scoring import empty_board

    a, b = _piece("a", "O4"), _piece("b", "I2")
    board, placed = _place(empty_board(), [], a, 0, 0)
    check = validate_game_rules(b, 1, 1, board, placed, _level([a, b]))
    assert check.violations[0].type == ViolationType.OVERLAP


def test_second_monomino_violates_cap():
    from polysum.models.results import ViolationType
    from polysum.modules.rules import validate_game_rules
    from polysum.modules.scoring import empty_board

    m1, m2 = _piece("m1", "I1"), _piece("m2", "I1")
    board, placed = _place(empty_board(), [], m1, 0, 0)
    check = validate_game_rules(m2, 4, 4, board, placed, _level([m1, m2]))
    assert not check.valid
    assert check.violations[0].type == ViolationType.MONOMINO_CAP


def test_last_monomino_warning():
    from polysum.models.results import Severity, ViolationType
    from polysum.modules.rules import validate_game_rules
    from polysum.modules.scoring import empty_board

    m = _piece("m", "I1")
    check = validate_game_rules(m, 2, 2, empty_board(), [], _level([m]))
    assert check.valid
    (warning,) = check.warnings
    assert warning.type == ViolationType.MONOMINO_CAP
    assert warning.severity == Severity.WARNING


def test_rejected_monomino_has_no_last_monomino_warning():
    from polysum.models.results import ViolationType
    from polysum.modules.rules import validate_game_rules
    from polysum.modules.scoring import empty_board

    a, m = _piece("a", "O4"), _piece("m", "I1")
    board, placed = _place(empty_board(), [], a, 0, 0)
    check = validate_game_rules(m, 1, 1, board, placed, _level([a, m]))
    assert not check.valid
    assert check.violations[0].type == ViolationType.OVERLAP
    assert check.warnings == []


def test_leftover_warning():
    from polysum.models.results import ViolationType
    from polysum.modules.rules import validate_game_rules
    from polysum.modules.scoring import empty_board

    bag = [_piece(f"p{i}", "I2") for i in range(8)]
    check = validate_game_rules(bag[0], 0, 0, empty_board(), [], _level(bag, max_leftovers=5))
    assert check.valid
    (warning,) = check.warnings
    assert warning.type == ViolationType.MAX_LEFTOVERS
    assert warning.message == "7 pieces will remain unused (limit: 5)"


def test_reposition_over_own_cells_is_valid():
    from polysum.modules.rules import validate_game_rules
    from polysum.modules.scoring import empty_board

    a = _piece("a", "I4")
    board, placed = _place(empty_board(), [], a, 0, 0)
    check = validate_game_rules(a, 0, 1, board, placed, _level([a]))
    assert check.valid


def test_validate_monomino_constraint():
    from polysum.models.level import LevelConstraints
    from polysum.modules.rules import validate_monomino_constraint

    constraints = LevelConstraints(monomino_cap=1)
    assert validate_monomino_constraint([], _piece("m", "I1"), constraints) == (True, None)
    ok, message = validate_monomino_constraint(
        [_piece("m1", "I1")], _piece("m2", "I1"), constraints
    )
    assert not ok
    assert "1 monomino" in message


# ─── Feedback ────────────────────────────────────────────────────────────────

def test_feedback_types():
    from polysum.models.results import GameRuleCheck, RuleViolation, Severity, ViolationType
    from polysum.modules.rules import generate_move_validation_feedback

    error = RuleViolation(type=ViolationType.OVERLAP, severity=Severity.ERROR, message="nope")
    warning = RuleViolation(type=ViolationType.MAX_LEFTOVERS, severity=Severity.WARNING, message="hmm")

    assert generate_move_validation_feedback(
        GameRuleCheck(valid=False, violations=[error], warnings=[warning])
    ).type == "error"
    assert generate_move_validation_feedback(
        GameRuleCheck(valid=True, warnings=[warning])
    ).message == "hmm"
    success = generate_move_validation_feedback(GameRuleCheck(valid=True))
    assert (success.type, success.message) == ("success", "Valid placement!")


# ─── Suggestions ─────────────────────────────────────────────────────────────

def test_suggestions_prefer_centre():
    from polysum.models.piece import Coordinate
    from polysum.modules.rules import suggest_placement
    from polysum.modules.scoring import empty_board

    m = _piece("m", "I1", value=3)
    suggestions = suggest_placement(m, empty_board(), [], _level([m], target=20))
    assert len(suggestions) == 3
    assert suggestions[0].position == Coordinate(x=2, y=2)
    assert suggestions[0].confidence == 95
    assert suggestions[0].reason == "Excellent strategic position"
    assert [s.confidence for s in suggestions] == sorted(
        (s.confidence for s in suggestions), reverse=True
    )
    assert len(suggestions[0].alternative_positions) == 3


def test_suggestions_reward_adjacency():
    from polysum.modules.rules import placement_confidence
    from polysum.models.piece import Coordinate
    from polysum.modules.scoring import empty_board

    a, b = _piece("a", "I2"), _piece("b", "I2")
    board, placed = _place(empty_board(), [], a, 0, 0)
    touching = placement_confidence(b, Coordinate(x=0, y=1), board, placed, 20)
    apart = placement_confidence(b, Coordinate(x=3, y=4), board, placed, 20)
    assert touching > apart


def test_no_suggestions_when_board_full():
    from polysum.modules.generation import generate_solved_board
    from polysum.modules.rules import suggest_placement
    import random

    tiling = None
    for seed in range(20):
        tiling = generate_solved_board(rng=random.Random(seed))
        if tiling is not None:
            break
    extra = _piece("x", "I2")
    assert suggest_placement(extra, tiling.board, tiling.pieces, _level([extra])) == []


def test_placement_reason_thresholds():
    from polysum.modules.rules import placement_reason
    assert placement_reason(80) == "Excellent strategic position"
    assert placement_reason(65) == "Good placement for sum and coverage"
    assert placement_reason(50) == "Decent positioning option"
    assert placement_reason(10) == "Fallback placement choice"


# ─── Contextual Hints ────────────────────────────────────────────────────────

def _play(bag, target, moves):
    """Fresh state for `bag`, then place each (piece_id, row, col)."""
    from polysum.core.game_state import new_game_state, place_piece

    state = new_game_state(_level(bag, target=target))
    for piece_id, row, col in moves:
        state, result = place_piece(state, piece_id, row, col)
        assert result.valid, result.reason
    return state


class _FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value

    def choice(self, seq):
        return seq[0]


def test_game_phase_boundaries():
    from polysum.modules.rules import GamePhase, game_phase
    assert game_phase(0, 0) == GamePhase.EARLY
    assert game_phase(7, 2) == GamePhase.EARLY
    assert game_phase(7, 3) is None
    assert game_phase(8, 0) == GamePhase.MID
    assert game_phase(19, 9) == GamePhase.MID
    assert game_phase(20, 9) == GamePhase.LATE


def test_opening_hints_on_sample_level():
    from polysum.core.game_state import new_game_state
    from polysum.models.results import HintPriority
    from polysum.modules.rules import generate_contextual_hints, suggest_placement
    from polysum.utils.level_io import load_sample_level

    state = new_game_state(load_sample_level())
    hints = generate_contextual_hints(state, move_count=0)

    assert [h.id for h in hints] == ["early_large", "center_start", "high_value"]
    first = hints[0]
    assert first.priority == HintPriority.HIGH
    # Highest-value tetromino in the tray
    assert first.suggested_piece.id == "decoy3"
    best = suggest_placement(first.suggested_piece, state.board, [], state.level)
    assert first.suggested_position == best[0].position
    assert first.alternative_positions == [s.position for s in best[1:]]


def test_mid_game_gap_fill_hint():
    from polysum.modules.rules import generate_contextual_hints

    bag = [_piece("a", "O4"), _piece("b", "O4"), _piece("c", "I3", value=2)]
    state = _play(bag, target=4, moves=[("a", 0, 0), ("b", 0, 2)])
    hints = generate_contextual_hints(state, move_count=2)

    assert [h.id for h in hints] == ["gap_fill", "exact_sum", "connection"]
    assert hints[0].suggested_piece.id == "c"
    assert hints[0].suggested_position is not None
    assert hints[1].suggested_piece.id == "c"


def test_final_fit_hint_finds_orientation():
    from polysum.models.piece import Coordinate
    from polysum.modules.rules import generate_contextual_hints

    rows = [_piece(f"r{i}", "I4") for i in range(5)]
    bag = [*rows, _piece("m", "I1"), _piece("f", "I4", value=5)]
    moves = [(f"r{i}", i, 0) for i in range(5)] + [("m", 4, 4)]
    state = _play(bag, target=11, moves=moves)
    assert state.covered_cells == 21

    (hint,) = generate_contextual_hints(state, move_count=6)
    assert hint.id == "final_fit"
    assert hint.message == "This piece should fit the remaining 4 cells perfectly"
    assert hint.suggested_piece.id == "f"
    assert hint.suggested_piece.rotation == 90
    assert hint.suggested_position == Coordinate(x=4, y=0)


def test_late_game_without_fit_warns():
    from polysum.models.results import HintType
    from polysum.modules.rules import generate_contextual_hints

    rows = [_piece(f"r{i}", "I4") for i in range(5)]
    bag = [*rows, _piece("m", "I1")]
    moves = [(f"r{i}", i, 0) for i in range(5)] + [("m", 4, 4)]
    state = _play(bag, target=11, moves=moves)

    hints = generate_contextual_hints(state, move_count=6)
    assert [h.id for h in hints] == ["recheck_placement", "impossible_sum"]
    assert all(h.type == HintType.WARNING for h in hints)


def test_sum_hints():
    from polysum.modules.rules import generate_contextual_hints

    over = _play(
        [_piece("a", "I2", value=4), _piece("b", "I2", value=3)],
        target=5, moves=[("a", 0, 0), ("b", 2, 0)],
    )
    (hint,) = generate_contextual_hints(over, move_count=2)
    assert hint.id == "sum_too_high"
    assert hint.message == "Remove pieces worth 2 points to reach target"

    short = _play(
        [_piece("a", "I2", value=4), _piece("b", "I1", value=1)],
        target=5, moves=[("a", 0, 0)],
    )
    hints = generate_contextual_hints(short, move_count=1)
    assert [h.id for h in hints] == ["exact_sum", "monomino_strategy"]
    assert hints[0].suggested_piece.id == "b"


def test_unreachable_target_warning():
    from polysum.modules.rules import generate_contextual_hints

    state = _play([_piece("a", "I2")], target=30, moves=[])
    hints = generate_contextual_hints(state, move_count=0)
    assert [h.id for h in hints] == ["impossible_sum", "center_start"]


def test_hints_count_held_piece_as_available():
    from polysum.core.game_state import pick_up_piece
    from polysum.modules.rules import generate_contextual_hints

    state = _play(
        [_piece("a", "I2", value=4), _piece("b", "I1", value=1)],
        target=5, moves=[("a", 0, 0)],
    )
    state = pick_up_piece(state, "b")
    hints = generate_contextual_hints(state, move_count=1)
    assert hints[0].id == "exact_sum"
    assert hints[0].suggested_piece.id == "b"


def test_hints_are_deterministic_without_rng():
    from polysum.core.game_state import new_game_state
    from polysum.modules.rules import generate_contextual_hints
    from polysum.utils.level_io import load_sample_level

    state = new_game_state(load_sample_level())
    first = generate_contextual_hints(state, move_count=7)
    assert generate_contextual_hints(state, move_count=7) == first
    assert not {"transform_reminder", "encouragement"} & {h.id for h in first}


def test_hints_never_exceed_three():
    from polysum.core.game_state import new_game_state
    from polysum.modules.rules import generate_contextual_hints
    from polysum.utils.level_io import load_sample_level

    state = new_game_state(load_sample_level())
    hints = generate_contextual_hints(state, move_count=9, rng=_FixedRandom(0.0))
    assert len(hints) == 3


def test_hint_cooldown_remaining():
    from polysum.models.results import HintFrequency
    from polysum.modules.rules import hint_cooldown_remaining

    assert hint_cooldown_remaining(None, HintFrequency.NORMAL, now=100.0) == 0.0
    assert hint_cooldown_remaining(90.0, HintFrequency.NEVER, now=100.0) == 0.0
    assert hint_cooldown_remaining(90.0, HintFrequency.NORMAL, now=100.0) == 50.0
    assert hint_cooldown_remaining(0.0, HintFrequency.RARE, now=500.0) == 0.0


def test_should_show_hint():
    from polysum.models.results import HintFrequency
    from polysum.modules.rules import should_show_hint

    lucky, unlucky = _FixedRandom(0.1), _FixedRandom(0.5)
    assert not should_show_hint(None, HintFrequency.NEVER, now=100.0, rng=lucky)
    assert should_show_hint(None, HintFrequency.FREQUENT, now=100.0, rng=lucky)
    assert not should_show_hint(None, HintFrequency.FREQUENT, now=100.0, rng=unlucky)
    assert not should_show_hint(90.0, HintFrequency.FREQUENT, now=100.0, rng=lucky)
    assert should_show_hint(60.0, HintFrequency.FREQUENT, now=100.0, rng=lucky)
