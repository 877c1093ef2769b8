# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — /sessions routes
A session wraps one GameState. Every move runs a pure transition and the
store swaps in the returned snapshot. Rejected moves are 200 responses
with `result.valid == false` and the state left as it was.

Each handler binds session_id (and level_id once known) for its logs.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from polysum.api.middleware.error_handler import SessionNotFoundError
from polysum.core.game_state import (
    apply_request,
    find_piece,
    new_game_state,
    reset_game,
    return_piece_to_tray,
    transform_piece,
)
from polysum.dependencies import SessionStoreDep
from polysum.models.game import PlacementRequest, Session, SessionSnapshot
from polysum.models.level import GameLevel
from polysum.models.results import (
    GameRuleCheck,
    Hint,
    PlacementResult,
    PlacementSuggestion,
)
from polysum.modules.rules import (
    generate_contextual_hints,
    suggest_placement,
    validate_game_rules,
)
from polysum.utils.logger import game_context, get_logger

router = APIRouter(prefix="/sessions", tags=["sessions"])
log = get_logger(__name__)


def _require(store: SessionStoreDep, session_id: str) -> Session:
    session = store.get_session(session_id)
    if session is None:
        raise SessionNotFoundError(session_id)
    return session


def _snapshot(session: Session, result: PlacementResult | None = None) -> SessionSnapshot:
    return SessionSnapshot(session_id=session.session_id, state=session.state, result=result)


@router.post(
    "",
    response_model=SessionSnapshot,
    status_code=status.HTTP_201_CREATED,
    summary="Start a session on a level",
)
async def create_session(level: GameLevel, store: SessionStoreDep) -> SessionSnapshot:
    with game_context(level_id=level.id):
        session = store.create_session(new_game_state(level))
    return _snapshot(session)


@router.get("/{session_id}", response_model=SessionSnapshot, summary="Current session state")
async def get_session(session_id: str, store: SessionStoreDep) -> SessionSnapshot:
    return _snapshot(_require(store, session_id))


@router.post(
    "/{session_id}/place",
    response_model=SessionSnapshot,
    summary="Place or reposition a piece",
    description=(
        "Optional rotate/flip flags are applied to the piece before it is "
        "validated at the target cell. A rejected move changes nothing."
    ),
)
async def place(
    session_id: str, request: PlacementRequest, store: SessionStoreDep
) -> SessionSnapshot:
    if request.row is None or request.col is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="row and col are required to place a piece",
        )
    with game_context(session_id=session_id):
        session = _require(store, session_id)
        with game_context(level_id=session.state.level.id):
            state, result = apply_request(session.state, request)
            session = store.replace_state(session_id, state) or session

            log.info(
                "move_applied",
                piece_id=request.piece_id,
                valid=result.valid,
                is_won=state.is_won,
            )
    return _snapshot(session, result)


@router.post(
    "/{session_id}/transform",
    response_model=SessionSnapshot,
    summary="Rotate and/or flip a piece",
)
async def transform(
    session_id: str, request: PlacementRequest, store: SessionStoreDep
) -> SessionSnapshot:
    with game_context(session_id=session_id):
        session = _require(store, session_id)
        state, result = transform_piece(
            session.state, request.piece_id, request.rotate, request.flip
        )
        session = store.replace_state(session_id, state) or session
    return _snapshot(session, result)


@router.delete(
    "/{session_id}/pieces/{piece_id}",
    response_model=SessionSnapshot,
    summary="Return a piece to the tray",
)
async def remove_piece(session_id: str, piece_id: str, store: SessionStoreDep) -> SessionSnapshot:
    with game_context(session_id=session_id):
        session = _require(store, session_id)
        state = return_piece_to_tray(session.state, piece_id)
        session = store.replace_state(session_id, state) or session
    return _snapshot(session)


@router.post("/{session_id}/reset", response_model=SessionSnapshot, summary="Restart the level")
async def reset(session_id: str, store: SessionStoreDep) -> SessionSnapshot:
    with game_context(session_id=session_id):
        session = _require(store, session_id)
        session = store.replace_state(session_id, reset_game(session.state)) or session
    return _snapshot(session)


@router.post(
    "/{session_id}/validate",
    response_model=GameRuleCheck,
    summary="Classify a proposed move without applying it",
)
async def validate(
    session_id: str, request: PlacementRequest, store: SessionStoreDep
) -> GameRuleCheck:
    if request.row is None or request.col is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="row and col are required to validate a move",
        )
    state = _require(store, session_id).state
    piece = find_piece(state, request.piece_id)
    if request.flip:
        piece = piece.toggled_flip()
    if request.rotate:
        piece = piece.rotated()

    return validate_game_rules(
        piece, request.row, request.col, state.board, state.placed_pieces, state.level
    )


@router.get(
    "/{session_id}/suggestions/{piece_id}",
    response_model=list[PlacementSuggestion],
    summary="Ranked placement hints for a piece",
)
async def suggestions(
    session_id: str, piece_id: str, store: SessionStoreDep, limit: int = 3
) -> list[PlacementSuggestion]:
    state = _require(store, session_id).state
    piece = find_piece(state, piece_id)
    return suggest_placement(piece, state.board, state.placed_pieces, state.level, limit=limit)


@router.get(
    "/{session_id}/hints",
    response_model=list[Hint],
    summary="Contextual hints for the current position",
)
async def hints(session_id: str, store: SessionStoreDep) -> list[Hint]:
    session = _require(store, session_id)
    return generate_contextual_hints(session.state, session.move_count)
