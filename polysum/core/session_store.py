# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Abstract SessionStore
Clean interface over play-session storage. A session holds one GameState
snapshot, replaced wholesale after every transition.

InMemorySessionStore — single-process deployments and tests
"""

from __future__ import annotations

import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from polysum.models.game import GameState, Session
from polysum.utils.logger import get_logger

log = get_logger(__name__)


# ─── Abstract Interface ──────────────────────────────────────────────────────

class SessionStore(ABC):
    """
    Abstract base class for all session backends.
    All methods are synchronous.
    """

    @abstractmethod
    def create_session(self, state: GameState) -> Session:
        """Store a new session holding `state`. Returns the Session."""

    @abstractmethod
    def get_session(self, session_id: str) -> Optional[Session]:
        """Return Session by ID, or None if not found."""

    @abstractmethod
    def replace_state(self, session_id: str, state: GameState) -> Optional[Session]:
        """Swap in a new snapshot. Returns the updated Session, or None if unknown."""

    @abstractmethod
    def delete_session(self, session_id: str) -> bool:
        """Delete a session. Returns True if it existed."""

    @abstractmethod
    def count(self) -> int:
        """Number of live sessions."""


# ─── In-Memory Implementation ────────────────────────────────────────────────

class InMemorySessionStore(SessionStore):
    """
    Thread-safe in-memory session store using a dict + RLock.
    All data is lost on process restart.
    """

    def __init__(self) -> None:
        self._store: dict[str, Session] = {}
        self._lock = threading.RLock()

    def create_session(self, state: GameState) -> Session:
        session = Session(session_id=str(uuid.uuid4()), state=state)
        with self._lock:
            self._store[session.session_id] = session
        log.info("session_created", session_id=session.session_id, level_id=state.level.id)
        return session

    def get_session(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._store.get(session_id)

    def replace_state(self, session_id: str, state: GameState) -> Optional[Session]:
        with self._lock:
            session = self._store.get(session_id)
            if session is None:
                log.warning("replace_state_not_found", session_id=session_id)
                return None
            updated = session.model_copy(update={
                "state": state,
                "move_count": session.move_count + (0 if state is session.state else 1),
                "updated_at": datetime.now(timezone.utc),
            })
            self._store[session_id] = updated

        log.debug(
            "session_updated",
            session_id=session_id,
            move_count=updated.move_count,
            is_won=state.is_won,
        )
        return updated

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            existed = self._store.pop(session_id, None) is not None
        if existed:
            log.info("session_deleted", session_id=session_id)
        return existed

    def count(self) -> int:
        with self._lock:
            return len(self._store)
