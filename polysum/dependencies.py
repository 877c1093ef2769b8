# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — FastAPI Dependencies
Singleton provider for the SessionStore. Instantiated once at startup via
the lifespan event in main.py; route handlers receive it through
FastAPI's Depends() injection.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from polysum.core.session_store import InMemorySessionStore, SessionStore
from polysum.utils.logger import get_logger

log = get_logger(__name__)

# ─── SessionStore Singleton ───────────────────────────────────────────────────

_session_store: SessionStore | None = None


def init_session_store() -> None:
    """Initialise the SessionStore singleton. Called once during lifespan startup."""
    global _session_store
    log.info("init_session_store", backend="memory")
    _session_store = InMemorySessionStore()


def get_session_store() -> SessionStore:
    """
    FastAPI dependency: inject the SessionStore singleton into route handlers.

    Usage in a route:
        @router.get("/sessions/{session_id}")
        async def get_session(session_id: str, store: SessionStoreDep):
            session = store.get_session(session_id)
            ...
    """
    if _session_store is None:
        raise RuntimeError(
            "SessionStore has not been initialised. "
            "Ensure init_session_store() is called during app lifespan startup."
        )
    return _session_store


# Annotated type alias for clean route signatures
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
