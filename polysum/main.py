# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — FastAPI Application Entry Point
Creates the app, registers lifespan events, CORS, routers,
and global error handlers.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from polysum.api.middleware.error_handler import register_error_handlers
from polysum.api.routes import levels, sessions
from polysum.config import get_settings
from polysum.dependencies import get_session_store, init_session_store
from polysum.utils.logger import configure_logging, get_logger

log = get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Startup: configure logging, initialise the SessionStore.
    """
    # ── Startup ──────────────────────────────────────────────────────────────
    configure_logging()
    settings = get_settings()

    log.info(
        "polysum_startup",
        version=VERSION,
        default_target=settings.default_target,
        default_decoy_count=settings.default_decoy_count,
        monomino_cap=settings.monomino_cap,
        tiling_max_steps=settings.tiling_max_steps,
    )

    init_session_store()

    log.info("polysum_ready")
    yield

    # ── Shutdown ─────────────────────────────────────────────────────────────
    log.info("polysum_shutdown")


def create_app() -> FastAPI:
    app = FastAPI(
        title="PolySum",
        summary="Polyomino tiling puzzles where the pieces must also add up.",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",   # Vite dev server
            "http://localhost:3000",   # Alternative dev port
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Error Handlers ───────────────────────────────────────────────────────
    register_error_handlers(app)

    # ── Routers ──────────────────────────────────────────────────────────────
    app.include_router(levels.router)
    app.include_router(sessions.router)

    # ── Health Check ─────────────────────────────────────────────────────────
    @app.get("/health", tags=["health"], summary="Health check")
    async def health() -> dict:
        return {
            "status": "ok",
            "service": "polysum",
            "version": VERSION,
            "sessions": get_session_store().count(),
        }

    return app


# Module-level app instance for uvicorn
app = create_app()
