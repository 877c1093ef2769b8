# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Global Error Handler
Converts all unhandled exceptions into structured JSON error responses.
Registered on the FastAPI app in main.py.

Rejected placements never reach this module: they are ordinary 200
responses carrying `valid: false`.
"""

from __future__ import annotations

import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from polysum.errors import BoardInvariantError, LevelDataError, PieceNotFoundError
from polysum.utils.logger import get_logger

log = get_logger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session_id does not exist in the store."""


class GenerationFailedError(RuntimeError):
    """Raised when the level generator produced nothing within its attempt budget."""


def _error_body(code: str, message: str, detail: str | None = None) -> dict:
    body = {"error": {"code": code, "message": message}}
    if detail:
        body["error"]["detail"] = detail
    return body


def register_error_handlers(app: FastAPI) -> None:
    """
    Register all global exception handlers on the FastAPI application.
    Call this in main.py after creating the app instance.
    """

    @app.exception_handler(LevelDataError)
    async def level_data_handler(req: Request, exc: LevelDataError) -> JSONResponse:
        log.warning("level_data_error", path=str(req.url), error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body(code="LEVEL_DATA_ERROR", message=str(exc)),
        )

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found_handler(
        req: Request, exc: SessionNotFoundError
    ) -> JSONResponse:
        log.warning("session_not_found", path=str(req.url), error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_error_body(
                code="SESSION_NOT_FOUND",
                message=f"Session not found: {exc}",
            ),
        )

    @app.exception_handler(PieceNotFoundError)
    async def piece_not_found_handler(
        req: Request, exc: PieceNotFoundError
    ) -> JSONResponse:
        log.warning("piece_not_found", path=str(req.url), error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_error_body(
                code="PIECE_NOT_FOUND",
                message=f"Piece not found: {exc}",
            ),
        )

    @app.exception_handler(GenerationFailedError)
    async def generation_failed_handler(
        req: Request, exc: GenerationFailedError
    ) -> JSONResponse:
        log.warning("generation_failed", path=str(req.url), error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body(
                code="GENERATION_FAILED",
                message="No level could be generated for these parameters.",
                detail=str(exc),
            ),
        )

    @app.exception_handler(BoardInvariantError)
    async def board_invariant_handler(
        req: Request, exc: BoardInvariantError
    ) -> JSONResponse:
        log.error("board_invariant_violated", path=str(req.url), error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                code="BOARD_INVARIANT_ERROR",
                message="Board and placed pieces disagree.",
                detail=str(exc),
            ),
        )

    @app.exception_handler(Exception)
    async def generic_handler(req: Request, exc: Exception) -> JSONResponse:
        tb = traceback.format_exc()
        log.error(
            "unhandled_exception",
            path=str(req.url),
            error=str(exc),
            exc_type=type(exc).__name__,
            traceback=tb,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                code="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred.",
            ),
        )
