# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Structured Logging
structlog with event-name logging. Requests and batch runs bind the
session_id / level_id they work on through game_context(), so every
event emitted underneath (transitions, generator, checker) carries them.

Board stamp/clear events fire for every piece the generator or a move
touches; they are dropped unless LOG_BOARD_EVENTS is set.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor

from polysum.config import get_settings

BOARD_EVENTS = frozenset({"piece_stamped_on_board", "piece_removed_from_board"})


def _add_app_info(
    logger: Any, method: str, event_dict: EventDict
) -> EventDict:
    event_dict["app"] = "polysum"
    return event_dict


def _drop_color_message_key(
    logger: Any, method: str, event_dict: EventDict
) -> EventDict:
    """Remove uvicorn's color_message to keep logs clean."""
    event_dict.pop("color_message", None)
    return event_dict


def _make_board_event_filter(enabled: bool) -> Processor:
    def _filter_board_events(
        logger: Any, method: str, event_dict: EventDict
    ) -> EventDict:
        if not enabled and event_dict.get("event") in BOARD_EVENTS:
            raise structlog.DropEvent
        return event_dict

    return _filter_board_events


def configure_logging() -> None:
    """
    JSON output by default, coloured console output at DEBUG.
    Called once at application startup and by the batch script.
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        _make_board_event_filter(settings.log_board_events),
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_app_info,
        _drop_color_message_key,
    ]

    if settings.log_level == "DEBUG":
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True)
        ]
    else:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stdout),
        cache_logger_on_first_use=True,
    )

    # stdlib passthrough for uvicorn / fastapi
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


@contextmanager
def game_context(
    session_id: Optional[str] = None, level_id: Optional[str] = None
) -> Iterator[None]:
    """
    Bind the ids that are known for the duration of the block. Unset ids
    are not bound, so an outer binding is never blanked. Work handed to
    asyncio.to_thread() inside the block inherits the binding.

        with game_context(session_id=session_id):
            state, result = apply_request(session.state, request)
    """
    ids = {
        key: value
        for key, value in (("session_id", session_id), ("level_id", level_id))
        if value is not None
    }
    with structlog.contextvars.bound_contextvars(**ids):
        yield


def get_logger(name: str = "polysum") -> structlog.BoundLogger:
    """
    Return a structlog bound logger.

    Usage:
        log = get_logger(__name__)
        log.info("level_generated", target=30)
    """
    return structlog.get_logger(name)
