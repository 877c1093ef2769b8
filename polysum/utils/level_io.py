# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Level File I/O
Reads and writes GameLevel JSON. Field names follow the level file
contract (camelCase inside `solution`), so files written here load in
any other consumer of the format and vice versa.

Malformed input (bad JSON, unknown shape name, value out of 1..9,
duplicate piece ids) raises LevelDataError.
"""

from pathlib import Path

from pydantic import ValidationError

from polysum.errors import LevelDataError
from polysum.models.level import GameLevel
from polysum.utils.logger import get_logger

log = get_logger(__name__)

FIXTURES_DIR = Path(__file__).resolve().parent.parent / "fixtures"
SAMPLE_LEVEL_PATH = FIXTURES_DIR / "sample_level.json"


def load_level_json(text: str | bytes) -> GameLevel:
    try:
        return GameLevel.model_validate_json(text)
    except ValidationError as exc:
        raise LevelDataError(f"invalid level data: {exc.error_count()} error(s)\n{exc}") from exc


def dump_level_json(level: GameLevel, indent: int | None = 2) -> str:
    return level.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


def load_level(path: Path | str) -> GameLevel:
    path = Path(path)
    level = load_level_json(path.read_bytes())
    log.debug("level_loaded", path=str(path), level_id=level.id, bag_size=len(level.bag))
    return level


def save_level(level: GameLevel, path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_level_json(level), encoding="utf-8")
    log.debug("level_saved", path=str(path), level_id=level.id)
    return path


def load_sample_level() -> GameLevel:
    """The bundled hand-built sample puzzle (target 28, three decoys)."""
    return load_level(SAMPLE_LEVEL_PATH)
