# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Application Configuration
All settings are loaded from environment variables with defaults tuned
for the 5×5 board. Override via .env or environment.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ─── Level Defaults ──────────────────────────────────────────────────────
    default_target: int = Field(30, ge=1)
    default_decoy_count: int = Field(3, ge=0)
    monomino_cap: int = Field(1, ge=0)

    # ─── Level Generator ─────────────────────────────────────────────────────
    # Placement attempts per tiling run before the run is declared exhausted
    tiling_max_steps: int = Field(20000, ge=1)
    # Fresh-seed retries before generate_level_with_retries gives up
    generator_max_attempts: int = Field(10, ge=1)
    generator_parallel_workers: int = Field(4, ge=1)

    # ─── Winnability Checker ─────────────────────────────────────────────────
    solver_attempt_budget: int = Field(5000, ge=0)

    # ─── Logging ─────────────────────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # Per-stamp board events; very chatty during generation
    log_board_events: bool = False

    # ─── Server ──────────────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 8000

    # ─── Derived helpers ─────────────────────────────────────────────────────
    @property
    def default_max_leftovers(self) -> int:
        return self.default_decoy_count + 2


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached singleton Settings instance."""
    return Settings()
