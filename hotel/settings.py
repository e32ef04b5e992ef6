"""
Application configuration using pydantic-settings.

Environment variables (prefix: HOTEL_):
    HOTEL_BOARDS_DIR      - Directory holding scenario sub-directories (default: boards)
    HOTEL_SEED            - Seed for dice, building draws and scenario choice
    HOTEL_STARTING_FUNDS  - Funds each player starts with (default: 12000)
    HOTEL_RELIEF_AMOUNT   - Amount granted by a relief request (default: 1000)
    HOTEL_NUM_PLAYERS     - Number of players, 2-8 (default: 3)
    HOTEL_STRICT_RELIEF   - Only grant relief on rounds that passed a treasury tile
    HOTEL_LOG_LEVEL       - Logging level for the CLI (default: INFO)
    HOTEL_LOG_DIR         - Directory for JSONL event logs (default: logs)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hotel.config import GameConfig


class GameSettings(BaseSettings):
    """Environment-driven defaults for running games."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="HOTEL_",
    )

    boards_dir: Path = Field(default=Path("boards"), description="Directory of scenario directories.")
    seed: Optional[int] = Field(default=None, description="Seed for all random draws.")
    starting_funds: int = Field(default=12000, gt=0)
    relief_amount: int = Field(default=1000, ge=0)
    num_players: int = Field(default=3, ge=2, le=8)
    strict_relief: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept standard logging level names, case-insensitively."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def to_game_config(self, **overrides) -> GameConfig:
        """Build an engine GameConfig from these settings."""
        values = {
            "starting_funds": self.starting_funds,
            "relief_amount": self.relief_amount,
            "num_players": self.num_players,
            "seed": self.seed,
            "strict_relief": self.strict_relief,
        }
        values.update(overrides)
        return GameConfig(**values)


@lru_cache
def get_game_settings() -> GameSettings:
    """Return cached game settings instance."""
    return GameSettings()
