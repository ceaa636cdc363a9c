"""
settings.py

Environment-driven configuration. Values come from `MEMORA_*` variables in
the process environment, optionally seeded by a local `.env` file.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import InvalidConfiguration

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MEMORA_",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    log_level: str = Field(default="INFO", description="loguru level for the web app")
    copyright_holder: str = "Memora Learning"
    max_questions: int = Field(default=200, ge=0)
    max_grid_problems: int = Field(default=500, ge=0)
    # Seeds entry points that receive neither an rng nor an explicit seed.
    seed: Optional[int] = None

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()


def load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as exc:
        problems = "; ".join(
            f"MEMORA_{'_'.join(str(part) for part in error['loc']).upper()}: {error['msg']}"
            for error in exc.errors()
        )
        raise InvalidConfiguration(problems) from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
