"""
config.py — Settings for the layout engine.

Uses pydantic-settings so every value can be overridden with a
``SLIDEALIGN_`` environment variable or a ``.env`` file.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from slidealign.model.schema import EMU_PER_INCH, EMU_PER_POINT


class Settings(BaseSettings):
    """Engine settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SLIDEALIGN_",
        extra="ignore",
    )

    # Anchor persistence
    redis_url: str = "redis://localhost:6379/0"
    anchor_key_prefix: str = "slidealign:"
    anchor_ttl_seconds: Optional[int] = Field(default=None, gt=0)

    # Layout defaults, in EMUs
    cell_stack_gap: float = Field(default=5 * EMU_PER_POINT, ge=0)
    default_cell_padding: float = Field(default=EMU_PER_INCH // 10, ge=0)
    default_matrix_spacing: float = Field(default=EMU_PER_INCH // 10, ge=0)

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Install a basic root handler for applications embedding the engine."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
    )
