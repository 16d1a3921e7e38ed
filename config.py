"""
Central configuration for the Constructivist generative assembler.
All render defaults and environment-driven settings live here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    # ── Canvas ──────────────────────────────────────────────────────
    CANVAS_WIDTH: int = 800   # preview fallback when no container size is known
    CANVAS_HEIGHT: int = 800
    CANVAS_PADDING: int = 40
    PREVIEW_PIXEL_RATIO: float = 1.0  # backing pixels per logical preview pixel

    # ── Export ──────────────────────────────────────────────────────
    EXPORT_BASE_SIZE: int = 3000  # longest side of the HQ export

    # ── Finishing ───────────────────────────────────────────────────
    GRAIN_AMOUNT: float = 10.0    # full span; offsets fall in [-5, 5)
    GRAIN_SEEDED: bool = False
    LINE_END_DOTS: bool = False

    # ── Variations ──────────────────────────────────────────────────
    NUM_VARIATIONS: int = 4
    SEED_LENGTH: int = 6

    # ── Paths ───────────────────────────────────────────────────────
    PROJECT_ROOT: Path = Path(__file__).parent
    OUTPUTS_DIR: Optional[Path] = None

    @model_validator(mode="after")
    def _set_default_paths(self) -> Settings:
        if self.OUTPUTS_DIR is None:
            self.OUTPUTS_DIR = self.PROJECT_ROOT / "outputs"
        return self

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton instance
settings = Settings()
