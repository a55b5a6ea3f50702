"""FastAPI application settings for the preset store."""

from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings
from functools import lru_cache


def _default_cors_origins() -> list[str]:
    # Default development origins
    return ["http://localhost:3000", "http://localhost:5173"]


class Settings(BaseSettings):
    """Preset store settings with environment variable support (``MEDIA_`` prefix)."""

    # App info
    app_name: str = "Media Browser Preset Store"
    version: str = "1.0.0"
    debug: bool = False

    # Database
    presets_db_path: Path = Path(__file__).parent.parent / "data" / "presets.db"

    # CORS, a JSON list in MEDIA_CORS_ORIGINS
    cors_origins: list[str] = Field(default_factory=_default_cors_origins)

    class Config:
        env_prefix = "MEDIA_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
