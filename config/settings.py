"""Application settings and configuration."""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Tuple
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


def _parse_per_page_options() -> Tuple[int, ...]:
    """Parse the allowed page sizes from a comma-separated environment variable."""
    raw = os.getenv("MEDIA_PER_PAGE_OPTIONS", "12,24,40,60,80,100")
    return tuple(int(part) for part in raw.split(",") if part.strip())


@dataclass
class SearchConfig:
    """Search state engine settings."""

    initial_sort: str = field(
        default_factory=lambda: os.getenv("MEDIA_INITIAL_SORT", "o_counter")
    )
    default_direction: str = "DESC"
    default_per_page: int = field(
        default_factory=lambda: int(os.getenv("MEDIA_DEFAULT_PER_PAGE", "24"))
    )
    per_page_options: Tuple[int, ...] = field(default_factory=_parse_per_page_options)
    search_debounce_seconds: float = field(
        default_factory=lambda: float(os.getenv("MEDIA_SEARCH_DEBOUNCE_SECONDS", "0.5"))
    )
    random_seed_max: int = 99_999_999


@dataclass
class PresetStoreConfig:
    """Remote preset store settings."""

    base_url: str = field(
        default_factory=lambda: os.getenv(
            "MEDIA_PRESET_STORE_URL", "http://localhost:8000/api"
        )
    )
    timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("MEDIA_PRESET_STORE_TIMEOUT", "10"))
    )
    retry_attempts: int = field(
        default_factory=lambda: int(os.getenv("MEDIA_PRESET_STORE_RETRIES", "3"))
    )


@dataclass
class AppConfig:
    """Application configuration settings."""

    name: str = field(default_factory=lambda: os.getenv("APP_NAME", "Media Browser"))
    version: str = field(default_factory=lambda: os.getenv("APP_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


@dataclass
class Config:
    """Main configuration container."""

    search: SearchConfig = field(default_factory=SearchConfig)
    preset_store: PresetStoreConfig = field(default_factory=PresetStoreConfig)
    app: AppConfig = field(default_factory=AppConfig)


# Global config instance
config = Config()
