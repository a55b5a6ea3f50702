"""YAML Configuration Loader for the media browser.

Loads and caches the view configuration from ``ui_config.yaml`` with fallback
to built-in defaults. Provides typed access to the values the search engine
needs (view modes, zoom levels, grid densities).
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from functools import lru_cache
import yaml

# Get config directory
CONFIG_DIR = Path(__file__).parent

_FALLBACK_UI_CONFIG: Dict[str, Any] = {
    "view": {
        "modes": ["grid", "wall", "table", "timeline", "folder"],
        "default_mode": "grid",
        "zoom_levels": ["small", "medium", "large"],
        "default_zoom": "medium",
        "grid_densities": ["compact", "medium", "comfortable"],
        "default_density": "medium",
    },
}


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""

    pass


def _load_yaml_file(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of YAML file in config directory

    Returns:
        Parsed YAML content as dictionary

    Raises:
        ConfigurationError: If file cannot be loaded
    """
    filepath = CONFIG_DIR / filename
    if not filepath.exists():
        raise ConfigurationError(f"Configuration file not found: {filepath}")

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing {filename}: {e}")
    except IOError as e:
        raise ConfigurationError(f"Error reading {filename}: {e}")


@lru_cache(maxsize=1)
def load_ui_config() -> Dict[str, Any]:
    """Load ui_config.yaml configuration."""
    try:
        return _load_yaml_file("ui_config.yaml")
    except ConfigurationError:
        return _FALLBACK_UI_CONFIG


def clear_config_cache() -> None:
    """Clear all cached configuration data."""
    load_ui_config.cache_clear()


@dataclass
class ViewConfig:
    """View settings accessor (view mode, zoom, density)."""

    _data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        ui_config = load_ui_config()
        self._data = ui_config.get("view", _FALLBACK_UI_CONFIG["view"])

    def _get(self, key: str) -> Any:
        return self._data.get(key, _FALLBACK_UI_CONFIG["view"][key])

    @property
    def modes(self) -> List[str]:
        """Get the available view modes."""
        return list(self._get("modes"))

    @property
    def default_mode(self) -> str:
        return self._get("default_mode")

    @property
    def zoom_levels(self) -> List[str]:
        return list(self._get("zoom_levels"))

    @property
    def default_zoom(self) -> str:
        return self._get("default_zoom")

    @property
    def grid_densities(self) -> List[str]:
        return list(self._get("grid_densities"))

    @property
    def default_density(self) -> str:
        return self._get("default_density")

    def is_valid_mode(self, mode: str) -> bool:
        """Check whether a view mode is one of the configured modes."""
        return mode in self.modes


_view_config: Optional[ViewConfig] = None


def get_view_config() -> ViewConfig:
    """Get view configuration."""
    global _view_config
    if _view_config is None:
        _view_config = ViewConfig()
    return _view_config


def reload_all_config() -> None:
    """Reload all configuration from YAML files."""
    global _view_config

    clear_config_cache()
    _view_config = None
