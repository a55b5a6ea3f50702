"""Configuration module for the media browser search engine.

Settings come from the environment, view options from ``ui_config.yaml`` and
per-artifact filter definitions from the ``config.schemas`` registry.
"""

from .settings import config, SearchConfig, PresetStoreConfig, AppConfig, Config
from .constants import (
    # Artifact types and contexts
    ARTIFACT_TYPES,
    SCENE_GRID_CONTEXTS,
    VALID_CONTEXTS,
    CONTEXT_LABELS,
    artifact_type_for_context,
    get_context_label,
    # Sorting
    SORT_ASC,
    SORT_DESC,
    SORT_DIRECTIONS,
    RANDOM_SORT,
    RANDOM_SORT_PREFIX,
    # Modifiers
    INCLUDES,
    INCLUDES_ALL,
    EXCLUDES,
    EQUALS,
    NOT_EQUALS,
    GREATER_THAN,
    LESS_THAN,
    BETWEEN,
    HIERARCHY_ALL_DESCENDANTS,
    # Units
    UNIT_METRIC,
    UNIT_IMPERIAL,
    UNIT_PREFERENCES,
)
from .config_loader import (
    ConfigurationError,
    ViewConfig,
    get_view_config,
    load_ui_config,
    reload_all_config,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    # Settings
    "config",
    "SearchConfig",
    "PresetStoreConfig",
    "AppConfig",
    "Config",
    # Artifact types and contexts
    "ARTIFACT_TYPES",
    "SCENE_GRID_CONTEXTS",
    "VALID_CONTEXTS",
    "CONTEXT_LABELS",
    "artifact_type_for_context",
    "get_context_label",
    # Sorting
    "SORT_ASC",
    "SORT_DESC",
    "SORT_DIRECTIONS",
    "RANDOM_SORT",
    "RANDOM_SORT_PREFIX",
    # Modifiers
    "INCLUDES",
    "INCLUDES_ALL",
    "EXCLUDES",
    "EQUALS",
    "NOT_EQUALS",
    "GREATER_THAN",
    "LESS_THAN",
    "BETWEEN",
    "HIERARCHY_ALL_DESCENDANTS",
    # Units
    "UNIT_METRIC",
    "UNIT_IMPERIAL",
    "UNIT_PREFERENCES",
    # YAML config
    "ConfigurationError",
    "ViewConfig",
    "get_view_config",
    "load_ui_config",
    "reload_all_config",
    # Logging
    "setup_logging",
    "get_logger",
]
