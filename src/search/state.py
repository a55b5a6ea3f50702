"""Canonical search state and filter-mapping helpers."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from config import config
from config.config_loader import get_view_config


@dataclass
class SearchState:
    """Everything that determines one page of search results and its layout."""

    filters: Dict[str, Any] = field(default_factory=dict)
    sort_field: str = field(default_factory=lambda: config.search.initial_sort)
    sort_direction: str = field(default_factory=lambda: config.search.default_direction)
    random_seed: Optional[int] = None
    page: int = 1
    per_page: int = field(default_factory=lambda: config.search.default_per_page)
    search_text: str = ""
    view_mode: str = field(default_factory=lambda: get_view_config().default_mode)
    zoom_level: str = field(default_factory=lambda: get_view_config().default_zoom)
    grid_density: str = field(default_factory=lambda: get_view_config().default_density)
    table_columns: Optional[Tuple[str, ...]] = None


def _is_empty(value: Any) -> bool:
    return value is None or value is False or value == "" or value == [] or value == {}


def prune_filters(filters: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Drop empty entries from a filter mapping.

    Empty means None, False, "", [] or {}. Range and date-range dicts lose
    their empty bounds first; multi-select lists keep first-seen order with
    duplicates removed.
    """
    pruned = {}
    for key, value in filters.items():
        if isinstance(value, dict):
            value = {k: v for k, v in value.items() if v is not None and v != ""}
        elif isinstance(value, (list, tuple)):
            value = list(dict.fromkeys(str(v) for v in value if v is not None and v != ""))
        if not _is_empty(value):
            pruned[key] = value
    return pruned


def merge_filters(
    filters: Mapping[str, Any],
    permanent_filters: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Overlay permanent filters on user filters. Permanent values always win."""
    merged = dict(filters)
    if permanent_filters:
        merged.update(permanent_filters)
    return prune_filters(merged)


def strip_keys(filters: Mapping[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    """Return a copy of ``filters`` without the given keys."""
    excluded = set(keys)
    return {k: v for k, v in filters.items() if k not in excluded}


def default_state(
    initial_sort: Optional[str] = None,
    permanent_filters: Optional[Mapping[str, Any]] = None,
) -> SearchState:
    """Hardcoded starting state: initial sort, descending, page 1, permanent filters only."""
    return SearchState(
        filters=merge_filters({}, permanent_filters),
        sort_field=initial_sort or config.search.initial_sort,
        sort_direction=config.search.default_direction,
    )
