"""URL query-string encoding of search state.

``encode`` writes a flat query string holding only what differs from the
defaults; ``decode`` reads one back on top of a base state. Both are pure:
no I/O and no access to a live location. A malformed parameter never makes
``decode`` fail. It is logged and that one field keeps its base value.

Parameter layout per field kind:

    text, select, single-select   <key>=<value>
    multi-select                  <key>=<id>,<id:instance>,...
    checkbox                      <key>=true
    range                         <key>_min=<n>&<key>_max=<n>
    date-range                    <key>_start=<YYYY-MM-DD>&<key>_end=...
    imperial-height-range         <key>_feet_min, <key>_inches_min, ...
    paired modifier / depth       <modifierKey>=<MOD>&<depthKey>=<int>

plus ``q``, ``sort``, ``direction`` (``dir`` is read as a legacy alias),
``page``, ``per_page``, ``view``, ``zoom``, ``density`` and ``columns``.
"""

import math
from dataclasses import replace
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, urlencode

from config import config
from config.config_loader import get_view_config
from config.constants import RANDOM_SORT, RANDOM_SORT_PREFIX, SORT_DIRECTIONS
from config.logging_config import get_logger
from config.schemas import (
    CHECKBOX,
    DATE_RANGE,
    IMPERIAL_HEIGHT_RANGE,
    MULTI_SELECT,
    RANGE,
    SELECT,
    SINGLE_SELECT,
    TEXT,
    FilterField,
    FilterSchema,
)
from src.search.errors import DecodeError
from src.search.state import SearchState, merge_filters, prune_filters

logger = get_logger("url_codec")

PAGINATION_KEYS = ("page", "per_page")

_RANGE_BOUNDS = ("min", "max")
_DATE_BOUNDS = ("start", "end")
_HEIGHT_BOUNDS = ("feet_min", "inches_min", "feet_max", "inches_max")


# =============================================================================
# Scalar parsing
# =============================================================================

def _parse_number(key: str, raw: str):
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        number = float(raw)
    except ValueError:
        raise DecodeError(key, raw, "not a number")
    if not math.isfinite(number):
        raise DecodeError(key, raw, "not a finite number")
    return number


def _parse_int(key: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise DecodeError(key, raw, "not an integer")


def _parse_date(key: str, raw: str) -> str:
    try:
        date.fromisoformat(raw)
    except ValueError:
        raise DecodeError(key, raw, "not an ISO date")
    return raw


def _parse_bool(key: str, raw: str) -> bool:
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise DecodeError(key, raw, "not a boolean")


# =============================================================================
# Per-kind field codecs
# =============================================================================

def _encode_field(filter_field: FilterField, value: Any) -> List[Tuple[str, str]]:
    key = filter_field.key
    kind = filter_field.kind

    if kind == CHECKBOX:
        return [(key, "true")] if value is True else []
    if kind in (TEXT, SELECT, SINGLE_SELECT):
        return [(key, str(value))]
    if kind == MULTI_SELECT:
        return [(key, ",".join(str(v) for v in value))]
    if kind == RANGE:
        return [(f"{key}_{b}", str(value[b])) for b in _RANGE_BOUNDS if b in value]
    if kind == DATE_RANGE:
        return [(f"{key}_{b}", str(value[b])) for b in _DATE_BOUNDS if b in value]
    if kind == IMPERIAL_HEIGHT_RANGE:
        return [(f"{key}_{b}", str(value[b])) for b in _HEIGHT_BOUNDS if b in value]
    return []


def _decode_bounds(
    params: Mapping[str, str],
    key: str,
    bounds: Tuple[str, ...],
    parse: Callable[[str, str], Any],
) -> Optional[Dict[str, Any]]:
    decoded = {}
    for bound in bounds:
        raw = params.get(f"{key}_{bound}")
        if raw:
            decoded[bound] = parse(f"{key}_{bound}", raw)
    return decoded or None


def _decode_field(filter_field: FilterField, params: Mapping[str, str]) -> Optional[Any]:
    """Decode one field. Returns None when the field is absent from the URL."""
    key = filter_field.key
    kind = filter_field.kind

    if kind == RANGE:
        return _decode_bounds(params, key, _RANGE_BOUNDS, _parse_number)
    if kind == DATE_RANGE:
        return _decode_bounds(params, key, _DATE_BOUNDS, _parse_date)
    if kind == IMPERIAL_HEIGHT_RANGE:
        return _decode_bounds(params, key, _HEIGHT_BOUNDS, _parse_int)

    raw = params.get(key)
    if not raw:
        return None
    if kind == CHECKBOX:
        return _parse_bool(key, raw)
    if kind == MULTI_SELECT:
        return [part for part in raw.split(",") if part]
    if kind in (SELECT, SINGLE_SELECT):
        if filter_field.options and raw not in filter_field.options:
            raise DecodeError(key, raw, "unknown option")
        return raw
    return raw


def _decode_paired(filter_field: FilterField, params: Mapping[str, str]) -> Dict[str, Any]:
    paired = {}
    modifier_key = filter_field.modifier_key
    if modifier_key and params.get(modifier_key):
        raw = params[modifier_key]
        if filter_field.modifier_options and raw not in filter_field.modifier_options:
            raise DecodeError(modifier_key, raw, "unknown modifier")
        paired[modifier_key] = raw
    hierarchy_key = filter_field.hierarchy_key
    if hierarchy_key and params.get(hierarchy_key):
        paired[hierarchy_key] = _parse_int(hierarchy_key, params[hierarchy_key])
    return paired


# =============================================================================
# Public API
# =============================================================================

def _sort_token(state: SearchState) -> str:
    if state.sort_field == RANDOM_SORT and state.random_seed is not None:
        return f"{RANDOM_SORT_PREFIX}{state.random_seed}"
    return state.sort_field


def encode(
    state: SearchState,
    schema: FilterSchema,
    defaults: Optional[SearchState] = None,
) -> str:
    """
    Encode a search state as a query string.

    Args:
        state: State to encode
        schema: Filter schema of the artifact type being browsed
        defaults: Values that may be left out of the URL. Defaults to a
            fresh ``SearchState()``.

    Returns:
        Query string without a leading ``?``. Sort and direction are always
        present; every other parameter only when it differs from ``defaults``.
    """
    if defaults is None:
        defaults = SearchState()

    filters = prune_filters(state.filters)
    pairs: List[Tuple[str, str]] = []

    for filter_field in schema.value_fields:
        value = filters.get(filter_field.key)
        if value is not None:
            pairs.extend(_encode_field(filter_field, value))
        for paired_key in (filter_field.modifier_key, filter_field.hierarchy_key):
            if paired_key and filters.get(paired_key) is not None:
                pairs.append((paired_key, str(filters[paired_key])))

    if state.search_text != defaults.search_text:
        pairs.append(("q", state.search_text))
    pairs.append(("sort", _sort_token(state)))
    pairs.append(("direction", state.sort_direction))
    if state.page != 1:
        pairs.append(("page", str(state.page)))
    if state.per_page != defaults.per_page:
        pairs.append(("per_page", str(state.per_page)))
    if state.view_mode != defaults.view_mode:
        pairs.append(("view", state.view_mode))
    if state.zoom_level != defaults.zoom_level:
        pairs.append(("zoom", state.zoom_level))
    if state.grid_density != defaults.grid_density:
        pairs.append(("density", state.grid_density))
    if state.table_columns != defaults.table_columns and state.table_columns is not None:
        pairs.append(("columns", ",".join(state.table_columns)))

    # Commas and colons stay literal so "id:instance" tokens read naturally
    return urlencode(pairs, safe=",:")


def _parse_params(query_string: str) -> Dict[str, str]:
    query_string = query_string.lstrip("?")
    # Last occurrence wins for repeated keys
    return dict(parse_qsl(query_string, keep_blank_values=True))


def _choice(key: str, raw: Any, allowed) -> Any:
    if raw not in allowed:
        raise DecodeError(key, raw, "not an allowed value")
    return raw


def _parse_page(raw: str) -> int:
    page = _parse_int("page", raw)
    if page < 1:
        raise DecodeError("page", raw, "must be at least 1")
    return page


def _parse_per_page(raw: str) -> int:
    return _choice("per_page", _parse_int("per_page", raw), config.search.per_page_options)


def _parse_columns(raw: str) -> Tuple[str, ...]:
    return tuple(column for column in raw.split(",") if column)


def _decode_sort(raw: str, schema: FilterSchema) -> Tuple[str, Optional[int]]:
    if raw.startswith(RANDOM_SORT_PREFIX):
        suffix = raw[len(RANDOM_SORT_PREFIX):]
        if not suffix.isdigit() or int(suffix) > config.search.random_seed_max:
            raise DecodeError("sort", raw, "bad random seed")
        return RANDOM_SORT, int(suffix)
    if raw not in schema.sort_values:
        raise DecodeError("sort", raw, "unknown sort field")
    return raw, None


def _decode_settings(params: Mapping[str, str], schema: FilterSchema) -> Dict[str, Any]:
    """Decode the non-filter parameters, each one independently."""
    view_config = get_view_config()
    parsers = {
        "q": ("search_text", str),
        "direction": ("sort_direction", lambda raw: _choice("direction", raw.upper(), SORT_DIRECTIONS)),
        "page": ("page", _parse_page),
        "per_page": ("per_page", _parse_per_page),
        "view": ("view_mode", lambda raw: _choice("view", raw, view_config.modes)),
        "zoom": ("zoom_level", lambda raw: _choice("zoom", raw, view_config.zoom_levels)),
        "density": ("grid_density", lambda raw: _choice("density", raw, view_config.grid_densities)),
        "columns": ("table_columns", _parse_columns),
    }

    if "direction" not in params and "dir" in params:
        params = {**params, "direction": params["dir"]}

    decoded: Dict[str, Any] = {}
    for key, (attribute, parse) in parsers.items():
        if key not in params:
            continue
        try:
            decoded[attribute] = parse(params[key])
        except DecodeError as e:
            logger.debug(f"Ignoring URL parameter {e}")

    if "sort" in params:
        try:
            decoded["sort_field"], decoded["random_seed"] = _decode_sort(params["sort"], schema)
        except DecodeError as e:
            logger.debug(f"Ignoring URL parameter {e}")
    return decoded


def _decode_filters(params: Mapping[str, str], schema: FilterSchema) -> Dict[str, Any]:
    decoded: Dict[str, Any] = {}
    for filter_field in schema.value_fields:
        try:
            value = _decode_field(filter_field, params)
            if value is not None:
                decoded[filter_field.key] = value
        except DecodeError as e:
            logger.debug(f"Ignoring URL parameter {e}")
        try:
            decoded.update(_decode_paired(filter_field, params))
        except DecodeError as e:
            logger.debug(f"Ignoring URL parameter {e}")
    return decoded


def decode(
    query_string: str,
    schema: FilterSchema,
    base: SearchState,
    permanent_filters: Optional[Mapping[str, Any]] = None,
) -> SearchState:
    """
    Decode a query string on top of a base state.

    Parameters absent from the string, and parameters that fail to parse,
    keep their ``base`` value, except ``page`` which falls back to 1.
    Decoded filters are laid over ``base.filters`` and permanent filters,
    when given, over both.

    Never raises for malformed input.
    """
    params = _parse_params(query_string)
    settings = _decode_settings(params, schema)
    # Page 1 is never written, so a missing page always means the first page
    settings.setdefault("page", 1)
    decoded_filters = _decode_filters(params, schema)

    filters = merge_filters({**base.filters, **decoded_filters}, permanent_filters)
    state = replace(base, filters=filters, **settings)

    if "sort_field" not in settings and state.sort_field != RANDOM_SORT:
        state.random_seed = None
    return state


def has_meaningful_params(query_string: str) -> bool:
    """Check whether a query string holds anything besides pagination."""
    params = _parse_params(query_string)
    return any(key not in PAGINATION_KEYS for key in params)
