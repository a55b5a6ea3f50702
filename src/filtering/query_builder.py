"""Build entity predicates from canonical filter values.

The predicate is the nested structure the fetch layer sends as
``<type>_filter``. Every clause is derived from a schema field; entries with
no schema field and entries holding empty values never reach the predicate.
"""

from typing import Any, Dict, List, Mapping, Optional

from config.constants import (
    BETWEEN,
    EQUALS,
    GREATER_THAN,
    HIERARCHY_ALL_DESCENDANTS,
    INCLUDES,
    LESS_THAN,
    UNIT_METRIC,
)
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
    schema_for,
)
from .units import convert_filter_units

logger = get_logger("query_builder")


def _number(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return int(number) if number.is_integer() else number


def _modifier(filter_field: FilterField, filters: Mapping[str, Any], fallback: str) -> str:
    if filter_field.modifier_key and filters.get(filter_field.modifier_key):
        return filters[filter_field.modifier_key]
    return filter_field.default_modifier or fallback


def _apply_depth(clause: Dict[str, Any], filter_field: FilterField, filters: Mapping[str, Any]) -> None:
    """Attach hierarchy depth. All-descendants forces the INCLUDES modifier."""
    if not filter_field.hierarchy_key:
        return
    depth = filters.get(filter_field.hierarchy_key)
    if depth is None or depth == "":
        return
    try:
        depth = int(depth)
    except (TypeError, ValueError):
        return
    clause["depth"] = depth
    if depth == HIERARCHY_ALL_DESCENDANTS:
        clause["modifier"] = INCLUDES


def _ids(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return list(dict.fromkeys(str(v) for v in value if v is not None and v != ""))


def _range_clause(filter_field: FilterField, value: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(value, dict):
        return None
    low = _number(value.get("min"))
    high = _number(value.get("max"))
    scale = filter_field.scale

    if low is not None and high is not None:
        return {"modifier": BETWEEN, "value": low * scale, "value2": high * scale}
    if low is not None:
        return {"modifier": GREATER_THAN, "value": low * scale - 1}
    if high is not None:
        return {"modifier": LESS_THAN, "value": high * scale + 1}
    return None


def _date_range_clause(value: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(value, dict):
        return None
    start = value.get("start") or None
    end = value.get("end") or None

    if start and end:
        return {"modifier": BETWEEN, "value": start, "value2": end}
    if start:
        return {"modifier": GREATER_THAN, "value": start}
    if end:
        return {"modifier": LESS_THAN, "value": end}
    return None


def build_clause(filter_field: FilterField, filters: Mapping[str, Any]) -> Optional[Any]:
    """Build the predicate clause for one field, or None when it contributes nothing."""
    value = filters.get(filter_field.key)
    kind = filter_field.kind

    if kind == CHECKBOX:
        return True if value is True or str(value).upper() == "TRUE" else None

    if kind == TEXT:
        if not value:
            return None
        return {"value": str(value), "modifier": INCLUDES}

    if kind == SELECT:
        if not value:
            return None
        if filter_field.wrap_list:
            return {"value": [value]}
        return {"value": value, "modifier": _modifier(filter_field, filters, EQUALS)}

    if kind in (SINGLE_SELECT, MULTI_SELECT):
        ids = _ids(value)
        if not ids:
            return None
        if kind == SINGLE_SELECT:
            clause = {"value": ids, "modifier": INCLUDES}
        else:
            clause = {"value": ids, "modifier": _modifier(filter_field, filters, INCLUDES)}
        _apply_depth(clause, filter_field, filters)
        return clause

    if kind in (RANGE, IMPERIAL_HEIGHT_RANGE):
        return _range_clause(filter_field, value)

    if kind == DATE_RANGE:
        return _date_range_clause(value)

    return None


def build_predicate(
    artifact_type: str,
    filters: Mapping[str, Any],
    unit_preference: str = UNIT_METRIC,
) -> Dict[str, Any]:
    """
    Build the entity predicate for an artifact type.

    Args:
        artifact_type: Entity type being searched (scene, performer, ...)
        filters: Canonical filter values, permanent filters already merged
        unit_preference: Unit system the measurement values were entered in

    Returns:
        Predicate dict keyed by clause name, in schema field order.
    """
    schema = schema_for(artifact_type, unit_preference)
    metric_filters = convert_filter_units(filters, unit_preference)

    predicate: Dict[str, Any] = {}
    for filter_field in schema.value_fields:
        clause = build_clause(filter_field, metric_filters)
        if clause is not None:
            predicate[filter_field.clause_key] = clause

    unknown = [
        key for key in filters
        if schema.get(key) is None and key not in schema.paired_keys()
    ]
    if unknown:
        logger.debug(f"Ignoring filters without a {artifact_type} field: {unknown}")
    return predicate


def build(
    artifact_type: str,
    filters: Mapping[str, Any],
    unit_preference: str = UNIT_METRIC,
) -> Dict[str, Any]:
    """Build the ``{"<type>_filter": predicate}`` part of a fetch query."""
    return {f"{artifact_type}_filter": build_predicate(artifact_type, filters, unit_preference)}
