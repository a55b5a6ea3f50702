"""Filter schema registry.

One declarative ``FilterSchema`` per artifact type. Lookups are pure; the unit
transform only changes how height, weight and length fields are presented,
never their keys or the stored metric values.
"""

from dataclasses import replace
from typing import Dict, List, Optional

from config.constants import UNIT_IMPERIAL, UNIT_METRIC
from .base import (
    CHECKBOX,
    DATE_RANGE,
    FIELD_KINDS,
    IMPERIAL_HEIGHT_RANGE,
    MULTI_SELECT,
    RANGE,
    SECTION_HEADER,
    SELECT,
    SINGLE_SELECT,
    TEXT,
    FilterField,
    FilterSchema,
    SortField,
)
from .library_schemas import GROUP_SCHEMA, STUDIO_SCHEMA, TAG_SCHEMA
from .media_schemas import GALLERY_SCHEMA, IMAGE_SCHEMA
from .performer_schemas import PERFORMER_SCHEMA
from .scene_schemas import SCENE_INDEX_SORT, SCENE_SCHEMA

SCHEMAS: Dict[str, FilterSchema] = {
    "scene": SCENE_SCHEMA,
    "performer": PERFORMER_SCHEMA,
    "studio": STUDIO_SCHEMA,
    "tag": TAG_SCHEMA,
    "group": GROUP_SCHEMA,
    "gallery": GALLERY_SCHEMA,
    "image": IMAGE_SCHEMA,
}

# Presentation overrides for imperial units, keyed by field key
_IMPERIAL_OVERRIDES: Dict[str, Dict] = {
    "height": {"label": "Height (ft/in)", "kind": IMPERIAL_HEIGHT_RANGE},
    "weight": {"label": "Weight (lbs)", "min": 50, "max": 500},
    "penisLength": {"label": "Penis Length (inches)", "min": 1, "max": 15},
}


def apply_unit_preference(schema: FilterSchema, unit_preference: str) -> FilterSchema:
    """
    Return the schema as presented for a unit preference.

    Metric returns the schema untouched. Imperial rewrites label, kind and
    bounds of the measurement fields. Applying the transform to an already
    transformed schema returns an equal schema.
    """
    if unit_preference != UNIT_IMPERIAL or schema.unit_preference == UNIT_IMPERIAL:
        return schema

    fields = tuple(
        replace(f, **_IMPERIAL_OVERRIDES[f.key]) if f.key in _IMPERIAL_OVERRIDES else f
        for f in schema.fields
    )
    return replace(schema, fields=fields, unit_preference=UNIT_IMPERIAL)


def schema_for(artifact_type: str, unit_preference: str = UNIT_METRIC) -> FilterSchema:
    """
    Get the filter schema for an artifact type.

    Unknown artifact types get the scene schema.
    """
    schema = SCHEMAS.get(artifact_type, SCENE_SCHEMA)
    return apply_unit_preference(schema, unit_preference)


def sort_options(artifact_type: str, group_filter_active: bool = False) -> List[SortField]:
    """
    Sort fields offered for an artifact type.

    Scene number ordering only makes sense inside a collection, so it is
    hidden for scenes unless a group filter is active.
    """
    sort_fields = list(schema_for(artifact_type).sort_fields)
    if artifact_type == "scene" and not group_filter_active:
        sort_fields = [s for s in sort_fields if s.value != SCENE_INDEX_SORT]
    return sort_fields


def filter_field(schema: FilterSchema, key: str) -> Optional[FilterField]:
    return schema.get(key)


def value_fields(schema: FilterSchema) -> List[FilterField]:
    return schema.value_fields


__all__ = [
    "CHECKBOX",
    "DATE_RANGE",
    "FIELD_KINDS",
    "IMPERIAL_HEIGHT_RANGE",
    "MULTI_SELECT",
    "RANGE",
    "SECTION_HEADER",
    "SELECT",
    "SINGLE_SELECT",
    "TEXT",
    "FilterField",
    "FilterSchema",
    "SortField",
    "SCHEMAS",
    "SCENE_INDEX_SORT",
    "apply_unit_preference",
    "schema_for",
    "sort_options",
    "filter_field",
    "value_fields",
]
