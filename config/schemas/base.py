"""Filter schema building blocks.

A filter schema is the static, declarative description of everything a user
can filter and sort on for one artifact type. Schemas are data only: the URL
codec and the query builder interpret them.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


# Field kinds
TEXT = "text"
SELECT = "select"
CHECKBOX = "checkbox"
SINGLE_SELECT = "single-select"
MULTI_SELECT = "multi-select"
RANGE = "range"
DATE_RANGE = "date-range"
IMPERIAL_HEIGHT_RANGE = "imperial-height-range"
SECTION_HEADER = "section-header"

FIELD_KINDS: Tuple[str, ...] = (
    TEXT,
    SELECT,
    CHECKBOX,
    SINGLE_SELECT,
    MULTI_SELECT,
    RANGE,
    DATE_RANGE,
    IMPERIAL_HEIGHT_RANGE,
    SECTION_HEADER,
)

_EMPTY_VALUES: Dict[str, Any] = {
    TEXT: "",
    SELECT: "",
    CHECKBOX: False,
    SINGLE_SELECT: "",
    MULTI_SELECT: [],
    RANGE: {},
    DATE_RANGE: {},
    IMPERIAL_HEIGHT_RANGE: {},
    SECTION_HEADER: None,
}


@dataclass(frozen=True)
class FilterField:
    """One filterable field of an artifact type."""

    key: str
    kind: str
    label: str
    predicate_key: Optional[str] = None
    modifier_key: Optional[str] = None
    modifier_options: Tuple[str, ...] = ()
    default_modifier: Optional[str] = None
    hierarchy_key: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None
    scale: int = 1  # multiplier applied to range bounds (minutes -> seconds)
    options: Tuple[str, ...] = ()
    wrap_list: bool = False  # select value is sent as a one-element list
    entity_type: Optional[str] = None

    @property
    def default_value(self) -> Any:
        """The empty value for this field's kind (a fresh copy each call)."""
        return deepcopy(_EMPTY_VALUES[self.kind])

    @property
    def is_section(self) -> bool:
        return self.kind == SECTION_HEADER

    @property
    def clause_key(self) -> str:
        """Name of the predicate clause this field produces."""
        return self.predicate_key or self.key

    @property
    def supports_hierarchy(self) -> bool:
        return self.hierarchy_key is not None


@dataclass(frozen=True)
class SortField:
    """A sortable field."""

    value: str
    label: str


@dataclass(frozen=True)
class FilterSchema:
    """Ordered filter fields and sort fields for one artifact type."""

    artifact_type: str
    fields: Tuple[FilterField, ...]
    sort_fields: Tuple[SortField, ...]
    unit_preference: str = "metric"
    _index: Dict[str, FilterField] = field(
        default_factory=dict, init=False, compare=False, repr=False
    )

    def __post_init__(self):
        seen = set()
        for filter_field in self.fields:
            if filter_field.key in seen:
                raise ValueError(
                    f"Duplicate filter key '{filter_field.key}' in {self.artifact_type} schema"
                )
            seen.add(filter_field.key)
            self._index[filter_field.key] = filter_field

    def get(self, key: str) -> Optional[FilterField]:
        """Look up a field by key."""
        return self._index.get(key)

    @property
    def value_fields(self) -> List[FilterField]:
        """Fields that carry a value (section headers excluded)."""
        return [f for f in self.fields if not f.is_section]

    @property
    def sort_values(self) -> List[str]:
        return [s.value for s in self.sort_fields]

    def paired_keys(self) -> List[str]:
        """Modifier and hierarchy keys declared by the schema's fields."""
        keys = []
        for f in self.value_fields:
            if f.modifier_key:
                keys.append(f.modifier_key)
            if f.hierarchy_key:
                keys.append(f.hierarchy_key)
        return keys


def section(key: str, label: str) -> FilterField:
    """Build a section-header pseudo-field."""
    return FilterField(key=key, kind=SECTION_HEADER, label=label)


def sorts(*pairs: Tuple[str, str]) -> Tuple[SortField, ...]:
    """Build a tuple of sort fields from (value, label) pairs."""
    return tuple(SortField(value=value, label=label) for value, label in pairs)


def option_values(options: List[Dict[str, str]]) -> Tuple[str, ...]:
    """Extract the values from a list of {value, label} option dicts."""
    return tuple(o["value"] for o in options)
