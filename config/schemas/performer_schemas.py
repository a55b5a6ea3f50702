"""Performer filter and sort definitions.

Height, weight and penis length are stored in metric units. The imperial
presentation of these fields is produced by ``apply_unit_preference`` in the
registry, never by editing this module.
"""

from config.constants import (
    ETHNICITY_OPTIONS,
    EQUALS,
    GENDER_OPTIONS,
    INCLUDES_ALL,
    MULTI_MODIFIER_OPTIONS,
)
from .base import (
    CHECKBOX,
    DATE_RANGE,
    MULTI_SELECT,
    RANGE,
    SELECT,
    TEXT,
    FilterField,
    FilterSchema,
    option_values,
    section,
    sorts,
)

PERFORMER_SORT_FIELDS = sorts(
    ("birthdate", "Birthdate"),
    ("career_length", "Career Length"),
    ("created_at", "Created At"),
    ("height", "Height"),
    ("last_o_at", "Last O At"),
    ("last_played_at", "Last Played At"),
    ("measurements", "Measurements"),
    ("name", "Name"),
    ("o_counter", "O Count"),
    ("penis_length", "Penis Length"),
    ("play_count", "Play Count"),
    ("random", "Random"),
    ("rating", "Rating"),
    ("scenes_count", "Scene Count"),
    ("updated_at", "Updated At"),
    ("weight", "Weight"),
)

PERFORMER_FIELDS = (
    section("section-common", "Common Filters"),
    FilterField("name", TEXT, "Name Search"),
    FilterField(
        "tags", MULTI_SELECT, "Tags",
        modifier_key="tagsModifier",
        modifier_options=option_values(MULTI_MODIFIER_OPTIONS),
        default_modifier=INCLUDES_ALL,
        hierarchy_key="tagsDepth",
        entity_type="tags",
    ),
    FilterField(
        "gender", SELECT, "Gender",
        default_modifier=EQUALS,
        options=option_values(GENDER_OPTIONS),
    ),
    FilterField("rating", RANGE, "Rating (0-100)", predicate_key="rating100", min=0, max=100),
    FilterField("favorite", CHECKBOX, "Favorites Only"),

    section("section-physical", "Physical Attributes"),
    FilterField(
        "ethnicity", SELECT, "Ethnicity",
        default_modifier=EQUALS,
        options=option_values(ETHNICITY_OPTIONS),
    ),
    FilterField("age", RANGE, "Age", min=18, max=100),
    FilterField("height", RANGE, "Height (cm)", min=100, max=250),
    FilterField("weight", RANGE, "Weight (kg)", min=30, max=200),
    FilterField("penisLength", RANGE, "Penis Length (cm)", predicate_key="penis_length", min=1, max=40),
    FilterField("measurements", TEXT, "Measurements"),

    section("section-stats", "Statistics"),
    FilterField("oCounter", RANGE, "O Count", predicate_key="o_counter", min=0, max=300),
    FilterField("playCount", RANGE, "Play Count", predicate_key="play_count", min=0, max=1000),
    FilterField("sceneCount", RANGE, "Scene Count", predicate_key="scene_count", min=0, max=1000),

    section("section-dates", "Date Ranges"),
    FilterField("birthdate", DATE_RANGE, "Birthdate"),
    FilterField("createdAt", DATE_RANGE, "Created Date", predicate_key="created_at"),
    FilterField("updatedAt", DATE_RANGE, "Updated Date", predicate_key="updated_at"),
)

PERFORMER_SCHEMA = FilterSchema(
    artifact_type="performer",
    fields=PERFORMER_FIELDS,
    sort_fields=PERFORMER_SORT_FIELDS,
)
