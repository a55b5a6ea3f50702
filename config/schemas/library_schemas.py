"""Studio, tag and group (collection) filter and sort definitions."""

from config.constants import (
    INCLUDES,
    INCLUDES_ALL,
    MULTI_MODIFIER_OPTIONS,
)
from .base import (
    CHECKBOX,
    DATE_RANGE,
    MULTI_SELECT,
    RANGE,
    TEXT,
    FilterField,
    FilterSchema,
    option_values,
    section,
    sorts,
)


# =============================================================================
# STUDIOS
# =============================================================================

STUDIO_SCHEMA = FilterSchema(
    artifact_type="studio",
    fields=(
        section("section-common", "Common Filters"),
        FilterField("name", TEXT, "Name Search"),
        FilterField("details", TEXT, "Details Search"),
        FilterField(
            "tags", MULTI_SELECT, "Tags",
            modifier_key="tagsModifier",
            modifier_options=option_values(MULTI_MODIFIER_OPTIONS),
            default_modifier=INCLUDES_ALL,
            hierarchy_key="tagsDepth",
            entity_type="tags",
        ),
        FilterField("rating", RANGE, "Rating (0-100)", predicate_key="rating100", min=0, max=100),
        FilterField("favorite", CHECKBOX, "Favorites Only"),
        FilterField("sceneCount", RANGE, "Scene Count", predicate_key="scene_count", min=0, max=5000),
        FilterField("oCounter", RANGE, "O Count", predicate_key="o_counter", min=0, max=1000),
        FilterField("playCount", RANGE, "Play Count", predicate_key="play_count", min=0, max=5000),

        section("section-dates", "Date Ranges"),
        FilterField("createdAt", DATE_RANGE, "Created Date", predicate_key="created_at"),
        FilterField("updatedAt", DATE_RANGE, "Updated Date", predicate_key="updated_at"),
    ),
    sort_fields=sorts(
        ("created_at", "Created At"),
        ("name", "Name"),
        ("o_counter", "O Count"),
        ("play_count", "Play Count"),
        ("random", "Random"),
        ("rating", "Rating"),
        ("scenes_count", "Scene Count"),
        ("updated_at", "Updated At"),
    ),
)


# =============================================================================
# TAGS
# =============================================================================

TAG_SCHEMA = FilterSchema(
    artifact_type="tag",
    fields=(
        section("section-common", "Common Filters"),
        FilterField("name", TEXT, "Name Search"),
        FilterField("description", TEXT, "Description Search"),
        FilterField("rating", RANGE, "Rating (0-100)", predicate_key="rating100", min=0, max=100),
        FilterField("favorite", CHECKBOX, "Favorites Only"),
        FilterField("sceneCount", RANGE, "Scene Count", predicate_key="scene_count", min=0, max=5000),
        FilterField("performerCount", RANGE, "Performer Count", predicate_key="performer_count", min=0, max=1000),
        FilterField("oCounter", RANGE, "O Count", predicate_key="o_counter", min=0, max=1000),

        section("section-dates", "Date Ranges"),
        FilterField("createdAt", DATE_RANGE, "Created Date", predicate_key="created_at"),
        FilterField("updatedAt", DATE_RANGE, "Updated Date", predicate_key="updated_at"),
    ),
    sort_fields=sorts(
        ("created_at", "Created At"),
        ("name", "Name"),
        ("o_counter", "O Count"),
        ("performer_count", "Performer Count"),
        ("play_count", "Play Count"),
        ("random", "Random"),
        ("rating", "Rating"),
        ("scenes_count", "Scene Count"),
        ("updated_at", "Updated At"),
    ),
)


# =============================================================================
# GROUPS (collections)
# =============================================================================

GROUP_SCHEMA = FilterSchema(
    artifact_type="group",
    fields=(
        section("section-common", "Common Filters"),
        FilterField("name", TEXT, "Name Search"),
        FilterField("synopsis", TEXT, "Synopsis Search"),
        FilterField("director", TEXT, "Director Search"),
        FilterField(
            "tags", MULTI_SELECT, "Tags",
            modifier_key="tagsModifier",
            modifier_options=option_values(MULTI_MODIFIER_OPTIONS),
            default_modifier=INCLUDES_ALL,
            entity_type="tags",
        ),
        FilterField(
            "performers", MULTI_SELECT, "Performers",
            modifier_key="performersModifier",
            modifier_options=option_values(MULTI_MODIFIER_OPTIONS),
            default_modifier=INCLUDES,
            entity_type="performers",
        ),
        FilterField(
            "studios", MULTI_SELECT, "Studios",
            default_modifier=INCLUDES,
            entity_type="studios",
        ),
        FilterField("rating", RANGE, "Rating (0-100)", predicate_key="rating100", min=0, max=100),
        FilterField("favorite", CHECKBOX, "Favorites Only"),
        FilterField("sceneCount", RANGE, "Scene Count", predicate_key="scene_count", min=0, max=500),
        FilterField("duration", RANGE, "Duration (minutes)", min=1, max=600, scale=60),

        section("section-dates", "Date Ranges"),
        FilterField("date", DATE_RANGE, "Release Date"),
        FilterField("createdAt", DATE_RANGE, "Created Date", predicate_key="created_at"),
        FilterField("updatedAt", DATE_RANGE, "Updated Date", predicate_key="updated_at"),
    ),
    sort_fields=sorts(
        ("created_at", "Created At"),
        ("date", "Date"),
        ("duration", "Duration"),
        ("name", "Name"),
        ("random", "Random"),
        ("rating", "Rating"),
        ("scene_count", "Scene Count"),
        ("updated_at", "Updated At"),
    ),
)
