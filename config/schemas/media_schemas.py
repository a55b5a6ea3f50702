"""Gallery and image filter and sort definitions."""

from config.constants import (
    GROUP_MODIFIER_OPTIONS,
    INCLUDES,
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


def _entity_fields(*, with_galleries: bool) -> tuple:
    """Performer/studio/tag (and optionally gallery) selects shared by galleries and images."""
    fields = (
        FilterField(
            "performers", MULTI_SELECT, "Performers",
            modifier_key="performersModifier",
            modifier_options=option_values(MULTI_MODIFIER_OPTIONS),
            default_modifier=INCLUDES,
            entity_type="performers",
        ),
        FilterField(
            "studios", MULTI_SELECT, "Studios",
            modifier_key="studiosModifier",
            modifier_options=option_values(GROUP_MODIFIER_OPTIONS),
            default_modifier=INCLUDES,
            hierarchy_key="studiosDepth",
            entity_type="studios",
        ),
        FilterField(
            "tags", MULTI_SELECT, "Tags",
            modifier_key="tagsModifier",
            modifier_options=option_values(MULTI_MODIFIER_OPTIONS),
            default_modifier=INCLUDES,
            hierarchy_key="tagsDepth",
            entity_type="tags",
        ),
    )
    if with_galleries:
        fields += (
            FilterField(
                "galleries", MULTI_SELECT, "Galleries",
                modifier_key="galleriesModifier",
                modifier_options=option_values(GROUP_MODIFIER_OPTIONS),
                default_modifier=INCLUDES,
                entity_type="galleries",
            ),
        )
    return fields


GALLERY_SCHEMA = FilterSchema(
    artifact_type="gallery",
    fields=(
        section("section-common", "Common Filters"),
        FilterField("title", TEXT, "Title Search"),
        *_entity_fields(with_galleries=False),
        FilterField("rating", RANGE, "Rating (0-100)", predicate_key="rating100", min=0, max=100),
        FilterField("imageCount", RANGE, "Image Count", predicate_key="image_count", min=0, max=5000),
        FilterField("favorite", CHECKBOX, "Favorites Only"),
        FilterField("hasFavoriteImage", CHECKBOX, "Has Favorite Image"),

        section("section-dates", "Date Ranges"),
        FilterField("date", DATE_RANGE, "Gallery Date"),
    ),
    sort_fields=sorts(
        ("created_at", "Created At"),
        ("date", "Date"),
        ("image_count", "Image Count"),
        ("path", "Path"),
        ("random", "Random"),
        ("rating", "Rating"),
        ("title", "Title"),
        ("updated_at", "Updated At"),
    ),
)

IMAGE_SCHEMA = FilterSchema(
    artifact_type="image",
    fields=(
        section("section-common", "Common Filters"),
        FilterField("title", TEXT, "Title Search"),
        *_entity_fields(with_galleries=True),
        FilterField("rating", RANGE, "Rating (0-100)", predicate_key="rating100", min=0, max=100),
        FilterField("oCounter", RANGE, "O Count", predicate_key="o_counter", min=0, max=300),
        FilterField("favorite", CHECKBOX, "Favorites Only"),

        section("section-dates", "Date Ranges"),
        FilterField("date", DATE_RANGE, "Image Date"),
    ),
    sort_fields=sorts(
        ("created_at", "Created At"),
        ("date", "Date"),
        ("filesize", "File Size"),
        ("o_counter", "O Count"),
        ("path", "Path"),
        ("random", "Random"),
        ("rating", "Rating"),
        ("title", "Title"),
        ("updated_at", "Updated At"),
    ),
)
