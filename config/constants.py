"""Constants for the media browser search engine.

Artifact types, browsing contexts, filter modifiers and sort options shared by
the schema registry, the URL codec, the query builder and the preset store.
"""

from typing import Dict, List, Tuple


# =============================================================================
# Artifact Types and Contexts
# =============================================================================

ARTIFACT_TYPES: Tuple[str, ...] = (
    "scene",
    "performer",
    "studio",
    "tag",
    "group",
    "gallery",
    "image",
)

# Scene grids embedded on detail pages keep their own default preset but
# share the "scene" preset pool.
SCENE_GRID_CONTEXTS: Tuple[str, ...] = (
    "scene_performer",
    "scene_tag",
    "scene_studio",
    "scene_group",
)

VALID_CONTEXTS: Tuple[str, ...] = ARTIFACT_TYPES + SCENE_GRID_CONTEXTS

CONTEXT_LABELS: Dict[str, str] = {
    "scene": "Scenes",
    "scene_performer": "Scenes on performer pages",
    "scene_tag": "Scenes on tag pages",
    "scene_studio": "Scenes on studio pages",
    "scene_group": "Scenes on collection pages",
    "performer": "Performers",
    "studio": "Studios",
    "tag": "Tags",
    "group": "Collections",
    "gallery": "Galleries",
    "image": "Images",
}


def artifact_type_for_context(context: str) -> str:
    """Map a browsing context to the artifact type its presets are stored under."""
    if context.startswith("scene_"):
        return "scene"
    return context


def get_context_label(context: str) -> str:
    """Get a display label for a browsing context."""
    return CONTEXT_LABELS.get(context, context)


# =============================================================================
# Sorting
# =============================================================================

SORT_ASC = "ASC"
SORT_DESC = "DESC"
SORT_DIRECTIONS: Tuple[str, ...] = (SORT_ASC, SORT_DESC)

RANDOM_SORT = "random"
RANDOM_SORT_PREFIX = "random_"


# =============================================================================
# Modifiers
# =============================================================================

INCLUDES = "INCLUDES"
INCLUDES_ALL = "INCLUDES_ALL"
EXCLUDES = "EXCLUDES"
EQUALS = "EQUALS"
NOT_EQUALS = "NOT_EQUALS"
GREATER_THAN = "GREATER_THAN"
LESS_THAN = "LESS_THAN"
BETWEEN = "BETWEEN"

MULTI_MODIFIER_OPTIONS: List[Dict[str, str]] = [
    {"value": INCLUDES_ALL, "label": "Has ALL of these"},
    {"value": INCLUDES, "label": "Has ANY of these"},
    {"value": EXCLUDES, "label": "Has NONE of these"},
]

GROUP_MODIFIER_OPTIONS: List[Dict[str, str]] = [
    {"value": INCLUDES, "label": "In ANY of these"},
    {"value": EXCLUDES, "label": "NOT in these"},
]

RESOLUTION_MODIFIER_OPTIONS: List[Dict[str, str]] = [
    {"value": EQUALS, "label": "Equals"},
    {"value": NOT_EQUALS, "label": "Not Equals"},
    {"value": GREATER_THAN, "label": "Greater Than"},
    {"value": LESS_THAN, "label": "Less Than"},
]

# Depth value meaning "include all descendants" for tag/studio hierarchies
HIERARCHY_ALL_DESCENDANTS = -1


# =============================================================================
# Units
# =============================================================================

UNIT_METRIC = "metric"
UNIT_IMPERIAL = "imperial"
UNIT_PREFERENCES: Tuple[str, ...] = (UNIT_METRIC, UNIT_IMPERIAL)


# =============================================================================
# Select Options
# =============================================================================

GENDER_OPTIONS: List[Dict[str, str]] = [
    {"value": "MALE", "label": "Male"},
    {"value": "FEMALE", "label": "Female"},
    {"value": "TRANSGENDER_MALE", "label": "Trans Male"},
    {"value": "TRANSGENDER_FEMALE", "label": "Trans Female"},
    {"value": "INTERSEX", "label": "Intersex"},
    {"value": "NON_BINARY", "label": "Non-Binary"},
]

ETHNICITY_OPTIONS: List[Dict[str, str]] = [
    {"value": "CAUCASIAN", "label": "Caucasian"},
    {"value": "BLACK", "label": "Black"},
    {"value": "ASIAN", "label": "Asian"},
    {"value": "INDIAN", "label": "Indian"},
    {"value": "LATIN", "label": "Latin"},
    {"value": "MIDDLE_EASTERN", "label": "Middle Eastern"},
    {"value": "MIXED", "label": "Mixed"},
    {"value": "OTHER", "label": "Other"},
]

RESOLUTION_OPTIONS: List[Dict[str, str]] = [
    {"value": "VERY_LOW", "label": "144p"},
    {"value": "LOW", "label": "240p"},
    {"value": "R360P", "label": "360p"},
    {"value": "STANDARD", "label": "480p"},
    {"value": "WEB_HD", "label": "540p"},
    {"value": "STANDARD_HD", "label": "720p"},
    {"value": "FULL_HD", "label": "1080p"},
    {"value": "QUAD_HD", "label": "1440p"},
    {"value": "FOUR_K", "label": "4K"},
    {"value": "EIGHT_K", "label": "8K"},
]

ORIENTATION_OPTIONS: List[Dict[str, str]] = [
    {"value": "LANDSCAPE", "label": "Landscape"},
    {"value": "PORTRAIT", "label": "Portrait"},
    {"value": "SQUARE", "label": "Square"},
]
