"""Scene filter and sort definitions."""

from config.constants import (
    GROUP_MODIFIER_OPTIONS,
    INCLUDES,
    INCLUDES_ALL,
    EQUALS,
    MULTI_MODIFIER_OPTIONS,
    ORIENTATION_OPTIONS,
    RESOLUTION_MODIFIER_OPTIONS,
    RESOLUTION_OPTIONS,
)
from .base import (
    CHECKBOX,
    DATE_RANGE,
    MULTI_SELECT,
    RANGE,
    SELECT,
    SINGLE_SELECT,
    TEXT,
    FilterField,
    FilterSchema,
    option_values,
    section,
    sorts,
)

SCENE_INDEX_SORT = "scene_index"

SCENE_SORT_FIELDS = sorts(
    ("bitrate", "Bitrate"),
    ("created_at", "Created At"),
    ("date", "Date"),
    ("duration", "Duration"),
    ("filesize", "File Size"),
    ("framerate", "Framerate"),
    ("last_o_at", "Last O At"),
    ("last_played_at", "Last Played At"),
    ("o_counter", "O Count"),
    ("path", "Path"),
    ("performer_count", "Performer Count"),
    ("play_count", "Play Count"),
    ("play_duration", "Play Duration"),
    ("random", "Random"),
    ("rating", "Rating"),
    (SCENE_INDEX_SORT, "Scene Number"),
    ("tag_count", "Tag Count"),
    ("title", "Title"),
    ("updated_at", "Updated At"),
)

SCENE_FIELDS = (
    section("section-common", "Common Filters"),
    FilterField("title", TEXT, "Title Search"),
    FilterField("details", TEXT, "Details Search"),
    FilterField(
        "performers", MULTI_SELECT, "Performers",
        predicate_key="performers",
        modifier_key="performersModifier",
        modifier_options=option_values(MULTI_MODIFIER_OPTIONS),
        default_modifier=INCLUDES,
        entity_type="performers",
    ),
    FilterField(
        "studio", SINGLE_SELECT, "Studio",
        predicate_key="studios",
        default_modifier=INCLUDES,
        hierarchy_key="studioDepth",
        entity_type="studios",
    ),
    FilterField(
        "tags", MULTI_SELECT, "Tags",
        predicate_key="tags",
        modifier_key="tagsModifier",
        modifier_options=option_values(MULTI_MODIFIER_OPTIONS),
        default_modifier=INCLUDES_ALL,
        hierarchy_key="tagsDepth",
        entity_type="tags",
    ),
    FilterField(
        "groups", MULTI_SELECT, "Collections",
        predicate_key="groups",
        modifier_key="groupsModifier",
        modifier_options=option_values(GROUP_MODIFIER_OPTIONS),
        default_modifier=INCLUDES,
        entity_type="groups",
    ),
    FilterField("rating", RANGE, "Rating (0-100)", predicate_key="rating100", min=0, max=100),
    FilterField("oCount", RANGE, "O Count", predicate_key="o_counter", min=0, max=300),
    FilterField("duration", RANGE, "Duration (minutes)", min=1, max=300, scale=60),
    FilterField("favorite", CHECKBOX, "Favorite Scenes"),
    FilterField("performerFavorite", CHECKBOX, "Favorite Performers", predicate_key="performer_favorite"),
    FilterField("studioFavorite", CHECKBOX, "Favorite Studios", predicate_key="studio_favorite"),
    FilterField("tagFavorite", CHECKBOX, "Favorite Tags", predicate_key="tag_favorite"),

    section("section-dates", "Date Ranges"),
    FilterField("date", DATE_RANGE, "Scene Date"),
    FilterField("createdAt", DATE_RANGE, "Created Date", predicate_key="created_at"),
    FilterField("updatedAt", DATE_RANGE, "Updated Date", predicate_key="updated_at"),
    FilterField("lastPlayedAt", DATE_RANGE, "Last Played Date", predicate_key="last_played_at"),

    section("section-video", "Video Properties"),
    FilterField(
        "resolution", SELECT, "Resolution",
        modifier_key="resolutionModifier",
        modifier_options=option_values(RESOLUTION_MODIFIER_OPTIONS),
        default_modifier=EQUALS,
        options=option_values(RESOLUTION_OPTIONS),
    ),
    FilterField("framerate", RANGE, "Framerate (fps)", min=0, max=120),
    FilterField(
        "orientation", SELECT, "Orientation",
        options=option_values(ORIENTATION_OPTIONS),
        wrap_list=True,
    ),
    FilterField("videoCodec", TEXT, "Video Codec", predicate_key="video_codec"),
    FilterField("audioCodec", TEXT, "Audio Codec", predicate_key="audio_codec"),

    section("section-other", "Other Filters"),
    FilterField("director", TEXT, "Director Search"),
    FilterField("playDuration", RANGE, "Play Duration (minutes)", predicate_key="play_duration", min=1, max=300, scale=60),
    FilterField("playCount", RANGE, "Play Count", predicate_key="play_count", min=0, max=1000),
    FilterField("performerCount", RANGE, "Performer Count", predicate_key="performer_count", min=0, max=20),
    FilterField("performerAge", RANGE, "Performer Age", predicate_key="performer_age", min=18, max=100),
    FilterField("tagCount", RANGE, "Tag Count", predicate_key="tag_count", min=0, max=50),
)

SCENE_SCHEMA = FilterSchema(
    artifact_type="scene",
    fields=SCENE_FIELDS,
    sort_fields=SCENE_SORT_FIELDS,
)
