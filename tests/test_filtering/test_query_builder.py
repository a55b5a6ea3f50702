"""Tests for entity predicate building."""

import pytest

from src.filtering.query_builder import build, build_predicate


class TestHierarchyAndModifiers:
    """Tests for modifier selection and hierarchy depth."""

    def test_all_descendants_forces_includes(self):
        """Test depth -1 overrides a stored EXCLUDES modifier."""
        predicate = build_predicate(
            "scene", {"tags": ["5"], "tagsModifier": "EXCLUDES", "tagsDepth": -1}
        )

        assert predicate["tags"] == {"value": ["5"], "modifier": "INCLUDES", "depth": -1}

    def test_other_depth_keeps_modifier(self):
        """Test a bounded depth is passed through with the stored modifier."""
        predicate = build_predicate(
            "scene", {"tags": ["5"], "tagsModifier": "EXCLUDES", "tagsDepth": 2}
        )

        assert predicate["tags"] == {"value": ["5"], "modifier": "EXCLUDES", "depth": 2}

    def test_default_modifier_per_field(self):
        """Test fields fall back to their own default modifier."""
        predicate = build_predicate("scene", {"tags": ["5"], "performers": ["3"]})

        assert predicate["tags"]["modifier"] == "INCLUDES_ALL"
        assert predicate["performers"]["modifier"] == "INCLUDES"

    def test_single_select_studio(self):
        """Test a single studio is sent as a one-element list under 'studios'."""
        predicate = build_predicate("scene", {"studio": "12", "studioDepth": -1})

        assert predicate["studios"] == {"value": ["12"], "modifier": "INCLUDES", "depth": -1}

    def test_multi_select_dedup_keeps_composite_ids(self):
        """Test duplicates are removed in first-seen order and id:instance tokens survive."""
        predicate = build_predicate("scene", {"performers": ["3", "7:instB", "3"]})

        assert predicate["performers"]["value"] == ["3", "7:instB"]


class TestRanges:
    """Tests for numeric and date ranges."""

    def test_between(self):
        predicate = build_predicate("scene", {"rating": {"min": 20, "max": 80}})

        assert predicate["rating100"] == {"modifier": "BETWEEN", "value": 20, "value2": 80}

    def test_min_only_is_exclusive_greater_than(self):
        predicate = build_predicate("scene", {"rating": {"min": 80}})

        assert predicate["rating100"] == {"modifier": "GREATER_THAN", "value": 79}

    def test_max_only_is_exclusive_less_than(self):
        predicate = build_predicate("scene", {"rating": {"max": 80}})

        assert predicate["rating100"] == {"modifier": "LESS_THAN", "value": 81}

    def test_duration_minutes_scaled_to_seconds(self):
        """Test minute bounds are sent as seconds."""
        both = build_predicate("scene", {"duration": {"min": 10, "max": 20}})
        low = build_predicate("scene", {"duration": {"min": 10}})

        assert both["duration"] == {"modifier": "BETWEEN", "value": 600, "value2": 1200}
        assert low["duration"] == {"modifier": "GREATER_THAN", "value": 599}

    def test_numeric_strings_accepted(self):
        """Test bounds entered as strings are read as numbers."""
        predicate = build_predicate("scene", {"oCount": {"min": "3"}})

        assert predicate["o_counter"] == {"modifier": "GREATER_THAN", "value": 2}

    @pytest.mark.parametrize(
        "value, expected",
        [
            ({"start": "2024-01-01", "end": "2024-06-30"},
             {"modifier": "BETWEEN", "value": "2024-01-01", "value2": "2024-06-30"}),
            ({"start": "2024-01-01"}, {"modifier": "GREATER_THAN", "value": "2024-01-01"}),
            ({"end": "2024-06-30"}, {"modifier": "LESS_THAN", "value": "2024-06-30"}),
        ],
    )
    def test_date_range(self, value, expected):
        predicate = build_predicate("scene", {"date": value})

        assert predicate["date"] == expected


class TestScalarFields:
    """Tests for text, select and checkbox fields."""

    def test_text_uses_includes(self):
        predicate = build_predicate("scene", {"title": "beach"})

        assert predicate["title"] == {"value": "beach", "modifier": "INCLUDES"}

    def test_select_with_paired_modifier(self):
        predicate = build_predicate(
            "scene", {"resolution": "FULL_HD", "resolutionModifier": "GREATER_THAN"}
        )

        assert predicate["resolution"] == {"value": "FULL_HD", "modifier": "GREATER_THAN"}

    def test_select_wrapped_in_list(self):
        predicate = build_predicate("scene", {"orientation": "LANDSCAPE"})

        assert predicate["orientation"] == {"value": ["LANDSCAPE"]}

    def test_gender_equals(self):
        predicate = build_predicate("performer", {"gender": "FEMALE"})

        assert predicate["gender"] == {"value": "FEMALE", "modifier": "EQUALS"}

    def test_checkbox(self):
        predicate = build_predicate("scene", {"favorite": True, "tagFavorite": False})

        assert predicate == {"favorite": True}


class TestOmission:
    """Tests for empty and unknown values."""

    def test_empty_values_omitted(self):
        """Test empty values never produce clauses."""
        filters = {"tags": [], "title": "", "rating": {}, "date": {"start": ""}, "favorite": False}

        assert build_predicate("scene", filters) == {}

    def test_unknown_keys_omitted(self):
        assert build_predicate("scene", {"bogus": "1", "tagsModifier": "EXCLUDES"}) == {}

    def test_deterministic(self):
        """Test equal inputs build equal predicates."""
        filters = {"tags": ["5", "7"], "rating": {"min": 60}, "favorite": True}

        assert build_predicate("scene", filters) == build_predicate("scene", dict(filters))


class TestBuild:
    """Tests for the query fragment and unit handling."""

    def test_wrapped_under_type_key(self):
        result = build("performer", {"favorite": True})

        assert result == {"performer_filter": {"favorite": True}}

    def test_imperial_values_converted(self):
        """Test imperial height and weight reach the predicate in metric."""
        filters = {"height": {"feet_min": 5, "inches_min": 6}, "weight": {"max": 200}}

        predicate = build_predicate("performer", filters, "imperial")

        assert predicate["height"] == {"modifier": "GREATER_THAN", "value": 167}
        assert predicate["weight"] == {"modifier": "LESS_THAN", "value": 92}

    def test_gallery_studios_hierarchy(self):
        predicate = build_predicate("gallery", {"studios": ["4"], "studiosDepth": -1})

        assert predicate["studios"] == {"value": ["4"], "modifier": "INCLUDES", "depth": -1}
