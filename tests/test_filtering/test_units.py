"""Tests for metric/imperial conversions."""

from src.filtering.units import (
    cm_to_feet_inches,
    cm_to_inches,
    convert_filter_units,
    feet_inches_to_cm,
    inches_to_cm,
    kg_to_lbs,
    lbs_to_kg,
)


class TestConversions:
    """Tests for single-value conversions."""

    def test_feet_inches_to_cm(self):
        """Test height conversion rounds to whole centimeters."""
        assert feet_inches_to_cm(5, 10) == 178
        assert feet_inches_to_cm(6, 0) == 183

    def test_cm_to_feet_inches(self):
        """Test height conversion back to feet and inches."""
        assert cm_to_feet_inches(178) == (5, 10)
        assert cm_to_feet_inches(0) == (0, 0)

    def test_cm_to_feet_inches_carries_twelve_inches(self):
        """Test 11.97 inches rounds up into the next foot."""
        assert cm_to_feet_inches(182.8) == (6, 0)

    def test_weight(self):
        """Test weight conversions round to whole units."""
        assert lbs_to_kg(150) == 68
        assert lbs_to_kg(200) == 91
        assert kg_to_lbs(68) == 150

    def test_length_keeps_one_decimal(self):
        """Test length conversions keep one decimal place."""
        assert inches_to_cm(6) == 15.2
        assert cm_to_inches(15.24) == 6.0


class TestConvertFilterUnits:
    """Tests for converting imperial filter values before predicate building."""

    def test_metric_is_passthrough(self):
        """Test metric filters are returned untouched."""
        filters = {"height": {"min": 170}}

        assert convert_filter_units(filters, "metric") is filters

    def test_imperial_height_becomes_cm_range(self):
        """Test feet/inches bounds become a centimeter range."""
        filters = {"height": {"feet_min": 5, "inches_min": 6, "feet_max": 6, "inches_max": 0}}

        converted = convert_filter_units(filters, "imperial")

        assert converted["height"] == {"min": 168, "max": 183}

    def test_imperial_height_with_only_max(self):
        """Test a missing lower bound stays missing."""
        converted = convert_filter_units({"height": {"feet_max": 5}}, "imperial")

        assert converted["height"] == {"max": 152}

    def test_imperial_weight_and_length(self):
        """Test pounds and inches are converted, other filters kept."""
        filters = {
            "weight": {"min": 150, "max": 200},
            "penisLength": {"max": 6},
            "tags": ["5"],
        }

        converted = convert_filter_units(filters, "imperial")

        assert converted["weight"] == {"min": 68, "max": 91}
        assert converted["penisLength"] == {"max": 15.2}
        assert converted["tags"] == ["5"]

    def test_input_not_mutated(self):
        """Test the caller's mapping is left as entered."""
        filters = {"weight": {"min": 150}}

        convert_filter_units(filters, "imperial")

        assert filters == {"weight": {"min": 150}}
