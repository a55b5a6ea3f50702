"""Metric/imperial conversions for measurement filters.

Stored values and predicates are always metric. Conversions round half away
from zero, so round trips can lose one unit of precision at the edges.
"""

import math
from typing import Any, Dict, Optional, Tuple

from config.constants import UNIT_IMPERIAL

CM_PER_INCH = 2.54
LBS_PER_KG = 2.205


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def feet_inches_to_cm(feet: int, inches: int) -> int:
    """Convert a height in feet and inches to whole centimeters."""
    total_inches = feet * 12 + inches
    return _round_half_up(total_inches * CM_PER_INCH)


def cm_to_feet_inches(cm: float) -> Tuple[int, int]:
    """Convert centimeters to (feet, inches), carrying 12 inches into a foot."""
    if not cm:
        return 0, 0
    total_inches = cm / CM_PER_INCH
    feet = int(total_inches // 12)
    inches = _round_half_up(total_inches % 12)
    if inches == 12:
        return feet + 1, 0
    return feet, inches


def lbs_to_kg(lbs: float) -> int:
    return _round_half_up(lbs / LBS_PER_KG)


def kg_to_lbs(kg: float) -> int:
    return _round_half_up(kg * LBS_PER_KG)


def inches_to_cm(inches: float) -> float:
    """Convert inches to centimeters with one decimal place."""
    return _round_half_up(inches * CM_PER_INCH * 10) / 10


def cm_to_inches(cm: float) -> float:
    return _round_half_up(cm / CM_PER_INCH * 10) / 10


def _as_number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _height_bound(height: Dict[str, Any], suffix: str) -> Optional[int]:
    feet = _as_number(height.get(f"feet_{suffix}")) or 0
    inches = _as_number(height.get(f"inches_{suffix}")) or 0
    if not feet and not inches:
        return None
    return feet_inches_to_cm(int(feet), int(inches))


def convert_filter_units(filters: Dict[str, Any], unit_preference: str) -> Dict[str, Any]:
    """
    Convert imperial measurement filters to metric.

    Height arrives as ``{"feet_min", "inches_min", "feet_max", "inches_max"}``
    and leaves as a ``{"min", "max"}`` range in centimeters. Weight is
    converted from pounds, penis length from inches. Metric filters are
    returned unchanged. The input mapping is never mutated.
    """
    if unit_preference != UNIT_IMPERIAL:
        return filters

    converted = dict(filters)

    height = filters.get("height")
    if isinstance(height, dict):
        metric_height = {}
        for suffix in ("min", "max"):
            bound = _height_bound(height, suffix)
            if bound is not None:
                metric_height[suffix] = bound
        converted["height"] = metric_height

    weight = filters.get("weight")
    if isinstance(weight, dict):
        converted["weight"] = {
            bound: lbs_to_kg(_as_number(value))
            for bound, value in weight.items()
            if bound in ("min", "max") and _as_number(value)
        }

    penis_length = filters.get("penisLength")
    if isinstance(penis_length, dict):
        converted["penisLength"] = {
            bound: inches_to_cm(_as_number(value))
            for bound, value in penis_length.items()
            if bound in ("min", "max") and _as_number(value)
        }

    return converted
