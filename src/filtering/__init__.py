"""Filtering module: URL codec, predicate builder, unit conversion and random sort."""

from .units import (
    convert_filter_units,
    feet_inches_to_cm,
    cm_to_feet_inches,
    lbs_to_kg,
    kg_to_lbs,
    inches_to_cm,
    cm_to_inches,
)
from .random_sort import (
    seed_for,
    reset_seed,
    new_seed,
    is_random_sort,
    parse_sort_token,
)
from .query_builder import build, build_predicate, build_clause
from .url_codec import encode, decode, has_meaningful_params
