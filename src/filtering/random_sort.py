"""Stable random ordering.

A random sort is sent to the fetch layer as ``random_<seed>``. Reusing the
seed keeps page N+1 consistent with page N; dropping it reshuffles. The seed
itself lives in ``SearchState.random_seed``; these helpers only derive and
parse it.
"""

import random
from typing import Optional, Tuple

from config import config
from config.constants import RANDOM_SORT, RANDOM_SORT_PREFIX


def parse_sort_token(token: str) -> Tuple[str, Optional[int]]:
    """
    Split a sort token into (field, seed).

    ``random_123`` gives ``("random", 123)``; ``random`` gives
    ``("random", None)``; any other token is returned as a plain field.
    """
    if token.startswith(RANDOM_SORT_PREFIX):
        suffix = token[len(RANDOM_SORT_PREFIX):]
        if suffix.isdigit():
            return RANDOM_SORT, int(suffix)
    return token, None


def is_random_sort(sort_field: Optional[str]) -> bool:
    """Check whether a sort field or token denotes random ordering."""
    if not sort_field:
        return False
    return parse_sort_token(sort_field)[0] == RANDOM_SORT


def new_seed(rng: Optional[random.Random] = None) -> int:
    return (rng or random).randint(0, config.search.random_seed_max)


def seed_for(
    sort_field: str,
    current_seed: Optional[int],
    rng: Optional[random.Random] = None,
) -> Tuple[str, Optional[int]]:
    """
    Derive the sort token and seed for a sort field.

    Args:
        sort_field: Plain field name, ``random`` or ``random_<seed>``
        current_seed: Seed already held by the caller, if any
        rng: Random source used when a new seed must be drawn

    Returns:
        ``(sort_token, seed)``. Non-random fields return ``(sort_field, None)``.
    """
    field_name, token_seed = parse_sort_token(sort_field)
    if field_name != RANDOM_SORT:
        return sort_field, None

    seed = current_seed
    if seed is None:
        seed = token_seed if token_seed is not None else new_seed(rng)
    return f"{RANDOM_SORT_PREFIX}{seed}", seed


def reset_seed() -> None:
    """The cleared seed value. Assign the result to the state's seed."""
    return None
