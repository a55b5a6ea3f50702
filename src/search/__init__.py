"""Search module: canonical search state and engine errors.

The controller lives in ``src.search.controller`` and is imported from there.
"""

from .errors import (
    SearchStateError,
    ValidationError,
    FetchError,
    SaveError,
    DefaultUpdateError,
    DeleteError,
    DecodeError,
)
from .state import (
    SearchState,
    default_state,
    merge_filters,
    prune_filters,
    strip_keys,
)
