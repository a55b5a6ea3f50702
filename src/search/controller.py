"""Search state synchronization controller.

Owns the ``SearchState`` of one search session and keeps three things in
step with it: the query sent to the fetch layer, the URL, and the saved
presets. State is the single source of truth. The URL is read once during
``initialize`` and only written afterwards.

Lifecycle::

    UNINITIALIZED --initialize()--> LOADING_DEFAULTS --> READY

Mutations that arrive before READY are not replayed: only the most recent
one is kept and applied once initialization completes.
"""

import asyncio
import random
from copy import deepcopy
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from config import config
from config.config_loader import get_view_config
from config.constants import (
    SORT_ASC,
    SORT_DESC,
    UNIT_METRIC,
    artifact_type_for_context,
)
from config.logging_config import get_logger
from config.schemas import schema_for
from src.filtering import query_builder, url_codec
from src.filtering.random_sort import is_random_sort, parse_sort_token, reset_seed, seed_for
from src.presets import Preset, PresetDraft, PresetManager
from src.search.errors import (
    DefaultUpdateError,
    DeleteError,
    FetchError,
    SaveError,
    ValidationError,
)
from src.search.state import SearchState, default_state, merge_filters, strip_keys

logger = get_logger("controller")

QueryCallback = Callable[[Dict[str, Any]], None]
UrlCallback = Callable[[str], None]


class ControllerState(Enum):
    """Lifecycle of a search session."""
    UNINITIALIZED = "uninitialized"
    LOADING_DEFAULTS = "loading_defaults"
    READY = "ready"


@dataclass
class PresetActionResult:
    """Outcome of a preset action, with a message fit for display."""

    ok: bool
    message: str
    preset: Optional[Preset] = None


class SearchStateController:
    """
    Orchestrates one search session.

    Args:
        artifact_type: Entity type being browsed. Ignored when ``context``
            names a scene grid, whose presets are always scene presets.
        on_query_change: Called with every accepted, non-duplicate query
        context: Default-preset scope; defaults to the artifact type
        preset_manager: Preset store access; None disables presets
        permanent_filters: Filters the user cannot edit or remove
        initial_sort: Sort used when neither URL nor default preset has one
        url: Query string present when the session starts
        on_url_change: Called with the new query string whenever it changes
        query_gate: Returns False while queries must be held back
        unit_preference: ``metric`` or ``imperial``
        debounce_seconds: Quiet period before search text is applied
        rng: Random source for random-sort seeds
    """

    def __init__(
        self,
        artifact_type: str,
        on_query_change: QueryCallback,
        context: Optional[str] = None,
        preset_manager: Optional[PresetManager] = None,
        permanent_filters: Optional[Mapping[str, Any]] = None,
        initial_sort: Optional[str] = None,
        url: str = "",
        on_url_change: Optional[UrlCallback] = None,
        query_gate: Optional[Callable[[], bool]] = None,
        unit_preference: str = UNIT_METRIC,
        debounce_seconds: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        self.context = context or artifact_type
        self.artifact_type = artifact_type_for_context(self.context)
        self.on_query_change = on_query_change
        self.on_url_change = on_url_change
        self.preset_manager = preset_manager
        self.permanent_filters: Dict[str, Any] = dict(permanent_filters or {})
        self.initial_sort = initial_sort or config.search.initial_sort
        self.unit_preference = unit_preference
        self.schema = schema_for(self.artifact_type, unit_preference)
        self.debounce_seconds = (
            config.search.search_debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self._query_gate = query_gate
        self._gate_opened = False
        self._rng = rng

        self.status = ControllerState.UNINITIALIZED
        self.state: Optional[SearchState] = None
        self.presets: List[Preset] = []
        self.default_ids: Dict[str, Optional[str]] = {}

        self._current_url = url.lstrip("?")
        self._url_defaults = default_state(self.initial_sort)
        self._last_query: Optional[Dict[str, Any]] = None
        self._query_deferred = False
        self._pending_mutation: Optional[Callable[[], None]] = None
        self._debounce_handle: Optional[asyncio.TimerHandle] = None
        self._search_generation = 0
        self._closed = False

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def current_url(self) -> str:
        return self._current_url

    @property
    def last_query(self) -> Optional[Dict[str, Any]]:
        return deepcopy(self._last_query)

    @property
    def default_preset_id(self) -> Optional[str]:
        return self.default_ids.get(self.context)

    @property
    def is_ready(self) -> bool:
        return self.status is ControllerState.READY

    def build_query(self, state: Optional[SearchState] = None) -> Dict[str, Any]:
        """Build the fetch query for a state (the current one by default)."""
        state = state or self.state
        sort_token, _ = seed_for(state.sort_field, state.random_seed, self._rng)
        query = {
            "filter": {
                "page": state.page,
                "per_page": state.per_page,
                "q": state.search_text,
                "sort": sort_token,
                "direction": state.sort_direction,
            },
        }
        filters = merge_filters(state.filters, self.permanent_filters)
        query.update(query_builder.build(self.artifact_type, filters, self.unit_preference))
        return query

    # -------------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------------

    async def initialize(self) -> None:
        """
        Establish the first state and emit the first query.

        A URL carrying anything beyond pagination is authoritative. Otherwise
        the context's default preset is used when one exists, and the
        hardcoded defaults when not. Runs once; later calls do nothing.
        """
        if self.status is not ControllerState.UNINITIALIZED:
            return
        self.status = ControllerState.LOADING_DEFAULTS

        entry_permanent = dict(self.permanent_filters)
        base = default_state(self.initial_sort, entry_permanent)
        if url_codec.has_meaningful_params(self._current_url):
            logger.info(f"Initializing {self.context} search from URL")
            state = url_codec.decode(self._current_url, self.schema, base, self.permanent_filters)
        else:
            state = await self._state_from_default_preset(base)
            if self._closed:
                logger.debug(f"Discarding {self.context} defaults that resolved after close")
                return
            # Permanent filters may have been replaced while the presets loaded
            state = replace(state, filters=strip_keys(state.filters, entry_permanent))
            # Pagination may still come from the URL
            state = url_codec.decode(self._current_url, self.schema, state, self.permanent_filters)

        state = replace(state, filters=merge_filters(state.filters, self.permanent_filters))
        self.state = self._with_seed(state)
        self.status = ControllerState.READY
        self._emit()
        self._sync_url()

        pending, self._pending_mutation = self._pending_mutation, None
        if pending is not None:
            pending()

    async def _state_from_default_preset(self, base: SearchState) -> SearchState:
        if self.preset_manager is None:
            return base
        try:
            defaults, presets = await asyncio.gather(
                self.preset_manager.defaults(),
                self.preset_manager.list(self.artifact_type),
            )
        except FetchError as e:
            logger.warning(f"Using default {self.context} search settings: {e}")
            return base

        self.default_ids = defaults
        self.presets = presets
        preset = PresetManager.resolve_default(self.context, defaults, presets)
        if preset is None:
            logger.info(f"No default preset for {self.context}")
            return base
        logger.info(f"Initializing {self.context} search from default preset '{preset.name}'")
        return self._state_from_preset(preset, base)

    def _state_from_preset(self, preset: Preset, base: SearchState) -> SearchState:
        sort_field = parse_sort_token(preset.sort)[0] if preset.sort else base.sort_field
        if sort_field not in self.schema.sort_values:
            logger.debug(f"Preset '{preset.name}' sorts by unknown field '{sort_field}'")
            sort_field = base.sort_field
        per_page = preset.per_page
        if per_page not in config.search.per_page_options:
            per_page = base.per_page
        view_config = get_view_config()
        return replace(
            base,
            filters=merge_filters(preset.filters, self.permanent_filters),
            sort_field=sort_field,
            sort_direction=preset.direction if preset.direction in (SORT_ASC, SORT_DESC) else base.sort_direction,
            random_seed=reset_seed(),
            page=1,
            per_page=per_page,
            view_mode=preset.view_mode if preset.view_mode in view_config.modes else base.view_mode,
            zoom_level=preset.zoom_level if preset.zoom_level in view_config.zoom_levels else base.zoom_level,
            grid_density=(
                preset.grid_density if preset.grid_density in view_config.grid_densities else base.grid_density
            ),
            table_columns=preset.table_columns if preset.table_columns is not None else base.table_columns,
        )

    # -------------------------------------------------------------------------
    # Emission and URL
    # -------------------------------------------------------------------------

    def _gate_is_open(self) -> bool:
        return self._gate_opened or self._query_gate is None or bool(self._query_gate())

    def _with_seed(self, state: SearchState) -> SearchState:
        _, seed = seed_for(state.sort_field, state.random_seed, self._rng)
        return state if seed == state.random_seed else replace(state, random_seed=seed)

    def _emit(self) -> None:
        if self.status is not ControllerState.READY:
            return
        if not self._gate_is_open():
            if not self._query_deferred:
                logger.debug(f"Holding {self.context} query until the gate opens")
            self._query_deferred = True
            return
        self._query_deferred = False

        query = self.build_query()
        if query == self._last_query:
            logger.debug("Suppressing duplicate query")
            return
        self._last_query = deepcopy(query)
        self.on_query_change(query)

    def _sync_url(self) -> None:
        visible = replace(self.state, filters=strip_keys(self.state.filters, self.permanent_filters))
        encoded = url_codec.encode(visible, self.schema, self._url_defaults)
        if encoded == self._current_url:
            return
        self._current_url = encoded
        if self.on_url_change is not None:
            self.on_url_change(encoded)

    def _commit(self, state: SearchState) -> None:
        if state == self.state:
            return
        self.state = state
        self._emit()
        self._sync_url()

    def _dispatch(self, name: str, apply: Callable[[], None]) -> None:
        if self._closed:
            return
        if self.status is not ControllerState.READY:
            logger.debug(f"Queueing {name} until initialization completes")
            self._pending_mutation = apply
            return
        apply()

    def open_gate(self) -> None:
        """Release queries held back by the query gate."""
        self._gate_opened = True
        if self._query_deferred:
            self._emit()

    # -------------------------------------------------------------------------
    # Filter mutations
    # -------------------------------------------------------------------------

    def _replace_filters(self, filters: Mapping[str, Any]) -> None:
        merged = merge_filters(filters, self.permanent_filters)
        self._commit(replace(self.state, filters=merged, page=1))

    def set_filters(self, partial: Mapping[str, Any]) -> None:
        """Merge a partial filter mapping into the current filters."""
        partial = dict(partial)
        self._dispatch("set_filters", lambda: self._replace_filters({**self.state.filters, **partial}))

    def set_filter(self, key: str, value: Any) -> None:
        self.set_filters({key: value})

    def remove_filter(self, key: str) -> None:
        """Remove one filter and its modifier and depth settings. Permanent filters stay."""
        def apply():
            if key in self.permanent_filters:
                logger.debug(f"Filter '{key}' is permanent and cannot be removed")
                return
            keys = [key]
            filter_field = self.schema.get(key)
            if filter_field is not None:
                keys += [k for k in (filter_field.modifier_key, filter_field.hierarchy_key) if k]
            self._replace_filters(strip_keys(self.state.filters, keys))

        self._dispatch("remove_filter", apply)

    def clear_filters(self) -> None:
        """Remove every user filter. Permanent filters stay."""
        self._dispatch("clear_filters", lambda: self._replace_filters({}))

    def set_permanent_filters(self, permanent_filters: Optional[Mapping[str, Any]]) -> None:
        """Replace the permanent filters and re-run the search from page 1."""
        previous = self.permanent_filters
        self.permanent_filters = dict(permanent_filters or {})
        if self.status is not ControllerState.READY:
            return
        filters = strip_keys(self.state.filters, previous)
        self._replace_filters(filters)
        if self._query_deferred:
            self._emit()

    # -------------------------------------------------------------------------
    # Sort and pagination
    # -------------------------------------------------------------------------

    def set_sort(self, sort_field: str, direction: Optional[str] = None) -> None:
        """
        Change the sort.

        The same field toggles the direction (or sets ``direction``). A new
        field starts descending unless ``direction`` is given. Entering or
        leaving random sort draws a fresh seed.
        """
        sort_field = parse_sort_token(sort_field)[0]

        def apply():
            current = self.state
            if sort_field not in self.schema.sort_values:
                logger.debug(f"Ignoring unknown sort field '{sort_field}'")
                return
            if direction is not None and direction not in (SORT_ASC, SORT_DESC):
                logger.debug(f"Ignoring unknown sort direction '{direction}'")
                return
            if sort_field == current.sort_field:
                new_direction = direction or (SORT_ASC if current.sort_direction == SORT_DESC else SORT_DESC)
                seed = current.random_seed
            else:
                new_direction = direction or config.search.default_direction
                seed = reset_seed()
                if is_random_sort(sort_field) or is_random_sort(current.sort_field):
                    logger.debug("Random sort seed reset")
            state = replace(
                current,
                sort_field=sort_field,
                sort_direction=new_direction,
                random_seed=seed,
                page=1,
            )
            self._commit(self._with_seed(state))

        self._dispatch("set_sort", apply)

    def set_page(self, page: int) -> None:
        def apply():
            if page < 1:
                logger.debug(f"Ignoring page {page}")
                return
            self._commit(replace(self.state, page=page))

        self._dispatch("set_page", apply)

    def set_per_page(self, per_page: int) -> None:
        def apply():
            if per_page not in config.search.per_page_options:
                logger.debug(f"Ignoring per-page value {per_page}")
                return
            if per_page == self.state.per_page:
                return
            self._commit(replace(self.state, per_page=per_page, page=1))

        self._dispatch("set_per_page", apply)

    # -------------------------------------------------------------------------
    # Search text
    # -------------------------------------------------------------------------

    def _cancel_debounce(self) -> None:
        if self._debounce_handle is not None:
            self._debounce_handle.cancel()
            self._debounce_handle = None

    def _apply_search_text(self, text: str) -> None:
        if text == self.state.search_text:
            return
        self._commit(replace(self.state, search_text=text, page=1))

    def _debounced_search(self, text: str, generation: int) -> None:
        self._debounce_handle = None
        if generation != self._search_generation:
            logger.debug("Dropping superseded search text")
            return
        self._dispatch("set_search_text", lambda: self._apply_search_text(text))

    def set_search_text(self, text: str) -> None:
        """
        Update the search text after the debounce period.

        Must be called from a running event loop. Each call supersedes the
        previous pending one.
        """
        self._search_generation += 1
        self._cancel_debounce()
        loop = asyncio.get_running_loop()
        self._debounce_handle = loop.call_later(
            self.debounce_seconds, self._debounced_search, text, self._search_generation
        )

    def clear_search(self) -> None:
        """Clear the search text now, dropping any pending debounced text."""
        self._search_generation += 1
        self._cancel_debounce()
        self._dispatch("clear_search", lambda: self._apply_search_text(""))

    # -------------------------------------------------------------------------
    # View settings (never change the query)
    # -------------------------------------------------------------------------

    def _set_view_attribute(self, name: str, attribute: str, value: Any, allowed) -> None:
        def apply():
            if allowed is not None and value not in allowed:
                logger.debug(f"Ignoring {name} '{value}'")
                return
            self._commit(replace(self.state, **{attribute: value}))

        self._dispatch(name, apply)

    def set_view_mode(self, view_mode: str) -> None:
        self._set_view_attribute("view_mode", "view_mode", view_mode, get_view_config().modes)

    def set_zoom_level(self, zoom_level: str) -> None:
        self._set_view_attribute("zoom_level", "zoom_level", zoom_level, get_view_config().zoom_levels)

    def set_grid_density(self, grid_density: str) -> None:
        self._set_view_attribute(
            "grid_density", "grid_density", grid_density, get_view_config().grid_densities
        )

    def set_table_columns(self, columns: Optional[Tuple[str, ...]]) -> None:
        columns = tuple(columns) if columns is not None else None
        self._set_view_attribute("table_columns", "table_columns", columns, None)

    # -------------------------------------------------------------------------
    # Presets
    # -------------------------------------------------------------------------

    def load_preset(self, preset: Preset) -> None:
        """Apply a preset. Permanent filters win, page resets and random sort reshuffles."""
        def apply():
            logger.info(f"Loading preset '{preset.name}'")
            self._commit(self._with_seed(self._state_from_preset(preset, self.state)))

        self._dispatch("load_preset", apply)

    def _presets_unavailable(self) -> Optional[PresetActionResult]:
        if self.preset_manager is None:
            return PresetActionResult(False, "Presets are not available")
        if self.state is None:
            return PresetActionResult(False, "Search is still loading")
        return None

    def _add_preset(self, preset: Preset) -> None:
        self.presets = [p for p in self.presets if p.id != preset.id] + [preset]

    async def save_preset(self, name: str, set_as_default: bool = False) -> PresetActionResult:
        """Save the current state as a preset. Permanent filters are left out."""
        unavailable = self._presets_unavailable()
        if unavailable:
            return unavailable

        draft = PresetDraft.from_state(
            name, self.state, self.context, self.permanent_filters, set_as_default
        )
        try:
            preset = await self.preset_manager.save(draft)
        except ValidationError as e:
            return PresetActionResult(False, str(e))
        except DefaultUpdateError as e:
            logger.error(str(e))
            self._add_preset(e.preset)
            return PresetActionResult(
                False,
                f"Saved preset '{e.preset.name}', but the default preset was not updated",
                e.preset,
            )
        except SaveError as e:
            logger.error(str(e))
            return PresetActionResult(False, "Failed to save preset. Please try again.")

        self._add_preset(preset)
        if set_as_default:
            self.default_ids = {**self.default_ids, self.context: preset.id}
        return PresetActionResult(True, f"Saved preset '{preset.name}'", preset)

    async def delete_preset(self, preset_id: str) -> PresetActionResult:
        unavailable = self._presets_unavailable()
        if unavailable:
            return unavailable

        try:
            await self.preset_manager.remove(preset_id, self.artifact_type)
        except DeleteError as e:
            logger.error(str(e))
            return PresetActionResult(False, "Failed to delete preset. Please try again.")

        self.presets = [p for p in self.presets if p.id != preset_id]
        self.default_ids = {
            ctx: (None if pid == preset_id else pid) for ctx, pid in self.default_ids.items()
        }
        return PresetActionResult(True, "Preset deleted")

    async def toggle_default(self, preset_id: str) -> PresetActionResult:
        """Make a preset this context's default, or clear it if it already is."""
        unavailable = self._presets_unavailable()
        if unavailable:
            return unavailable

        new_default = None if self.default_preset_id == preset_id else preset_id
        try:
            defaults = await self.preset_manager.set_default(self.context, new_default)
        except SaveError as e:
            logger.error(str(e))
            return PresetActionResult(False, "Failed to update default preset. Please try again.")

        self.default_ids = defaults or {**self.default_ids, self.context: new_default}
        if new_default is None:
            return PresetActionResult(True, "Default preset cleared")
        return PresetActionResult(True, "Default preset updated")

    async def refresh_presets(self) -> PresetActionResult:
        """Reload the preset list and default selections from the store."""
        if self.preset_manager is None:
            return PresetActionResult(False, "Presets are not available")
        try:
            defaults, presets = await asyncio.gather(
                self.preset_manager.defaults(),
                self.preset_manager.list(self.artifact_type),
            )
        except FetchError as e:
            logger.error(str(e))
            return PresetActionResult(False, "Failed to load presets. Please try again.")
        self.default_ids = defaults
        self.presets = presets
        return PresetActionResult(True, f"Loaded {len(presets)} presets")

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """End the session. Pending search text and late init results are discarded."""
        self._closed = True
        self._search_generation += 1
        self._cancel_debounce()
        self._pending_mutation = None
