"""Saved presets and per-context default selections.

Presets are pooled per artifact type; defaults are chosen per context. All
scene grid contexts (``scene_performer``, ``scene_tag``...) therefore share
the scene presets while each keeps its own default.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from config.constants import VALID_CONTEXTS, artifact_type_for_context
from config.logging_config import get_logger
from src.search.errors import (
    DefaultUpdateError,
    DeleteError,
    FetchError,
    SaveError,
    ValidationError,
)
from src.search.state import SearchState, strip_keys
from .store_client import PresetStoreClient

logger = get_logger("presets")

# Failures of a store call: transport and HTTP status errors, plus bodies that
# are not JSON (ValueError) or not shaped like presets
STORE_ERRORS = (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError)


@dataclass
class Preset:
    """A named, saved snapshot of filters, sort and view settings."""

    id: str
    name: str
    artifact_type: str
    context: str
    filters: Dict[str, Any] = field(default_factory=dict)
    sort: str = ""
    direction: str = "DESC"
    view_mode: Optional[str] = None
    zoom_level: Optional[str] = None
    grid_density: Optional[str] = None
    table_columns: Optional[Tuple[str, ...]] = None
    per_page: Optional[int] = None
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Preset":
        columns = data.get("table_columns")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            artifact_type=data["artifact_type"],
            context=data.get("context") or data["artifact_type"],
            filters=dict(data.get("filters") or {}),
            sort=data.get("sort") or "",
            direction=data.get("direction") or "DESC",
            view_mode=data.get("view_mode"),
            zoom_level=data.get("zoom_level"),
            grid_density=data.get("grid_density"),
            table_columns=tuple(columns) if columns is not None else None,
            per_page=data.get("per_page"),
            created_at=data.get("created_at"),
        )


@dataclass
class PresetDraft:
    """A preset about to be saved. Permanent filters are stripped on save."""

    name: str
    artifact_type: str
    context: str
    filters: Dict[str, Any] = field(default_factory=dict)
    sort: str = ""
    direction: str = "DESC"
    view_mode: Optional[str] = None
    zoom_level: Optional[str] = None
    grid_density: Optional[str] = None
    table_columns: Optional[Tuple[str, ...]] = None
    per_page: Optional[int] = None
    permanent_filters: Dict[str, Any] = field(default_factory=dict)
    set_as_default: bool = False

    @classmethod
    def from_state(
        cls,
        name: str,
        state: SearchState,
        context: str,
        permanent_filters: Optional[Mapping[str, Any]] = None,
        set_as_default: bool = False,
    ) -> "PresetDraft":
        """Snapshot the current search state."""
        return cls(
            name=name,
            artifact_type=artifact_type_for_context(context),
            context=context,
            filters=dict(state.filters),
            sort=state.sort_field,
            direction=state.sort_direction,
            view_mode=state.view_mode,
            zoom_level=state.zoom_level,
            grid_density=state.grid_density,
            table_columns=state.table_columns,
            per_page=state.per_page,
            permanent_filters=dict(permanent_filters or {}),
            set_as_default=set_as_default,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Request body for the store, without the permanent filter keys."""
        payload = asdict(self)
        payload.pop("permanent_filters")
        payload.pop("set_as_default")
        payload["name"] = self.name.strip()
        payload["filters"] = strip_keys(self.filters, self.permanent_filters)
        if self.table_columns is not None:
            payload["table_columns"] = list(self.table_columns)
        return payload


class PresetManager:
    """Preset CRUD and default selection on top of the preset store."""

    def __init__(self, client: Optional[PresetStoreClient] = None):
        self.client = client or PresetStoreClient()

    @staticmethod
    def artifact_type_for_context(context: str) -> str:
        return artifact_type_for_context(context)

    async def list(self, artifact_type: str) -> List[Preset]:
        """
        List the saved presets of an artifact type.

        Raises:
            FetchError: If the store cannot be read
        """
        try:
            data = await self.client.list_presets(artifact_type)
            return [Preset.from_dict(item) for item in data or []]
        except STORE_ERRORS as e:
            raise FetchError(f"Could not load {artifact_type} presets: {e!r}") from e

    async def defaults(self) -> Dict[str, Optional[str]]:
        """
        Get the default preset id for every context that has one set.

        Raises:
            FetchError: If the store cannot be read
        """
        try:
            data = await self.client.get_defaults()
            return dict(data or {})
        except STORE_ERRORS as e:
            raise FetchError(f"Could not load default presets: {e!r}") from e

    @staticmethod
    def resolve_default(
        context: str,
        defaults: Mapping[str, Optional[str]],
        presets: List[Preset],
    ) -> Optional[Preset]:
        """Pick the context's default out of an already fetched preset list."""
        preset_id = defaults.get(context)
        if preset_id is None:
            return None
        for preset in presets:
            if preset.id == str(preset_id):
                return preset
        logger.debug(f"Default preset {preset_id} for {context} no longer exists")
        return None

    async def default_for(self, context: str) -> Optional[Preset]:
        """
        Get the default preset of a context, or None when none is set.

        Raises:
            FetchError: If the store cannot be read
        """
        defaults = await self.defaults()
        if defaults.get(context) is None:
            return None
        presets = await self.list(artifact_type_for_context(context))
        return self.resolve_default(context, defaults, presets)

    async def save(self, draft: PresetDraft) -> Preset:
        """
        Save a new preset, optionally making it the default of its context.

        Raises:
            ValidationError: If the name is empty. Nothing is sent.
            SaveError: If the store rejects or cannot receive the preset
            DefaultUpdateError: If the preset was saved but the default
                update failed. The saved preset is on the error.
        """
        if not draft.name or not draft.name.strip():
            raise ValidationError("Preset name is required")
        if draft.context not in VALID_CONTEXTS:
            raise ValidationError(f"Unknown context: {draft.context}")

        try:
            data = await self.client.create_preset(draft.to_payload())
            preset = Preset.from_dict(data)
        except STORE_ERRORS as e:
            raise SaveError(f"Could not save preset '{draft.name.strip()}': {e!r}") from e
        logger.info(f"Saved {preset.artifact_type} preset '{preset.name}' ({preset.id})")

        if draft.set_as_default:
            try:
                await self.set_default(draft.context, preset.id)
            except SaveError as e:
                raise DefaultUpdateError(str(e), preset) from e
        return preset

    async def remove(self, preset_id: str, artifact_type: str) -> None:
        """
        Delete a preset. The store clears any default pointing at it.

        Raises:
            DeleteError: If the store rejects or cannot receive the request
        """
        try:
            await self.client.delete_preset(artifact_type, preset_id)
        except STORE_ERRORS as e:
            raise DeleteError(f"Could not delete preset {preset_id}: {e!r}") from e
        logger.info(f"Deleted {artifact_type} preset {preset_id}")

    async def set_default(self, context: str, preset_id: Optional[str]) -> Dict[str, Optional[str]]:
        """
        Set or clear (``preset_id=None``) the default preset of a context.

        Raises:
            SaveError: If the store rejects or cannot receive the update
        """
        try:
            data = await self.client.put_default(context, preset_id)
            return dict(data or {})
        except STORE_ERRORS as e:
            raise SaveError(f"Could not update default preset for {context}: {e!r}") from e
