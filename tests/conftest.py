"""Pytest configuration and fixtures for search state engine tests."""

import asyncio
import random
from copy import deepcopy

import httpx
import pytest

from config.schemas import schema_for
from src.presets import PresetManager
from src.search.controller import SearchStateController


class FakePresetStore:
    """In-memory stand-in for PresetStoreClient with the store's server-side rules."""

    def __init__(self):
        self.presets = {}
        self.defaults = {}
        self.calls = []
        self.fail_reads = False
        self.fail_writes = False
        self.read_delay = 0.0
        self._next_id = 1

    def add_preset(self, name, artifact_type="scene", context=None, **fields):
        """Store a preset directly and return it."""
        preset = {
            "id": f"p{self._next_id}",
            "name": name,
            "artifact_type": artifact_type,
            "context": context or artifact_type,
            "filters": {},
            "sort": "",
            "direction": "DESC",
            "view_mode": None,
            "zoom_level": None,
            "grid_density": None,
            "table_columns": None,
            "per_page": None,
            "created_at": "2024-01-01T00:00:00Z",
        }
        preset.update(fields)
        self._next_id += 1
        self.presets[preset["id"]] = preset
        return deepcopy(preset)

    async def _read(self, call):
        self.calls.append(call)
        if self.read_delay:
            await asyncio.sleep(self.read_delay)
        if self.fail_reads:
            raise httpx.ConnectError("preset store unreachable")

    def _write(self, call):
        self.calls.append(call)
        if self.fail_writes:
            raise httpx.ConnectError("preset store unreachable")

    async def list_presets(self, artifact_type):
        await self._read(("list", artifact_type))
        return [deepcopy(p) for p in self.presets.values() if p["artifact_type"] == artifact_type]

    async def get_defaults(self):
        await self._read(("defaults",))
        return dict(self.defaults)

    async def create_preset(self, payload):
        self._write(("create", payload["name"]))
        fields = {k: v for k, v in payload.items() if k not in ("name", "artifact_type", "context")}
        return self.add_preset(payload["name"], payload["artifact_type"], payload["context"], **fields)

    async def delete_preset(self, artifact_type, preset_id):
        self._write(("delete", artifact_type, preset_id))
        del self.presets[preset_id]
        self.defaults = {c: p for c, p in self.defaults.items() if p != preset_id}

    async def put_default(self, context, preset_id):
        self._write(("put_default", context, preset_id))
        if preset_id is None:
            self.defaults.pop(context, None)
        else:
            self.defaults[context] = preset_id
        return dict(self.defaults)

    async def aclose(self):
        pass


@pytest.fixture
def fake_store():
    """Empty in-memory preset store."""
    return FakePresetStore()


@pytest.fixture
def scene_schema():
    return schema_for("scene")


@pytest.fixture
def performer_schema():
    return schema_for("performer")


class ControllerHarness:
    """A controller plus everything it emitted."""

    def __init__(self, controller, queries, urls):
        self.controller = controller
        self.queries = queries
        self.urls = urls


@pytest.fixture
def make_controller():
    """Factory building a controller that records queries and URL writes."""

    def _make(artifact_type="scene", store=None, **kwargs):
        queries = []
        urls = []
        kwargs.setdefault("debounce_seconds", 0.01)
        kwargs.setdefault("rng", random.Random(7))
        controller = SearchStateController(
            artifact_type,
            queries.append,
            preset_manager=PresetManager(client=store) if store is not None else None,
            on_url_change=urls.append,
            **kwargs,
        )
        return ControllerHarness(controller, queries, urls)

    return _make
