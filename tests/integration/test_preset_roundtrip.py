"""Integration tests: controller and preset manager against the real preset store app."""

import asyncio

import httpx
import pytest

from api.config import get_settings
from api.main import app
from src.presets import PresetManager, PresetStoreClient
from src.search.controller import SearchStateController


@pytest.fixture
def presets_db(tmp_path, monkeypatch):
    monkeypatch.setenv("MEDIA_PRESETS_DB_PATH", str(tmp_path / "presets.db"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def store_manager() -> PresetManager:
    client = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver/api"
    )
    return PresetManager(client=PresetStoreClient(client=client, retry_wait=0))


@pytest.mark.usefixtures("presets_db")
class TestPresetRoundTrip:
    """Tests for saving a preset in one session and starting from it in the next."""

    def test_saved_default_starts_next_session(self):
        first_queries = []
        second_queries = []

        async def scenario():
            first = SearchStateController(
                "scene",
                first_queries.append,
                context="scene_studio",
                preset_manager=store_manager(),
                permanent_filters={"studio": "12"},
            )
            await first.initialize()
            first.set_filters({"rating": {"min": 80}, "tags": ["5", "7:instB"]})
            first.set_sort("title")
            result = await first.save_preset("Studio favourites", set_as_default=True)
            assert result.ok, result.message

            second = SearchStateController(
                "scene",
                second_queries.append,
                context="scene_studio",
                preset_manager=store_manager(),
                permanent_filters={"studio": "34"},
            )
            await second.initialize()
            return result.preset, second

        preset, second = asyncio.run(scenario())

        assert preset.filters == {"rating": {"min": 80}, "tags": ["5", "7:instB"]}
        assert second.default_preset_id == preset.id
        query = second_queries[0]
        assert query["filter"]["sort"] == "title"
        assert query["scene_filter"]["rating100"] == {"modifier": "GREATER_THAN", "value": 79}
        assert query["scene_filter"]["studios"]["value"] == ["34"]
        assert query["scene_filter"]["tags"]["value"] == ["5", "7:instB"]

    def test_default_is_per_context(self):
        async def scenario():
            manager = store_manager()
            session = SearchStateController(
                "scene", lambda query: None, context="scene_tag", preset_manager=manager
            )
            await session.initialize()
            saved = await session.save_preset("Tag pages", set_as_default=True)

            plain = SearchStateController("scene", lambda query: None, preset_manager=store_manager())
            await plain.initialize()
            deleted = await session.delete_preset(saved.preset.id)
            defaults = await manager.defaults()
            return saved, plain, deleted, defaults

        saved, plain, deleted, defaults = asyncio.run(scenario())

        assert plain.default_preset_id is None
        assert [p.id for p in plain.presets] == [saved.preset.id]
        assert deleted.ok
        assert defaults == {}
