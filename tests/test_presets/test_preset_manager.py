"""Tests for the preset manager and preset store client."""

import asyncio
import json

import httpx
import pytest

from src.presets import Preset, PresetDraft, PresetManager, PresetStoreClient
from src.search.errors import (
    DefaultUpdateError,
    DeleteError,
    FetchError,
    SaveError,
    ValidationError,
)
from src.search.state import SearchState

PRESET = {
    "id": "p1",
    "name": "Top rated",
    "artifact_type": "scene",
    "context": "scene",
    "filters": {"rating": {"min": 80}},
    "sort": "rating",
    "direction": "DESC",
    "view_mode": "grid",
    "zoom_level": None,
    "grid_density": None,
    "table_columns": ["title", "date"],
    "per_page": 40,
    "created_at": "2024-01-01T00:00:00Z",
}


class StoreStub:
    """Scripted preset store: responses are consumed per request, the last one repeats."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses[0] if len(self.responses) == 1 else self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def manager(self) -> PresetManager:
        client = httpx.AsyncClient(
            base_url="http://store/api", transport=httpx.MockTransport(self)
        )
        return PresetManager(
            client=PresetStoreClient(client=client, retry_attempts=3, retry_wait=0)
        )

    def body(self, index=-1):
        return json.loads(self.requests[index].content)


def run(coro):
    return asyncio.run(coro)


class TestListing:
    """Tests for reading presets and defaults."""

    def test_list_presets(self):
        store = StoreStub(httpx.Response(200, json=[PRESET]))

        presets = run(store.manager().list("scene"))

        assert presets == [Preset.from_dict(PRESET)]
        assert presets[0].table_columns == ("title", "date")
        assert store.requests[0].url.path == "/api/presets"
        assert store.requests[0].url.params["type"] == "scene"

    def test_server_error_retried(self):
        """Test a 5xx read is retried and the later success returned."""
        store = StoreStub(httpx.Response(503), httpx.Response(200, json={"scene": "p1"}))

        defaults = run(store.manager().defaults())

        assert defaults == {"scene": "p1"}
        assert len(store.requests) == 2

    def test_client_error_not_retried(self):
        store = StoreStub(httpx.Response(404))

        with pytest.raises(FetchError):
            run(store.manager().list("scene"))
        assert len(store.requests) == 1

    def test_unreachable_store_gives_up(self):
        """Test connection failures are retried up to the attempt limit."""
        store = StoreStub(httpx.ConnectError("connection refused"))

        with pytest.raises(FetchError):
            run(store.manager().defaults())
        assert len(store.requests) == 3

    def test_default_for_context(self):
        """Test a scene grid context resolves its default from the scene pool."""
        second = {**PRESET, "id": "p2", "name": "Recent", "context": "scene_tag"}
        store = StoreStub(
            httpx.Response(200, json={"scene_tag": "p2"}),
            httpx.Response(200, json=[PRESET, second]),
        )

        preset = run(store.manager().default_for("scene_tag"))

        assert preset.id == "p2"
        assert store.requests[1].url.params["type"] == "scene"

    def test_default_for_context_without_default(self):
        store = StoreStub(httpx.Response(200, json={"scene": "p1"}))

        assert run(store.manager().default_for("performer")) is None
        assert len(store.requests) == 1

    def test_non_json_body_is_fetch_error(self):
        """Test an HTML page from a proxy in front of the store fails the read cleanly."""
        store = StoreStub(httpx.Response(200, text="<html>proxy</html>"))
        manager = store.manager()

        with pytest.raises(FetchError):
            run(manager.defaults())
        with pytest.raises(FetchError):
            run(manager.list("scene"))
        assert len(store.requests) == 2

    @pytest.mark.parametrize(
        "body",
        [[{"name": "No id"}], [None], {"scene": "p1"}, "text"],
    )
    def test_malformed_presets_are_fetch_error(self, body):
        store = StoreStub(httpx.Response(200, json=body))

        with pytest.raises(FetchError):
            run(store.manager().list("scene"))

    def test_malformed_defaults_are_fetch_error(self):
        store = StoreStub(httpx.Response(200, json=[1, 2]))

        with pytest.raises(FetchError):
            run(store.manager().defaults())

    def test_stale_default_resolves_to_none(self):
        presets = [Preset.from_dict(PRESET)]

        assert PresetManager.resolve_default("scene", {"scene": "gone"}, presets) is None
        assert PresetManager.resolve_default("scene", {"scene": "p1"}, presets) == presets[0]


class TestSaving:
    """Tests for creating presets."""

    def test_permanent_filters_not_persisted(self):
        """Test a permanent studio filter is left out of the saved snapshot."""
        store = StoreStub(httpx.Response(201, json={**PRESET, "id": "p9"}))
        state = SearchState(filters={"studio": "12", "rating": {"min": 80}})
        draft = PresetDraft.from_state(
            "  Top rated  ", state, "scene_studio", permanent_filters={"studio": "12"}
        )

        preset = run(store.manager().save(draft))

        body = store.body()
        assert body["filters"] == {"rating": {"min": 80}}
        assert body["name"] == "Top rated"
        assert body["artifact_type"] == "scene"
        assert body["context"] == "scene_studio"
        assert preset.id == "p9"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected_without_request(self, name):
        store = StoreStub(httpx.Response(201, json=PRESET))
        draft = PresetDraft.from_state(name, SearchState(), "scene")

        with pytest.raises(ValidationError, match="Preset name is required"):
            run(store.manager().save(draft))
        assert store.requests == []

    def test_unknown_context_rejected(self):
        store = StoreStub(httpx.Response(201, json=PRESET))
        draft = PresetDraft.from_state("Mine", SearchState(), "scene_nowhere")

        with pytest.raises(ValidationError):
            run(store.manager().save(draft))
        assert store.requests == []

    def test_save_as_default(self):
        store = StoreStub(
            httpx.Response(201, json=PRESET),
            httpx.Response(200, json={"scene": "p1"}),
        )
        draft = PresetDraft.from_state("Top rated", SearchState(), "scene", set_as_default=True)

        run(store.manager().save(draft))

        assert store.requests[1].method == "PUT"
        assert store.body() == {"context": "scene", "preset_id": "p1"}

    def test_save_failure_sent_once(self):
        """Test writes are never retried."""
        store = StoreStub(httpx.Response(500))
        draft = PresetDraft.from_state("Top rated", SearchState(), "scene")

        with pytest.raises(SaveError):
            run(store.manager().save(draft))
        assert len(store.requests) == 1


    def test_non_json_save_response_is_save_error(self):
        store = StoreStub(httpx.Response(201, text="<html>proxy</html>"))
        draft = PresetDraft.from_state("Top rated", SearchState(), "scene")

        with pytest.raises(SaveError):
            run(store.manager().save(draft))

    def test_default_update_failure_after_save(self):
        """Test the saved preset is still handed back when making it default fails."""
        store = StoreStub(
            httpx.Response(201, json={**PRESET, "id": "p9"}),
            httpx.ConnectError("connection refused"),
        )
        draft = PresetDraft.from_state("Top rated", SearchState(), "scene", set_as_default=True)

        with pytest.raises(DefaultUpdateError) as excinfo:
            run(store.manager().save(draft))

        assert isinstance(excinfo.value, SaveError)
        assert excinfo.value.preset.id == "p9"
        assert [r.method for r in store.requests] == ["POST", "PUT"]

class TestDeletingAndDefaults:
    """Tests for deleting presets and changing default selections."""

    def test_delete(self):
        store = StoreStub(httpx.Response(204))

        run(store.manager().remove("p1", "scene"))

        assert store.requests[0].method == "DELETE"
        assert store.requests[0].url.path == "/api/presets/scene/p1"

    def test_delete_missing_preset(self):
        store = StoreStub(httpx.Response(404, json={"detail": "Preset not found"}))

        with pytest.raises(DeleteError):
            run(store.manager().remove("p404", "scene"))

    def test_clear_default(self):
        store = StoreStub(httpx.Response(200, json={}))

        defaults = run(store.manager().set_default("scene", None))

        assert defaults == {}
        assert store.body() == {"context": "scene", "preset_id": None}

    def test_default_update_failure(self):
        store = StoreStub(httpx.ConnectError("connection refused"))

        with pytest.raises(SaveError):
            run(store.manager().set_default("scene", "p1"))
        assert len(store.requests) == 1
