"""Tests for the preset store endpoints."""


class TestRootEndpoints:
    """Tests for root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Media Browser Preset Store"
        assert data["endpoints"]["presets"] == "/api/presets"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestPresets:
    """Tests for preset listing, creation and deletion."""

    def test_create_returns_stored_preset(self, scene_preset):
        assert scene_preset["id"]
        assert scene_preset["created_at"].endswith("Z")
        assert scene_preset["filters"] == {"rating": {"min": 80}, "tags": ["5", "7:instB"]}
        assert scene_preset["table_columns"] == ["title", "date"]

    def test_list_by_type(self, client, scene_preset):
        response = client.get("/api/presets", params={"type": "scene"})

        assert response.status_code == 200
        assert response.json() == [scene_preset]
        assert response.headers["cache-control"] == "no-store"

    def test_list_other_type_empty(self, client, scene_preset):
        response = client.get("/api/presets", params={"type": "performer"})

        assert response.json() == []

    def test_scene_grid_contexts_share_pool(self, client, scene_preset):
        """Test presets saved from a scene grid context are listed with scene presets."""
        client.post(
            "/api/presets",
            json={"name": "Tag page", "artifact_type": "scene", "context": "scene_tag"},
        )

        names = [p["name"] for p in client.get("/api/presets", params={"type": "scene"}).json()]

        assert names == ["Top rated", "Tag page"]

    def test_name_trimmed(self, client):
        response = client.post(
            "/api/presets",
            json={"name": "  Padded  ", "artifact_type": "tag", "context": "tag"},
        )

        assert response.json()["name"] == "Padded"

    def test_blank_name_rejected(self, client):
        response = client.post(
            "/api/presets",
            json={"name": "   ", "artifact_type": "scene", "context": "scene"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Preset name is required"

    def test_unknown_type_rejected(self, client):
        assert client.get("/api/presets", params={"type": "hologram"}).status_code == 400
        response = client.post(
            "/api/presets",
            json={"name": "X", "artifact_type": "hologram", "context": "scene"},
        )
        assert response.status_code == 400

    def test_context_must_match_type(self, client):
        response = client.post(
            "/api/presets",
            json={"name": "X", "artifact_type": "performer", "context": "scene_tag"},
        )

        assert response.status_code == 400

    def test_missing_type_parameter(self, client):
        assert client.get("/api/presets").status_code == 422

    def test_delete(self, client, scene_preset):
        response = client.delete(f"/api/presets/scene/{scene_preset['id']}")

        assert response.status_code == 204
        assert client.get("/api/presets", params={"type": "scene"}).json() == []

    def test_delete_under_wrong_type(self, client, scene_preset):
        response = client.delete(f"/api/presets/performer/{scene_preset['id']}")

        assert response.status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/api/presets/scene/nope").status_code == 404


class TestDefaults:
    """Tests for per-context default selections."""

    def test_no_defaults(self, client):
        assert client.get("/api/defaults").json() == {}

    def test_set_default_per_context(self, client, scene_preset):
        """Test contexts sharing an artifact type keep separate defaults."""
        client.put("/api/defaults", json={"context": "scene", "preset_id": scene_preset["id"]})
        response = client.put(
            "/api/defaults", json={"context": "scene_tag", "preset_id": scene_preset["id"]}
        )

        assert response.status_code == 200
        assert response.json() == {"scene": scene_preset["id"], "scene_tag": scene_preset["id"]}

    def test_replace_default(self, client, scene_preset):
        other = client.post(
            "/api/presets",
            json={"name": "Newest", "artifact_type": "scene", "context": "scene", "sort": "date"},
        ).json()
        client.put("/api/defaults", json={"context": "scene", "preset_id": scene_preset["id"]})

        response = client.put("/api/defaults", json={"context": "scene", "preset_id": other["id"]})

        assert response.json() == {"scene": other["id"]}

    def test_clear_default(self, client, scene_preset):
        client.put("/api/defaults", json={"context": "scene", "preset_id": scene_preset["id"]})

        response = client.put("/api/defaults", json={"context": "scene", "preset_id": None})

        assert response.json() == {}

    def test_unknown_preset(self, client):
        response = client.put("/api/defaults", json={"context": "scene", "preset_id": "nope"})

        assert response.status_code == 404

    def test_unknown_context(self, client, scene_preset):
        response = client.put(
            "/api/defaults", json={"context": "nowhere", "preset_id": scene_preset["id"]}
        )

        assert response.status_code == 400

    def test_preset_of_other_type_rejected(self, client, scene_preset):
        response = client.put(
            "/api/defaults", json={"context": "performer", "preset_id": scene_preset["id"]}
        )

        assert response.status_code == 400

    def test_delete_clears_default(self, client, scene_preset):
        client.put("/api/defaults", json={"context": "scene_studio", "preset_id": scene_preset["id"]})

        client.delete(f"/api/presets/scene/{scene_preset['id']}")

        assert client.get("/api/defaults").json() == {}


class TestEntryPoint:
    """Tests for the uvicorn entry point."""

    def test_main_configures_logging_before_serving(self, monkeypatch):
        """Test main sets up the media_browser logger and then starts uvicorn."""
        import logging

        from api import main as api_main

        served = []
        monkeypatch.setattr(api_main.uvicorn, "run", lambda app, **kwargs: served.append(app))
        logger = logging.getLogger("media_browser")
        previous = list(logger.handlers)
        try:
            api_main.main()

            assert served == ["api.main:app"]
            assert logger.handlers
            assert logger.level != logging.NOTSET
        finally:
            logger.handlers[:] = previous
            logger.setLevel(logging.NOTSET)
