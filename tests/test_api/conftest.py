"""Pytest fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from api.config import get_settings
from api.main import app


@pytest.fixture
def presets_db(tmp_path, monkeypatch):
    """Point the preset store at a fresh database file."""
    db_path = tmp_path / "presets.db"
    monkeypatch.setenv("MEDIA_PRESETS_DB_PATH", str(db_path))
    get_settings.cache_clear()
    yield db_path
    get_settings.cache_clear()


@pytest.fixture
def client(presets_db):
    """Create a TestClient for the FastAPI application."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def scene_preset(client):
    """A saved scene preset."""
    response = client.post(
        "/api/presets",
        json={
            "name": "Top rated",
            "artifact_type": "scene",
            "context": "scene",
            "filters": {"rating": {"min": 80}, "tags": ["5", "7:instB"]},
            "sort": "rating",
            "direction": "DESC",
            "table_columns": ["title", "date"],
            "per_page": 40,
        },
    )
    assert response.status_code == 201
    return response.json()
