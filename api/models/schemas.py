"""Pydantic schemas for preset store request/response validation."""

from pydantic import BaseModel, Field
from typing import Any, Optional


class PresetCreate(BaseModel):
    """Body of POST /api/presets."""
    name: str = Field(..., description="Display name, must not be blank")
    artifact_type: str = Field(..., description="scene, performer, studio, tag, group, gallery or image")
    context: str = Field(..., description="Browsing context the preset was saved from")
    filters: dict[str, Any] = Field(default_factory=dict)
    sort: str = ""
    direction: str = "DESC"
    view_mode: Optional[str] = None
    zoom_level: Optional[str] = None
    grid_density: Optional[str] = None
    table_columns: Optional[list[str]] = None
    per_page: Optional[int] = None


class PresetResponse(PresetCreate):
    """A stored preset."""
    id: str
    created_at: str


class DefaultUpdate(BaseModel):
    """Body of PUT /api/defaults. A null preset_id clears the context's default."""
    context: str
    preset_id: Optional[str] = None
