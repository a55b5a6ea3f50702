"""API Pydantic models."""

from api.models.schemas import (
    PresetCreate,
    PresetResponse,
    DefaultUpdate,
)

__all__ = [
    "PresetCreate",
    "PresetResponse",
    "DefaultUpdate",
]
