"""Presets module: preset store client and preset manager."""

from .store_client import PresetStoreClient
from .manager import Preset, PresetDraft, PresetManager
