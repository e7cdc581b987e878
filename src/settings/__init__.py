"""
Settings package for Fast Reader.

This package provides settings management including:
- ReaderSettings model with range validation
- SettingsManager class for typed, validated access over a store
- MemorySettingsStore, the default in-process store
"""

from settings.settings_models import ReaderSettings, SETTING_KEYS, validate_settings
from settings.settings_manager import SettingsManager
from settings.settings_store import MemorySettingsStore

__all__ = [
    "ReaderSettings",
    "SETTING_KEYS",
    "validate_settings",
    "SettingsManager",
    "MemorySettingsStore",
]
