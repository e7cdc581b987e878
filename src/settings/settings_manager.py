"""
Centralized settings management for Fast Reader.

This module provides a SettingsManager class that sits between the reader and
a settings store, providing type safety, validation, and a consistent API.

Usage:
    from settings import MemorySettingsStore, SettingsManager

    manager = SettingsManager(MemorySettingsStore({"rsvp_speed": 300}))

    # Typed access
    manager.speed_up()
    manager.toggle_ovp_alignment()

    # The live model handed to a session
    session = RSVPSession(..., settings=manager.settings)
"""

from typing import Any, Optional

from pydantic import ValidationError

from rsvp.interfaces import SettingsStoreProtocol
from settings.settings_models import (
    MAX_PREVIEW,
    MAX_WPM,
    MIN_PREVIEW,
    MIN_WPM,
    SETTING_KEYS,
    WPM_STEP,
    ReaderSettings,
    ValidationResult,
    validate_settings,
)
from settings.settings_store import MemorySettingsStore
from utils.exceptions import ConfigurationError
from utils.structured_logging import get_logger

logger = get_logger(__name__)


class SettingsManager:
    """Validated settings access on top of a key/value store.

    The manager owns a single ReaderSettings instance. Sessions hold a
    reference to it, so changes made here are seen on their next tick.

    Attributes:
        store: Backing settings store
        settings: Live, validated settings model
        last_validation: Result of the most recent load
    """

    def __init__(self, store: Optional[SettingsStoreProtocol] = None) -> None:
        self.store = store if store is not None else MemorySettingsStore()
        self.settings = ReaderSettings()
        self.last_validation = ValidationResult()
        self.load()

    # =========================================================================
    # Loading
    # =========================================================================

    def load(self) -> ValidationResult:
        """Load every known key from the store, keeping defaults for bad values."""
        raw = {key: self.store.load(key) for key in SETTING_KEYS}
        validated, result = validate_settings(raw)

        for warning in result.warnings:
            logger.warning(f"Settings: {warning}")
        for error in result.errors:
            logger.error(f"Settings: {error}")

        for key in SETTING_KEYS:
            setattr(self.settings, key, validated[key])

        self.last_validation = result
        logger.debug("Settings loaded", **{key: validated[key] for key in SETTING_KEYS})
        return result

    # =========================================================================
    # Basic Access Methods
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value.

        Args:
            key: Setting key (e.g., "rsvp_speed")
            default: Returned for unknown keys

        Returns:
            Setting value or default
        """
        if key not in SETTING_KEYS:
            return default
        return getattr(self.settings, key)

    def set(self, key: str, value: Any, auto_save: bool = True) -> None:
        """Set a setting value.

        Args:
            key: Setting key
            value: New value
            auto_save: Whether to save and flush immediately

        Raises:
            ConfigurationError: If the key is unknown or the value is invalid
        """
        if key not in SETTING_KEYS:
            raise ConfigurationError(f"Unknown setting: {key}", field=key, error_code="CFG_INVALID_SETTINGS")
        try:
            setattr(self.settings, key, value)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid value for {key}: {value!r}",
                field=key,
                error_code="CFG_INVALID_SETTINGS",
                details={"errors": e.errors()}
            ) from e

        logger.debug("Setting changed", key=key, value=value)
        if auto_save:
            self.store.save(key, getattr(self.settings, key))
            self.store.flush()

    # =========================================================================
    # Typed Accessors
    # =========================================================================

    def get_rsvp_speed(self) -> int:
        return self.settings.rsvp_speed

    def set_rsvp_speed(self, wpm: int) -> int:
        """Set the reading rate, clamped to the supported range.

        Returns:
            The rate actually stored
        """
        wpm = max(MIN_WPM, min(MAX_WPM, int(wpm)))
        self.set("rsvp_speed", wpm)
        return wpm

    def speed_up(self) -> int:
        return self.set_rsvp_speed(self.settings.rsvp_speed + WPM_STEP)

    def speed_down(self) -> int:
        return self.set_rsvp_speed(self.settings.rsvp_speed - WPM_STEP)

    def get_words_preview_count(self) -> int:
        return self.settings.words_preview_count

    def change_words_preview_count(self, delta: int) -> int:
        """Grow or shrink the preview by ``delta`` units, within 1..10.

        Returns:
            The count actually stored
        """
        count = max(MIN_PREVIEW, min(MAX_PREVIEW, self.settings.words_preview_count + delta))
        self.set("words_preview_count", count)
        return count

    def is_ovp_alignment_enabled(self) -> bool:
        return self.settings.ovp_alignment_enabled

    def toggle_ovp_alignment(self) -> bool:
        self.set("ovp_alignment_enabled", not self.settings.ovp_alignment_enabled)
        return self.settings.ovp_alignment_enabled

    def is_position_indicator_enabled(self) -> bool:
        return self.settings.show_position_indicator

    def toggle_position_indicator(self) -> bool:
        self.set("show_position_indicator", not self.settings.show_position_indicator)
        return self.settings.show_position_indicator

    def is_tap_to_launch_enabled(self) -> bool:
        return self.settings.tap_to_launch_enabled

    def toggle_tap_to_launch(self) -> bool:
        self.set("tap_to_launch_enabled", not self.settings.tap_to_launch_enabled)
        return self.settings.tap_to_launch_enabled


__all__ = ["SettingsManager"]
