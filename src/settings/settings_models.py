"""
Pydantic Settings Validation Models

This module provides runtime validation for reader settings using Pydantic.
It catches configuration errors early (typos, out-of-range values) and
provides clear error messages.

Usage:
    from settings.settings_models import validate_settings

    raw = {key: store.load(key) for key in SETTING_KEYS}
    validated, result = validate_settings(raw)
    for warning in result.warnings:
        logger.warning(f"Settings: {warning}")
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError


# =============================================================================
# Validation Result
# =============================================================================

@dataclass
class ValidationResult:
    """Result of settings validation."""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    unknown_keys: List[str] = field(default_factory=list)


# =============================================================================
# Reader Settings
# =============================================================================

MIN_WPM = 50
MAX_WPM = 2000
WPM_STEP = 25
MIN_PREVIEW = 1
MAX_PREVIEW = 10


class ReaderSettings(BaseModel):
    """RSVP reader settings.

    Assignments are validated, so a session holding this object never sees
    an out-of-range rate or preview count.
    """
    model_config = ConfigDict(extra="allow", validate_assignment=True)

    rsvp_speed: int = Field(default=250, ge=MIN_WPM, le=MAX_WPM)
    words_preview_count: int = Field(default=3, ge=MIN_PREVIEW, le=MAX_PREVIEW)
    ovp_alignment_enabled: bool = True
    show_position_indicator: bool = True
    tap_to_launch_enabled: bool = False
    display_width_percent: int = Field(default=90, ge=10, le=100)
    display_height_percent: int = Field(default=25, ge=10, le=100)


SETTING_KEYS: Tuple[str, ...] = tuple(ReaderSettings.model_fields.keys())


# =============================================================================
# Validation Functions
# =============================================================================

def _describe(error: Dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', 'invalid value')}"


def validate_settings(settings_dict: Dict[str, Any]) -> Tuple[Dict[str, Any], ValidationResult]:
    """
    Validate a settings dictionary against ReaderSettings.

    Invalid values are reported as errors and replaced by their defaults;
    the remaining values are kept. Unknown keys and likely typos produce
    warnings.

    Args:
        settings_dict: Raw settings dictionary (None values mean "unset")

    Returns:
        Tuple of (validated settings dict, ValidationResult)
    """
    result = ValidationResult()
    candidate = {key: value for key, value in settings_dict.items() if value is not None}

    known_keys = set(SETTING_KEYS)
    for key in candidate:
        if key not in known_keys and not key.startswith("_"):
            result.unknown_keys.append(key)

    if result.unknown_keys:
        result.warnings.append(
            f"Unknown settings keys (may be typos): {', '.join(result.unknown_keys[:5])}"
            + (f" (+{len(result.unknown_keys) - 5} more)" if len(result.unknown_keys) > 5 else "")
        )

    _check_common_typos(candidate, result)

    try:
        validated = ReaderSettings(**candidate)
    except ValidationError as e:
        result.is_valid = False
        bad_keys = set()
        for error in e.errors():
            result.errors.append(f"Validation failed: {_describe(error)}")
            if error.get("loc"):
                bad_keys.add(error["loc"][0])
        cleaned = {key: value for key, value in candidate.items() if key not in bad_keys}
        validated = ReaderSettings(**cleaned)

    return validated.model_dump(), result


def _check_common_typos(settings_dict: Dict[str, Any], result: ValidationResult) -> None:
    """Check for common typos in settings keys."""
    typo_suggestions = {
        "rsvp_sped": "rsvp_speed",
        "wpm": "rsvp_speed",
        "words_preview": "words_preview_count",
        "preview_count": "words_preview_count",
        "ovp_alignment": "ovp_alignment_enabled",
        "show_position": "show_position_indicator",
        "tap_to_launch": "tap_to_launch_enabled",
    }

    for key in settings_dict:
        if key in typo_suggestions:
            result.warnings.append(
                f"Possible typo: '{key}' - did you mean '{typo_suggestions[key]}'?"
            )


def get_settings_schema() -> Dict[str, Any]:
    """Get JSON schema for the reader settings."""
    return ReaderSettings.model_json_schema()


__all__ = [
    "ReaderSettings",
    "ValidationResult",
    "SETTING_KEYS",
    "MIN_WPM",
    "MAX_WPM",
    "WPM_STEP",
    "MIN_PREVIEW",
    "MAX_PREVIEW",
    "validate_settings",
    "get_settings_schema",
]
