"""
RSVP Pacing

Converts a base words-per-minute rate into the delay before advancing past a
unit. Longer units (multi-character Chinese segments in particular) get
proportionally more fixation time: every character beyond the first adds 20%
of the base interval.
"""

import math
from fractions import Fraction

MS_PER_MINUTE = 60000

# Extra share of the base interval per character beyond the first
PER_CHARACTER_FACTOR = Fraction(1, 5)


def _base_interval(wpm: float) -> Fraction:
    if wpm <= 0:
        raise ValueError(f"Reading rate must be positive, got {wpm}")
    return MS_PER_MINUTE / Fraction(wpm)


def adaptive_factor(char_count: int) -> Fraction:
    """Scale factor for a unit of ``char_count`` characters."""
    if char_count <= 1:
        return Fraction(1)
    return 1 + (char_count - 1) * PER_CHARACTER_FACTOR


def interval(unit: str, wpm: float) -> int:
    """Calculate the display delay for a unit.

    Computed exactly, then floored, so results do not drift with float
    rounding.

    Args:
        unit: Display unit (word or segment)
        wpm: Base rate in words per minute

    Returns:
        Delay in milliseconds

    Example:
        >>> interval("a", 250)
        240
        >>> interval("abc", 250)
        336
    """
    char_count = max(len(unit), 1)
    return math.floor(_base_interval(wpm) * adaptive_factor(char_count))


def fixed_interval(wpm: float) -> int:
    """Unscaled delay, used when playback is resumed by hand."""
    return math.floor(_base_interval(wpm))


class PacingModel:
    """Stateless facade over :func:`interval`."""

    def interval(self, unit: str, wpm: float) -> int:
        return interval(unit, wpm)

    def fixed_interval(self, wpm: float) -> int:
        return fixed_interval(wpm)


__all__ = ['PacingModel', 'interval', 'fixed_interval', 'adaptive_factor']
