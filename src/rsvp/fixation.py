"""
Optimal Recognition Point (ORP) location.

The ORP is the character the reader's eye should rest on. Short units are
anchored near their start, longer ones roughly a third of the way in. The
core only picks the character; measuring its horizontal centre
(``prefix_width + anchor_width / 2``) is left to the presentation layer,
which owns the font metrics.
"""

from dataclasses import dataclass
from typing import Tuple

# Anchor index (1-based) for units of 1..8 characters; 9 and longer use the cap
ORP_INDEX_TABLE: Tuple[int, ...] = (1, 1, 2, 2, 3, 3, 4, 4)
ORP_INDEX_CAP = 5


@dataclass(frozen=True)
class FixationPoint:
    """Anchor data for one unit.

    Attributes:
        prefix: Characters strictly before the anchor, concatenated
        anchor_char: The anchor character itself ("" for an empty unit)
        anchor_index: 1-based position of the anchor within the unit
    """
    prefix: str
    anchor_char: str
    anchor_index: int


def optimal_recognition_index(char_count: int) -> int:
    """Look up the 1-based anchor index for a unit length."""
    if char_count <= 1:
        return 1
    if char_count > len(ORP_INDEX_TABLE):
        return ORP_INDEX_CAP
    return ORP_INDEX_TABLE[char_count - 1]


def locate(unit: str) -> FixationPoint:
    """Compute the fixation point for a display unit.

    Args:
        unit: Display unit

    Returns:
        FixationPoint with the prefix, anchor character and anchor index
    """
    chars = list(unit)
    anchor_index = optimal_recognition_index(len(chars))
    prefix = "".join(chars[:anchor_index - 1])
    anchor_char = chars[anchor_index - 1] if chars else ""
    return FixationPoint(prefix=prefix, anchor_char=anchor_char, anchor_index=anchor_index)


class FixationLocator:
    """Stateless facade over :func:`locate`."""

    def locate(self, unit: str) -> FixationPoint:
        return locate(unit)


__all__ = ['FixationPoint', 'FixationLocator', 'locate', 'optimal_recognition_index', 'ORP_INDEX_TABLE']
