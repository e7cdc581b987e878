"""
RSVP Text Segmentation

Splits text extracted from the current page into display units:
- Latin-script text is split into words with edge punctuation stripped
- Chinese text is split into clause-like segments driven by punctuation
  semantics (split after terminators, before opening marks, and keep a
  closing mark glued to an adjacent terminator)
"""

import string
import unicodedata
from typing import List, Tuple

from utils.structured_logging import get_logger

logger = get_logger(__name__)

UnitSequence = Tuple[str, ...]

# Presence of any of these marks routes text to the Chinese path
CHINESE_MARKERS = frozenset("。！？；，：")

# Split after the character
AFTER_SPLIT = frozenset("。！？；…，、\n")

# Split before the character (it opens a new segment)
BEFORE_SPLIT = frozenset("“《〈【（ ")

# Split after, unless paired with an adjacent terminator
CLOSING_MARKS = frozenset("”》〉】）")


def contains_chinese_text(text: str) -> bool:
    """Check whether text carries full-width Chinese punctuation."""
    return any(char in CHINESE_MARKERS for char in text)


def _has_content(segment: str) -> bool:
    return bool(segment) and not segment.isspace()


def _is_punctuation(char: str) -> bool:
    return char in string.punctuation or unicodedata.category(char).startswith("P")


def _strip_punctuation(token: str) -> str:
    start = 0
    end = len(token)
    while start < end and _is_punctuation(token[start]):
        start += 1
    while end > start and _is_punctuation(token[end - 1]):
        end -= 1
    return token[start:end]


def split_latin_words(text: str) -> List[str]:
    """Split text on whitespace and strip leading/trailing punctuation.

    Interior punctuation survives, so "don't" and "Foo-bar" stay whole.
    Tokens that are pure punctuation are dropped.
    """
    words = []
    for token in text.split():
        word = _strip_punctuation(token)
        if word:
            words.append(word)
    return words


def split_chinese_segments(text: str) -> List[str]:
    """Split Chinese text into punctuation-delimited segments.

    Single left-to-right scan with one character of lookahead:

    1. An opening mark (or plain space) closes the pending segment and
       starts a new one with itself.
    2. A closing mark next to a terminator, in either order, is taken as one
       atomic unit: both characters are appended and the segment is emitted.
    3. A lone closing mark or terminator is appended and the segment emitted.
    4. Anything else accumulates.

    Whitespace-only segments are never emitted. If nothing was emitted but
    the input has content, the whole input is returned as one segment.

    Args:
        text: Raw page text

    Returns:
        Segments in reading order
    """
    segments: List[str] = []
    current = ""
    length = len(text)
    i = 0

    while i < length:
        char = text[i]
        next_char = text[i + 1] if i + 1 < length else None

        if char in BEFORE_SPLIT:
            if _has_content(current):
                segments.append(current)
                current = char
            else:
                current += char
        elif next_char is not None and (
            (char in CLOSING_MARKS and next_char in AFTER_SPLIT)
            or (char in AFTER_SPLIT and next_char in CLOSING_MARKS)
        ):
            current += char + next_char
            if _has_content(current):
                segments.append(current)
                current = ""
            i += 2
            continue
        elif char in CLOSING_MARKS or char in AFTER_SPLIT:
            current += char
            if _has_content(current):
                segments.append(current)
                current = ""
        else:
            current += char

        i += 1

    if _has_content(current):
        segments.append(current)

    if not segments and _has_content(text):
        segments.append(text)

    return segments


def segment(text: str) -> UnitSequence:
    """Segment page text into an immutable sequence of display units.

    Total: returns an empty sequence for empty or whitespace-only input.
    """
    if not text or text.isspace():
        return ()

    if contains_chinese_text(text):
        units = split_chinese_segments(text)
        logger.debug("Chinese text detected, using sentence splitting", units=len(units))
    else:
        units = split_latin_words(text)
        logger.debug("Latin text detected, using word splitting", units=len(units))

    return tuple(units)


class SegmentationEngine:
    """Stateless facade over :func:`segment` for injection into a session."""

    def segment(self, text: str) -> UnitSequence:
        return segment(text)


__all__ = [
    'UnitSequence',
    'SegmentationEngine',
    'segment',
    'contains_chinese_text',
    'split_latin_words',
    'split_chinese_segments',
]
