"""
Reading position tracking for resume-on-reentry.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ContentFingerprint:
    """Opaque identity of "the same page/position of the same document".

    Compared by value only; nothing inspects the fields.
    """
    position: Any
    document: Any

    @classmethod
    def from_inputs(cls, inputs) -> "ContentFingerprint":
        """Build from a document's ``(position, identity)`` pair."""
        position, document = inputs
        return cls(position=position, document=document)


class ResumeTracker:
    """Remembers where reading stopped on a given page.

    Attributes:
        last_fingerprint: Fingerprint recorded at the last stop, if any
        last_index: 1-based unit index recorded with it
    """

    def __init__(self):
        self.last_fingerprint: Optional[ContentFingerprint] = None
        self.last_index: int = 1

    def should_resume(self, fingerprint: ContentFingerprint) -> bool:
        """True iff the fingerprint matches the recorded one and reading had moved past the first unit."""
        return self.last_fingerprint == fingerprint and self.last_index > 1

    def record_position(self, fingerprint: ContentFingerprint, index: int) -> None:
        self.last_fingerprint = fingerprint
        self.last_index = index

    def clear(self) -> None:
        self.last_fingerprint = None
        self.last_index = 1


__all__ = ['ContentFingerprint', 'ResumeTracker']
