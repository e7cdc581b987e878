"""
RSVP Reading Engine

This package provides the toolkit-independent core of the RSVP (Rapid Serial
Visual Presentation) reader:

- segmentation.py: SegmentationEngine - Latin word / Chinese clause splitting
- pacing.py: PacingModel - Adaptive per-unit intervals from a WPM rate
- fixation.py: FixationLocator - Optimal Recognition Point selection
- resume.py: ResumeTracker, ContentFingerprint - Resume-on-reentry
- session.py: RSVPSession - The start/tick/pause/stop state machine
- interfaces.py: Collaborator protocols (document, scheduler, presentation)
"""

from .segmentation import SegmentationEngine, UnitSequence, segment
from .pacing import PacingModel, interval, fixed_interval
from .fixation import FixationLocator, FixationPoint, locate
from .resume import ContentFingerprint, ResumeTracker
from .session import RSVPSession, SessionState, SessionStatus

__all__ = [
    'SegmentationEngine',
    'UnitSequence',
    'segment',
    'PacingModel',
    'interval',
    'fixed_interval',
    'FixationLocator',
    'FixationPoint',
    'locate',
    'ContentFingerprint',
    'ResumeTracker',
    'RSVPSession',
    'SessionState',
    'SessionStatus',
]
