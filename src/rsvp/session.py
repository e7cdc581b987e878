"""
RSVP Session State Machine

Drives a reading session over the units of the current page:
- start/stop/toggle, pause/resume, step back
- adaptive per-unit pacing through an external scheduler
- crossing page boundaries (advance, settle, re-segment, continue)
- resuming at the last position when the same page is re-entered

The session is single-threaded: every transition runs either on a user
action or inside a scheduler callback. One callback per role (tick, page
advance, indicator hide) is outstanding at a time and each is cancelled
independently.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from rsvp.fixation import FixationLocator
from rsvp.interfaces import (
    DocumentProtocol,
    NotifierProtocol,
    PresentationProtocol,
    SchedulerProtocol,
)
from rsvp.pacing import PacingModel
from rsvp.resume import ContentFingerprint, ResumeTracker
from rsvp.segmentation import SegmentationEngine, UnitSequence
from settings.settings_models import ReaderSettings
from utils.exceptions import (
    EmptySegmentation,
    EndOfDocument,
    ExtractionFailure,
    ReadingConditionError,
)
from utils.structured_logging import get_logger

logger = get_logger(__name__)

# Delay before re-reading a freshly advanced page, so the viewer can redraw
PAGE_SETTLE_DELAY_MS = 100

# Position indicator auto-hide
INDICATOR_TIMEOUT_MS = 3000


class SessionStatus(Enum):
    """Externally visible session status.

    Only STOPPED and RUNNING are stored; PAUSED is reported for a running
    session that has no tick or page advance outstanding.
    """
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass
class SessionState:
    """Mutable session record, owned by RSVPSession.

    Attributes:
        status: STOPPED or RUNNING
        units: Units of the page being read
        current_index: 1-based index of the unit on screen
        page_fingerprint: Fingerprint of the page the units came from
        tracker: Resume position, kept across stop/start
    """
    status: SessionStatus = SessionStatus.STOPPED
    units: UnitSequence = ()
    current_index: int = 1
    page_fingerprint: Optional[ContentFingerprint] = None
    tracker: ResumeTracker = field(default_factory=ResumeTracker)

    @property
    def total(self) -> int:
        return len(self.units)

    @property
    def current_unit(self) -> Optional[str]:
        if 1 <= self.current_index <= len(self.units):
            return self.units[self.current_index - 1]
        return None

    def load_page(self, units: UnitSequence, fingerprint: ContentFingerprint) -> None:
        self.units = units
        self.current_index = 1
        self.page_fingerprint = fingerprint

    def reset(self) -> None:
        """Drop per-run fields; the resume tracker survives."""
        self.status = SessionStatus.STOPPED
        self.units = ()
        self.current_index = 1
        self.page_fingerprint = None


class RSVPSession:
    """RSVP reading session over a document collaborator.

    Usage:
        session = RSVPSession(document, scheduler, overlay, notifier=overlay)
        session.toggle()        # start reading the current page
        session.toggle_pause()  # pause / resume
        session.step_back()
        session.stop()
    """

    def __init__(
        self,
        document: DocumentProtocol,
        scheduler: SchedulerProtocol,
        presentation: PresentationProtocol,
        notifier: Optional[NotifierProtocol] = None,
        settings: Optional[ReaderSettings] = None,
        segmenter: Optional[SegmentationEngine] = None,
        pacing: Optional[PacingModel] = None,
        locator: Optional[FixationLocator] = None
    ):
        """Initialize the session.

        Args:
            document: Source of page text, fingerprints and page advance
            scheduler: Timer primitive
            presentation: Rendering layer
            notifier: Optional sink for notices and reading conditions
            settings: Reader settings (defaults when omitted); read live
            segmenter: Segmentation engine
            pacing: Pacing model
            locator: Fixation locator
        """
        self.document = document
        self.scheduler = scheduler
        self.presentation = presentation
        self.notifier = notifier
        self.settings = settings or ReaderSettings()
        self.segmenter = segmenter or SegmentationEngine()
        self.pacing = pacing or PacingModel()
        self.locator = locator or FixationLocator()

        self.state = SessionState()

        # One outstanding handle per role
        self._tick_handle: Any = None
        self._advance_handle: Any = None
        self._indicator_handle: Any = None

    # =========================================================================
    # STATUS
    # =========================================================================

    @property
    def status(self) -> SessionStatus:
        if self.state.status is SessionStatus.STOPPED:
            return SessionStatus.STOPPED
        if self._tick_handle is None and self._advance_handle is None:
            return SessionStatus.PAUSED
        return SessionStatus.RUNNING

    @property
    def is_active(self) -> bool:
        """True while running or paused."""
        return self.state.status is SessionStatus.RUNNING

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def units(self) -> UnitSequence:
        return self.state.units

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def start(self) -> bool:
        """Start reading the current page.

        Returns:
            True if the session is running afterwards
        """
        if self.is_active:
            logger.info("RSVP already enabled, ignoring start request")
            return False

        logger.info("Starting RSVP mode")

        try:
            units = self._extract_units()
        except ExtractionFailure as e:
            logger.warning("Cannot start RSVP - text extraction failed", error=e.message)
            self._report(e)
            return False

        if not units:
            logger.warning("Cannot start RSVP - no units extracted")
            self._report(EmptySegmentation("The current page has no readable units"))
            return False

        fingerprint = self._current_fingerprint()
        tracker = self.state.tracker
        resuming = tracker.should_resume(fingerprint)

        self.state.load_page(units, fingerprint)
        self.state.status = SessionStatus.RUNNING

        if resuming:
            self.state.current_index = min(tracker.last_index, len(units))
            logger.info(
                "Resuming from last position",
                index=self.state.current_index,
                total=len(units)
            )
            self._show_position_indicator()
        else:
            logger.info("Starting from beginning", total=len(units))

        unit = self.state.current_unit
        delay = self.pacing.interval(unit, self.settings.rsvp_speed)
        logger.info(
            "RSVP adaptive interval",
            unit=unit,
            length=len(unit),
            interval_ms=delay,
            wpm=self.settings.rsvp_speed
        )
        self._schedule_tick(delay)
        self._render_current()

        logger.info("RSVP started successfully")
        return True

    def tick(self) -> None:
        """Advance to the next unit, crossing to the next page when exhausted."""
        if not self.is_active or not self.state.units:
            return

        self.state.current_index += 1

        if self.state.current_index <= self.state.total:
            unit = self.state.current_unit
            self._render_current()
            self._schedule_tick(self.pacing.interval(unit, self.settings.rsvp_speed))
        else:
            logger.info("End of current page, attempting to go to next page")
            self._advance_page()

    def stop(self) -> bool:
        """Stop the session, remembering the position for a later resume.

        Idempotent.

        Returns:
            True if the session was active
        """
        if not self.is_active:
            return False

        logger.info("Stopping RSVP mode")

        state = self.state
        if state.units and state.current_index > 1 and state.page_fingerprint is not None:
            index = min(state.current_index, state.total)
            state.tracker.record_position(state.page_fingerprint, index)
            logger.info("Updated last read position", index=index)

        self._cancel_tick()
        self._cancel_page_advance()
        self._cancel_indicator()

        state.reset()

        self.presentation.hide_position_indicator()
        self.presentation.dismiss()
        self._info("RSVP stopped")
        return True

    def toggle(self) -> bool:
        """Start when stopped, otherwise stop.

        Returns:
            True if the session is active afterwards
        """
        if self.is_active:
            self.stop()
        else:
            self.start()
        return self.is_active

    def pause(self) -> bool:
        """Cancel the scheduled tick without moving."""
        if not self.is_active or self._tick_handle is None:
            return False
        self._cancel_tick()
        logger.debug("RSVP paused", index=self.state.current_index)
        self._info("RSVP paused")
        return True

    def resume(self) -> bool:
        """Reschedule a tick after a paused interval.

        Uses the fixed ``60000 / wpm`` interval rather than the adaptive one.
        """
        if not self.is_active or self._tick_handle is not None or self._advance_handle is not None:
            return False
        delay = self.pacing.fixed_interval(self.settings.rsvp_speed)
        self._schedule_tick(delay)
        logger.debug("RSVP resumed", index=self.state.current_index, interval_ms=delay)
        self._info("RSVP resumed")
        return True

    def toggle_pause(self) -> bool:
        """Pause when a tick is scheduled, otherwise resume.

        Returns:
            True if the transition happened
        """
        if self._tick_handle is not None:
            return self.pause()
        return self.resume()

    def step_back(self) -> bool:
        """Go back one unit without touching the schedule."""
        if not self.is_active or self.state.current_index <= 1:
            return False
        self.state.current_index -= 1
        self._render_current()
        return True

    def close(self) -> None:
        """Release the session when the host document closes."""
        self.stop()

    # =========================================================================
    # PAGE ADVANCE
    # =========================================================================

    def _advance_page(self) -> None:
        if not self.document.advance_position():
            logger.info("Already at the end of the document")
            self.stop()
            self._report(EndOfDocument("Reached the end of the document"))
            return

        logger.info("Moved to next page, waiting for it to settle")
        self._cancel_page_advance()
        self._advance_handle = self.scheduler.schedule_after(
            PAGE_SETTLE_DELAY_MS, self._on_page_settled
        )

    def _on_page_settled(self) -> None:
        self._advance_handle = None
        self.continue_with_new_page()

    def continue_with_new_page(self) -> None:
        """Re-segment the newly advanced page and carry on reading.

        A blank page (or one whose text cannot be extracted) triggers another
        advance instead of ending the session.
        """
        if not self.is_active:
            return

        try:
            units = self._extract_units()
        except ExtractionFailure as e:
            logger.warning("Text extraction failed on new page", error=e.message)
            units = ()

        if not units:
            logger.warning("No units extracted from new page, trying next page")
            self._advance_page()
            return

        self.state.load_page(units, self._current_fingerprint())
        self.state.tracker.clear()
        logger.info("Extracted units from new page", total=len(units))

        unit = self.state.current_unit
        self._render_current()
        self._schedule_tick(self.pacing.interval(unit, self.settings.rsvp_speed))

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _extract_units(self) -> UnitSequence:
        text = self.document.extract_page_text()
        units = self.segmenter.segment(text)
        logger.info("Extracted units from current page", chars=len(text), units=len(units))
        return units

    def _current_fingerprint(self) -> ContentFingerprint:
        return ContentFingerprint.from_inputs(self.document.current_fingerprint_inputs())

    def _render_current(self) -> None:
        unit = self.state.current_unit
        if not unit:
            return
        start = self.state.current_index
        following = max(self.settings.words_preview_count - 1, 0)
        preview = self.state.units[start:start + following]
        point = self.locator.locate(unit)
        self.presentation.render(
            unit,
            preview,
            point.prefix,
            point.anchor_char,
            self.settings.ovp_alignment_enabled
        )

    def _show_position_indicator(self) -> None:
        if not self.settings.show_position_indicator or self.state.current_index <= 1:
            return
        self._cancel_indicator()
        self.presentation.hide_position_indicator()
        self.presentation.show_position_indicator(self.state.current_index, self.state.total)
        self._indicator_handle = self.scheduler.schedule_after(
            INDICATOR_TIMEOUT_MS, self._on_indicator_timeout
        )

    def _on_indicator_timeout(self) -> None:
        self._indicator_handle = None
        self.presentation.hide_position_indicator()

    def _schedule_tick(self, delay_ms: int) -> None:
        self._cancel_tick()
        self._tick_handle = self.scheduler.schedule_after(delay_ms, self._on_tick_timer)

    def _on_tick_timer(self) -> None:
        self._tick_handle = None
        self.tick()

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self.scheduler.cancel(self._tick_handle)
            self._tick_handle = None

    def _cancel_page_advance(self) -> None:
        if self._advance_handle is not None:
            self.scheduler.cancel(self._advance_handle)
            self._advance_handle = None

    def _cancel_indicator(self) -> None:
        if self._indicator_handle is not None:
            self.scheduler.cancel(self._indicator_handle)
            self._indicator_handle = None

    def _info(self, message: str) -> None:
        if self.notifier is not None:
            self.notifier.info(message)

    def _report(self, condition: ReadingConditionError) -> None:
        logger.info("Reading condition", code=condition.error_code, message=condition.message)
        if self.notifier is not None:
            self.notifier.report(condition)


__all__ = [
    'RSVPSession',
    'SessionState',
    'SessionStatus',
    'PAGE_SETTLE_DELAY_MS',
    'INDICATOR_TIMEOUT_MS',
]
