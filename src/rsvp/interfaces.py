"""
Interface definitions for the RSVP session's collaborators.

The session never talks to a concrete viewer, toolkit or settings file; it
depends on these Protocol classes. Using them enables:
- Testing the state machine with plain fakes and mocks
- Swapping the Tk adapters for another host
- Keeping font metrics and persistence out of the core
"""

from typing import Any, Callable, Protocol, Sequence, Tuple

from utils.exceptions import ReadingConditionError


class DocumentProtocol(Protocol):
    """Protocol for the host document viewer."""

    def extract_page_text(self) -> str:
        """Return raw text for the current page or view.

        Raises:
            ExtractionFailure: If no text could be produced
        """
        ...

    def current_fingerprint_inputs(self) -> Tuple[Any, Any]:
        """Return ``(position discriminator, document identity)``."""
        ...

    def advance_position(self) -> bool:
        """Move to the next page or scroll step; False at the end."""
        ...


class SchedulerProtocol(Protocol):
    """Protocol for the timer primitive."""

    def schedule_after(self, duration_ms: int, callback: Callable[[], None]) -> Any:
        """Run callback after duration_ms and return a cancel handle."""
        ...

    def cancel(self, handle: Any) -> None:
        """Cancel a scheduled callback; it must not run afterwards."""
        ...


class PresentationProtocol(Protocol):
    """Protocol for the rendering layer."""

    def render(
        self,
        unit: str,
        preview_units: Sequence[str],
        fixation_prefix: str,
        fixation_anchor: str,
        anchor_enabled: bool
    ) -> None:
        """Draw the current unit and its following preview units."""
        ...

    def show_position_indicator(self, current_index: int, total_count: int) -> None:
        ...

    def hide_position_indicator(self) -> None:
        ...

    def dismiss(self) -> None:
        """Remove every RSVP artifact from the screen."""
        ...


class NotifierProtocol(Protocol):
    """Protocol for user-visible notices."""

    def info(self, message: str) -> None:
        """Show a transient informational notice."""
        ...

    def report(self, condition: ReadingConditionError) -> None:
        """Surface a condition that ended the current reading attempt."""
        ...


class SettingsStoreProtocol(Protocol):
    """Protocol for scalar key/value settings persistence."""

    def load(self, key: str, default: Any = None) -> Any:
        ...

    def save(self, key: str, value: Any) -> None:
        ...

    def flush(self) -> None:
        ...
