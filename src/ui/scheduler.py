"""
Tk-backed scheduler for the RSVP session.

Wraps ``widget.after`` / ``widget.after_cancel`` so the session can run its
tick, page-settle and indicator timers on the Tk event loop.
"""

import tkinter as tk
from typing import Callable, Optional

from utils.structured_logging import get_logger

logger = get_logger(__name__)


class TkScheduler:
    """SchedulerProtocol implementation on top of a Tk widget."""

    def __init__(self, widget: tk.Misc):
        self.widget = widget

    def schedule_after(self, duration_ms: int, callback: Callable[[], None]) -> str:
        return self.widget.after(max(int(duration_ms), 0), callback)

    def cancel(self, handle: Optional[str]) -> None:
        if handle is None:
            return
        try:
            self.widget.after_cancel(handle)
        except tk.TclError as e:
            # Widget already destroyed; nothing left to cancel
            logger.debug("after_cancel failed", handle=handle, error=str(e))


__all__ = ["TkScheduler"]
