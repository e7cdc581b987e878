"""
RSVP Overlay

Canvas overlay drawn on top of the reader window while a session runs:
- Current unit with the ORP character highlighted and centred under a
  crosshair, wrapped onto several lines when too wide
- Following preview units in a secondary colour
- "index/total" position indicator in the top-right corner
- Transient notices and reading-condition reports

Implements both PresentationProtocol and NotifierProtocol.
"""

import tkinter as tk
import tkinter.font as tkfont
from typing import Callable, List, Optional, Sequence

import ttkbootstrap as ttk

from settings.settings_models import ReaderSettings
from utils.error_codes import get_error_message
from utils.exceptions import ReadingConditionError
from utils.structured_logging import get_logger

logger = get_logger(__name__)

NOTICE_TIMEOUT_MS = 2000
REPORT_TIMEOUT_MS = 4000

INDICATOR_TAG = "position_indicator"
CROSSHAIR_TAG = "crosshair"
CROSSHAIR_COLOR = "#BBBBBB"
CROSSHAIR_ARM = 15

# Horizontal room kept free on each side of the current unit
WRAP_MARGIN = 20
MAX_WRAPPED_LINES = 4


def wrap_by_width(
    text: str,
    measure: Callable[[str], int],
    max_width: int,
    max_lines: int = MAX_WRAPPED_LINES
) -> List[str]:
    """Break a unit that is too wide for the overlay into lines.

    Characters are added greedily while the measured line fits. The last
    character always stays on the current line, and once ``max_lines`` is
    reached everything left goes onto the final line.

    Args:
        text: Unit to wrap
        measure: Width of a string in pixels (e.g. ``Font.measure``)
        max_width: Available width in pixels
        max_lines: Upper bound on the number of lines returned

    Returns:
        The lines, at least one
    """
    if not text:
        return [""]

    lines: List[str] = []
    current = ""
    for i, char in enumerate(text):
        candidate = current + char
        is_last = i == len(text) - 1
        if (current and measure(candidate) > max_width
                and not is_last and len(lines) < max_lines - 1):
            lines.append(current)
            current = char
        else:
            current = candidate
    lines.append(current)
    return lines


class OverlayTheme:
    """Color theme definitions for the overlay."""

    DARK = {
        'bg': "#1E1E1E",
        'text': "#FFFFFF",
        'orp': "#FF6B6B",
        'preview': "#888888",
        'indicator': "#AAAAAA",
    }

    LIGHT = {
        'bg': "#F5F5F5",
        'text': "#1E1E1E",
        'orp': "#E53935",
        'preview': "#777777",
        'indicator': "#555555",
    }

    @classmethod
    def get_colors(cls, dark_theme: bool) -> dict:
        return cls.DARK if dark_theme else cls.LIGHT


class RSVPOverlay:
    """Overlay window for RSVP display on top of a host widget."""

    def __init__(
        self,
        parent: tk.Misc,
        settings: Optional[ReaderSettings] = None,
        on_dismiss: Optional[Callable[[], None]] = None,
        dark_theme: bool = True,
        font_size: int = 36
    ):
        """Initialize the overlay.

        Args:
            parent: Host widget the overlay is placed over
            settings: Reader settings (display size is read on each render)
            on_dismiss: Called when the user clicks the overlay
            dark_theme: Use the dark color theme
            font_size: Point size of the current unit
        """
        self.parent = parent
        self.settings = settings or ReaderSettings()
        self.on_dismiss = on_dismiss
        self.colors = OverlayTheme.get_colors(dark_theme)
        self.font_size = font_size

        self.frame: Optional[tk.Frame] = None
        self.canvas: Optional[tk.Canvas] = None
        self.notice_label: Optional[ttk.Label] = None
        self._notice_timer: Optional[str] = None

        self._unit_font: Optional[tkfont.Font] = None
        self._preview_font: Optional[tkfont.Font] = None
        self._indicator_font: Optional[tkfont.Font] = None

    @property
    def is_visible(self) -> bool:
        return self.frame is not None

    # =========================================================================
    # PRESENTATION
    # =========================================================================

    def render(
        self,
        unit: str,
        preview_units: Sequence[str],
        fixation_prefix: str,
        fixation_anchor: str,
        anchor_enabled: bool
    ) -> None:
        """Draw the current unit and its preview units.

        A unit wider than the overlay is wrapped by character and drawn
        centred without the anchor highlight.
        """
        self._ensure_canvas()
        canvas = self.canvas
        canvas.delete("unit")
        canvas.delete(CROSSHAIR_TAG)

        width = max(canvas.winfo_width(), canvas.winfo_reqwidth())
        height = max(canvas.winfo_height(), canvas.winfo_reqheight())
        center_x = width // 2
        unit_y = height // 2 - (self.font_size // 3 if preview_units else 0)
        font = self._unit_font

        if anchor_enabled:
            self._draw_crosshair(center_x, height)

        lines = [unit]
        if font.measure(unit) > width - 2 * WRAP_MARGIN:
            lines = wrap_by_width(unit, font.measure, width - 2 * WRAP_MARGIN)

        if len(lines) > 1:
            line_height = font.metrics("linespace")
            top_y = unit_y - line_height * (len(lines) - 1) / 2
            for i, line in enumerate(lines):
                canvas.create_text(center_x, top_y + i * line_height, text=line, font=font,
                                   fill=self.colors['text'], anchor=tk.CENTER, tags="unit")
            unit_y = top_y + line_height * (len(lines) - 1)
        elif anchor_enabled and fixation_anchor:
            # Centre the anchor character, not the unit
            start_x = center_x - (font.measure(fixation_prefix) + font.measure(fixation_anchor) / 2)
            suffix = unit[len(fixation_prefix) + len(fixation_anchor):]
            x = start_x
            for text, color in (
                (fixation_prefix, self.colors['text']),
                (fixation_anchor, self.colors['orp']),
                (suffix, self.colors['text']),
            ):
                if text:
                    canvas.create_text(x, unit_y, text=text, font=font, fill=color,
                                       anchor=tk.W, tags="unit")
                x += font.measure(text)
        else:
            canvas.create_text(center_x, unit_y, text=unit, font=font,
                               fill=self.colors['text'], anchor=tk.CENTER, tags="unit")

        if preview_units:
            canvas.create_text(
                center_x, unit_y + self.font_size + 8,
                text=" ".join(preview_units),
                font=self._preview_font,
                fill=self.colors['preview'],
                anchor=tk.CENTER,
                tags="unit"
            )

    def show_position_indicator(self, current_index: int, total_count: int) -> None:
        self._ensure_canvas()
        self.canvas.delete(INDICATOR_TAG)
        width = max(self.canvas.winfo_width(), self.canvas.winfo_reqwidth())
        self.canvas.create_text(
            width - 10, 10,
            text=f"{current_index}/{total_count}",
            font=self._indicator_font,
            fill=self.colors['indicator'],
            anchor=tk.NE,
            tags=INDICATOR_TAG
        )

    def hide_position_indicator(self) -> None:
        if self.canvas is not None:
            self.canvas.delete(INDICATOR_TAG)

    def dismiss(self) -> None:
        """Remove the overlay from the host window."""
        if self.frame is not None:
            self.frame.destroy()
        self.frame = None
        self.canvas = None

    # =========================================================================
    # NOTIFIER
    # =========================================================================

    def info(self, message: str) -> None:
        logger.debug("Notice", message=message)
        self._show_notice(message, NOTICE_TIMEOUT_MS)

    def report(self, condition: ReadingConditionError) -> None:
        title, message = get_error_message(condition.error_code)
        logger.info("Reporting reading condition", code=condition.error_code, title=title)
        self._show_notice(f"{title}\n{message}", REPORT_TIMEOUT_MS)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _ensure_canvas(self) -> None:
        if self.canvas is not None:
            return

        if self._unit_font is None:
            self._unit_font = tkfont.Font(family="Helvetica", size=self.font_size, weight="bold")
            self._preview_font = tkfont.Font(family="Helvetica", size=max(self.font_size // 2, 10))
            self._indicator_font = tkfont.Font(family="Helvetica", size=10)

        self.frame = tk.Frame(self.parent, bg=self.colors['bg'])
        self.frame.place(
            relx=0.5, rely=0.5, anchor=tk.CENTER,
            relwidth=self.settings.display_width_percent / 100,
            relheight=self.settings.display_height_percent / 100
        )
        self.canvas = tk.Canvas(self.frame, bg=self.colors['bg'], highlightthickness=0)
        self.canvas.pack(fill=tk.BOTH, expand=True)
        self.canvas.bind('<Button-1>', self._on_click)
        self.frame.update_idletasks()

    def _draw_crosshair(self, center_x: int, height: int) -> None:
        # Vertical line through the anchor column with a short arm at mid-height
        self.canvas.create_line(center_x, 0, center_x, height,
                                fill=CROSSHAIR_COLOR, tags=CROSSHAIR_TAG)
        self.canvas.create_line(center_x - CROSSHAIR_ARM, height // 2,
                                center_x + CROSSHAIR_ARM, height // 2,
                                fill=CROSSHAIR_COLOR, tags=CROSSHAIR_TAG)

    def _on_click(self, event=None) -> None:
        if self.on_dismiss is not None:
            self.on_dismiss()
        else:
            self.dismiss()

    def _show_notice(self, text: str, timeout_ms: int) -> None:
        if self._notice_timer is not None:
            self.parent.after_cancel(self._notice_timer)
            self._notice_timer = None

        if self.notice_label is None:
            self.notice_label = ttk.Label(self.parent, text=text, bootstyle="inverse-secondary",
                                          padding=(12, 6), justify=tk.CENTER)
        else:
            self.notice_label.configure(text=text)
        self.notice_label.place(relx=0.5, rely=0.95, anchor=tk.S)
        self.notice_label.lift()
        self._notice_timer = self.parent.after(timeout_ms, self._hide_notice)

    def _hide_notice(self) -> None:
        self._notice_timer = None
        if self.notice_label is not None:
            self.notice_label.place_forget()


__all__ = ["RSVPOverlay", "OverlayTheme", "wrap_by_width"]
