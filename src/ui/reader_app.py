"""
Reader Application Window

Host window for the RSVP reader. Shows the current page (or screen of a
plain-text document) and wires the keyboard to an RSVPSession:

    Return      Start / stop RSVP
    space       Pause / resume
    Left        Step back one unit
    Escape      Stop
    + / -       Speed up / slow down
    [ / ]       Fewer / more preview units
    o           Toggle ORP alignment
    i           Toggle the position indicator
    t           Toggle tap-to-launch
    Next/Prior  Turn page forward / back while stopped

With tap-to-launch enabled, clicking the page starts a session.
"""

import tkinter as tk
from typing import Optional

import ttkbootstrap as ttk

from rsvp.session import RSVPSession
from settings.settings_manager import SettingsManager
from ui.rsvp_overlay import RSVPOverlay
from ui.scheduler import TkScheduler
from utils.structured_logging import get_logger

logger = get_logger(__name__)


class ReaderApp(ttk.Window):
    """Main window hosting a document and its RSVP session."""

    def __init__(self, document, settings_manager: Optional[SettingsManager] = None,
                 title: str = "Fast Reader", themename: str = "darkly"):
        """Initialize the reader window.

        Args:
            document: PagedDocument or ReflowableDocument
            settings_manager: Settings access (a fresh in-memory one if omitted)
            title: Window title
            themename: ttkbootstrap theme
        """
        super().__init__(title=title, themename=themename, size=(900, 700))

        self.document = document
        self.settings_manager = settings_manager or SettingsManager()
        settings = self.settings_manager.settings

        self._create_ui()

        self.overlay = RSVPOverlay(self.page_frame, settings=settings, on_dismiss=self.stop_rsvp)
        self.session = RSVPSession(
            document,
            TkScheduler(self),
            self.overlay,
            notifier=self.overlay,
            settings=settings
        )

        document.add_position_listener(self._refresh_page)
        self._bind_keys()
        self._refresh_page()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _create_ui(self) -> None:
        self.page_frame = ttk.Frame(self, padding=10)
        self.page_frame.pack(fill=tk.BOTH, expand=True)

        self.page_text = tk.Text(self.page_frame, wrap=tk.WORD, font=("Helvetica", 12),
                                 relief=tk.FLAT, padx=12, pady=12)
        self.page_text.pack(fill=tk.BOTH, expand=True)
        self.page_text.bind('<Button-1>', self._on_page_click)

        self.status_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.status_var, bootstyle="secondary",
                  padding=(10, 4)).pack(fill=tk.X, side=tk.BOTTOM)

    def _bind_keys(self) -> None:
        self.bind('<Return>', lambda e: self.toggle_rsvp())
        self.bind('<space>', lambda e: self._toggle_pause())
        self.bind('<Left>', lambda e: self.session.step_back())
        self.bind('<Escape>', lambda e: self.stop_rsvp())
        self.bind('<plus>', lambda e: self._change_speed(up=True))
        self.bind('<equal>', lambda e: self._change_speed(up=True))
        self.bind('<minus>', lambda e: self._change_speed(up=False))
        self.bind('<bracketleft>', lambda e: self._change_preview(-1))
        self.bind('<bracketright>', lambda e: self._change_preview(1))
        self.bind('<Next>', lambda e: self._turn_page(forward=True))
        self.bind('<Prior>', lambda e: self._turn_page(forward=False))

        toggles = {
            'o': ("ORP alignment", self.settings_manager.toggle_ovp_alignment),
            'i': ("Position indicator", self.settings_manager.toggle_position_indicator),
            't': ("Tap to launch", self.settings_manager.toggle_tap_to_launch),
        }
        for key, (label, toggle) in toggles.items():
            for keysym in (key, key.upper()):
                self.bind(f'<Key-{keysym}>',
                          lambda e, name=label, flip=toggle: self._toggle_setting(name, flip))

    # =========================================================================
    # RSVP CONTROL
    # =========================================================================

    def toggle_rsvp(self) -> None:
        self.session.toggle()
        self._update_status()

    def stop_rsvp(self) -> None:
        self.session.stop()
        self._update_status()

    def _toggle_pause(self) -> str:
        self.session.toggle_pause()
        self._update_status()
        return "break"

    def _change_speed(self, up: bool) -> None:
        wpm = self.settings_manager.speed_up() if up else self.settings_manager.speed_down()
        logger.info("Reading speed changed", wpm=wpm)
        self._update_status()

    def _change_preview(self, delta: int) -> None:
        count = self.settings_manager.change_words_preview_count(delta)
        logger.info("Preview count changed", words_preview_count=count)
        self.overlay.info(f"Preview: {count} units")

    def _toggle_setting(self, label: str, toggle) -> None:
        """Flip a boolean setting and confirm the new state on screen.

        The session reads the shared settings model on every tick, so the
        change applies to the next unit shown.
        """
        enabled = toggle()
        logger.info("Setting toggled", setting=label, enabled=enabled)
        if toggle == self.settings_manager.toggle_position_indicator and not enabled:
            self.overlay.hide_position_indicator()
        self.overlay.info(f"{label} {'on' if enabled else 'off'}")

    def _on_page_click(self, event=None) -> Optional[str]:
        if self.settings_manager.is_tap_to_launch_enabled() and not self.session.is_active:
            self.session.start()
            self._update_status()
            return "break"
        return None

    def _turn_page(self, forward: bool = True) -> None:
        if self.session.is_active:
            return
        if forward:
            if not self.document.advance_position():
                self.overlay.info("Already at the last page")
        elif not self.document.retreat_position():
            self.overlay.info("Already at the first page")

    # =========================================================================
    # DISPLAY
    # =========================================================================

    def _refresh_page(self) -> None:
        self.page_text.configure(state=tk.NORMAL)
        self.page_text.delete("1.0", tk.END)
        self.page_text.insert("1.0", self.document.visible_text)
        self.page_text.configure(state=tk.DISABLED)
        self._update_status()

    def _update_status(self) -> None:
        position, _ = self.document.current_fingerprint_inputs()
        self.status_var.set(
            f"{position}  |  {self.settings_manager.get_rsvp_speed()} WPM  |  "
            f"RSVP {self.session.status.value}"
        )

    def _on_close(self) -> None:
        self.session.close()
        self.destroy()


__all__ = ["ReaderApp"]
