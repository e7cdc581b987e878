"""
Tk tests for the RSVP overlay.

Skipped automatically when no display is available.
"""

import pytest
from unittest.mock import MagicMock

from utils.exceptions import EndOfDocument


@pytest.fixture
def overlay(tk_root):
    import tkinter as tk
    from ui.rsvp_overlay import RSVPOverlay

    frame = tk.Frame(tk_root, width=600, height=400)
    frame.pack()
    overlay = RSVPOverlay(frame)
    yield overlay
    overlay.dismiss()
    frame.destroy()


def canvas_texts(canvas, tag="unit"):
    return [canvas.itemcget(item, "text") for item in canvas.find_withtag(tag)]


class TestRSVPOverlay:

    def test_render_splits_anchor(self, overlay):
        """Test the unit is drawn as prefix, anchor and suffix, then the preview."""
        overlay.render("reading", ("fast",), "rea", "d", True)

        texts = canvas_texts(overlay.canvas)
        assert texts == ["rea", "d", "ing", "fast"]

    def test_anchor_is_highlighted(self, overlay):
        """Test the anchor character uses the ORP colour."""
        overlay.render("reading", (), "rea", "d", True)
        items = overlay.canvas.find_withtag("unit")
        assert overlay.canvas.itemcget(items[1], "fill") == overlay.colors['orp']

    def test_render_without_anchor_draws_whole_unit(self, overlay):
        """Test alignment off draws the unit as one item."""
        overlay.render("reading", (), "rea", "d", False)
        assert canvas_texts(overlay.canvas) == ["reading"]

    def test_rerender_replaces_unit(self, overlay):
        """Test each render clears the previous unit."""
        overlay.render("one", (), "o", "n", True)
        overlay.render("two", (), "t", "w", True)
        assert "one" not in "".join(canvas_texts(overlay.canvas))

    def test_crosshair_follows_alignment(self, overlay):
        """Test the crosshair is drawn through the centre only with alignment on."""
        overlay.render("reading", (), "rea", "d", True)
        lines = overlay.canvas.find_withtag("crosshair")
        assert len(lines) == 2

        width = max(overlay.canvas.winfo_width(), overlay.canvas.winfo_reqwidth())
        x0, _, x1, _ = overlay.canvas.coords(lines[0])
        assert x0 == x1 == width // 2

        overlay.render("reading", (), "rea", "d", False)
        assert overlay.canvas.find_withtag("crosshair") == ()

    def test_wide_unit_is_wrapped(self, overlay):
        """Test a unit wider than the overlay is split over several lines."""
        unit = "x" * 200
        overlay.render(unit, (), "x" * 60, "x", True)

        texts = canvas_texts(overlay.canvas)
        assert 1 < len(texts) <= 4
        assert "".join(texts) == unit

    def test_position_indicator(self, overlay):
        """Test the indicator shows index/total and can be hidden."""
        overlay.render("word", (), "w", "o", True)
        overlay.show_position_indicator(5, 9)
        assert canvas_texts(overlay.canvas, "position_indicator") == ["5/9"]

        overlay.hide_position_indicator()
        assert canvas_texts(overlay.canvas, "position_indicator") == []

    def test_dismiss(self, overlay):
        """Test dismiss removes the overlay and is idempotent."""
        overlay.render("word", (), "w", "o", True)
        overlay.dismiss()
        assert overlay.is_visible is False
        overlay.dismiss()

    def test_click_calls_on_dismiss(self, overlay):
        """Test a click hands dismissal to the host."""
        overlay.on_dismiss = MagicMock()
        overlay.render("word", (), "w", "o", True)
        overlay._on_click()
        overlay.on_dismiss.assert_called_once()

    def test_info_and_report_show_notice(self, overlay):
        """Test notices and reading-condition reports reach the notice label."""
        overlay.info("RSVP paused")
        assert overlay.notice_label.cget("text") == "RSVP paused"

        overlay.report(EndOfDocument("done"))
        assert overlay.notice_label.cget("text").startswith("End of document")
