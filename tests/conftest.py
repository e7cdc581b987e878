"""Shared pytest fixtures and configuration."""
import os
import sys
import pytest
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
# Add src directory to path (matches main.py behavior for internal imports)
sys.path.insert(0, str(project_root / 'src'))

from processing.documents import PagedDocument
from settings.settings_models import ReaderSettings

# Set testing environment
os.environ['FAST_READER_ENV'] = 'testing'


class FakeScheduler:
    """Deterministic scheduler: callbacks only run when a test fires them.

    Session callbacks are identified by their role, i.e. the bound method
    name ("_on_tick_timer", "_on_page_settled", "_on_indicator_timeout").
    """

    def __init__(self):
        self._next_handle = 0
        self.pending = {}
        self.scheduled = []
        self.cancelled = []

    def schedule_after(self, duration_ms, callback):
        self._next_handle += 1
        handle = self._next_handle
        self.pending[handle] = (duration_ms, callback)
        self.scheduled.append((getattr(callback, '__name__', repr(callback)), duration_ms))
        return handle

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.pending.pop(handle, None)

    def pending_roles(self):
        return [getattr(cb, '__name__', repr(cb)) for _, cb in self.pending.values()]

    def delay_for(self, role):
        for delay, callback in self.pending.values():
            if getattr(callback, '__name__', None) == role:
                return delay
        return None

    def fire(self, role):
        """Run the pending callback for a role. Returns False if none is pending."""
        for handle, (_, callback) in list(self.pending.items()):
            if getattr(callback, '__name__', None) == role:
                del self.pending[handle]
                callback()
                return True
        return False

    def fire_tick(self):
        return self.fire('_on_tick_timer')

    def fire_settle(self):
        return self.fire('_on_page_settled')

    def fire_indicator(self):
        return self.fire('_on_indicator_timeout')


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def presentation():
    """Mock presentation layer."""
    return MagicMock(name="presentation")


@pytest.fixture
def notifier():
    """Mock notifier."""
    return MagicMock(name="notifier")


@pytest.fixture
def reader_settings():
    return ReaderSettings()


@pytest.fixture
def paged_document():
    """Three-page document; page 2 is blank."""
    return PagedDocument(
        [
            "The quick brown fox jumps over the lazy dog",
            "",
            "Second chapter begins here",
        ],
        identity="/docs/sample.pdf"
    )


@pytest.fixture
def make_session(scheduler, presentation, notifier, reader_settings):
    """Factory for sessions wired to the fake collaborators."""
    from rsvp.session import RSVPSession

    def _make(document, **kwargs):
        kwargs.setdefault('notifier', notifier)
        kwargs.setdefault('settings', reader_settings)
        return RSVPSession(document, scheduler, presentation, **kwargs)

    return _make


@pytest.fixture(scope='session')
def tk_root():
    """Create a Tk root window for UI tests."""
    import tkinter as tk

    try:
        root = tk.Tk()
    except tk.TclError as e:
        pytest.skip(f"Tk not available: {e}")
    root.withdraw()  # Hide the window
    yield root
    try:
        root.quit()
        root.destroy()
    except tk.TclError:
        pass  # Already destroyed


# Pytest hooks
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "ui: marks tests as UI tests requiring display"
    )


def pytest_collection_modifyitems(config, items):
    """Mark and, without a display, skip the Tk test modules."""
    for item in items:
        if os.path.basename(str(item.fspath)).startswith("test_ui_"):
            item.add_marker(pytest.mark.ui)
            if sys.platform.startswith('linux') and not os.environ.get('DISPLAY'):
                item.add_marker(pytest.mark.skip(reason="No display available for UI tests"))
