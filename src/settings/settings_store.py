"""
In-process settings store.

Hosts that persist settings supply their own object satisfying
``rsvp.interfaces.SettingsStoreProtocol``; this store keeps values in memory
and is what the launcher and the tests use.
"""

from typing import Any, Dict, Optional

from utils.structured_logging import get_logger

logger = get_logger(__name__)


class MemorySettingsStore:
    """Scalar key/value store backed by a dict."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = dict(initial or {})
        self.flush_count = 0

    def load(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def save(self, key: str, value: Any) -> None:
        self._values[key] = value

    def flush(self) -> None:
        self.flush_count += 1
        logger.debug("Settings flushed", keys=len(self._values))
