"""In-memory click history per short code."""

import logging
import threading
from typing import Dict, List, Optional

from .models import ClickEvent


class AnalyticsRecorder:
    """Append-only click histories keyed by short code.

    Does not consult the link registry; callers append only after a visit was
    counted there.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._histories: Dict[str, List[ClickEvent]] = {}
        self._lock = threading.Lock()

    def init_history(self, shortcode: str) -> None:
        """Create an empty history for a new short code, if absent."""
        with self._lock:
            self._histories.setdefault(shortcode, [])

    def append(self, shortcode: str, event: ClickEvent) -> None:
        """Append a click, creating the history on first use."""
        with self._lock:
            self._histories.setdefault(shortcode, []).append(event)
        self.logger.debug(f"Recorded click on {shortcode} from {event.location}")

    def get_history(self, shortcode: str) -> List[ClickEvent]:
        """Return the clicks recorded for a short code, oldest first.

        An unknown short code yields an empty list.
        """
        with self._lock:
            return list(self._histories.get(shortcode, ()))

    def remove(self, shortcode: str) -> bool:
        """Forget the history of a short code.

        Returns:
            True if a history was removed
        """
        with self._lock:
            return self._histories.pop(shortcode, None) is not None

    def is_responsive(self, timeout: float = 1.0) -> bool:
        """Check that the history lock can be taken within ``timeout`` seconds."""
        if not self._lock.acquire(timeout=timeout):
            return False
        self._lock.release()
        return True

    def total_events(self) -> int:
        """Number of clicks recorded across all short codes."""
        with self._lock:
            return sum(len(history) for history in self._histories.values())
