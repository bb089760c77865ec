"""Fixed-period timer thread."""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class Ticker(threading.Thread):
    """Call `callback` every `period` seconds until cancelled."""

    def __init__(self, callback: Callable[[], object], period: float = 1.0) -> None:
        super().__init__(daemon=True)
        self._callback = callback
        self._period = float(period)
        self._stop_event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._stop_event.is_set()

    def cancel(self) -> None:
        """Stop the loop; the current wait returns immediately."""
        self._stop_event.set()

    def run(self) -> None:
        # first tick fires one full period after start()
        while not self._stop_event.wait(self._period):
            try:
                self._callback()
            except Exception:
                logger.exception("[ticker] tick callback failed")
