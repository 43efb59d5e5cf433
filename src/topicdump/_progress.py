"""Line-count progress observers."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

DEFAULT_INTERVAL = 100_000


def log_progress(count: int) -> None:
    """Stock observer: log the line count in millions."""
    logger.info("%.1f million lines", count / 1_000_000)


class Progress:
    """Calls ``callback`` every ``interval`` lines.

    Observer failures never abort a parse: the first exception is logged and
    the observer is switched off for the rest of the pass.
    """

    __slots__ = ("_callback", "_interval")

    def __init__(
        self, callback: ProgressCallback | None, interval: int = DEFAULT_INTERVAL
    ) -> None:
        if interval < 1:
            raise ValueError(f"interval must be >= 1, got {interval}")
        self._callback = callback
        self._interval = interval

    def tick(self, line_count: int) -> None:
        if self._callback is None or line_count % self._interval:
            return
        try:
            self._callback(line_count)
        except Exception:
            logger.warning(
                "progress observer failed at line %d; disabling it",
                line_count, exc_info=True,
            )
            self._callback = None
