"""Wall-clock time source and its startup validation."""

import logging
import math
import time
from typing import Callable

from tiercache.domain.interfaces.clock import Clock
from tiercache.domain.models.common import Timestamp
from tiercache.domain.models.errors import ClockUnavailableError

logger = logging.getLogger(__name__)


class SystemClock(Clock):
    """Clock backed by time.time() (sub-millisecond resolution on supported platforms)."""

    def __init__(self, time_func: Callable[[], float] = time.time):
        self._time_func = time_func

    def now(self) -> Timestamp:
        return Timestamp(self._time_func())


def verify_clock(clock: Clock) -> Timestamp:
    """Reads the clock once and rejects unusable readings.

    Raises:
        ClockUnavailableError: If the clock raises, or returns a value that is
            not a finite positive number.
    """
    try:
        reading = clock.now()
    except Exception as e:
        logger.critical(f"Time source {clock.__class__.__name__} failed: {e}", exc_info=True)
        raise ClockUnavailableError(f"Time source unavailable: {e}") from e

    if isinstance(reading, bool) or not isinstance(reading, (int, float)):
        raise ClockUnavailableError(f"Time source returned a non-numeric value: {reading!r}")
    if not math.isfinite(reading) or reading <= 0:
        raise ClockUnavailableError(f"Time source returned an invalid timestamp: {reading!r}")
    logger.debug(f"Time source {clock.__class__.__name__} verified at {reading:.3f}")
    return Timestamp(float(reading))
