import time

import pytest

from tiercache.domain.models.errors import ClockUnavailableError
from tiercache.infrastructure.clock.system_clock import SystemClock, verify_clock


def test_system_clock_tracks_wall_time():
    before = time.time()
    reading = SystemClock().now()
    after = time.time()
    assert before <= reading <= after


def test_verify_clock_accepts_valid_reading():
    assert verify_clock(SystemClock(lambda: 1_700_000_000.5)) == 1_700_000_000.5


@pytest.mark.parametrize("reading", [0, -1.0, float("inf"), float("nan"), "soon", None, True])
def test_verify_clock_rejects_invalid_readings(reading):
    with pytest.raises(ClockUnavailableError):
        verify_clock(SystemClock(lambda: reading))


def test_verify_clock_wraps_clock_exceptions():
    def broken() -> float:
        raise OSError("no clock")

    with pytest.raises(ClockUnavailableError) as exc_info:
        verify_clock(SystemClock(broken))
    assert isinstance(exc_info.value.__cause__, OSError)
