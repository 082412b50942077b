"""Interface for the time source used to stamp and expire cache entries."""

import abc

from ..models.common import Timestamp


class Clock(abc.ABC):
    """Abstract Base Class for a wall-clock time source."""

    @abc.abstractmethod
    def now(self) -> Timestamp:
        """Returns the current time in epoch seconds (millisecond resolution or better)."""
        pass
