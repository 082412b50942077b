"""Interface for interacting with the user (input/output).

Defines the contract for displaying values, statistics, errors and
informational messages, and for reading commands from the user, allowing
different UI implementations (e.g., console, tests).
"""

import abc
from typing import Any

from tiercache.domain.models.cache import CacheStatsSnapshot


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_output(self, output: Any, **kwargs: Any) -> None:
        """Displays a value (a cached payload, a derived key) to the user.

        Args:
            output: The value to display. Non-string values are rendered as JSON.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_stats(self, stats: CacheStatsSnapshot) -> None:
        """Displays cache statistics."""
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user."""
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    @abc.abstractmethod
    def get_prompt(self, prompt_message: str = "> ") -> str:
        """Gets one line of input from the user synchronously.

        Args:
            prompt_message: The message to display before the input prompt.

        Returns:
            The user's input.
        """
        pass
