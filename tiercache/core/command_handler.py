"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py) and delegates the
work to the key derivation helpers, the cache store and the ShellService.
"""

import logging
from typing import List

from tiercache.core.services.shell_service import ShellService
from tiercache.domain import keys
from tiercache.domain.interfaces.cache import CacheStore
from tiercache.domain.interfaces.user_interface import UserInterface
from tiercache.domain.models.errors import TierCacheError

logger = logging.getLogger(__name__)

KEY_KINDS = ("profile", "insights", "compare")


class CommandHandler:
    """Handles incoming commands and delegates to appropriate services."""

    def __init__(
        self,
        shell_service: ShellService,
        cache_store: CacheStore,
        ui: UserInterface,
    ):
        self.shell_service = shell_service
        self.cache_store = cache_store
        self.ui = ui

    def start_shell(self) -> None:
        """Handles the initiation of the interactive shell."""
        logger.info("Starting interactive cache shell.")
        try:
            self.shell_service.start_session()
        except Exception as e:
            logger.error(f"Cache shell failed: {e}", exc_info=True)
            self.ui.display_error(f"Failed to run cache shell: {e}")

    def handle_key(self, kind: str, identifiers: List[str], source: str = keys.DEFAULT_PROFILE_SOURCE) -> bool:
        """Handles the 'key' command: prints the derived cache key.

        Returns:
            True if a key was derived, False on invalid input.
        """
        logger.info(f"Handling 'key' command: kind={kind}, identifiers={identifiers}")
        expected = 2 if kind == "compare" else 1
        if kind not in KEY_KINDS:
            self.ui.display_error(f"Unknown key kind '{kind}'. Choose one of: {', '.join(KEY_KINDS)}.")
            return False
        if len(identifiers) != expected:
            self.ui.display_error(f"'{kind}' keys take {expected} identifier(s), got {len(identifiers)}.")
            return False

        try:
            if kind == "profile":
                key = keys.profile_key(identifiers[0], source)
            elif kind == "insights":
                key = keys.insights_key(identifiers[0])
            else:
                key = keys.comparison_key(identifiers[0], identifiers[1])
        except TierCacheError as e:
            self.ui.display_error(f"Invalid identifier: {e}")
            return False

        self.ui.display_output(key)
        return True
