"""Core service for the interactive cache shell.

Runs a read-eval loop against the process-wide CacheStore so that entries
and statistics persist between commands for the lifetime of the session.
"""

import json
import logging
import shlex
from typing import Any, List, Optional

from tiercache.domain.interfaces.cache import CacheStore
from tiercache.domain.interfaces.user_interface import UserInterface
from tiercache.domain.models.common import CacheKey
from tiercache.domain.models.errors import TierCacheError
from tiercache.infrastructure.config.settings import CacheSettings

logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"exit", "quit"}

HELP_TEXT = """Commands:
  get <key>                 Look up a key
  set <key> <value> [ttl]   Store a value (JSON if it parses) with TTL seconds, 'none' = never expires
  delete <key>              Remove a key
  clear                     Remove all entries (statistics are kept)
  stats                     Show hit/miss statistics
  purge                     Remove expired entries now
  help                      Show this help
  exit | quit               Leave the shell"""


def parse_value(raw: str) -> Any:
    """Parses a value as JSON, falling back to the raw string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_ttl(raw: str) -> Optional[float]:
    if raw.lower() == "none":
        return None
    return float(raw)


class ShellService:
    """Interactive command loop over a CacheStore."""

    def __init__(self, cache_store: CacheStore, ui: UserInterface, settings: Optional[CacheSettings] = None):
        self.cache_store = cache_store
        self.ui = ui
        self.settings = settings or CacheSettings()
        self.commands_run = 0

    def start_session(self) -> None:
        """Reads and executes commands until the user exits or input ends."""
        self.ui.display_info("Starting cache shell. Type 'help' for commands, 'exit' or 'quit' to end.")
        while True:
            try:
                line = self.ui.get_prompt("cache> ")
            except (EOFError, KeyboardInterrupt):
                logger.debug("Input closed, leaving shell.")
                break
            if not self.execute_line(line):
                break
        self.ui.display_info("Ending cache shell.")
        logger.info(f"Shell session ended after {self.commands_run} commands.")

    def execute_line(self, line: str) -> bool:
        """Executes one command line. Returns False when the session should end."""
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            self.ui.display_error(f"Could not parse command: {e}")
            return True
        if not tokens:
            return True

        command, args = tokens[0].lower(), tokens[1:]
        if command in EXIT_COMMANDS:
            return False

        self.commands_run += 1
        try:
            self._dispatch(command, args)
        except TierCacheError as e:
            logger.warning(f"Shell command '{command}' rejected: {e}")
            self.ui.display_error(str(e))
        except ValueError as e:
            self.ui.display_error(f"Invalid argument: {e}")
        return True

    def _dispatch(self, command: str, args: List[str]) -> None:
        if command == "get" and len(args) == 1:
            value = self.cache_store.get(CacheKey(args[0]))
            if value is None:
                self.ui.display_info(f"(miss) {args[0]}")
            else:
                self.ui.display_output(value, title=args[0])
        elif command == "set" and len(args) in (2, 3):
            value = parse_value(args[1])
            if value is None:
                # A stored None would read back as a miss while counting as a hit.
                self.ui.display_error("Refusing to store null: it is indistinguishable from a miss.")
                return
            ttl = parse_ttl(args[2]) if len(args) == 3 else self.settings.default_ttl_seconds
            self.cache_store.set(CacheKey(args[0]), value, ttl)
            expiry = f"TTL: {ttl:g}s" if ttl is not None else "never expires"
            self.ui.display_info(f"Stored {args[0]} ({expiry})")
        elif command == "delete" and len(args) == 1:
            self.cache_store.delete(CacheKey(args[0]))
            self.ui.display_info(f"Deleted {args[0]}")
        elif command == "clear" and not args:
            self.cache_store.clear()
            self.ui.display_info("Cache cleared.")
        elif command == "stats" and not args:
            self.ui.display_stats(self.cache_store.get_stats())
        elif command == "purge" and not args:
            removed = self.cache_store.purge_expired()
            self.ui.display_info(f"Purged {removed} expired entries.")
        elif command == "help":
            self.ui.display_info(HELP_TEXT)
        else:
            self.ui.display_error(f"Unknown command or wrong arguments: {command}. Type 'help'.")
