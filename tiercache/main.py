"""Main entry point for the tiercache application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
import sys
import threading
from typing import Any, Dict, List, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from tiercache.core.command_handler import CommandHandler
from tiercache.core.services.cached_lookup_service import CachedLookupService
from tiercache.core.services.shell_service import ShellService

# --- Domain Layer ---
from tiercache.domain import keys
from tiercache.domain.models.errors import ClockUnavailableError

# --- Infrastructure Layer ---
from tiercache.infrastructure.cache.memory_cache import InMemoryCacheStore
from tiercache.infrastructure.cache.sweeper import ExpirySweeper
from tiercache.infrastructure.cli.display import ConsoleDisplay
from tiercache.infrastructure.clock.system_clock import SystemClock
from tiercache.infrastructure.config.settings import get_cache_settings, get_config, load_configuration
from tiercache.infrastructure.monitoring.logger_setup import DEFAULT_LOG_FORMAT, resolve_log_level, setup_logging

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_dependencies() -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root: the one cache store of the process is
    constructed here and passed to every consumer.
    """
    dependencies: Dict[str, Any] = {}

    # 1. Load Configuration First, then logging
    load_configuration()
    setup_logging(
        log_level=resolve_log_level(get_config('logging.level', 'WARNING')),
        log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
        log_file=get_config('logging.file'),
    )
    logger.info("Initializing application dependencies...")

    dependencies['ui'] = ConsoleDisplay()
    dependencies['settings'] = get_cache_settings()

    # 2. Cache store. An unusable clock is fatal.
    try:
        dependencies['cache_store'] = InMemoryCacheStore(clock=SystemClock())
    except ClockUnavailableError as e:
        logger.critical(f"Fatal Error during application initialization: {e}", exc_info=True)
        dependencies['ui'].display_error(f"Application Initialization Failed: {e}")
        sys.exit(1)

    sweep_interval = dependencies['settings'].sweep_interval_seconds
    dependencies['sweeper'] = (
        ExpirySweeper(dependencies['cache_store'], sweep_interval) if sweep_interval > 0 else None
    )

    # 3. Core Services
    # No CLI command reads lookup_service; it is the cache-aside entry point
    # for library consumers that obtain the container via get_dependencies().
    dependencies['lookup_service'] = CachedLookupService(
        cache_store=dependencies['cache_store'],
        settings=dependencies['settings'],
    )
    dependencies['shell_service'] = ShellService(
        cache_store=dependencies['cache_store'],
        ui=dependencies['ui'],
        settings=dependencies['settings'],
    )
    dependencies['command_handler'] = CommandHandler(
        shell_service=dependencies['shell_service'],
        cache_store=dependencies['cache_store'],
        ui=dependencies['ui'],
    )

    logger.info("All dependencies initialized successfully.")
    return dependencies


_dependencies: Optional[Dict[str, Any]] = None


def get_dependencies() -> Dict[str, Any]:
    """Returns the process-wide dependencies, creating them on first use by a command."""
    global _dependencies
    if _dependencies is None:
        _dependencies = create_dependencies()
    return _dependencies


def reset_dependencies() -> None:
    """Drops the process-wide dependencies (the cache store included)."""
    global _dependencies
    _dependencies = None


# --- Typer App Definition ---
app = typer.Typer(
    name="tiercache",
    help="tiercache: tiered, TTL-based in-process response cache.",
    add_completion=False,
)


SWEEPER_STOP_TIMEOUT_SECONDS = 5


async def _start_sweeper(sweeper: ExpirySweeper) -> None:
    sweeper.start()


def _run_shell_with_sweeper(handler: CommandHandler, sweeper: ExpirySweeper) -> None:
    """Runs the sweeper loop in a daemon thread and the shell on the calling thread.

    The shell must own the main thread so that Ctrl-C reaches its
    KeyboardInterrupt handler.
    """
    loop = asyncio.new_event_loop()
    sweeper_thread = threading.Thread(target=loop.run_forever, name="expiry-sweeper", daemon=True)
    sweeper_thread.start()
    asyncio.run_coroutine_threadsafe(_start_sweeper(sweeper), loop).result()
    try:
        handler.start_shell()
    finally:
        asyncio.run_coroutine_threadsafe(sweeper.stop(), loop).result(timeout=SWEEPER_STOP_TIMEOUT_SECONDS)
        loop.call_soon_threadsafe(loop.stop)
        sweeper_thread.join(timeout=SWEEPER_STOP_TIMEOUT_SECONDS)
        if not sweeper_thread.is_alive():
            loop.close()


def _start_shell() -> None:
    deps = get_dependencies()
    handler: CommandHandler = deps['command_handler']
    sweeper: Optional[ExpirySweeper] = deps['sweeper']
    if sweeper is None:
        handler.start_shell()
    else:
        _run_shell_with_sweeper(handler, sweeper)


# --- CLI Commands ---

@app.command()
def key(
    kind: Annotated[str, typer.Argument(help="Key kind: 'profile', 'insights' or 'compare'.")],
    identifiers: Annotated[List[str], typer.Argument(help="Identifier(s); 'compare' takes two.")],
    source: Annotated[
        str, typer.Option("--source", "-s", help="Namespace for profile keys.")
    ] = keys.DEFAULT_PROFILE_SOURCE,
):
    """Print the cache key derived from one or two identifiers."""
    handler: CommandHandler = get_dependencies()['command_handler']
    if not handler.handle_key(kind, identifiers, source):
        raise typer.Exit(code=2)


@app.command()
def shell():
    """Start an interactive shell against the process-wide cache."""
    _start_shell()


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context):
    """Main entry point. Starts the shell if no command is given."""
    if ctx.invoked_subcommand is None:
        logger.info("No command invoked, starting interactive shell.")
        _start_shell()


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
