import json
import logging
from typing import Any, Optional

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tiercache.domain.interfaces.user_interface import UserInterface
from tiercache.domain.models.cache import CacheStatsSnapshot

logger = logging.getLogger(__name__)


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console (or uses the one given)."""
        self.console = console or Console()

    def display_output(self, output: Any, **kwargs: Any) -> None:
        """Displays a value. Strings are printed as-is, anything else as highlighted JSON.

        Args:
            output: The value to display.
            **kwargs: Additional arguments including:
                - title: Optional panel title.
        """
        title = kwargs.get("title")
        if isinstance(output, str):
            renderable: Any = Text(output)
        else:
            try:
                renderable = JSON(json.dumps(output, default=str))
            except (TypeError, ValueError) as e:
                logger.debug(f"Falling back to repr output: {e}")
                renderable = Text(repr(output))

        if title:
            self.console.print(Panel(renderable, title=f"[bold cyan]{title}[/bold cyan]", box=ROUNDED))
        else:
            self.console.print(renderable)

    def display_stats(self, stats: CacheStatsSnapshot) -> None:
        """Renders cache statistics as a two-column table."""
        table = Table(title="Cache Statistics", box=ROUNDED, show_header=True)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Hits", str(stats["hits"]))
        table.add_row("Misses", str(stats["misses"]))
        table.add_row("Sets", str(stats["sets"]))
        table.add_row("Hit rate", stats["hit_rate"])
        table.add_row("Size", str(stats["size"]))
        self.console.print(table)

    def get_prompt(self, prompt_message: str = "> ") -> str:
        """Gets one line of input from the user."""
        return self.console.input(f"[bold green]{prompt_message}[/bold green]")

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        panel = Panel(
            Text(info_message, style="white"),
            title="[bold blue]Info[/bold blue]",
            border_style="blue",
            box=SIMPLE,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        logger.warning(f"Display warning: {warning_message}")
        panel = Panel(
            Text(warning_message, style="white"),
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)
