"""Rich output rendering for CLI."""

import json
import logging
from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table

logger = logging.getLogger(__name__)


class OutputRenderer:
    """
    Rich output renderer for CLI.

    Prints analysis payloads as JSON, optionally followed by a summary table.
    """

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        """
        Initialize output renderer.

        Args:
            console: Rich console for results (creates new if not provided)
            err_console: Rich console for errors (stderr by default)
        """
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def render_json(self, payload: Dict[str, Any]) -> None:
        """
        Render a payload as JSON.

        Args:
            payload: JSON-serializable payload
        """
        self.console.print_json(json.dumps(payload, ensure_ascii=False))

    def render_summary(self, payload: Dict[str, Any]) -> None:
        """
        Render a short table of scores and performance figures.

        Args:
            payload: Analysis payload
        """
        table = Table(title=payload.get("url", ""), show_header=True)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")

        for key in ("seoScore", "geoScore", "wordCount", "h1Count"):
            if key in payload:
                table.add_row(key, str(payload[key]))

        performance = payload.get("performance") or {}
        for key, value in performance.items():
            table.add_row(key, str(value))

        self.console.print(table)

    def render_error(self, message: str) -> None:
        """
        Render an error message.

        Args:
            message: Error description
        """
        self.err_console.print(f"[bold red]Error:[/bold red] {message}")
