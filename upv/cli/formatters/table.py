"""
Table formatter for rich terminal tables.
"""

from io import StringIO
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .base import OutputFormatter

# Status values reported by rasdial and net use
STATUS_STYLES = {
    "ok": "green",
    "connected": "green",
    "disconnected": "yellow",
    "reconnecting": "yellow",
    "unavailable": "red",
}


class TableFormatter(OutputFormatter):
    """Format output as rich terminal tables."""

    def _render(self, renderable: Any) -> str:
        # Render with the real stdout's capabilities so colors survive
        stdout = Console()
        buffer = StringIO()
        temp_console = Console(
            file=buffer,
            no_color=self.no_color,
            force_terminal=stdout.is_terminal and not self.no_color,
            width=stdout.width,
        )
        temp_console.print(renderable)
        return buffer.getvalue()

    def _format_status(self, value: Any) -> str:
        if value is None:
            return "[dim]-[/dim]"
        style = STATUS_STYLES.get(str(value).lower())
        if style:
            return f"[{style}]● {escape(str(value))}[/{style}]"
        return escape(str(value))

    def format_single(
        self,
        data: Dict[str, Any],
        title: Optional[str] = None,
        **kwargs
    ) -> str:
        """Format a single item as a key-value table."""
        table = Table(title=title, show_header=False)
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value")

        for key, value in data.items():
            display_key = key.replace("_", " ").title()

            if isinstance(value, bool):
                display_value = "✓ Yes" if value else "✗ No"
                style = "green" if value else "red"
                table.add_row(display_key, f"[{style}]{display_value}[/{style}]")
            elif isinstance(value, list):
                table.add_row(display_key, ", ".join(str(v) for v in value) or "[dim]-[/dim]")
            elif value is None:
                table.add_row(display_key, "[dim]Not set[/dim]")
            else:
                table.add_row(display_key, escape(str(value)))

        return self._render(table)

    def format_list(
        self,
        data: List[Dict[str, Any]],
        columns: Optional[List[str]] = None,
        title: Optional[str] = None,
        **kwargs
    ) -> str:
        """Format a list of items as a table."""
        if not data:
            return "No data to display"

        if not columns:
            columns = list(data[0].keys())

        table = Table(title=title, show_header=True, header_style="bold magenta")

        for col in columns:
            if col in ["status", "letter"]:
                table.add_column(col.title(), justify="center")
            else:
                table.add_column(col.replace("_", " ").title())

        for item in data:
            row = []
            for col in columns:
                value = item.get(col, "")

                if col == "status":
                    row.append(self._format_status(value))
                elif isinstance(value, bool):
                    row.append("[green]✓[/green]" if value else "[red]✗[/red]")
                elif value is None:
                    row.append("[dim]-[/dim]")
                else:
                    row.append(escape(str(value)))

            table.add_row(*row)

        return self._render(table)

    def format_success(self, message: str) -> str:
        """Format success with rich styling."""
        return self._render(f"[green]✓[/green] {escape(message)}")

    def format_warning(self, message: str) -> str:
        """Format warning with rich styling."""
        return self._render(f"[yellow]⚠[/yellow] {escape(message)}")

    def format_info(self, message: str) -> str:
        """Format info with rich styling."""
        return self._render(f"[blue]ℹ[/blue] {escape(message)}")
