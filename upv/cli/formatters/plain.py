"""
Plain text formatter for simple output.
"""

from typing import Any, Dict, List, Optional

from .base import OutputFormatter


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "-"
    if value is None:
        return "-"
    return str(value)


class PlainFormatter(OutputFormatter):
    """Format output as plain text."""

    def format_single(self, data: Dict[str, Any], **kwargs) -> str:
        """Format a single item as plain text."""
        lines = []
        for key, value in data.items():
            display_key = key.replace("_", " ").title()
            lines.append(f"{display_key}: {_display(value)}")

        return "\n".join(lines)

    def format_list(
        self,
        data: List[Dict[str, Any]],
        columns: Optional[List[str]] = None,
        **kwargs
    ) -> str:
        """Format a list of items, one per line with tab separated fields."""
        if not data:
            return "No data to display"

        if not columns:
            columns = list(data[0].keys())

        return "\n".join(
            "\t".join(_display(item.get(col)) for col in columns)
            for item in data
        )

    def format_success(self, message: str) -> str:
        """Format success as plain text."""
        return f"Success: {message}"

    def format_warning(self, message: str) -> str:
        """Format warning as plain text."""
        return f"Warning: {message}"

    def format_info(self, message: str) -> str:
        """Format info as plain text."""
        return f"Info: {message}"
