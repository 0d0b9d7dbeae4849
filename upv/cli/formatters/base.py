"""
Base formatter class for output formatting.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from upv.core.config import runtime_config


class OutputFormat(str, Enum):
    TABLE = "table"
    PLAIN = "plain"
    JSON = "json"
    YAML = "yaml"


class OutputFormatter(ABC):
    """Base class for output formatters."""

    # Machine-readable formats print data only, without status messages
    structured = False

    def __init__(self, no_color: bool = False):
        """
        Initialize formatter.

        Args:
            no_color: Disable colored output
        """
        self.no_color = no_color or runtime_config.no_color

    @abstractmethod
    def format_single(self, data: Dict[str, Any], **kwargs) -> str:
        """
        Format a single data item.

        Args:
            data: Data to format
            **kwargs: Additional formatting options

        Returns:
            Formatted string
        """
        pass

    @abstractmethod
    def format_list(self, data: List[Dict[str, Any]], **kwargs) -> str:
        """
        Format a list of data items.

        Args:
            data: List of data to format
            **kwargs: Additional formatting options

        Returns:
            Formatted string
        """
        pass

    def format_success(self, message: str) -> str:
        """Format a success message."""
        return f"✓ {message}"

    def format_warning(self, message: str) -> str:
        """Format a warning message."""
        return f"⚠ {message}"

    def format_info(self, message: str) -> str:
        """Format an info message."""
        return f"ℹ {message}"


def get_formatter(format_type: Optional[Union[OutputFormat, str]] = None) -> OutputFormatter:
    """
    Get formatter instance based on type.

    Args:
        format_type: Format type (table, json, yaml, plain)

    Returns:
        Formatter instance

    Raises:
        ValueError: If the format is unknown
    """
    from . import JsonFormatter, PlainFormatter, TableFormatter, YamlFormatter

    format_type = OutputFormat(format_type or runtime_config.output_format)

    formatters = {
        OutputFormat.TABLE: TableFormatter,
        OutputFormat.JSON: JsonFormatter,
        OutputFormat.YAML: YamlFormatter,
        OutputFormat.PLAIN: PlainFormatter,
    }

    formatter_class = formatters[format_type]
    return formatter_class(no_color=runtime_config.no_color)
