"""Output formatters for CLI commands."""

from .base import OutputFormat, OutputFormatter, get_formatter
from .json import JsonFormatter
from .plain import PlainFormatter
from .table import TableFormatter
from .yaml import YamlFormatter

__all__ = [
    "JsonFormatter",
    "OutputFormat",
    "OutputFormatter",
    "PlainFormatter",
    "TableFormatter",
    "YamlFormatter",
    "get_formatter",
]
