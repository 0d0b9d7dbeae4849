"""YAML formatter for human-readable structured output.
"""

from typing import Any

import yaml

from .base import OutputFormatter


class YamlFormatter(OutputFormatter):
    """Format output as YAML."""

    structured = True

    def _dump(self, data: Any) -> str:
        return yaml.safe_dump(
            data,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

    def format_single(self, data: dict[str, Any], **kwargs) -> str:
        """Format a single item as YAML."""
        return self._dump(self._serialize(data))

    def format_list(self, data: list[dict[str, Any]], **kwargs) -> str:
        """Format a list of items as YAML."""
        return self._dump([self._serialize(item) for item in data])

    def format_success(self, message: str) -> str:
        """Format success as YAML."""
        return self._dump({"success": True, "message": message})

    def format_warning(self, message: str) -> str:
        """Format warning as YAML."""
        return self._dump({"warning": True, "message": message})

    def format_info(self, message: str) -> str:
        """Format info as YAML."""
        return self._dump({"info": True, "message": message})

    def _serialize(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._serialize(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._serialize(item) for item in obj]
        elif hasattr(obj, 'model_dump'):  # Pydantic model
            return self._serialize(obj.model_dump(mode="json"))
        else:
            return obj
