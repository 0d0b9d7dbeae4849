"""
Tests for output formatters.
"""

import json

import pytest

from upv.cli.formatters import (
    JsonFormatter,
    OutputFormat,
    PlainFormatter,
    TableFormatter,
    YamlFormatter,
    get_formatter,
)
from upv.core.config import runtime_config
from upv.core.models import PurgeReport


class TestGetFormatter:

    @pytest.mark.parametrize(
        ("format_type", "expected"),
        [
            ("table", TableFormatter),
            ("plain", PlainFormatter),
            (OutputFormat.JSON, JsonFormatter),
            (OutputFormat.YAML, YamlFormatter),
        ],
    )
    def test_by_name(self, format_type, expected):
        assert isinstance(get_formatter(format_type), expected)

    def test_defaults_to_global_format(self):
        runtime_config.output_format = "yaml"

        assert isinstance(get_formatter(), YamlFormatter)

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            get_formatter("xml")


def test_purge_report_as_json():
    report = PurgeReport(deleted=["UPV"], failed={"Old": "Access is denied."}, kept=["UPV Home"])

    data = json.loads(get_formatter("json").format_single(report.model_dump()))

    assert data == {
        "deleted": ["UPV"],
        "failed": {"Old": "Access is denied."},
        "kept": ["UPV Home"],
        "ok": False,
    }
