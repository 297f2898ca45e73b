"""Tests for the format_result dispatcher and OutputSettings."""

import json

from shelfctl.output.formatters import OutputSettings, format_result
from shelfctl.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError(code="ERR", message=msg))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResult:
    def test_json_mode(self) -> None:
        output = format_result(_ok("outline", name="a"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "outline"
        assert data["data"]["name"] == "a"

    def test_json_mode_error(self) -> None:
        output = format_result(_err("get_document", "Bad"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is False
        assert data["error"]["message"] == "Bad"

    def test_json_wins_over_quiet(self) -> None:
        settings = OutputSettings(json_output=True, quiet=True)
        assert json.loads(format_result(_ok(), settings=settings))["ok"] is True

    def test_quiet_lists_names(self) -> None:
        result = _ok("list_documents", items=[{"name": "a"}, {"name": "b"}], count=2)
        assert format_result(result, settings=OutputSettings(quiet=True)) == "a\nb"

    def test_quiet_other_ops(self) -> None:
        assert format_result(_ok("outline"), settings=OutputSettings(quiet=True)) == "OK: outline"

    def test_quiet_error(self) -> None:
        output = format_result(_err("get_document", "nope"), settings=OutputSettings(quiet=True))
        assert output == "ERROR: get_document — nope"

    def test_default_is_human(self) -> None:
        output = format_result(_ok("unknown_op", key="val"))
        assert "OK" in output
        assert "key: val" in output
