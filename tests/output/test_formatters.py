"""Tests for the format_result dispatcher and OutputSettings."""

import json

from sixdegrees.domain.errors import ErrorCode
from sixdegrees.output.formatters import OutputSettings, format_result
from sixdegrees.services.result import ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult.failure(op, ErrorCode.NOT_FOUND, msg)


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_ok("statistics", people_count=5), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "statistics"
        assert data["data"]["people_count"] == 5

    def test_json_mode_error(self) -> None:
        data = json.loads(format_result(_err("find_path", "Bad"), json_output=True))
        assert data["ok"] is False
        assert data["error"]["code"] == "NOT_FOUND"
        assert data["error"]["message"] == "Bad"

    def test_settings_overrides_shorthand(self) -> None:
        output = format_result(_ok(key="val"), settings=OutputSettings(), json_output=True)
        assert output.startswith("{") is False


class TestFormatResultQuiet:
    def test_quiet_success(self) -> None:
        output = format_result(_ok("statistics"), settings=OutputSettings(quiet=True))
        assert output == "OK: statistics"

    def test_quiet_error(self) -> None:
        output = format_result(_err("find_path", "Bad input"), settings=OutputSettings(quiet=True))
        assert "ERROR" in output
        assert "Bad input" in output


class TestFormatResultDefault:
    def test_default_success_contains_ok(self) -> None:
        output = format_result(_ok("cache_status", cache_path="/tmp/x.json"))
        assert "OK" in output
        assert "cache_status" in output

    def test_default_error_contains_error(self) -> None:
        output = format_result(_err("find_path", "Bad"))
        assert "ERROR" in output
        assert "Bad" in output
