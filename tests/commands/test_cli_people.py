"""Tests for people CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from sixdegrees.cli import cli


@pytest.mark.usefixtures("workspace")
class TestSearchCommand:
    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "people", "search", "tom"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert [p["name"] for p in data["people"]] == ["Tom Cruise", "Tom Hanks"]

    def test_quiet_ids(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "people", "search", "tom"])
        assert result.stdout.split() == ["p4", "p1"]

    def test_limit_capped_by_settings(self, cli_runner: CliRunner, workspace: Path) -> None:
        toml = workspace / "sixdegrees.toml"
        toml.write_text(
            toml.read_text(encoding="utf-8") + "\n[search]\nmax_search_results = 1\n",
            encoding="utf-8",
        )
        result = cli_runner.invoke(cli, ["--json", "people", "search", "tom", "--limit", "10"])
        assert json.loads(result.stdout)["data"]["count"] == 1

    def test_no_match_is_success(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["people", "search", "streep"])
        assert result.exit_code == 0
        assert "No people found." in result.stdout


@pytest.mark.usefixtures("workspace")
class TestListCommand:
    def test_paging(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "people", "list", "--limit", "2", "--offset", "2"]
        )
        data = json.loads(result.stdout)["data"]
        assert [p["name"] for p in data["people"]] == ["Robin Wright", "Tom Cruise"]
        assert data["total_count"] == 5

    def test_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["people", "list"])
        assert "Kevin Bacon" in result.stdout
        assert "5 people of 5" in result.stdout
