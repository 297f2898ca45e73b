"""Tests for the check command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from shelfctl.cli import cli
from tests.conftest import CHAPTER_THREE


@pytest.mark.usefixtures("_isolated_library")
class TestCheckCommand:
    def test_clean_library(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "No issues found." in result.output

    def test_reports_duplicate(self, cli_runner: CliRunner, library_root: Path) -> None:
        (library_root / "chapter3-copy.md").write_text(CHAPTER_THREE, encoding="utf-8")
        result = cli_runner.invoke(cli, ["--json", "check"])
        assert result.exit_code == 0
        issues = json.loads(result.output)["data"]["issues"]
        assert [i["kind"] for i in issues] == ["identical"]

    def test_errors_only(self, cli_runner: CliRunner, library_root: Path) -> None:
        (library_root / "stub.md").write_text("# Stub\n", encoding="utf-8")
        everything = json.loads(cli_runner.invoke(cli, ["--json", "check"]).output)
        assert everything["data"]["count"] == 1
        errors = json.loads(cli_runner.invoke(cli, ["--json", "check", "--errors-only"]).output)
        assert errors["data"]["count"] == 0

    def test_threshold_from_config(self, cli_runner: CliRunner, library_root: Path) -> None:
        (library_root / "stub.md").write_text("# Stub\n\nab\n", encoding="utf-8")
        (library_root / "shelfctl.toml").write_text("[check]\nmin_body_chars = 5\n")
        result = cli_runner.invoke(cli, ["--json", "check"])
        issues = json.loads(result.output)["data"]["issues"]
        assert [i["kind"] for i in issues] == ["empty_section"]
