"""Tests for the access-policy CLI."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from access_policy.cli.main import cli

_DOCUMENT = textwrap.dedent(
    """\
    scopes:
      - name: liberal
        rules:
          - permit: [superpowers, administrator]
      - name: restrict_to
        parent: liberal
        rules:
          - restrict: administrator
            to: [action_c, action_d]
          - permit: everyone
            to: action_b
    permission_sets:
      - name: admin
        permissions: [administrator]
    """
)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def config_file(tmp_path: Path) -> str:
    path = tmp_path / "policies.yaml"
    path.write_text(_DOCUMENT, encoding="utf-8")
    return str(path)


class TestCheckCommand:
    def test_allowed_exit_zero(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(
            cli,
            ["check", "-c", config_file, "-s", "restrict_to", "-a", "action_c", "-p", "administrator"],
        )
        assert result.exit_code == 0
        assert "ALLOWED" in result.output

    def test_denied_exit_one(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(
            cli,
            ["check", "-c", config_file, "-s", "restrict_to", "-a", "action_a", "-p", "administrator"],
        )
        assert result.exit_code == 1
        assert "DENIED" in result.output

    def test_permission_set(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(
            cli,
            ["check", "-c", config_file, "-s", "restrict_to", "-a", "action_d", "-r", "admin"],
        )
        assert result.exit_code == 0

    def test_unknown_permission_set(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(
            cli,
            ["check", "-c", config_file, "-s", "restrict_to", "-a", "action_d", "-r", "ghost"],
        )
        assert result.exit_code == 2

    def test_anonymous_everyone(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(
            cli,
            ["check", "-c", config_file, "-s", "restrict_to", "-a", "action_b", "--anonymous"],
        )
        assert result.exit_code == 0

    def test_unknown_scope(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(cli, ["check", "-c", config_file, "-s", "nope", "-a", "x"])
        assert result.exit_code == 2

    def test_missing_config(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli, ["check", "-c", str(tmp_path / "missing.yaml"), "-s", "x", "-a", "y"]
        )
        assert result.exit_code == 2


class TestOtherCommands:
    def test_explain(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(
            cli, ["explain", "-c", config_file, "-s", "restrict_to", "-a", "action_a", "-a", "action_c"]
        )
        assert result.exit_code == 0
        assert "superpowers" in result.output
        assert "administrator" in result.output

    def test_validate(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(cli, ["validate", "-c", config_file])
        assert result.exit_code == 0
        assert "2 scopes" in result.output
        assert "1 permission sets" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "access-policy" in result.output
