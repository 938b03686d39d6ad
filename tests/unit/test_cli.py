"""Unit tests for dtui.cli.main — the click command group."""
from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from dtui.cli.main import cli


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------


class TestParseCommand:
    def test_valid_literal(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "ai", "[1,2]"])
        assert result.exit_code == 0
        assert "OK ai: [1, 2]" in result.output

    def test_brackets_are_not_markup(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "as", '["[bold]x"]'])
        assert result.exit_code == 0
        assert "[bold]x" in result.output

    def test_json_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "a{sv}", '{"volume": "u"->5}', "--format", "json"])
        assert result.exit_code == 0
        assert '"signature": "a{sv}"' in result.output

    def test_yaml_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "(si)", '("a", 1)', "--format", "yaml"])
        assert result.exit_code == 0
        assert "signature: (si)" in result.output

    def test_invalid_literal_exits_with_error_table(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "u", "-1"])
        assert result.exit_code == 1
        assert "LEXICAL" in result.output

    def test_range_error(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "y", "256"])
        assert result.exit_code == 1
        assert "RANGE" in result.output

    def test_strict_keys(self, runner: CliRunner) -> None:
        literal = '{"a": 1, "a": 2}'
        assert runner.invoke(cli, ["parse", "a{si}", literal]).exit_code == 0
        result = runner.invoke(cli, ["parse", "a{si}", literal, "--strict-keys"])
        assert result.exit_code == 1
        assert "STRUCTURAL" in result.output

    def test_invalid_signature(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "a{vs}", "{}"])
        assert result.exit_code == 1
        assert "Invalid signature" in result.output

    def test_empty_signature(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse", "", "1"])
        assert result.exit_code == 1
        assert "empty signature" in result.output


# ---------------------------------------------------------------------------
# signature / grammar / version
# ---------------------------------------------------------------------------


class TestInfoCommands:
    def test_signature_tree(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["signature", "a{sv}"])
        assert result.exit_code == 0
        assert "dict of string to variant" in result.output

    def test_signature_invalid(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["signature", "(s"])
        assert result.exit_code == 1
        assert "unterminated structure" in result.output

    def test_grammar(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["grammar"])
        assert result.exit_code == 0
        assert "Literal grammar" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_log_level_option(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--log-level", "debug", "parse", "b", "true"])
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# methods / call
# ---------------------------------------------------------------------------


class TestMethodsCommand:
    def test_lists_members(self, runner: CliRunner, player_xml_file: Path) -> None:
        result = runner.invoke(cli, ["methods", str(player_xml_file)])
        assert result.exit_code == 0
        assert "SetVolume" in result.output
        assert "Activate" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["methods", str(tmp_path / "missing.xml")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_malformed_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.xml"
        path.write_text("<node>", encoding="utf-8")
        result = runner.invoke(cli, ["methods", str(path)])
        assert result.exit_code == 1
        assert "Introspection error" in result.output

    def test_no_interfaces(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "empty.xml"
        path.write_text("<node/>", encoding="utf-8")
        result = runner.invoke(cli, ["methods", str(path)])
        assert result.exit_code == 0
        assert "No interfaces" in result.output


class TestCallCommand:
    def _invoke(self, runner: CliRunner, path: Path, *args: str):  # type: ignore[no-untyped-def]
        return runner.invoke(
            cli,
            ["call", str(path), "org.example.Player", *args, "--object-path", "/org/example/Player"],
        )

    def test_valid_call(self, runner: CliRunner, player_xml_file: Path) -> None:
        result = self._invoke(runner, player_xml_file, "Seek", "5000")
        assert result.exit_code == 0
        assert "org.example.Player.Seek" in result.output
        assert "5000" in result.output

    def test_dict_argument(self, runner: CliRunner, player_xml_file: Path) -> None:
        result = self._invoke(runner, player_xml_file, "SetVolume", "5", '{"mute": "b"->true}')
        assert result.exit_code == 0
        assert '{"mute": "b"->true}' in result.output

    def test_wrong_argument_count(self, runner: CliRunner, player_xml_file: Path) -> None:
        result = self._invoke(runner, player_xml_file, "Seek")
        assert result.exit_code == 1
        assert "takes 1 argument(s)" in result.output

    def test_invalid_argument(self, runner: CliRunner, player_xml_file: Path) -> None:
        result = self._invoke(runner, player_xml_file, "SetVolume", "x", "{}")
        assert result.exit_code == 1
        assert "Argument 0" in result.output

    def test_unknown_method(self, runner: CliRunner, player_xml_file: Path) -> None:
        result = self._invoke(runner, player_xml_file, "Missing")
        assert result.exit_code == 1
        assert "no method 'Missing'" in result.output

    def test_unknown_object(self, runner: CliRunner, player_xml_file: Path) -> None:
        result = runner.invoke(cli, ["call", str(player_xml_file), "org.example.Player", "Stop"])
        assert result.exit_code == 1
        assert "No object '/'" in result.output
