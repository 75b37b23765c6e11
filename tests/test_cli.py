"""Tests for cli.py — global flags, routing, help and exit codes."""

import pytest

from todi_cli import config
from todi_cli.cli import _extract_global_flags, build_parser
from todi_cli.exceptions import UsageError
from todi_cli.usage import HELP_TEXT, PROJECT_HELP, TASK_HELP

# ---------------------------------------------------------------------------
# _extract_global_flags
# ---------------------------------------------------------------------------


class TestExtractGlobalFlags:
    def test_no_flags(self):
        flags = _extract_global_flags(["list"])
        assert flags.json is False
        assert flags.remaining == ["list"]

    def test_flags_anywhere(self):
        flags = _extract_global_flags(["list", "--json", "Inbox", "-q", "--verbose"])
        assert flags.json is True
        assert flags.quiet is True
        assert flags.verbose is True
        assert flags.remaining == ["list", "Inbox"]

    def test_value_flags(self):
        flags = _extract_global_flags(
            ["--config", "/tmp/c.json", "add", "x", "--api-base=http://localhost:1"]
        )
        assert flags.config_path == "/tmp/c.json"
        assert flags.api_base == "http://localhost:1"
        assert flags.remaining == ["add", "x"]

    def test_value_flag_missing_argument(self):
        with pytest.raises(UsageError) as exc_info:
            _extract_global_flags(["list", "--config"])
        assert str(exc_info.value) == "flag needs an argument: --config"

    def test_double_dash_stops_scan(self):
        flags = _extract_global_flags(["add", "--", "--json"])
        assert flags.json is False
        assert flags.remaining == ["add", "--", "--json"]

    def test_leading_double_dash_dropped(self):
        flags = _extract_global_flags(["--", "list", "--json"])
        assert flags.json is False
        assert flags.remaining == ["list", "--json"]

    def test_double_dash_after_global_flag(self):
        flags = _extract_global_flags(["--plain", "--", "task", "list"])
        assert flags.plain is True
        assert flags.remaining == ["task", "list"]

    def test_help_only_before_command(self):
        assert _extract_global_flags(["-h"]).show_help is True
        flags = _extract_global_flags(["list", "-h"])
        assert flags.show_help is False
        assert flags.remaining == ["list", "-h"]


class TestBuildParser:
    def test_task_add_flags(self):
        ns = build_parser().parse_args(
            ["task", "add", "Write", "docs", "--label", "a", "--label", "b", "--priority", "3"]
        )
        assert ns.words == ["Write", "docs"]
        assert ns.label == ["a", "b"]
        assert ns.priority == 3

    def test_limit_range(self):
        with pytest.raises(UsageError):
            build_parser().parse_args(["task", "list", "--limit", "0"])
        with pytest.raises(UsageError):
            build_parser().parse_args(["task", "list", "--limit", "201"])

    def test_activity_limit_range(self):
        ns = build_parser().parse_args(["activity", "list"])
        assert ns.limit == config.DEFAULT_ACTIVITY_LIMIT
        with pytest.raises(UsageError):
            build_parser().parse_args(["activity", "list", "--limit", "101"])

    def test_unknown_flag(self):
        with pytest.raises(UsageError):
            build_parser().parse_args(["label", "list", "--bogus"])

    def test_no_abbreviations(self):
        with pytest.raises(UsageError):
            build_parser().parse_args(["task", "add", "x", "--desc", "y"])


# ---------------------------------------------------------------------------
# run()
# ---------------------------------------------------------------------------


class TestRouting:
    def test_no_args_prints_usage(self, cli):
        result = cli()
        assert result.code == 2
        assert result.out == HELP_TEXT

    def test_help(self, cli):
        assert cli("--help").code == 0
        assert cli("help").out == HELP_TEXT

    def test_version(self, cli):
        result = cli("--version")
        assert result.code == 0
        assert result.out == f"todi {config.VERSION}\n"

    def test_unknown_command(self, cli):
        result = cli("frobnicate")
        assert result.code == 2
        assert result.err.startswith("error: unknown command: frobnicate\n")
        assert "Usage:" in result.err

    def test_leading_double_dash(self, cli, token, fake_api):
        fake_api.page("/tasks", [])
        result = cli("--", "task", "list")
        assert result.code == 0
        assert fake_api.calls("GET", "/tasks")[0].query == {"limit": "50"}

    def test_unknown_group_action(self, cli):
        result = cli("project", "explode")
        assert result.code == 2
        assert result.err.startswith("error: unknown project command: explode\n")

    def test_group_without_action(self, cli):
        result = cli("project")
        assert result.code == 2
        assert result.out == PROJECT_HELP

    def test_group_help(self, cli):
        assert cli("project", "help").code == 0
        result = cli("list", "--help")
        assert result.code == 0
        assert result.out == TASK_HELP

    def test_json_and_plain_conflict(self, cli, token):
        result = cli("--json", "--plain", "list")
        assert result.code == 2
        assert result.err == "error: cannot use --json and --plain together\n"

    def test_missing_token(self, cli):
        result = cli("list")
        assert result.code == 1
        assert "missing Todoist token" in result.err

    def test_usage_error_exit_code(self, cli, token):
        result = cli("list", "--limit", "abc")
        assert result.code == 2
        assert result.err.startswith("error: argument --limit")

    def test_api_base_precedence(self, cli, token, fake_api, monkeypatch):
        monkeypatch.setenv(config.API_BASE_ENV, "http://env-host")
        fake_api.page("/tasks", [])
        cli("list")
        assert fake_api.requests[-1].url.startswith("http://env-host/api/v1/tasks")
        cli("--api-base", "http://flag-host/", "list")
        assert fake_api.requests[-1].url.startswith("http://flag-host/api/v1/tasks")

    def test_bad_config_file(self, cli, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{")
        result = cli("--config", str(path), "config", "get", "token")
        assert result.code == 1
        assert result.err.startswith("error: parse config:")
