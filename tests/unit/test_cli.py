"""Tests for the command line entrypoint."""
from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from kubegen.cli import build_parser, execute, main, parse_args


@pytest.fixture
def no_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config lookup at an empty location and clear env overrides."""
    monkeypatch.setenv("KUBEGEN_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("KUBEGEN_SERVER", raising=False)
    monkeypatch.delenv("KUBEGEN_NAMESPACE", raising=False)
    return tmp_path


class TestParseArgs:
    def test_container_args_after_separator(self):
        args = parse_args(build_parser(), ["run", "job", "--image", "busybox", "--", "echo", "--port", "1"])
        assert args.name == "job"
        assert args.args == ["echo", "--port", "1"]
        assert args.port is None

    def test_repeated_env(self):
        args = parse_args(build_parser(), ["run", "job", "--env", "a=b", "--env", "c=d"])
        assert args.env == ["a=b", "c=d"]

    def test_subcommand_survives_command_flag_default(self):
        """``run`` without ``--command`` still selects the run subcommand."""
        args = parse_args(build_parser(), ["run", "web", "--image", "nginx"])
        assert args.subcommand == "run"
        assert args.command is False

    def test_command_flag_set(self):
        args = parse_args(build_parser(), ["run", "web", "--image", "nginx", "--command", "--", "sh"])
        assert args.subcommand == "run"
        assert args.command is True

    def test_unknown_output_rejected(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            parse_args(build_parser(), ["run", "job", "-o", "wide"])
        assert excinfo.value.code == 2


class TestMain:
    def test_dry_run_success(self, no_config, capsys):
        code = main(["run", "web", "--image", "nginx", "--port", "80", "--expose", "--dry-run", "-o", "json"])
        assert code == 0
        out = capsys.readouterr().out
        decoder = json.JSONDecoder()
        first, end = decoder.raw_decode(out)
        second, _ = decoder.raw_decode(out[end:].lstrip())
        assert first["kind"] == "ReplicationController"
        assert second["kind"] == "Service"

    def test_dry_run_without_command_flag(self, no_config, capsys):
        code = main(["run", "web", "--image", "nginx", "--dry-run"])
        assert code == 0
        captured = capsys.readouterr()
        assert captured.out == 'replicationcontroller "web" created (dry run)\n'
        assert "usage:" not in captured.out

    def test_error_exit_code(self, no_config, capsys):
        code = main(["run", "web", "--image", "nginx", "--restart", "foo", "--dry-run"])
        assert code == 1
        assert "error: invalid restart policy: foo" in capsys.readouterr().err

    def test_bad_config_reported(self, no_config, capsys, monkeypatch):
        monkeypatch.setenv("KUBEGEN_SERVER", "not-a-url")
        code = main(["run", "web", "--image", "nginx"])
        assert code == 1
        assert "invalid configuration" in capsys.readouterr().err

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: kubegen" in capsys.readouterr().out

    def test_generators_listing(self, capsys):
        assert main(["generators"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert "run\trun/v1" in lines
        assert "expose\tservice/v2" in lines


class TestExecute:
    def test_submits_through_transport(self, no_config, api_server):
        args = parse_args(
            build_parser(),
            ["-s", "http://testserver", "-n", "team", "run", "web", "--image", "nginx"],
        )
        out = io.StringIO()
        execute(args, out, transport=api_server.transport)
        assert [str(r.url) for r in api_server.requests] == [
            "http://testserver/api/v1/namespaces/team/replicationcontrollers"
        ]
        assert out.getvalue() == 'replicationcontroller "web" created\n'
