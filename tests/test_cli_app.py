"""End-to-end tests for CLI dispatch and exit status mapping."""

from __future__ import annotations

from sys import executable

import pytest

from cmdinvoke.cli import run
from cmdinvoke.cli.context import exit_status_for


def test_run_prints_captured_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    code = run(["run", executable, "-c", "print('hello')"])

    assert code == 0
    assert capsys.readouterr().out == "hello\n"


def test_run_async_flag_prints_same_output(capsys: pytest.CaptureFixture[str]) -> None:
    code = run(["run", "--async", executable, "-c", "print('hello')"])

    assert code == 0
    assert capsys.readouterr().out == "hello\n"


def test_run_relays_exit_code_and_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    code = run(
        [
            "run",
            executable,
            "-c",
            "import sys; sys.stderr.write('broken' + chr(10)); sys.exit(4)",
        ]
    )

    assert code == 4
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "broken" in captured.err


def test_run_maps_timeout_to_124() -> None:
    code = run(
        ["run", "--timeout", "0.3", executable, "-c", "import time; time.sleep(2)"]
    )

    assert code == 124


def test_run_maps_launch_failure_to_127(tmp_path) -> None:
    code = run(["run", str(tmp_path / "missing-tool"), "version"])

    assert code == 127


def test_run_resolves_registered_tool_name(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("COMMAND_GIT", executable)

    code = run(["run", "git", "-c", "print('via settings')"])

    assert code == 0
    assert capsys.readouterr().out == "via settings\n"


def test_paths_lists_registered_tools(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("COMMAND_AWS", "/opt/aws")

    code = run(["paths"])

    assert code == 0
    out = capsys.readouterr().out
    assert "COMMAND_AWS" in out
    assert "/opt/aws" in out
    assert "/usr/bin/git" in out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert run([]) == 2
    assert "usage" in capsys.readouterr().out


@pytest.mark.parametrize(
    ("exit_code", "expected"),
    [(1, 1), (3, 3), (-9, 137), (256, 1)],
)
def test_exit_status_for(exit_code: int, expected: int) -> None:
    assert exit_status_for(exit_code) == expected
