# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from kuma import process
from kuma.process import TIMEOUT_EXIT_CODE, CommandOptions, SubprocessExecutionError, run_command


def test_command_options_reject_negative_timeout() -> None:
    with pytest.raises(ValueError):
        CommandOptions(timeout=-1)


def test_run_command_requires_arguments() -> None:
    with pytest.raises(ValueError):
        run_command([])


def test_run_command_reports_missing_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(process, "find_executable", lambda _cmd: None)

    with pytest.raises(FileNotFoundError, match="not-a-real-tool"):
        run_command(["not-a-real-tool", "--version"])


def test_run_command_resolves_executable_and_captures_text(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        seen.update(kwargs)
        return subprocess.CompletedProcess(cmd, 1, stdout="finding\n", stderr="")

    monkeypatch.setattr(process, "find_executable", lambda cmd: f"/usr/bin/{cmd}")
    monkeypatch.setattr(process.subprocess, "run", fake_run)

    completed = run_command(["ruff", "check", "src"], options=CommandOptions(cwd=Path("/work"), timeout=3))

    assert completed.returncode == 1
    assert completed.stdout == "finding\n"
    assert seen["cmd"] == ["/usr/bin/ruff", "check", "src"]
    assert seen["cwd"] == "/work"
    assert seen["timeout"] == 3
    assert seen["text"] is True
    assert seen["stdin"] is subprocess.DEVNULL


def test_run_command_maps_timeout_to_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"], output=b"partial", stderr=None)

    monkeypatch.setattr(process, "find_executable", lambda cmd: f"/usr/bin/{cmd}")
    monkeypatch.setattr(process.subprocess, "run", fake_run)

    completed = run_command(["radon", "cc"], options=CommandOptions(timeout=2))

    assert completed.returncode == TIMEOUT_EXIT_CODE
    assert completed.stdout == "partial"
    assert completed.stderr == "Command timed out after 2.0s"


def test_run_command_check_raises_on_failure() -> None:
    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command([sys.executable, "-c", "import sys; sys.exit(3)"], options=CommandOptions(check=True))

    assert excinfo.value.returncode == 3


def test_run_command_executes_real_process() -> None:
    completed = run_command([sys.executable, "-c", "print('hello')"])

    assert completed.returncode == 0
    assert completed.stdout.strip() == "hello"
