# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

from helpers.executors import FakeExecutor, completed
from kuma.config import Config, ToolConfig
from kuma.tool_versions import UNAVAILABLE, collect_tool_versions, verbose_version_lines


def test_collect_tool_versions_takes_first_line() -> None:
    executor = FakeExecutor(
        {
            "pylint": completed(0, stdout="pylint 3.2.0\nastroid 3.2.0\nPython 3.12.1\n"),
            "radon": completed(0, stdout=""),
            "ruff": completed(0, stderr="ruff 0.5.0\n"),
        },
    )

    versions = collect_tool_versions(Config(), executor=executor)

    assert versions == {"duplication": "pylint 3.2.0", "complexity": UNAVAILABLE, "style": "ruff 0.5.0"}


def test_collect_tool_versions_uses_configured_arguments() -> None:
    config = Config(tools={"security": ToolConfig(command=["bandit", "-r"], version_args=["-V"])})
    executor = FakeExecutor({"bandit": OSError("permission denied")})

    assert collect_tool_versions(config, executor=executor) == {"security": UNAVAILABLE}
    assert executor.calls == [["bandit", "-V"]]


def test_verbose_version_lines_skip_disabled_tools() -> None:
    config = Config()
    config.tools["complexity"].enabled = False

    lines = verbose_version_lines(config, executor=FakeExecutor())

    assert lines[0].startswith("kuma ")
    assert lines[1:] == [f"  duplication: {UNAVAILABLE}", f"  style: {UNAVAILABLE}"]
