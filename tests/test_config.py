# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from kuma.config import COMPLEXITY_TOOL, DUPLICATION_TOOL, STYLE_TOOL, Config, ToolConfig


def test_default_tools_cover_the_three_roles() -> None:
    config = Config()

    assert [name for name, _ in config.selected_tools()] == [DUPLICATION_TOOL, COMPLEXITY_TOOL, STYLE_TOOL]
    assert [tool.heading(name) for name, tool in config.selected_tools()] == [
        "# Similarity",
        "# Complexity",
        "# Ruff",
    ]


def test_selected_tools_honours_only_and_enabled() -> None:
    config = Config()
    config.tools[DUPLICATION_TOOL].enabled = False

    assert [name for name, _ in config.selected_tools()] == [COMPLEXITY_TOOL, STYLE_TOOL]
    assert [name for name, _ in config.selected_tools([DUPLICATION_TOOL, STYLE_TOOL])] == [STYLE_TOOL]


def test_tools_with_equal_order_sort_by_name() -> None:
    config = Config(
        tools={
            "zeta": ToolConfig(command=["zeta"]),
            "alpha": ToolConfig(command=["alpha"]),
        },
    )

    assert [name for name, _ in config.selected_tools()] == ["alpha", "zeta"]


def test_heading_falls_back_to_tool_name() -> None:
    assert ToolConfig(command=["bandit"]).heading("security") == "# security"


def test_build_command_orders_optional_arguments() -> None:
    tool = ToolConfig(
        command=["ruff", "check"],
        format_option="--output-format",
        extended_args=["--preview"],
        auto_gen_args=["--add-noqa"],
    )

    cmd = tool.build_command(
        [Path("src"), Path("tests")],
        output_format="github",
        extended=True,
        auto_gen=True,
    )

    assert cmd == ["ruff", "check", "--output-format", "github", "--preview", "--add-noqa", "src", "tests"]


def test_format_is_dropped_for_tools_without_format_option() -> None:
    tool = ToolConfig(command=["radon", "cc"])

    assert tool.build_command([Path(".")], output_format="json") == ["radon", "cc", "."]


@pytest.mark.parametrize(
    "payload",
    [
        {"command": []},
        {"command": ["  "]},
        {"command": ["ruff"], "timeout": -1},
        {"command": ["ruff"], "unexpected": True},
    ],
)
def test_tool_config_rejects_invalid_values(payload: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        ToolConfig.model_validate(payload)


def test_to_dict_omits_provenance(tmp_path: Path) -> None:
    config = Config(source=tmp_path / ".kuma.toml")

    data = config.to_dict()

    assert "source" not in data
    assert data["tools"][STYLE_TOOL]["command"] == ["ruff", "check", "--no-fix"]
