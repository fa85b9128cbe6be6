# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models describing the wrapped analysis tools."""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


DUPLICATION_TOOL: Final[str] = "duplication"
COMPLEXITY_TOOL: Final[str] = "complexity"
STYLE_TOOL: Final[str] = "style"


class ToolConfig(BaseModel):
    """How a single external analyser is invoked and how its result is judged."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    command: list[str]
    title: str | None = None
    enabled: bool = True
    order: int = 100
    format_option: str | None = None
    extended_args: list[str] = Field(default_factory=list)
    auto_gen_args: list[str] = Field(default_factory=list)
    version_args: list[str] = Field(default_factory=lambda: ["--version"])
    # Exit statuses that mean the tool itself broke rather than found issues.
    error_exit_codes: list[int] = Field(default_factory=list)
    # Bits of a bitmask exit status (pylint style) that mean the same.
    error_exit_mask: int = 0
    fail_on_output: bool = False
    timeout: float | None = None

    @field_validator("command")
    @classmethod
    def _require_executable(cls, value: list[str]) -> list[str]:
        if not value or not value[0].strip():
            raise ValueError("command must name an executable")
        return value

    @field_validator("timeout")
    @classmethod
    def _non_negative_timeout(cls, value: float | None) -> float | None:
        if value is not None and value < 0:
            raise ValueError("timeout must be non-negative")
        return value

    def heading(self, name: str) -> str:
        """Return the section heading written before the tool output."""

        return f"# {self.title or name}"

    def build_command(
        self,
        targets: Collection[Path],
        *,
        output_format: str | None = None,
        extended: bool = False,
        auto_gen: bool = False,
    ) -> list[str]:
        """Return the full argument list for an invocation against ``targets``."""

        cmd = list(self.command)
        if output_format and self.format_option:
            cmd.extend([self.format_option, output_format])
        if extended:
            cmd.extend(self.extended_args)
        if auto_gen:
            cmd.extend(self.auto_gen_args)
        cmd.extend(str(target) for target in targets)
        return cmd


def default_tools() -> dict[str, ToolConfig]:
    """Return the built-in duplication, complexity, and style tool definitions."""

    return {
        DUPLICATION_TOOL: ToolConfig(
            title="Similarity",
            command=["pylint", "--disable=all", "--enable=duplicate-code", "--score=n"],
            order=10,
            format_option="--output-format",
            # fatal (1) and usage (32) bits
            error_exit_mask=33,
        ),
        COMPLEXITY_TOOL: ToolConfig(
            title="Complexity",
            command=["radon", "cc", "--min", "C", "--show-complexity"],
            order=20,
            fail_on_output=True,
        ),
        STYLE_TOOL: ToolConfig(
            title="Ruff",
            command=["ruff", "check", "--no-fix"],
            order=30,
            format_option="--output-format",
            extended_args=["--extend-select", "B,C90,SIM,UP"],
            auto_gen_args=["--add-noqa"],
            error_exit_codes=[2],
        ),
    }


class Config(BaseModel):
    """Resolved configuration for one directory tree."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    tools: dict[str, ToolConfig] = Field(default_factory=default_tools)
    source: Path | None = None

    def selected_tools(self, only: Collection[str] = ()) -> list[tuple[str, ToolConfig]]:
        """Return enabled tools in invocation order, optionally narrowed to ``only``."""

        selected = [
            (name, tool)
            for name, tool in self.tools.items()
            if tool.enabled and (not only or name in only)
        ]
        return sorted(selected, key=lambda item: (item[1].order, item[0]))

    def to_dict(self) -> dict[str, object]:
        """Return the configuration as a plain mapping without provenance."""

        return self.model_dump(exclude={"source"})


__all__ = [
    "COMPLEXITY_TOOL",
    "Config",
    "ConfigError",
    "DUPLICATION_TOOL",
    "STYLE_TOOL",
    "ToolConfig",
    "default_tools",
]
