# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Result models produced by a run."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ToolStatus(str, Enum):
    """Classification of a single tool invocation."""

    CLEAN = "clean"
    FINDINGS = "findings"
    ERROR = "error"


class ToolOutcome(BaseModel):
    """Result bundle produced by each executed tool."""

    model_config = ConfigDict(validate_assignment=True)

    tool: str
    targets: list[Path] = Field(default_factory=list)
    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""
    status: ToolStatus

    @property
    def ok(self) -> bool:
        """Return ``True`` when the tool completed without findings or errors."""

        return self.status is ToolStatus.CLEAN


class RunResult(BaseModel):
    """Aggregate result for a full run."""

    model_config = ConfigDict(validate_assignment=True)

    outcomes: list[ToolOutcome] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    aborted: bool = False

    @property
    def all_passed(self) -> bool:
        """Return ``True`` when every tool ran clean and no error was recorded."""

        return not self.errors and all(outcome.ok for outcome in self.outcomes)

    @property
    def succeeded(self) -> bool:
        """Return ``True`` when the run passed and was not aborted."""

        return self.all_passed and not self.aborted


__all__ = ["RunResult", "ToolOutcome", "ToolStatus"]
