# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error-stream reporting for the CLI: error summaries and fatal failures."""

from __future__ import annotations

import platform
from collections.abc import Sequence

from rich.console import Console
from rich.text import Text
from rich.traceback import Traceback

from ..tool_versions import kuma_version
from .shared import CLILogger


def display_error_summary(errors: Sequence[str], *, console: Console) -> None:
    """Print the aggregated tool errors once the run has finished.

    Args:
        errors: Diagnostics accumulated by the runner.
        console: Console bound to the error stream.
    """

    if not errors:
        return

    plural = "s" if len(errors) > 1 else ""
    console.print()
    console.print(Text(f"{len(errors)} error{plural} occurred:", style="red"))
    for error in errors:
        console.print(Text(error))
    console.print(
        Text(
            "Errors are usually caused by a wrapped tool that is missing or crashed.\n"
            "If the tools are installed correctly, please report the problem and mention\n"
            f"the following information in the issue report:\n"
            f"kuma {kuma_version()} (using Python {platform.python_version()})",
        ),
    )


def report_fatal(exc: BaseException, *, logger: CLILogger) -> None:
    """Write the message and traceback of an unexpected failure to stderr."""

    logger.fail(str(exc) or type(exc).__name__)
    logger.console.print(Traceback.from_exception(type(exc), exc, exc.__traceback__))


__all__ = ["display_error_summary", "report_fatal"]
