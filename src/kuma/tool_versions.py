# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Version strings for kuma and the analysers it wraps."""

from __future__ import annotations

import platform
from collections.abc import Callable
from importlib import metadata
from subprocess import CompletedProcess

from .config import Config
from .process import CommandOptions, run_command

UNAVAILABLE = "not installed"


def kuma_version() -> str:
    """Return the installed kuma distribution version."""

    try:
        return metadata.version("kuma")
    except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
        return "0.0.0"


def collect_tool_versions(
    config: Config,
    *,
    executor: Callable[..., CompletedProcess[str]] = run_command,
) -> dict[str, str]:
    """Return the first line each wrapped tool prints for its version query."""

    versions: dict[str, str] = {}
    for name, tool in config.selected_tools():
        cmd = [tool.command[0], *tool.version_args]
        try:
            completed = executor(cmd, options=CommandOptions(timeout=30))
        except OSError:
            versions[name] = UNAVAILABLE
            continue
        output = (completed.stdout or completed.stderr or "").strip()
        versions[name] = output.splitlines()[0] if output else UNAVAILABLE
    return versions


def verbose_version_lines(
    config: Config,
    *,
    executor: Callable[..., CompletedProcess[str]] = run_command,
) -> list[str]:
    """Return the report printed by ``--verbose-version``."""

    lines = [
        f"kuma {kuma_version()} (using Python {platform.python_version()}, {platform.platform(terse=True)})",
    ]
    for name, version in collect_tool_versions(config, executor=executor).items():
        lines.append(f"  {name}: {version}")
    return lines


__all__ = ["collect_tool_versions", "kuma_version", "verbose_version_lines"]
