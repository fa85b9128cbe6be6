# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Programmatic entry point for embedding kuma in other tooling."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from .config_store import ConfigStore
from .options import KumaOptions
from .runner import Executor, Runner


def smell(
    io: TextIO,
    paths: Sequence[Path] | None = None,
    *,
    options: KumaOptions | None = None,
    executor: Executor | None = None,
) -> bool:
    """Run the configured analysers over ``paths`` and write their reports to ``io``.

    Args:
        io: Writable text stream receiving every tool's output.
        paths: Targets to inspect; defaults to the current directory.
        options: Optional flag set; defaults to a plain run.
        executor: Optional process runner used instead of :func:`kuma.process.run_command`.

    Returns:
        bool: ``True`` when every tool ran clean.
    """

    runner = Runner(options or KumaOptions(), ConfigStore(), executor=executor, sink=io)
    return runner.run(list(paths or ()))


__all__ = ["smell"]
