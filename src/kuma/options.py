# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsed command-line options shared by the CLI and the runner."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

EXITING_OPTIONS: Final[tuple[str, ...]] = ("version", "verbose_version")


@dataclass(frozen=True, slots=True)
class KumaOptions:
    """Immutable snapshot of the flags supplied for one invocation."""

    output_format: str | None = None
    config: Path | None = None
    extended_rules: bool = False
    auto_gen_config: bool = False
    only: tuple[str, ...] = ()
    debug: bool = False
    emoji: bool = True
    color: bool = True
    version: bool = False
    verbose_version: bool = False

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> KumaOptions:
        """Build options from a Click/Typer parameter mapping.

        Unknown keys such as the positional ``paths`` are ignored.
        """

        config = params.get("config")
        return cls(
            output_format=params.get("output_format") or None,
            config=Path(config) if config is not None else None,
            extended_rules=bool(params.get("extended_rules", False)),
            auto_gen_config=bool(params.get("auto_gen_config", False)),
            only=tuple(params.get("only") or ()),
            debug=bool(params.get("debug", False)),
            emoji=bool(params.get("emoji", True)),
            color=bool(params.get("color", True)),
            version=bool(params.get("version", False)),
            verbose_version=bool(params.get("verbose_version", False)),
        )

    @property
    def exiting(self) -> bool:
        """Return ``True`` when an option asks to print information and stop."""

        return any(getattr(self, name) for name in EXITING_OPTIONS)


__all__ = ["EXITING_OPTIONS", "KumaOptions"]
