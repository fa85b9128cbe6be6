# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application declaring the kuma command-line surface."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import typer
from typer.main import get_command

from ..options import KumaOptions

PROG_NAME: Final[str] = "kuma"

app = typer.Typer(
    name=PROG_NAME,
    help="Run duplication, complexity, and style analysers over a codebase.",
    add_completion=False,
    pretty_exceptions_enable=False,
)


@dataclass(frozen=True, slots=True)
class ParsedArguments:
    """Options plus the positional targets extracted from ``argv``."""

    options: KumaOptions
    paths: tuple[Path, ...]


@app.command()
def inspect(
    paths: list[Path] | None = typer.Argument(
        None,
        metavar="[PATHS...]",
        help="Files or directories to inspect. Defaults to the current directory.",
        show_default=False,
    ),
    output_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format forwarded to tools that support one.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Use this configuration file for every target.",
    ),
    extended_rules: bool = typer.Option(
        False,
        "--extended",
        "-R",
        help="Enable each tool's extended rule set.",
    ),
    auto_gen_config: bool = typer.Option(
        False,
        "--auto-gen-config",
        help="Ask tools that support it to record current findings as accepted.",
    ),
    only: list[str] | None = typer.Option(
        None,
        "--only",
        help="Run only the named tool(s), e.g. --only style.",
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Show configuration resolution details."),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Toggle emoji in CLI output."),
    color: bool = typer.Option(True, "--color/--no-color", help="Toggle coloured CLI output."),
    version: bool = typer.Option(False, "--version", "-v", help="Display version and exit."),
    verbose_version: bool = typer.Option(
        False,
        "--verbose-version",
        "-V",
        help="Display kuma, Python, and wrapped tool versions and exit.",
    ),
) -> None:
    """Inspect PATHS with every configured analyser and exit non-zero on findings."""

    from .command import CLI

    options = KumaOptions(
        output_format=output_format,
        config=config,
        extended_rules=extended_rules,
        auto_gen_config=auto_gen_config,
        only=tuple(only or []),
        debug=debug,
        emoji=emoji,
        color=color,
        version=version,
        verbose_version=verbose_version,
    )
    raise typer.Exit(code=CLI().execute(options, list(paths or [])))


def parse_arguments(arguments: Sequence[str]) -> ParsedArguments:
    """Parse ``arguments`` with the command definition without invoking it.

    Raises:
        click.exceptions.Exit: When an eager option such as ``--help`` already
            produced its output.
        click.ClickException: When the arguments are not valid.
    """

    command = get_command(app)
    with command.make_context(PROG_NAME, list(arguments)) as ctx:
        params = dict(ctx.params)
    raw_paths = params.get("paths") or ()
    return ParsedArguments(
        options=KumaOptions.from_params(params),
        paths=tuple(Path(str(path)) for path in raw_paths),
    )


def main() -> None:
    """Console-script entry point."""

    from .command import CLI

    raise SystemExit(CLI().run(sys.argv[1:]))


__all__ = ["ParsedArguments", "app", "main", "parse_arguments"]
