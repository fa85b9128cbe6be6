# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run lifecycle of the ``kuma`` command: options, interrupts, exit status."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import click
import typer

from ..config import Config, ConfigError
from ..config_loader import ConfigLoader
from ..config_store import ConfigStore
from ..interrupts import CancellationToken, HardExit, InterruptHandler, terminate
from ..options import KumaOptions
from ..process import run_command
from ..runner import Executor, Runner
from ..tool_versions import kuma_version, verbose_version_lines
from .app import parse_arguments
from .reporting import display_error_summary, report_fatal
from .shared import build_cli_logger

RunnerFactory = Callable[..., Runner]


class CLI:
    """Drive one invocation from raw arguments to a process exit status.

    Exit status is ``0`` only when every tool ran clean and no interrupt was
    received; findings, tool errors, aborts, and fatal failures yield ``1``.
    """

    def __init__(
        self,
        *,
        config_store: ConfigStore | None = None,
        runner_factory: RunnerFactory = Runner,
        executor: Executor | None = None,
        hard_exit: HardExit = terminate,
    ) -> None:
        self.options = KumaOptions()
        self.config_store = config_store
        self._runner_factory = runner_factory
        self._executor = executor
        self._hard_exit = hard_exit
        self._logger = build_cli_logger(emoji=True)

    def run(self, arguments: Sequence[str]) -> int:
        """Parse ``arguments`` and execute the run they describe."""

        try:
            parsed = parse_arguments(arguments)
        except (click.exceptions.Exit, typer.Exit) as exc:
            return exc.exit_code
        except click.ClickException as exc:
            exc.show()
            return 1
        except Exception as exc:  # noqa: BLE001 - top-level boundary reports every failure
            report_fatal(exc, logger=self._logger)
            return 1
        return self.execute(parsed.options, parsed.paths)

    def execute(self, options: KumaOptions, paths: Sequence[Path]) -> int:
        """Execute an already parsed invocation and return its exit status."""

        self.options = options
        self._logger = build_cli_logger(emoji=options.emoji, debug=options.debug, no_color=not options.color)
        try:
            if options.exiting:
                self._handle_exiting_options()
                return 0
            self._act_on_options()
            runner = self._runner_factory(
                options,
                self.config_store,
                token=CancellationToken(),
                executor=self._executor,
            )
            with self.trap_interrupt(runner) as handler:
                if not handler.installed:
                    self._logger.warn("Interrupt handling is only available on the main thread")
                all_passed = runner.run(list(paths))
            display_error_summary(runner.errors, console=self._logger.console)
            return 0 if all_passed and not runner.aborting else 1
        except Exception as exc:  # noqa: BLE001 - top-level boundary reports every failure
            report_fatal(exc, logger=self._logger)
            return 1

    def trap_interrupt(self, runner: Runner) -> InterruptHandler:
        """Return a SIGINT handler bound to ``runner``'s live cancellation token."""

        return InterruptHandler(runner.token, notify=self._logger.notice, hard_exit=self._hard_exit)

    def _handle_exiting_options(self) -> None:
        if self.options.version:
            self._logger.echo(kuma_version())
        if self.options.verbose_version:
            store = self._ensure_config_store()
            try:
                config = store.for_path(Path.cwd())
            except ConfigError as exc:
                self._logger.warn(f"{exc}; reporting versions of the default tools")
                config = Config()
            for line in verbose_version_lines(config, executor=self._executor or run_command):
                self._logger.echo(line)

    def _act_on_options(self) -> None:
        store = self._ensure_config_store()
        store.loader.debug = self.options.debug
        if self.options.config is not None:
            store.set_options_config(self.options.config)

    def _ensure_config_store(self) -> ConfigStore:
        if self.config_store is None:
            loader = ConfigLoader(debug=self.options.debug, echo=self._logger.debug)
            self.config_store = ConfigStore(loader)
        return self.config_store


__all__ = ["CLI"]
