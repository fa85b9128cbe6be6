# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Sequential dispatcher that runs every configured analyser over the targets."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from subprocess import CompletedProcess
from typing import TextIO

from .config import Config, ToolConfig
from .config_store import ConfigStore
from .interrupts import CancellationToken
from .models import RunResult, ToolOutcome, ToolStatus
from .options import KumaOptions
from .process import TIMEOUT_EXIT_CODE, CommandOptions, run_command

Executor = Callable[..., CompletedProcess[str]]
TargetGroup = tuple[Config, list[Path]]


class Runner:
    """Invoke the configured tools one after another and aggregate pass/fail.

    Tool output is forwarded verbatim to ``sink``. Tools that cannot start or
    that exit with one of their ``error_exit_codes``, a status matching
    their ``error_exit_mask`` or by a signal are recorded in
    :attr:`errors` and the loop carries on. The cancellation token is polled
    before every invocation; once it is set no further tool is started.
    """

    def __init__(
        self,
        options: KumaOptions,
        config_store: ConfigStore,
        *,
        token: CancellationToken | None = None,
        executor: Executor | None = None,
        sink: TextIO | None = None,
    ) -> None:
        self._options = options
        self._config_store = config_store
        self._token = token or CancellationToken()
        self._executor = executor or run_command
        self._sink = sink
        self._errors: list[str] = []
        self._outcomes: list[ToolOutcome] = []
        self._result: RunResult | None = None

    @property
    def errors(self) -> list[str]:
        """Diagnostics for invocations that failed abnormally, in occurrence order."""

        return self._errors

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def aborting(self) -> bool:
        return self._token.cancelled

    @property
    def result(self) -> RunResult | None:
        """Return the result of the last completed :meth:`run`."""

        return self._result

    def abort(self) -> None:
        """Request that no further tool invocations are started."""

        self._token.cancel()

    def run(self, paths: Sequence[Path]) -> bool:
        """Run every selected tool over ``paths`` and return whether all passed.

        Args:
            paths: Target files or directories; the current directory when empty.

        Returns:
            bool: ``True`` when every tool ran clean and no error was recorded.
        """

        targets = list(paths) or [Path(".")]
        groups = self._group_targets(targets)
        self._report_unknown_tools(groups)

        for config, group_targets in groups:
            for name, tool in config.selected_tools(self._options.only):
                if self.aborting:
                    break
                self._outcomes.append(self._invoke(name, tool, group_targets))
            if self.aborting:
                break

        self._result = RunResult(
            outcomes=list(self._outcomes),
            errors=list(self._errors),
            aborted=self.aborting,
        )
        return self._result.all_passed

    # Internal helpers ----------------------------------------------------------

    def _group_targets(self, targets: Sequence[Path]) -> list[TargetGroup]:
        groups: list[TargetGroup] = []
        for target in targets:
            config = self._config_store.for_path(target)
            for existing, members in groups:
                if existing is config:
                    members.append(target)
                    break
            else:
                groups.append((config, [target]))
        return groups

    def _report_unknown_tools(self, groups: Sequence[TargetGroup]) -> None:
        known = {name for config, _ in groups for name in config.tools}
        for name in self._options.only:
            if name not in known:
                self._errors.append(f"Unknown tool '{name}' requested with --only.")

    def _invoke(self, name: str, tool: ToolConfig, targets: list[Path]) -> ToolOutcome:
        cmd = tool.build_command(
            targets,
            output_format=self._options.output_format,
            extended=self._options.extended_rules,
            auto_gen=self._options.auto_gen_config,
        )
        self._write(tool.heading(name))
        try:
            completed = self._executor(cmd, options=CommandOptions(timeout=tool.timeout))
        except OSError as exc:
            self._record_error(name, targets, str(exc))
            return ToolOutcome(tool=name, targets=targets, status=ToolStatus.ERROR, stderr=str(exc))

        stdout = completed.stdout or ""
        stderr = completed.stderr or ""
        self._write(stdout)
        status = _classify(tool, completed.returncode, stdout)
        if status is ToolStatus.ERROR:
            self._record_error(name, targets, _failure_reason(completed.returncode, stderr))
        return ToolOutcome(
            tool=name,
            targets=targets,
            returncode=completed.returncode,
            stdout=stdout,
            stderr=stderr,
            status=status,
        )

    def _record_error(self, name: str, targets: Sequence[Path], reason: str) -> None:
        joined = ", ".join(str(target) for target in targets)
        self._errors.append(f"{name} failed on {joined}: {reason}")

    def _write(self, text: str) -> None:
        if not text:
            return
        sink = self._sink if self._sink is not None else sys.stdout
        sink.write(text if text.endswith("\n") else f"{text}\n")


def _classify(tool: ToolConfig, returncode: int, stdout: str) -> ToolStatus:
    if returncode == 0:
        if tool.fail_on_output and stdout.strip():
            return ToolStatus.FINDINGS
        return ToolStatus.CLEAN
    if returncode < 0:
        return ToolStatus.ERROR
    if returncode in tool.error_exit_codes or returncode & tool.error_exit_mask:
        return ToolStatus.ERROR
    if returncode == TIMEOUT_EXIT_CODE and tool.timeout is not None:
        return ToolStatus.ERROR
    return ToolStatus.FINDINGS


def _failure_reason(returncode: int, stderr: str) -> str:
    lines = [line.strip() for line in stderr.splitlines() if line.strip()]
    if lines:
        return lines[-1]
    if returncode < 0:
        return f"terminated by signal {-returncode}"
    return f"exited with status {returncode}"


__all__ = ["Executor", "Runner"]
