# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Cooperative SIGINT handling for a single run.

The first interrupt only sets a :class:`CancellationToken` that the runner
polls between tool invocations. A second interrupt terminates the process at
once with status ``1``.
"""

from __future__ import annotations

import os
import signal
import sys
import threading
from collections.abc import Callable
from enum import Enum
from types import FrameType, TracebackType
from typing import Final, NoReturn

ABORT_NOTICE: Final[str] = "Exiting... Interrupt again to exit immediately."

HardExit = Callable[[int], NoReturn]
Notify = Callable[[str], None]


def terminate(code: int) -> NoReturn:
    """Flush the standard streams and exit at once, skipping interpreter teardown."""

    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            # closed or broken pipe; nothing left to deliver
            continue
    os._exit(code)


class CancellationToken:
    """One-way flag shared between the signal path and the runner loop."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class InterruptState(str, Enum):
    """Lifecycle of the interrupt handler."""

    RUNNING = "running"
    ABORTING = "aborting"
    TERMINATED = "terminated"


class InterruptHandler:
    """SIGINT handler bound to the live cancellation token of one runner.

    Use as a context manager to install the handler for the duration of a run
    and restore the previous handler afterwards.
    """

    def __init__(
        self,
        token: CancellationToken,
        *,
        notify: Notify | None = None,
        hard_exit: HardExit = terminate,
    ) -> None:
        self._token = token
        self._notify = notify
        self._hard_exit = hard_exit
        self._state = InterruptState.RUNNING
        self._previous: signal.Handlers | Callable[[int, FrameType | None], object] | int | None = None
        self._installed = False

    @property
    def state(self) -> InterruptState:
        return self._state

    @property
    def installed(self) -> bool:
        return self._installed

    def __call__(self, signum: int = signal.SIGINT, frame: FrameType | None = None) -> None:
        del signum, frame
        if self._state is not InterruptState.RUNNING or self._token.cancelled:
            self._state = InterruptState.TERMINATED
            self._hard_exit(1)
            return
        self._state = InterruptState.ABORTING
        self._token.cancel()
        if self._notify is not None:
            self._notify("")
            self._notify(ABORT_NOTICE)

    def install(self) -> bool:
        """Register the handler for SIGINT.

        Returns:
            bool: ``False`` when called off the main thread, where Python does
            not allow signal handlers to be installed.
        """

        if threading.current_thread() is not threading.main_thread():
            return False
        self._previous = signal.signal(signal.SIGINT, self)
        self._installed = True
        return True

    def restore(self) -> None:
        """Reinstate the handler that was active before :meth:`install`."""

        if not self._installed:
            return
        signal.signal(signal.SIGINT, self._previous if self._previous is not None else signal.SIG_DFL)
        self._installed = False

    def __enter__(self) -> InterruptHandler:
        self.install()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.restore()


__all__ = [
    "ABORT_NOTICE",
    "CancellationToken",
    "InterruptHandler",
    "InterruptState",
    "terminate",
]
