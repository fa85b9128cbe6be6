# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

from __future__ import annotations

import signal
import threading

import pytest

from kuma import interrupts
from kuma.interrupts import ABORT_NOTICE, CancellationToken, InterruptHandler, InterruptState, terminate


class _Exited(BaseException):
    pass


def _recording_exit(codes: list[int]):
    def _exit(code: int) -> None:
        codes.append(code)
        raise _Exited

    return _exit


def test_token_starts_unset_and_stays_set() -> None:
    token = CancellationToken()
    assert token.cancelled is False

    token.cancel()
    token.cancel()

    assert token.cancelled is True


def test_first_interrupt_sets_token_and_notifies() -> None:
    token = CancellationToken()
    messages: list[str] = []
    codes: list[int] = []
    handler = InterruptHandler(token, notify=messages.append, hard_exit=_recording_exit(codes))

    handler(signal.SIGINT, None)

    assert token.cancelled is True
    assert handler.state is InterruptState.ABORTING
    assert messages == ["", ABORT_NOTICE]
    assert codes == []


def test_second_interrupt_hard_exits_with_status_one() -> None:
    token = CancellationToken()
    codes: list[int] = []
    handler = InterruptHandler(token, hard_exit=_recording_exit(codes))
    handler()

    with pytest.raises(_Exited):
        handler()

    assert codes == [1]
    assert handler.state is InterruptState.TERMINATED


def test_interrupt_after_external_cancel_hard_exits() -> None:
    token = CancellationToken()
    token.cancel()
    codes: list[int] = []
    handler = InterruptHandler(token, hard_exit=_recording_exit(codes))

    with pytest.raises(_Exited):
        handler()

    assert codes == [1]


def test_context_manager_installs_and_restores(monkeypatch: pytest.MonkeyPatch) -> None:
    registered: list[object] = []
    previous = object()

    def fake_signal(signum: int, handler: object) -> object:
        registered.append(handler)
        return previous

    monkeypatch.setattr(signal, "signal", fake_signal)
    handler = InterruptHandler(CancellationToken())

    with handler as active:
        assert active.installed is True
        assert registered == [handler]

    assert registered == [handler, previous]
    assert handler.installed is False


def test_install_is_refused_off_the_main_thread(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(signal, "signal", lambda *_args: pytest.fail("signal.signal must not be called"))
    handler = InterruptHandler(CancellationToken())
    results: list[bool] = []

    worker = threading.Thread(target=lambda: results.append(handler.install()))
    worker.start()
    worker.join()

    assert results == [False]
    handler.restore()


def test_terminate_flushes_streams_before_exiting(monkeypatch: pytest.MonkeyPatch) -> None:
    events: list[str] = []

    class _Stream:
        def __init__(self, name: str) -> None:
            self.name = name

        def flush(self) -> None:
            events.append(f"flush {self.name}")

    class _BrokenStream:
        def flush(self) -> None:
            raise BrokenPipeError

    def fake_exit(code: int) -> None:
        events.append(f"exit {code}")
        raise _Exited

    monkeypatch.setattr(interrupts.sys, "stdout", _BrokenStream())
    monkeypatch.setattr(interrupts.sys, "stderr", _Stream("stderr"))
    monkeypatch.setattr(interrupts.os, "_exit", fake_exit)

    with pytest.raises(_Exited):
        terminate(1)

    assert events == ["flush stderr", "exit 1"]
