# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from helpers.executors import FakeExecutor


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``Path.home`` at an empty directory so user config never leaks in."""

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a project directory containing one module."""

    root = tmp_path / "project"
    root.mkdir()
    (root / "module.py").write_text("x = 0\nprint(x)\n", encoding="utf-8")
    return root


@pytest.fixture
def fake_executor() -> FakeExecutor:
    return FakeExecutor()
