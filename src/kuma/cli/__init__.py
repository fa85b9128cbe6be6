# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""kuma CLI package exports."""

from __future__ import annotations

from typing import Final

from .app import app, main
from .command import CLI

__all__: Final[list[str]] = ["CLI", "app", "main"]
