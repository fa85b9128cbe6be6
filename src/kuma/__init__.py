# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core package metadata and convenience hooks."""

from __future__ import annotations

from .api import smell
from .tool_versions import kuma_version

__all__ = ["__version__", "smell"]

__version__ = kuma_version()
