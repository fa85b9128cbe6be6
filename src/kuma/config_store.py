# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-invocation cache of resolved configuration objects."""

from __future__ import annotations

from pathlib import Path

from .config import Config
from .config_loader import ConfigLoader


class ConfigStore:
    """Resolve the configuration that applies to a target file or directory.

    Directory lookups and parsed configuration objects are cached separately,
    so sibling targets sharing a configuration file reuse one :class:`Config`.
    """

    def __init__(self, loader: ConfigLoader | None = None) -> None:
        self.loader = loader or ConfigLoader()
        self._options_config: Config | None = None
        self._path_cache: dict[Path, Path | None] = {}
        self._object_cache: dict[Path | None, Config] = {}

    @property
    def options_config(self) -> Config | None:
        """Return the override supplied through ``-c``, if any."""

        return self._options_config

    def set_options_config(self, path: Path) -> None:
        """Load ``path`` and use it for every target regardless of location."""

        fragment = self.loader.load_file(path)
        self._options_config = self.loader.merge_with_default(fragment, path)

    def for_path(self, file_or_dir: Path) -> Config:
        """Return the configuration governing ``file_or_dir``."""

        if self._options_config is not None:
            return self._options_config

        directory = file_or_dir if file_or_dir.is_dir() else file_or_dir.parent
        directory = directory.resolve()
        if directory not in self._path_cache:
            self._path_cache[directory] = self.loader.configuration_file_for(directory)
        path = self._path_cache[directory]
        if path not in self._object_cache:
            self.loader.debug_log(f"For {directory}: {path if path is not None else 'default configuration'}")
            self._object_cache[path] = self.loader.configuration_from_file(path)
        return self._object_cache[path]


__all__ = ["ConfigStore"]
