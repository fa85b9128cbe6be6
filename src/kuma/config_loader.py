# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discover, load, and merge ``.kuma.toml`` configuration files."""

from __future__ import annotations

import copy
import os
import tomllib
from collections.abc import Callable, Iterable, Mapping, MutableMapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .config import Config, ConfigError
from .config_utils import _deep_merge, _expand_env

CONFIG_FILE_NAME: Final[str] = ".kuma.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "kuma"
INCLUDE_KEYS: Final[tuple[str, ...]] = ("include", "inherit_from")

DebugEcho = Callable[[str], None]


class ConfigLoader:
    """Locate and materialise configuration for a directory tree.

    Lookup walks from a directory towards the filesystem root and stops at the
    first ``.kuma.toml`` or ``pyproject.toml`` carrying a ``[tool.kuma]`` table.
    When nothing is found the user-level ``~/.kuma.toml`` applies, and failing
    that the built-in defaults.
    """

    def __init__(
        self,
        *,
        home: Path | None = None,
        env: Mapping[str, str] | None = None,
        debug: bool = False,
        echo: DebugEcho | None = None,
    ) -> None:
        self._home = home
        self._env = env if env is not None else os.environ
        self.debug = debug
        self._echo = echo
        self._toml_cache: dict[tuple[Path, int], dict[str, Any]] = {}

    # Discovery ---------------------------------------------------------------

    def configuration_file_for(self, directory: Path) -> Path | None:
        """Return the configuration file governing ``directory`` or ``None`` for defaults."""

        start = directory.resolve()
        for candidate_dir in (start, *start.parents):
            local = candidate_dir / CONFIG_FILE_NAME
            if local.is_file():
                return local
            pyproject = candidate_dir / PYPROJECT_FILE_NAME
            if pyproject.is_file() and self._pyproject_section(self._read_toml(pyproject)) is not None:
                return pyproject
        user_file = self._user_config_path()
        if user_file.is_file():
            return user_file
        return None

    def _user_config_path(self) -> Path:
        home = self._home if self._home is not None else Path.home()
        return home / CONFIG_FILE_NAME

    # Loading -----------------------------------------------------------------

    def load_file(self, path: Path) -> dict[str, Any]:
        """Return the raw configuration fragment stored at ``path`` with includes applied.

        Raises:
            ConfigError: If the file is missing, malformed, or includes form a cycle.
        """

        return self._load(path, ())

    def merge_with_default(self, fragment: Mapping[str, Any], path: Path | None) -> Config:
        """Merge ``fragment`` onto the built-in defaults and validate the result."""

        merged = _deep_merge(Config().to_dict(), fragment)
        try:
            config = Config.model_validate(merged)
        except ValidationError as exc:
            origin = str(path) if path is not None else "configuration"
            raise ConfigError(f"Invalid configuration in {origin}: {exc}") from exc
        config.source = path
        return config

    def configuration_from_file(self, path: Path | None) -> Config:
        """Return the validated configuration for ``path``; ``None`` yields the defaults."""

        if path is None:
            self.debug_log("Using built-in default configuration")
            return Config()
        self.debug_log(f"Configuration loaded from {path}")
        return self.merge_with_default(self.load_file(path), path)

    def _load(self, path: Path, stack: tuple[Path, ...]) -> dict[str, Any]:
        resolved = path.resolve()
        if resolved in stack:
            chain = " -> ".join(str(entry) for entry in (*stack, resolved))
            raise ConfigError(f"Circular include detected: {chain}")
        if not resolved.is_file():
            raise ConfigError(f"Configuration file {path} does not exist")

        data = self._read_toml(resolved)
        if resolved.name == PYPROJECT_FILE_NAME:
            data = self._pyproject_section(data) or {}
        document = dict(data)

        merged: dict[str, Any] = {}
        for key in INCLUDE_KEYS:
            for include_path in self._coerce_includes(document.pop(key, None), resolved.parent):
                merged = _deep_merge(merged, self._load(include_path, (*stack, resolved)))
        merged = _deep_merge(merged, document)
        return _expand_env(merged, self._env)

    def _read_toml(self, path: Path) -> dict[str, Any]:
        cache_key = (path, path.stat().st_mtime_ns)
        cached = self._toml_cache.get(cache_key)
        if cached is None:
            try:
                with path.open("rb") as handle:
                    cached = tomllib.load(handle)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"Unable to parse {path}: {exc}") from exc
            self._toml_cache[cache_key] = cached
        return copy.deepcopy(cached)

    @staticmethod
    def _pyproject_section(data: Mapping[str, Any]) -> dict[str, Any] | None:
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return None
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, MutableMapping):
            return None
        return dict(section)

    @staticmethod
    def _coerce_includes(raw: Any, base_dir: Path) -> Iterable[Path]:
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
            raise ConfigError(f"Unsupported include declaration: {raw!r}")
        return [_resolve_path(Path(item).expanduser(), base_dir) for item in raw]

    def debug_log(self, message: str) -> None:
        """Echo ``message`` when debug output is enabled."""

        if self.debug and self._echo is not None:
            self._echo(message)


def _resolve_path(path: Path, base_dir: Path) -> Path:
    return path if path.is_absolute() else base_dir / path


__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigLoader",
    "INCLUDE_KEYS",
    "PYPROJECT_FILE_NAME",
]
