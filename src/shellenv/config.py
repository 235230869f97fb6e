# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project configuration loaded from ``pyproject.toml`` and ``.shellenv.toml``."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

CONFIG_KEY: Final[str] = "shellenv"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
CONFIG_FILENAME: Final[str] = ".shellenv.toml"
DEFAULT_DESCRIPTOR: Final[Path] = Path("shellenv.toml")
DEFAULT_CATALOG_ROOT: Final[Path] = Path(".shellenv") / "catalog"


class ShellEnvConfig(BaseModel):
    """Effective shellenv settings for one project root."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid", frozen=True)

    descriptor: Path = Field(default=DEFAULT_DESCRIPTOR)
    catalog_root: Path = Field(default=DEFAULT_CATALOG_ROOT)
    preset: str | None = None
    emoji: bool = True
    color: bool = True

    def resolved(self, root: Path) -> ShellEnvConfig:
        """Return a copy whose relative paths are anchored at ``root``."""

        return self.model_copy(
            update={
                "descriptor": _anchor(self.descriptor, root),
                "catalog_root": _anchor(self.catalog_root, root),
            },
        )


@dataclass(frozen=True, slots=True)
class ConfigLoadResult:
    """Loaded configuration together with the files that contributed to it."""

    config: ShellEnvConfig
    sources: tuple[Path, ...]


def _anchor(path: Path, root: Path) -> Path:
    expanded = path.expanduser()
    return expanded if expanded.is_absolute() else root / expanded


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"{path}: cannot read configuration: {exc}") from exc


def _section(path: Path) -> Mapping[str, Any] | None:
    """Return the shellenv table stored in ``path``, if the file has one."""

    if not path.is_file():
        return None
    document = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        tool_table = document.get("tool", {})
        section = tool_table.get(CONFIG_KEY) if isinstance(tool_table, Mapping) else None
    else:
        section = document
    if section is None:
        return None
    if not isinstance(section, Mapping):
        raise ConfigError(f"{path}: shellenv configuration must be a table")
    return section


def load_config(root: Path, *, overrides: Mapping[str, Any] | None = None) -> ConfigLoadResult:
    """Load configuration for ``root`` with layered precedence.

    Layers, lowest first: built-in defaults, ``[tool.shellenv]`` in
    ``pyproject.toml``, ``.shellenv.toml``, then ``overrides`` (CLI options;
    ``None`` values are ignored). Relative paths are anchored at ``root``.

    Args:
        root: Project root directory.
        overrides: Explicit values taking precedence over every file.

    Returns:
        ConfigLoadResult: Effective configuration and contributing files.

    Raises:
        ConfigError: If a file is unreadable or a value is invalid.
    """

    merged: dict[str, Any] = {}
    sources: list[Path] = []
    for path in (root / PYPROJECT_FILENAME, root / CONFIG_FILENAME):
        section = _section(path)
        if section is None:
            continue
        merged.update({str(key).replace("-", "_"): value for key, value in section.items()})
        sources.append(path)
    if overrides:
        merged.update({key: value for key, value in overrides.items() if value is not None})
    try:
        config = ShellEnvConfig.model_validate(merged)
    except ValidationError as exc:
        origin = ", ".join(str(path) for path in sources) or "overrides"
        raise ConfigError(f"invalid shellenv configuration ({origin}): {exc}") from exc
    return ConfigLoadResult(config=config.resolved(root), sources=tuple(sources))


__all__ = [
    "CONFIG_FILENAME",
    "ConfigLoadResult",
    "ShellEnvConfig",
    "load_config",
]
