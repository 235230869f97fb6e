# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared CLI plumbing: errors, logging adapter and input loading."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console

from ..catalog import CatalogSnapshot, load_catalog
from ..config import ShellEnvConfig, load_config
from ..descriptor import EnvironmentDescriptor, load_descriptor, load_preset
from ..errors import ShellEnvError
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import warn as core_warn


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    use_emoji: bool
    use_color: bool | None = None

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences."""

        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        """Log a warning message honouring emoji preferences."""

        core_warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        """Log a success message honouring emoji preferences."""

        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def info(self, message: str) -> None:
        """Log an informational message honouring emoji preferences."""

        core_info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def echo(self, message: str, *, nl: bool = True) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message, nl=nl)


def build_cli_logger(*, emoji: bool, color: bool = True) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided presentation flags."""

    return CLILogger(use_emoji=emoji, use_color=None if color else False)


def build_stdout_console(*, color: bool) -> Console:
    """Return a console writing tables to standard output."""

    return Console(no_color=not color, highlight=False, soft_wrap=True)


@dataclass(frozen=True, slots=True)
class CommandInputs:
    """Configuration, descriptor and catalog snapshot for one command run."""

    config: ShellEnvConfig
    descriptor: EnvironmentDescriptor
    catalog: CatalogSnapshot


def load_config_for_cli(
    root: Path,
    *,
    descriptor: Path | None = None,
    catalog: Path | None = None,
    preset: str | None = None,
    emoji: bool | None = None,
) -> ShellEnvConfig:
    """Load configuration for ``root`` with CLI overrides applied.

    An explicit ``descriptor`` clears any preset named by the configuration
    files; passing both ``descriptor`` and ``preset`` keeps the preset.

    Raises:
        CLIError: If the configuration is invalid.
    """

    overrides = {"descriptor": descriptor, "catalog_root": catalog, "preset": preset, "emoji": emoji}
    try:
        config = load_config(root, overrides=overrides).config
    except ShellEnvError as exc:
        raise CLIError(str(exc), exit_code=2) from exc
    if descriptor is not None and preset is None:
        config = config.model_copy(update={"preset": None})
    return config


def load_inputs(config: ShellEnvConfig) -> CommandInputs:
    """Load the descriptor and catalog snapshot named by ``config``.

    The descriptor is validated before the catalog is touched, so structural
    errors such as cyclic derived variables are reported first.

    Raises:
        ShellEnvError: If the descriptor or catalog cannot be loaded.
    """

    if config.preset is not None:
        descriptor = load_preset(config.preset)
    else:
        descriptor = load_descriptor(config.descriptor)
    snapshot = load_catalog(config.catalog_root)
    return CommandInputs(config=config, descriptor=descriptor, catalog=snapshot)


__all__ = [
    "CLIError",
    "CLILogger",
    "CommandInputs",
    "build_cli_logger",
    "build_stdout_console",
    "load_config_for_cli",
    "load_inputs",
]
