# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exceptions raised while loading descriptors and resolving environments."""

from __future__ import annotations

from collections.abc import Sequence


class ShellEnvError(RuntimeError):
    """Base class for every failure surfaced by shellenv."""


class DescriptorError(ShellEnvError):
    """Raised when an environment descriptor is structurally invalid."""


class CyclicDerivationError(DescriptorError):
    """Raised when derived variables depend on each other in a cycle."""

    def __init__(self, cycle: Sequence[str]) -> None:
        """Create the error for the offending variable chain.

        Args:
            cycle: Variable names forming the cycle, first name repeated last.
        """

        self.cycle: tuple[str, ...] = tuple(cycle)
        super().__init__(f"cyclic derived variables: {' -> '.join(self.cycle)}")


class UnresolvedToolError(ShellEnvError):
    """Raised when a tool (or one of its outputs) is absent from the catalog."""

    def __init__(self, tool: str, *, output: str | None = None) -> None:
        """Create the error naming the missing tool reference.

        Args:
            tool: Tool name that could not be resolved.
            output: Optional named output that the tool does not provide.
        """

        self.tool = tool
        self.output = output
        if output is None:
            message = f"tool '{tool}' is not available in the catalog"
        else:
            message = f"tool '{tool}' has no output named '{output}'"
        super().__init__(message)


class CatalogUnavailableError(ShellEnvError):
    """Raised when the catalog cannot be read at all."""


class CatalogIntegrityError(ShellEnvError):
    """Raised when catalog documents violate structural or semantic invariants."""


class ConfigError(ShellEnvError):
    """Raised when a configuration file cannot be parsed or validated."""


__all__ = [
    "CatalogIntegrityError",
    "CatalogUnavailableError",
    "ConfigError",
    "CyclicDerivationError",
    "DescriptorError",
    "ShellEnvError",
    "UnresolvedToolError",
]
