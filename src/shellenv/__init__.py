# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Declarative development shells resolved into reproducible environments."""

from __future__ import annotations

from typing import Final

from .activation import ActivationEnvironment
from .catalog import CatalogEntry, CatalogLoader, CatalogSnapshot, load_catalog
from .descriptor import (
    Concat,
    EnvironmentDescriptor,
    Literal,
    ToolPathRef,
    ToolReference,
    VariableRef,
    load_descriptor,
    load_preset,
)
from .errors import (
    CatalogIntegrityError,
    CatalogUnavailableError,
    ConfigError,
    CyclicDerivationError,
    DescriptorError,
    ShellEnvError,
    UnresolvedToolError,
)
from .resolver import inspect_tools, resolve

__version__: Final[str] = "0.1.0"

__all__: Final[tuple[str, ...]] = (
    "ActivationEnvironment",
    "CatalogEntry",
    "CatalogIntegrityError",
    "CatalogLoader",
    "CatalogSnapshot",
    "CatalogUnavailableError",
    "Concat",
    "ConfigError",
    "CyclicDerivationError",
    "DescriptorError",
    "EnvironmentDescriptor",
    "Literal",
    "ShellEnvError",
    "ToolPathRef",
    "ToolReference",
    "UnresolvedToolError",
    "VariableRef",
    "inspect_tools",
    "load_catalog",
    "load_descriptor",
    "load_preset",
    "resolve",
)
