# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Environment descriptor models, expressions and loaders."""

from __future__ import annotations

from typing import Final

from .expressions import Concat, Expression, Literal, ToolPathRef, VariableRef, parse_expression
from .graph import derivation_order
from .loader import available_presets, load_descriptor, load_preset, parse_descriptor
from .models import EnvironmentDescriptor, ToolReference

__all__: Final[tuple[str, ...]] = (
    "Concat",
    "EnvironmentDescriptor",
    "Expression",
    "Literal",
    "ToolPathRef",
    "ToolReference",
    "VariableRef",
    "available_presets",
    "derivation_order",
    "load_descriptor",
    "load_preset",
    "parse_descriptor",
    "parse_expression",
)
