# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases and constants."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | Sequence["JSONValue"] | Mapping[str, "JSONValue"]

SEARCH_PATH_VARIABLE: Final[str] = "PATH"
SEARCH_PATH_SEPARATOR: Final[str] = ":"
DEFAULT_BIN_DIR: Final[str] = "bin"
VARIABLE_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

DESCRIPTOR_SCHEMA_FILENAME: Final[str] = "descriptor.schema.json"
CATALOG_ENTRY_SCHEMA_FILENAME: Final[str] = "catalog_entry.schema.json"

__all__ = [
    "CATALOG_ENTRY_SCHEMA_FILENAME",
    "DEFAULT_BIN_DIR",
    "DESCRIPTOR_SCHEMA_FILENAME",
    "JSONPrimitive",
    "JSONValue",
    "SEARCH_PATH_SEPARATOR",
    "SEARCH_PATH_VARIABLE",
    "VARIABLE_NAME_PATTERN",
]
