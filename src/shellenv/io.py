# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers for reading JSON and TOML documents."""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import cast

from .errors import ShellEnvError
from .types import JSONValue


class DocumentError(ShellEnvError):
    """Raised when a document cannot be parsed or is not plain data."""


def load_schema(path: Path) -> Mapping[str, JSONValue]:
    """Load a JSON schema from disk and ensure it is a JSON object.

    Args:
        path: Filesystem path to the schema file.

    Returns:
        Mapping[str, JSONValue]: Parsed JSON schema mapping.

    Raises:
        FileNotFoundError: If the schema file does not exist.
        DocumentError: If the schema cannot be parsed or is not a JSON object.
    """

    payload = load_document(path)
    if not isinstance(payload, Mapping):
        raise DocumentError(f"{path}: expected a JSON object")
    return payload


def load_document(path: Path) -> JSONValue:
    """Load a JSON or TOML document, chosen by file suffix.

    Args:
        path: Filesystem path to the document.

    Returns:
        JSONValue: Parsed value.

    Raises:
        FileNotFoundError: If the document is missing.
        DocumentError: If the document cannot be parsed.
    """

    if not path.exists():
        raise FileNotFoundError(path)
    if path.suffix == ".toml":
        with path.open("rb") as stream:
            try:
                payload = cast(JSONValue, tomllib.load(stream))
            except tomllib.TOMLDecodeError as exc:
                raise DocumentError(f"{path}: failed to parse TOML: {exc}") from exc
    else:
        with path.open("r", encoding="utf-8") as stream:
            try:
                payload = cast(JSONValue, json.load(stream))
            except json.JSONDecodeError as exc:
                raise DocumentError(f"{path}: failed to parse JSON: {exc}") from exc
    return _ensure_json_value(payload, context=str(path))


def _ensure_json_value(value: JSONValue, *, context: str) -> JSONValue:
    """Ensure ``value`` is composed of JSON-compatible structures.

    Args:
        value: Parsed payload to validate recursively.
        context: Human-readable context string used in error messages.

    Returns:
        JSONValue: Validated value with mappings and lists normalised.

    Raises:
        DocumentError: If ``value`` contains unsupported constructs such as TOML datetimes.
    """

    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(key): _ensure_json_value(item, context=f"{context}.{key}") for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [_ensure_json_value(item, context=f"{context}[]") for item in value]
    raise DocumentError(f"{context}: value is not plain data")


__all__ = ["DocumentError", "load_document", "load_schema"]
