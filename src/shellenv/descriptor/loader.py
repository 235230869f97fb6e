# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load environment descriptors from TOML or JSON documents."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Final, cast

from ..errors import DescriptorError
from ..io import DocumentError, load_document
from ..schema import SchemaRepository, default_schemas, first_error_message
from ..types import JSONValue
from .expressions import Expression, parse_expression
from .models import EnvironmentDescriptor

LOGGER = logging.getLogger(__name__)

PRESET_ROOT: Final[Path] = Path(__file__).resolve().parent / "presets"


def parse_descriptor(
    document: JSONValue,
    *,
    source: str = "<descriptor>",
    schemas: SchemaRepository | None = None,
) -> EnvironmentDescriptor:
    """Validate ``document`` and build the descriptor it declares.

    Args:
        document: Parsed descriptor document.
        source: Label used in error messages.
        schemas: Optional schema repository; the bundled schemas by default.

    Returns:
        EnvironmentDescriptor: Validated descriptor.

    Raises:
        DescriptorError: If the document violates the descriptor schema or the
            structural invariants checked by :class:`EnvironmentDescriptor`.
    """

    repository = schemas or default_schemas()
    message = first_error_message(repository.descriptor_validator, document)
    if message is not None:
        raise DescriptorError(f"{source}: {message}")
    shell = cast(Mapping[str, JSONValue], cast(Mapping[str, JSONValue], document)["shell"])
    raw_tools = cast(list[JSONValue], shell.get("tools") or [])
    raw_env = cast(Mapping[str, JSONValue], shell.get("env") or {})
    name = shell.get("name")

    variables: list[tuple[str, Expression]] = [
        (variable, parse_expression(value, context=f"{source}: shell.env.{variable}"))
        for variable, value in raw_env.items()
    ]
    descriptor = EnvironmentDescriptor.build(
        [str(tool) for tool in raw_tools],
        variables,
        name=str(name) if name is not None else None,
    )
    LOGGER.debug("loaded descriptor %s with %d tools", source, len(descriptor.tools))
    return descriptor


def load_descriptor(path: Path, *, schemas: SchemaRepository | None = None) -> EnvironmentDescriptor:
    """Read and parse the descriptor stored at ``path``.

    Raises:
        DescriptorError: If the file is missing, unreadable or invalid.
    """

    try:
        document = load_document(path)
    except FileNotFoundError as exc:
        raise DescriptorError(f"descriptor not found: {path}") from exc
    except DocumentError as exc:
        raise DescriptorError(str(exc)) from exc
    return parse_descriptor(document, source=str(path), schemas=schemas)


def available_presets() -> tuple[str, ...]:
    """Return the names of the bundled preset descriptors."""

    return tuple(sorted(path.stem for path in PRESET_ROOT.glob("*.toml")))


def load_preset(name: str) -> EnvironmentDescriptor:
    """Load the bundled preset descriptor called ``name``.

    Raises:
        DescriptorError: If no preset with that name exists.
    """

    path = PRESET_ROOT / f"{name}.toml"
    if not path.is_file():
        known = ", ".join(available_presets()) or "none"
        raise DescriptorError(f"unknown preset '{name}' (available: {known})")
    return load_descriptor(path)


__all__ = ["PRESET_ROOT", "available_presets", "load_descriptor", "load_preset", "parse_descriptor"]
