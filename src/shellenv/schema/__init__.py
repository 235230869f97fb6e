# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""JSON schema loading utilities for descriptors and catalog entries."""

from __future__ import annotations

import importlib
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Final, Protocol, cast, runtime_checkable

from ..io import load_schema
from ..types import CATALOG_ENTRY_SCHEMA_FILENAME, DESCRIPTOR_SCHEMA_FILENAME, JSONValue

SCHEMA_ROOT: Final[Path] = Path(__file__).resolve().parent


class SchemaValidationError(Protocol):
    """Represent schema validation errors surfaced by jsonschema."""

    @property
    def message(self) -> str:
        """Return the descriptive validation error message."""


@runtime_checkable
class SchemaValidator(Protocol):
    """Minimal interface exposed by jsonschema validators."""

    def validate(self, instance: JSONValue) -> None:
        """Validate ``instance`` against the bound schema."""

    def iter_errors(self, instance: JSONValue) -> Iterable[SchemaValidationError]:
        """Iterate over validation errors for ``instance``."""


SchemaValidatorFactory = Callable[[JSONValue], SchemaValidator]

jsonschema_module = importlib.import_module("jsonschema")
Draft202012Validator = cast(SchemaValidatorFactory, jsonschema_module.Draft202012Validator)


@dataclass(frozen=True, slots=True)
class SchemaRepository:
    """Validators for descriptor and catalog entry documents."""

    schema_root: Path
    descriptor_validator: SchemaValidator
    catalog_entry_validator: SchemaValidator

    @classmethod
    def load(cls, schema_root: Path | None = None) -> SchemaRepository:
        """Load schema validators from disk.

        Args:
            schema_root: Optional override for the schema directory; defaults to
                the schemas bundled with the package.

        Returns:
            SchemaRepository: Repository configured with both validators.
        """

        resolved_root = schema_root or SCHEMA_ROOT
        descriptor_schema = load_schema(resolved_root / DESCRIPTOR_SCHEMA_FILENAME)
        entry_schema = load_schema(resolved_root / CATALOG_ENTRY_SCHEMA_FILENAME)
        return cls(
            schema_root=resolved_root,
            descriptor_validator=Draft202012Validator(descriptor_schema),
            catalog_entry_validator=Draft202012Validator(entry_schema),
        )


@lru_cache(maxsize=1)
def default_schemas() -> SchemaRepository:
    """Return the cached repository built from the bundled schemas."""

    return SchemaRepository.load()


def first_error_message(validator: SchemaValidator, document: JSONValue) -> str | None:
    """Return the most relevant validation message for ``document``, if any.

    Args:
        validator: Validator bound to the expected schema.
        document: Payload to check.

    Returns:
        str | None: Message of the first error ordered by location, or ``None``.
    """

    errors = sorted(
        validator.iter_errors(document),
        key=lambda error: [str(part) for part in getattr(error, "absolute_path", ())],
    )
    if not errors:
        return None
    error = errors[0]
    location = "/".join(str(part) for part in getattr(error, "absolute_path", ()))
    return f"{location or '<root>'}: {error.message}"


__all__ = [
    "SCHEMA_ROOT",
    "SchemaRepository",
    "SchemaValidator",
    "default_schemas",
    "first_error_message",
]
