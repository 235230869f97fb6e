# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""High-level loader that materialises catalog snapshots from disk."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import CatalogIntegrityError, CatalogUnavailableError
from ..io import DocumentError, load_document
from ..schema import SchemaRepository, first_error_message
from ..types import JSONValue
from .models import CatalogEntry, CatalogSnapshot
from .scanner import CatalogScanner

LOGGER = logging.getLogger(__name__)


def entry_checksum(catalog_root: Path, paths: Sequence[Path]) -> str:
    """Return a SHA-256 digest over each entry document's relative path and bytes.

    Raises:
        CatalogUnavailableError: If an entry document cannot be read.
    """

    hasher = hashlib.sha256()
    for path in paths:
        try:
            payload = path.read_bytes()
        except OSError as exc:
            raise CatalogUnavailableError(f"cannot read catalog document {path}: {exc}") from exc
        hasher.update(path.relative_to(catalog_root).as_posix().encode("utf-8"))
        hasher.update(b"\0")
        hasher.update(payload)
    return hasher.hexdigest()


@dataclass(slots=True)
class CatalogLoader:
    """Loader that validates and materialises catalog entry documents."""

    catalog_root: Path
    schema_root: Path | None = None
    _schemas: SchemaRepository = field(init=False, repr=False)
    _scanner: CatalogScanner = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialise the schema repository and scanner."""

        self._schemas = SchemaRepository.load(self.schema_root)
        self.schema_root = self._schemas.schema_root
        self._scanner = CatalogScanner(self.catalog_root)

    def load_entries(self) -> tuple[CatalogEntry, ...]:
        """Load every entry document under ``catalog_root``.

        Returns:
            tuple[CatalogEntry, ...]: Entries in document path order.

        Raises:
            CatalogUnavailableError: If the catalog or one of its files cannot be read.
            CatalogIntegrityError: If a document is malformed or fails schema validation.
        """

        entries: list[CatalogEntry] = []
        for path in self._scanner.entry_documents():
            document = self._read(path)
            message = first_error_message(self._schemas.catalog_entry_validator, document)
            if message is not None:
                raise CatalogIntegrityError(f"{path}: {message}")
            entries.append(CatalogEntry.from_mapping(_as_mapping(document), source=path))
        return tuple(entries)

    def load_snapshot(self) -> CatalogSnapshot:
        """Produce an immutable snapshot of the catalog with its checksum.

        Returns:
            CatalogSnapshot: Snapshot containing every catalog entry.
        """

        entries = self.load_entries()
        checksum = self.compute_checksum()
        LOGGER.debug("loaded %d catalog entries from %s (checksum %s)", len(entries), self.catalog_root, checksum)
        return CatalogSnapshot(_entries=entries, checksum=checksum)

    def compute_checksum(self) -> str:
        """Calculate a checksum representing the current catalog contents.

        Returns:
            str: Hex-encoded checksum covering catalog entry files.
        """

        return entry_checksum(self.catalog_root, self._scanner.entry_documents())

    @staticmethod
    def _read(path: Path) -> JSONValue:
        try:
            return load_document(path)
        except DocumentError as exc:
            raise CatalogIntegrityError(str(exc)) from exc
        except OSError as exc:
            raise CatalogUnavailableError(f"cannot read catalog document {path}: {exc}") from exc


def _as_mapping(document: JSONValue) -> Mapping[str, JSONValue]:
    if not isinstance(document, Mapping):  # pragma: no cover - rejected by the schema first
        raise CatalogIntegrityError("catalog entry must be a JSON object")
    return document


def load_catalog(catalog_root: Path, *, schema_root: Path | None = None) -> CatalogSnapshot:
    """Load a catalog snapshot from ``catalog_root`` in one call."""

    return CatalogLoader(catalog_root, schema_root=schema_root).load_snapshot()


__all__ = ["CatalogLoader", "entry_checksum", "load_catalog"]
