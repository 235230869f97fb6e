# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem scanning utilities for the tool catalog."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..errors import CatalogUnavailableError


@dataclass(slots=True)
class CatalogScanner:
    """Scan the catalog directory tree for entry documents."""

    catalog_root: Path

    def entry_documents(self) -> tuple[Path, ...]:
        """Return sorted catalog entry document paths.

        Files whose name starts with ``_`` are treated as private notes and skipped.

        Returns:
            tuple[Path, ...]: Sorted entry file paths.

        Raises:
            CatalogUnavailableError: If the catalog root is missing or unreadable.
        """

        if not self.catalog_root.is_dir():
            raise CatalogUnavailableError(f"catalog directory not found: {self.catalog_root}")
        try:
            paths = [path for path in self.catalog_root.rglob("*.json") if not path.name.startswith("_")]
        except OSError as exc:
            raise CatalogUnavailableError(f"cannot read catalog directory {self.catalog_root}: {exc}") from exc
        return tuple(sorted(paths))


__all__ = ["CatalogScanner"]
