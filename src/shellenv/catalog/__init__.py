# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Public export surface for the tool catalog."""

from __future__ import annotations

from typing import Final

from .loader import CatalogLoader, entry_checksum, load_catalog
from .models import CatalogEntry, CatalogSnapshot
from .scanner import CatalogScanner

__all__: Final[tuple[str, ...]] = (
    "CatalogEntry",
    "CatalogLoader",
    "CatalogScanner",
    "CatalogSnapshot",
    "entry_checksum",
    "load_catalog",
)
