# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Immutable catalog entry and snapshot models."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from types import MappingProxyType

from ..errors import CatalogIntegrityError, UnresolvedToolError
from ..types import DEFAULT_BIN_DIR, JSONValue


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """Installed artifact for one tool name."""

    name: str
    path: str
    bin_dir: str | None = DEFAULT_BIN_DIR
    outputs: Mapping[str, str] = field(default_factory=dict)
    version: str | None = None
    description: str | None = None
    source: Path | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Freeze ``outputs`` so the entry cannot be mutated after creation."""

        object.__setattr__(self, "outputs", MappingProxyType(dict(self.outputs)))

    def __hash__(self) -> int:
        return hash((self.name, self.path, self.bin_dir, tuple(sorted(self.outputs.items())), self.version))

    @property
    def binary_path(self) -> str | None:
        """Return the directory holding the tool's executables, if it has one."""

        if self.bin_dir is None:
            return None
        return str(PurePosixPath(self.path) / self.bin_dir)

    def output_path(self, output: str | None = None) -> str:
        """Return the install path, or the path of the named ``output``.

        Args:
            output: Optional output name such as ``lib_src``.

        Returns:
            str: Resolved path string.

        Raises:
            UnresolvedToolError: If the entry does not provide ``output``.
        """

        if output is None:
            return self.path
        try:
            return self.outputs[output]
        except KeyError as exc:
            raise UnresolvedToolError(self.name, output=output) from exc

    @classmethod
    def from_mapping(cls, data: Mapping[str, JSONValue], *, source: Path | None = None) -> CatalogEntry:
        """Build an entry from a schema-validated catalog document."""

        outputs = data.get("outputs") or {}
        bin_dir = data.get("bin_dir", DEFAULT_BIN_DIR)
        version = data.get("version")
        description = data.get("description")
        return cls(
            name=str(data["name"]),
            path=str(data["path"]),
            bin_dir=str(bin_dir) if bin_dir is not None else None,
            outputs={str(key): str(value) for key, value in dict(outputs).items()},  # type: ignore[arg-type]
            version=str(version) if version is not None else None,
            description=str(description) if description is not None else None,
            source=source,
        )

    def to_mapping(self) -> dict[str, JSONValue]:
        """Return the entry in catalog document form."""

        payload: dict[str, JSONValue] = {"name": self.name, "path": self.path, "bin_dir": self.bin_dir}
        if self.outputs:
            payload["outputs"] = dict(sorted(self.outputs.items()))
        if self.version is not None:
            payload["version"] = self.version
        if self.description is not None:
            payload["description"] = self.description
        return payload


@dataclass(frozen=True, slots=True)
class CatalogSnapshot:
    """Read-only view of the catalog paired with a deterministic checksum.

    A snapshot answers one question for the resolver: which installed artifact
    a tool name maps to. It never changes after construction, so a resolution
    against the same snapshot always sees the same catalog state.
    """

    _entries: tuple[CatalogEntry, ...]
    checksum: str
    _index: Mapping[str, CatalogEntry] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Reject duplicate tool names and index entries by name."""

        index: dict[str, CatalogEntry] = {}
        for entry in self._entries:
            if entry.name in index:
                raise CatalogIntegrityError(f"Duplicate tool '{entry.name}' detected in catalog snapshot")
            index[entry.name] = entry
        object.__setattr__(self, "_index", MappingProxyType(index))

    @classmethod
    def from_entries(cls, entries: Iterable[CatalogEntry]) -> CatalogSnapshot:
        """Build an in-memory snapshot whose checksum covers the entries' content.

        Args:
            entries: Catalog entries; ordering does not affect the checksum.

        Returns:
            CatalogSnapshot: Snapshot over ``entries``.
        """

        ordered = tuple(sorted(entries, key=lambda entry: entry.name))
        hasher = hashlib.sha256()
        for entry in ordered:
            hasher.update(json.dumps(entry.to_mapping(), sort_keys=True).encode("utf-8"))
            hasher.update(b"\0")
        return cls(_entries=ordered, checksum=hasher.hexdigest())

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        """Return the catalog entries contained in the snapshot."""

        return self._entries

    @property
    def names(self) -> tuple[str, ...]:
        """Return the sorted tool names known to the snapshot."""

        return tuple(sorted(self._index))

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, name: str) -> CatalogEntry | None:
        """Return the entry for ``name`` or ``None`` when absent."""

        return self._index.get(name)

    def lookup(self, name: str) -> CatalogEntry:
        """Return the entry registered for ``name``.

        Args:
            name: Tool name to resolve.

        Returns:
            CatalogEntry: Installed artifact for the tool.

        Raises:
            UnresolvedToolError: If ``name`` is not known to the snapshot.
        """

        try:
            return self._index[name]
        except KeyError as exc:
            raise UnresolvedToolError(name) from exc


__all__ = ["CatalogEntry", "CatalogSnapshot"]
