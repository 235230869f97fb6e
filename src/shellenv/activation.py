# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Immutable activation environment handed to a consuming shell."""

from __future__ import annotations

import hashlib
import json
import shlex
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Literal

from .types import SEARCH_PATH_SEPARATOR, SEARCH_PATH_VARIABLE

OutputFormat = Literal["sh", "json", "dotenv"]
OUTPUT_FORMATS: Final[tuple[OutputFormat, ...]] = ("sh", "json", "dotenv")


@dataclass(frozen=True, slots=True)
class ActivationEnvironment(Mapping[str, str]):
    """Resolved variables plus the ordered search-path entries.

    The mapping always contains :data:`SEARCH_PATH_VARIABLE`, holding the
    resolved binary directories joined in declaration order. Instances are
    never patched; each resolution builds a new one.
    """

    path_entries: tuple[str, ...]
    derived: tuple[tuple[str, str], ...] = ()
    _variables: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Assemble the read-only variable mapping."""

        variables = dict(self.derived)
        variables[SEARCH_PATH_VARIABLE] = SEARCH_PATH_SEPARATOR.join(self.path_entries)
        object.__setattr__(self, "_variables", MappingProxyType(dict(sorted(variables.items()))))

    def __getitem__(self, key: str) -> str:
        return self._variables[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ActivationEnvironment):
            return (self.path_entries, self.derived) == (other.path_entries, other.derived)
        if isinstance(other, Mapping):
            return dict(self._variables.items()) == dict(other.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.path_entries, self.derived))

    @property
    def search_path(self) -> str:
        """Return the value of the search-path variable."""

        return self._variables[SEARCH_PATH_VARIABLE]

    def as_dict(self) -> dict[str, str]:
        """Return a mutable copy of the variables, sorted by name."""

        return dict(self._variables)

    def fingerprint(self) -> str:
        """Return a SHA-256 digest identifying this exact environment."""

        hasher = hashlib.sha256()
        for key, value in self._variables.items():
            hasher.update(key.encode("utf-8"))
            hasher.update(b"=")
            hasher.update(value.encode("utf-8"))
            hasher.update(b"\0")
        return hasher.hexdigest()

    def apply(self, base: Mapping[str, str]) -> dict[str, str]:
        """Overlay the environment on an explicitly supplied ``base`` environment.

        Derived variables replace base values. The resolved search path is
        prepended to the base search path, if there is one.

        Args:
            base: Environment of the consuming process, e.g. ``dict(os.environ)``.

        Returns:
            dict[str, str]: New environment suitable for a child process.
        """

        merged = dict(base)
        merged.update(self.derived)
        inherited = base.get(SEARCH_PATH_VARIABLE, "")
        parts = [part for part in (self.search_path, inherited) if part]
        merged[SEARCH_PATH_VARIABLE] = SEARCH_PATH_SEPARATOR.join(parts)
        return merged

    def to_shell(self) -> str:
        """Render POSIX ``export`` statements that activate the environment."""

        lines: list[str] = []
        for key, value in self._variables.items():
            if key == SEARCH_PATH_VARIABLE:
                continue
            lines.append(f"export {key}={shlex.quote(value)}")
        if self.path_entries:
            prefix = shlex.quote(self.search_path)
            lines.append(f'export {SEARCH_PATH_VARIABLE}={prefix}"${{{SEARCH_PATH_VARIABLE}:+:${SEARCH_PATH_VARIABLE}}}"')
        return "\n".join(lines) + "\n"

    def to_json(self) -> str:
        """Render the variables as a sorted JSON object."""

        return json.dumps(dict(self._variables), indent=2, sort_keys=True) + "\n"

    def to_dotenv(self) -> str:
        """Render ``NAME=value`` lines with double-quoted, escaped values.

        ``$`` is escaped so loaders that interpolate quoted values keep it literal.
        """

        lines = []
        for key, value in self._variables.items():
            escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("$", "\\$")
            lines.append(f'{key}="{escaped}"')
        return "\n".join(lines) + "\n"

    def render(self, output_format: OutputFormat) -> str:
        """Render the environment in ``output_format``.

        Raises:
            ValueError: If ``output_format`` is not one of :data:`OUTPUT_FORMATS`.
        """

        if output_format == "sh":
            return self.to_shell()
        if output_format == "json":
            return self.to_json()
        if output_format == "dotenv":
            return self.to_dotenv()
        raise ValueError(f"unsupported output format '{output_format}'")


__all__ = ["OUTPUT_FORMATS", "ActivationEnvironment", "OutputFormat"]
