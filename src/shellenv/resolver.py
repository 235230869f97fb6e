# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Resolve environment descriptors against catalog snapshots."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .activation import ActivationEnvironment
from .catalog.models import CatalogEntry, CatalogSnapshot
from .descriptor.expressions import ToolPathRef, evaluate, iter_nodes
from .descriptor.models import EnvironmentDescriptor
from .errors import UnresolvedToolError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Resolution outcome for one tool name, used for reporting."""

    name: str
    declared: bool
    entry: CatalogEntry | None
    error: str | None = None

    @property
    def resolved(self) -> bool:
        """Return ``True`` when the tool and every requested output resolved."""

        return self.entry is not None and self.error is None


def resolve(descriptor: EnvironmentDescriptor, catalog: CatalogSnapshot) -> ActivationEnvironment:
    """Resolve ``descriptor`` against ``catalog`` into an activation environment.

    The result depends only on the two arguments. Resolution is all-or-nothing:
    the first failure aborts it and no environment is produced.

    Args:
        descriptor: Validated environment descriptor.
        catalog: Immutable catalog snapshot answering tool lookups.

    Returns:
        ActivationEnvironment: Search-path entries in declaration order with
        duplicates removed, plus every derived variable.

    Raises:
        CyclicDerivationError: If derived variables form a cycle; raised before
            any catalog lookup.
        UnresolvedToolError: If a tool or tool output is missing from ``catalog``.
    """

    order = descriptor.derivation_order
    resolved = {name: catalog.lookup(name) for name in descriptor.referenced_tools()}

    path_entries: dict[str, None] = {}
    for name in descriptor.tool_names:
        entry = resolved[name]
        binary_path = entry.binary_path
        if binary_path is not None:
            path_entries.setdefault(binary_path, None)

    def tool_path(reference: ToolPathRef) -> str:
        return resolved[reference.tool].output_path(reference.output)

    definitions = descriptor.variable_map
    values: dict[str, str] = {}
    for name in order:
        values[name] = evaluate(definitions[name], tool_path=tool_path, variables=values)

    environment = ActivationEnvironment(
        path_entries=tuple(path_entries),
        derived=tuple(sorted(values.items())),
    )
    LOGGER.debug(
        "resolved %s: %d path entries, %d derived variables (catalog %s)",
        descriptor.name or "<descriptor>",
        len(environment.path_entries),
        len(values),
        catalog.checksum[:12],
    )
    return environment


def inspect_tools(descriptor: EnvironmentDescriptor, catalog: CatalogSnapshot) -> tuple[ToolStatus, ...]:
    """Report the resolution status of every tool ``descriptor`` needs.

    Unlike :func:`resolve` this never raises for missing tools, so callers can
    show every problem at once.

    Args:
        descriptor: Validated environment descriptor.
        catalog: Catalog snapshot to check against.

    Returns:
        tuple[ToolStatus, ...]: Declared tools first, then tools only used by
        derived variables.
    """

    outputs: dict[str, list[str]] = {}
    for _, expression in descriptor.variables:
        for node in iter_nodes(expression):
            if isinstance(node, ToolPathRef) and node.output is not None:
                outputs.setdefault(node.tool, []).append(node.output)

    declared = set(descriptor.tool_names)
    statuses: list[ToolStatus] = []
    for name in descriptor.referenced_tools():
        entry = catalog.get(name)
        error: str | None = None
        if entry is None:
            error = str(UnresolvedToolError(name))
        else:
            missing = [output for output in outputs.get(name, ()) if output not in entry.outputs]
            if missing:
                error = str(UnresolvedToolError(name, output=missing[0]))
        statuses.append(ToolStatus(name=name, declared=name in declared, entry=entry, error=error))
    return tuple(statuses)


__all__ = ["ToolStatus", "inspect_tools", "resolve"]
