# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Declarative environment descriptor models."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from ..errors import DescriptorError
from ..types import SEARCH_PATH_VARIABLE, VARIABLE_NAME_PATTERN, JSONValue
from .expressions import Expression, dump_expression, tool_dependencies
from .graph import derivation_order


@dataclass(frozen=True, slots=True)
class ToolReference:
    """Stable name of one required tool within the catalog."""

    name: str

    def __post_init__(self) -> None:
        """Reject empty or whitespace-padded names."""

        if not self.name or self.name != self.name.strip():
            raise DescriptorError(f"invalid tool name {self.name!r}")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class EnvironmentDescriptor:
    """Ordered tool references plus derived variable definitions.

    Construction validates variable names and the derivation graph, so a
    descriptor that exists is structurally sound. Whether the referenced tools
    exist is only known once a catalog snapshot is supplied to the resolver.
    """

    tools: tuple[ToolReference, ...] = ()
    variables: tuple[tuple[str, Expression], ...] = ()
    name: str | None = None
    _order: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate variable names and compute the derivation order."""

        seen: set[str] = set()
        for variable, _ in self.variables:
            if not VARIABLE_NAME_PATTERN.match(variable):
                raise DescriptorError(f"invalid variable name {variable!r}")
            if variable == SEARCH_PATH_VARIABLE:
                raise DescriptorError(f"'{SEARCH_PATH_VARIABLE}' is managed by the resolver and cannot be derived")
            if variable in seen:
                raise DescriptorError(f"variable '{variable}' is defined more than once")
            seen.add(variable)
        object.__setattr__(self, "_order", derivation_order(self.variable_map))

    @classmethod
    def build(
        cls,
        tools: Iterable[str | ToolReference],
        variables: Mapping[str, Expression] | Iterable[tuple[str, Expression]] = (),
        *,
        name: str | None = None,
    ) -> EnvironmentDescriptor:
        """Construct a descriptor from plain tool names and variable definitions.

        Args:
            tools: Tool names or references in declaration order.
            variables: Derived variables as a mapping or ordered pairs.
            name: Optional descriptor label used in messages.

        Returns:
            EnvironmentDescriptor: Validated descriptor.
        """

        references = tuple(tool if isinstance(tool, ToolReference) else ToolReference(tool) for tool in tools)
        pairs = tuple(variables.items()) if isinstance(variables, Mapping) else tuple(variables)
        return cls(tools=references, variables=pairs, name=name)

    @property
    def variable_map(self) -> dict[str, Expression]:
        """Return derived variables keyed by name in declaration order."""

        return dict(self.variables)

    @property
    def derivation_order(self) -> tuple[str, ...]:
        """Return the order in which derived variables must be evaluated."""

        return self._order

    @property
    def tool_names(self) -> tuple[str, ...]:
        """Return declared tool names in declaration order."""

        return tuple(tool.name for tool in self.tools)

    def referenced_tools(self) -> tuple[str, ...]:
        """Return every tool name the descriptor needs from the catalog.

        Declared tools come first, followed by tools only referenced from
        derived-variable expressions. Duplicates are dropped.
        """

        names: dict[str, None] = dict.fromkeys(self.tool_names)
        for _, expression in self.variables:
            for tool in tool_dependencies(expression):
                names.setdefault(tool, None)
        return tuple(names)

    def to_document(self) -> dict[str, JSONValue]:
        """Return the descriptor in its on-disk document form."""

        return {
            "shell": {
                "tools": list(self.tool_names),
                "env": {variable: dump_expression(expression) for variable, expression in self.variables},
            },
        }


__all__ = ["EnvironmentDescriptor", "ToolReference"]
