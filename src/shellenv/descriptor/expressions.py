# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Expression tree used to derive environment variables from resolved tools."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import TypeAlias

from ..errors import DescriptorError
from ..types import JSONValue


@dataclass(frozen=True, slots=True)
class ToolPathRef:
    """Install path of a catalog tool, or one of its named outputs."""

    tool: str
    output: str | None = None

    def describe(self) -> str:
        """Return a compact human-readable rendering of the reference."""

        return f"path_of({self.tool})" if self.output is None else f"path_of({self.tool}.{self.output})"


@dataclass(frozen=True, slots=True)
class Literal:
    """Constant string value."""

    value: str

    def describe(self) -> str:
        """Return the literal quoted for display."""

        return repr(self.value)


@dataclass(frozen=True, slots=True)
class VariableRef:
    """Value of another derived variable in the same descriptor."""

    name: str

    def describe(self) -> str:
        """Return the reference in shell-like ``$NAME`` form."""

        return f"${self.name}"


@dataclass(frozen=True, slots=True)
class Concat:
    """Concatenation of sub-expressions, joined without a separator."""

    parts: tuple[Expression, ...]

    def describe(self) -> str:
        """Return the parts joined with ``+``."""

        return " + ".join(part.describe() for part in self.parts) or "''"


Expression: TypeAlias = ToolPathRef | Literal | VariableRef | Concat


def iter_nodes(expression: Expression) -> Iterator[Expression]:
    """Yield ``expression`` and every nested sub-expression depth first."""

    pending: list[Expression] = [expression]
    while pending:
        node = pending.pop()
        yield node
        if isinstance(node, Concat):
            pending.extend(reversed(node.parts))


def variable_dependencies(expression: Expression) -> tuple[str, ...]:
    """Return the derived-variable names referenced by ``expression``.

    Args:
        expression: Expression tree to inspect.

    Returns:
        tuple[str, ...]: Referenced variable names in first-seen order.
    """

    names: dict[str, None] = {}
    for node in iter_nodes(expression):
        if isinstance(node, VariableRef):
            names.setdefault(node.name, None)
    return tuple(names)


def tool_dependencies(expression: Expression) -> tuple[str, ...]:
    """Return the tool names referenced by ``expression`` in first-seen order."""

    names: dict[str, None] = {}
    for node in iter_nodes(expression):
        if isinstance(node, ToolPathRef):
            names.setdefault(node.tool, None)
    return tuple(names)


def evaluate(
    expression: Expression,
    *,
    tool_path: Callable[[ToolPathRef], str],
    variables: Mapping[str, str],
) -> str:
    """Evaluate ``expression`` to a string.

    Args:
        expression: Expression tree to evaluate.
        tool_path: Callable returning the resolved path for a tool reference.
        variables: Derived variables evaluated so far.

    Returns:
        str: Fully evaluated value.

    Raises:
        KeyError: If a referenced variable has not been evaluated yet.
    """

    pieces: list[str] = []
    for node in iter_nodes(expression):
        if isinstance(node, Literal):
            pieces.append(node.value)
        elif isinstance(node, ToolPathRef):
            pieces.append(tool_path(node))
        elif isinstance(node, VariableRef):
            pieces.append(variables[node.name])
    return "".join(pieces)


def parse_expression(value: JSONValue, *, context: str) -> Expression:
    """Build an expression from its document form.

    Strings become literals. Tables carry exactly one of ``tool`` (with an
    optional ``output``), ``var`` or ``concat``; a bare list is shorthand for
    ``concat``.

    Args:
        value: Raw document value.
        context: Location used in error messages.

    Returns:
        Expression: Parsed expression tree.

    Raises:
        DescriptorError: If ``value`` is not a recognised expression form.
    """

    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, list):
        return Concat(tuple(parse_expression(item, context=f"{context}[{index}]") for index, item in enumerate(value)))
    if not isinstance(value, Mapping):
        raise DescriptorError(f"{context}: expected a string, list or table expression")

    keys = set(value)
    if "tool" in keys:
        if not keys <= {"tool", "output"}:
            raise DescriptorError(f"{context}: unexpected keys {sorted(keys - {'tool', 'output'})}")
        tool = value["tool"]
        output = value.get("output")
        if not isinstance(tool, str) or not tool:
            raise DescriptorError(f"{context}: 'tool' must be a non-empty string")
        if output is not None and (not isinstance(output, str) or not output):
            raise DescriptorError(f"{context}: 'output' must be a non-empty string")
        return ToolPathRef(tool=tool, output=output)
    if keys == {"var"}:
        name = value["var"]
        if not isinstance(name, str) or not name:
            raise DescriptorError(f"{context}: 'var' must be a non-empty string")
        return VariableRef(name)
    if keys == {"concat"}:
        parts = value["concat"]
        if not isinstance(parts, list):
            raise DescriptorError(f"{context}: 'concat' must be a list")
        return parse_expression(parts, context=f"{context}.concat")
    raise DescriptorError(f"{context}: table expression needs one of 'tool', 'var' or 'concat'")


def dump_expression(expression: Expression) -> JSONValue:
    """Return the document form of ``expression`` (inverse of :func:`parse_expression`)."""

    if isinstance(expression, Literal):
        return expression.value
    if isinstance(expression, ToolPathRef):
        payload: dict[str, JSONValue] = {"tool": expression.tool}
        if expression.output is not None:
            payload["output"] = expression.output
        return payload
    if isinstance(expression, VariableRef):
        return {"var": expression.name}
    return {"concat": [dump_expression(part) for part in expression.parts]}


__all__ = [
    "Concat",
    "Expression",
    "Literal",
    "ToolPathRef",
    "VariableRef",
    "dump_expression",
    "evaluate",
    "iter_nodes",
    "parse_expression",
    "tool_dependencies",
    "variable_dependencies",
]
