# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Dependency ordering for derived variables."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum

from ..errors import CyclicDerivationError, DescriptorError
from .expressions import Expression, variable_dependencies


class _Mark(Enum):
    IN_PROGRESS = "in-progress"
    DONE = "done"


def derivation_order(variables: Mapping[str, Expression]) -> tuple[str, ...]:
    """Return variable names ordered so each follows everything it references.

    Variables are visited in declaration order and dependencies in the order
    they appear inside each expression, so the result is deterministic. The walk
    keeps an explicit stack, so chain length is not bounded by recursion depth.

    Args:
        variables: Derived variable definitions keyed by name.

    Returns:
        tuple[str, ...]: Evaluation order covering every variable.

    Raises:
        DescriptorError: If an expression references an undefined variable.
        CyclicDerivationError: If the reference graph contains a cycle.
    """

    marks: dict[str, _Mark] = {}
    order: list[str] = []
    for root in variables:
        if root in marks:
            continue
        marks[root] = _Mark.IN_PROGRESS
        path: list[str] = [root]
        pending: list[Iterator[str]] = [iter(variable_dependencies(variables[root]))]
        while pending:
            name = path[-1]
            dependency = next(pending[-1], None)
            if dependency is None:
                pending.pop()
                path.pop()
                marks[name] = _Mark.DONE
                order.append(name)
                continue
            if dependency not in variables:
                raise DescriptorError(f"variable '{name}' references undefined variable '{dependency}'")
            mark = marks.get(dependency)
            if mark is _Mark.DONE:
                continue
            if mark is _Mark.IN_PROGRESS:
                start = path.index(dependency)
                raise CyclicDerivationError([*path[start:], dependency])
            marks[dependency] = _Mark.IN_PROGRESS
            path.append(dependency)
            pending.append(iter(variable_dependencies(variables[dependency])))
    return tuple(order)


__all__ = ["derivation_order"]
