# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for derived-variable ordering and cycle detection."""

from __future__ import annotations

import pytest

from shellenv.descriptor.expressions import Concat, Literal, ToolPathRef, VariableRef
from shellenv.descriptor.graph import derivation_order
from shellenv.errors import CyclicDerivationError, DescriptorError


def test_dependencies_come_before_dependents() -> None:
    order = derivation_order(
        {
            "C": Concat((VariableRef("B"), Literal("/c"))),
            "A": ToolPathRef("rust"),
            "B": Concat((VariableRef("A"), Literal("/b"))),
            "D": Literal("d"),
        },
    )
    assert order == ("A", "B", "C", "D")


def test_two_variable_cycle_is_reported_with_its_chain() -> None:
    with pytest.raises(CyclicDerivationError) as excinfo:
        derivation_order({"A": VariableRef("B"), "B": VariableRef("A")})
    assert excinfo.value.cycle == ("A", "B", "A")
    assert "A -> B -> A" in str(excinfo.value)


def test_self_reference_is_a_cycle() -> None:
    with pytest.raises(CyclicDerivationError) as excinfo:
        derivation_order({"OK": Literal("x"), "LOOP": Concat((Literal("x"), VariableRef("LOOP")))})
    assert excinfo.value.cycle == ("LOOP", "LOOP")


def test_cycle_chain_excludes_the_acyclic_prefix() -> None:
    with pytest.raises(CyclicDerivationError) as excinfo:
        derivation_order({"ENTRY": VariableRef("X"), "X": VariableRef("Y"), "Y": VariableRef("X")})
    assert excinfo.value.cycle == ("X", "Y", "X")


def test_undefined_variable_reference_is_rejected() -> None:
    with pytest.raises(DescriptorError, match="undefined variable 'MISSING'"):
        derivation_order({"A": VariableRef("MISSING")})


def test_long_reference_chain_is_ordered_without_recursion_limits() -> None:
    length = 2000
    variables = {f"V_{index}": VariableRef(f"V_{index - 1}") for index in range(length - 1, 0, -1)}
    variables["V_0"] = Literal("root")

    order = derivation_order(variables)

    assert order == tuple(f"V_{index}" for index in range(length))


def test_cycle_closing_a_long_chain_reports_the_whole_loop() -> None:
    length = 2000
    variables = {f"V_{index}": VariableRef(f"V_{index - 1}") for index in range(1, length)}
    variables["V_0"] = VariableRef(f"V_{length - 1}")

    with pytest.raises(CyclicDerivationError) as excinfo:
        derivation_order(variables)

    assert len(excinfo.value.cycle) == length + 1
    assert excinfo.value.cycle[0] == excinfo.value.cycle[-1] == "V_1"
