# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for resolving descriptors into activation environments."""

from __future__ import annotations

import itertools

import pytest

from shellenv.activation import ActivationEnvironment
from shellenv.catalog import CatalogEntry, CatalogSnapshot
from shellenv.descriptor import Concat, EnvironmentDescriptor, Literal, ToolPathRef, VariableRef, load_preset
from shellenv.errors import CyclicDerivationError, UnresolvedToolError
from shellenv.resolver import inspect_tools, resolve

RUST_PATH = (
    "/nix/store/aaa-cargo-1.80.0/bin:"
    "/nix/store/bbb-clippy-1.80.0/bin:"
    "/nix/store/ccc-rustc-1.80.0/bin:"
    "/nix/store/ddd-rustfmt-1.80.0/bin"
)


def test_rust_preset_resolves_to_the_expected_environment(rust_catalog: CatalogSnapshot) -> None:
    environment = resolve(load_preset("rust"), rust_catalog)

    assert isinstance(environment, ActivationEnvironment)
    assert dict(environment) == {
        "PATH": RUST_PATH,
        "RUST_SRC_DIR": "/nix/store/fff-rust-lib-src",
    }


def test_resolution_is_deterministic(rust_catalog: CatalogSnapshot) -> None:
    descriptor = load_preset("rust")
    first = resolve(descriptor, rust_catalog)
    second = resolve(descriptor, rust_catalog)

    assert first == second
    assert first is not second
    assert first.to_json() == second.to_json()
    assert first.fingerprint() == second.fingerprint()


def test_search_path_covers_every_tool_without_duplicates(rust_catalog: CatalogSnapshot) -> None:
    descriptor = EnvironmentDescriptor.build(["rustc", "cargo", "rustc", "rust", "cargo"])

    environment = resolve(descriptor, rust_catalog)

    assert environment.path_entries == (
        "/nix/store/ccc-rustc-1.80.0/bin",
        "/nix/store/aaa-cargo-1.80.0/bin",
    )
    assert environment["PATH"] == "/nix/store/ccc-rustc-1.80.0/bin:/nix/store/aaa-cargo-1.80.0/bin"


def test_tools_sharing_a_binary_directory_appear_once() -> None:
    catalog = CatalogSnapshot.from_entries(
        [
            CatalogEntry(name="rustc", path="/nix/store/toolchain"),
            CatalogEntry(name="cargo", path="/nix/store/toolchain"),
        ],
    )
    environment = resolve(EnvironmentDescriptor.build(["rustc", "cargo"]), catalog)
    assert environment.path_entries == ("/nix/store/toolchain/bin",)


def test_missing_tool_is_named_and_no_environment_is_produced(rust_catalog: CatalogSnapshot) -> None:
    descriptor = EnvironmentDescriptor.build(["cargo", "rust-analyzer", "gopls"])

    with pytest.raises(UnresolvedToolError) as excinfo:
        resolve(descriptor, rust_catalog)

    assert excinfo.value.tool == "rust-analyzer"
    assert "rust-analyzer" in str(excinfo.value)


def test_derived_variable_takes_the_tool_path_exactly() -> None:
    catalog = CatalogSnapshot.from_entries([CatalogEntry(name="T", path="/p")])
    descriptor = EnvironmentDescriptor.build(["T"], {"X": ToolPathRef("T")})

    environment = resolve(descriptor, catalog)

    assert environment["X"] == "/p"
    assert environment["PATH"] == "/p/bin"


def test_expression_tools_resolve_without_joining_the_search_path(rust_catalog: CatalogSnapshot) -> None:
    descriptor = EnvironmentDescriptor.build([], {"RUSTC_HOME": ToolPathRef("rustc")})

    environment = resolve(descriptor, rust_catalog)

    assert environment["RUSTC_HOME"] == "/nix/store/ccc-rustc-1.80.0"
    assert environment.path_entries == ()
    assert environment["PATH"] == ""


def test_missing_expression_output_is_unresolved(rust_catalog: CatalogSnapshot) -> None:
    descriptor = EnvironmentDescriptor.build(["rustc"], {"DOCS": ToolPathRef("rust", "doc")})

    with pytest.raises(UnresolvedToolError) as excinfo:
        resolve(descriptor, rust_catalog)

    assert (excinfo.value.tool, excinfo.value.output) == ("rust", "doc")


def test_derived_variables_can_build_on_each_other(rust_catalog: CatalogSnapshot) -> None:
    descriptor = EnvironmentDescriptor.build(
        ["rustc"],
        {
            "CORE_SRC": Concat((VariableRef("RUST_SRC_DIR"), Literal("/core"))),
            "RUST_SRC_DIR": ToolPathRef("rust", "lib_src"),
        },
    )

    environment = resolve(descriptor, rust_catalog)

    assert environment["CORE_SRC"] == "/nix/store/fff-rust-lib-src/core"


def test_cycle_is_rejected_before_any_catalog_lookup(monkeypatch: pytest.MonkeyPatch) -> None:
    lookups: list[str] = []

    def recording_lookup(self: CatalogSnapshot, name: str) -> CatalogEntry:
        lookups.append(name)
        raise AssertionError("catalog must not be consulted")

    monkeypatch.setattr(CatalogSnapshot, "lookup", recording_lookup)

    with pytest.raises(CyclicDerivationError):
        EnvironmentDescriptor.build(["rustc"], {"A": VariableRef("B"), "B": VariableRef("A")})
    assert lookups == []


def test_tool_order_only_changes_the_search_path(rust_catalog: CatalogSnapshot) -> None:
    tools = ["cargo", "clippy", "rustc", "rustfmt"]
    variables = {"RUST_SRC_DIR": ToolPathRef("rust", "lib_src")}
    baseline = resolve(EnvironmentDescriptor.build(tools, variables), rust_catalog)

    for permutation in itertools.permutations(tools):
        environment = resolve(EnvironmentDescriptor.build(permutation, variables), rust_catalog)
        assert environment.derived == baseline.derived
        assert set(environment.path_entries) == set(baseline.path_entries)
        assert environment.path_entries == tuple(
            rust_catalog.lookup(name).binary_path for name in permutation
        )


def test_inspect_tools_reports_every_problem(rust_catalog: CatalogSnapshot) -> None:
    descriptor = EnvironmentDescriptor.build(
        ["cargo", "gopls"],
        {"SRC": ToolPathRef("rust", "doc"), "NODE": ToolPathRef("node")},
    )

    statuses = {status.name: status for status in inspect_tools(descriptor, rust_catalog)}

    assert list(statuses) == ["cargo", "gopls", "rust", "node"]
    assert statuses["cargo"].resolved and statuses["cargo"].declared
    assert not statuses["gopls"].resolved
    assert statuses["rust"].entry is not None
    assert statuses["rust"].error == "tool 'rust' has no output named 'doc'"
    assert not statuses["node"].declared
    assert statuses["node"].error == "tool 'node' is not available in the catalog"


def test_long_derivation_chain_resolves(rust_catalog: CatalogSnapshot) -> None:
    length = 2000
    variables: list[tuple[str, Concat | ToolPathRef]] = [
        (f"V_{index}", Concat((VariableRef(f"V_{index - 1}"),))) for index in range(length - 1, 0, -1)
    ]
    variables.append(("V_0", ToolPathRef("rust", "lib_src")))

    environment = resolve(EnvironmentDescriptor.build(["rustc"], variables), rust_catalog)

    assert environment[f"V_{length - 1}"] == "/nix/store/fff-rust-lib-src"
    assert len(environment.derived) == length
