# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from shellenv.catalog import CatalogEntry, CatalogSnapshot

RUST_ENTRIES: tuple[CatalogEntry, ...] = (
    CatalogEntry(name="cargo", path="/nix/store/aaa-cargo-1.80.0", version="1.80.0"),
    CatalogEntry(name="clippy", path="/nix/store/bbb-clippy-1.80.0", version="1.80.0"),
    CatalogEntry(name="rustc", path="/nix/store/ccc-rustc-1.80.0", version="1.80.0"),
    CatalogEntry(name="rustfmt", path="/nix/store/ddd-rustfmt-1.80.0", version="1.80.0"),
    CatalogEntry(
        name="rust",
        path="/nix/store/eee-rust-1.80.0",
        bin_dir=None,
        outputs={"lib_src": "/nix/store/fff-rust-lib-src"},
        version="1.80.0",
    ),
)


@pytest.fixture
def rust_entries() -> tuple[CatalogEntry, ...]:
    """Return catalog entries for a Rust toolchain."""
    return RUST_ENTRIES


@pytest.fixture
def rust_catalog() -> CatalogSnapshot:
    """Return an in-memory catalog holding a Rust toolchain."""
    return CatalogSnapshot.from_entries(RUST_ENTRIES)


CatalogWriter = Callable[[Path, Iterable[CatalogEntry]], Path]


def _write_catalog(root: Path, entries: Iterable[CatalogEntry]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for entry in entries:
        (root / f"{entry.name}.json").write_text(json.dumps(entry.to_mapping(), indent=2), encoding="utf-8")
    return root


@pytest.fixture
def write_catalog() -> CatalogWriter:
    """Return a helper writing catalog entries as JSON documents under a directory."""
    return _write_catalog


@pytest.fixture
def rust_project(tmp_path: Path) -> Path:
    """Return a project root with a Rust descriptor and an on-disk catalog."""
    project = tmp_path / "project"
    _write_catalog(project / ".shellenv" / "catalog", RUST_ENTRIES)
    (project / "shellenv.toml").write_text(
        """
[shell]
name = "rust"
tools = ["cargo", "clippy", "rustc", "rustfmt"]

[shell.env]
RUST_SRC_DIR = { tool = "rust", output = "lib_src" }
""".strip(),
        encoding="utf-8",
    )
    return project
