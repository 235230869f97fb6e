# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered project configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from shellenv.config import ShellEnvConfig, load_config
from shellenv.errors import ConfigError


def test_defaults_are_anchored_at_root(tmp_path: Path) -> None:
    result = load_config(tmp_path)

    assert result.sources == ()
    assert result.config.descriptor == tmp_path / "shellenv.toml"
    assert result.config.catalog_root == tmp_path / ".shellenv" / "catalog"
    assert result.config.preset is None
    assert result.config.emoji is True


def test_layers_apply_in_precedence_order(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
[project]
name = "demo"

[tool.shellenv]
catalog-root = "catalogs/pyproject"
descriptor = "env/dev.toml"
emoji = false
""".strip(),
        encoding="utf-8",
    )
    (tmp_path / ".shellenv.toml").write_text('catalog_root = "/opt/catalog"\n', encoding="utf-8")

    result = load_config(tmp_path, overrides={"descriptor": Path("cli.toml"), "preset": None})

    assert result.sources == (tmp_path / "pyproject.toml", tmp_path / ".shellenv.toml")
    assert result.config.catalog_root == Path("/opt/catalog")
    assert result.config.descriptor == tmp_path / "cli.toml"
    assert result.config.emoji is False


def test_pyproject_without_section_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")
    assert load_config(tmp_path).sources == ()


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    (tmp_path / ".shellenv.toml").write_text("colour = true\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid shellenv configuration"):
        load_config(tmp_path)


def test_invalid_toml_is_reported(tmp_path: Path) -> None:
    (tmp_path / ".shellenv.toml").write_text("emoji = \n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid TOML"):
        load_config(tmp_path)


def test_config_is_frozen() -> None:
    config = ShellEnvConfig()
    with pytest.raises(ValueError):
        config.emoji = False  # type: ignore[misc]
