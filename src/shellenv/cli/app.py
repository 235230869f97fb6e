# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the shellenv commands."""

from __future__ import annotations

from pathlib import Path
from typing import cast

import typer
from rich import box
from rich.table import Table

from ..activation import OUTPUT_FORMATS, OutputFormat
from ..catalog import load_catalog
from ..errors import ShellEnvError
from ..resolver import ToolStatus, inspect_tools, resolve
from .shared import CLIError, build_cli_logger, build_stdout_console, load_config_for_cli, load_inputs

app = typer.Typer(
    help="Resolve declarative development shells into reproducible environments.",
    no_args_is_help=True,
    add_completion=False,
)

ROOT_OPTION = typer.Option(Path.cwd(), "--root", "-r", help="Project root.")
DESCRIPTOR_OPTION = typer.Option(None, "--descriptor", "-d", help="Descriptor file (TOML or JSON).")
CATALOG_OPTION = typer.Option(None, "--catalog", "-c", help="Catalog directory of tool entries.")
PRESET_OPTION = typer.Option(None, "--preset", "-p", help="Use a bundled preset descriptor instead of a file.")
NO_EMOJI_OPTION = typer.Option(False, "--no-emoji", help="Disable emoji in status messages.")


@app.command("resolve")
def resolve_command(
    root: Path = ROOT_OPTION,
    descriptor: Path | None = DESCRIPTOR_OPTION,
    catalog: Path | None = CATALOG_OPTION,
    preset: str | None = PRESET_OPTION,
    no_emoji: bool = NO_EMOJI_OPTION,
    output_format: str = typer.Option(
        "sh",
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format: sh (export statements), json or dotenv.",
    ),
) -> None:
    """Resolve the descriptor and print the activation environment."""

    emoji = False if no_emoji else None
    logger = build_cli_logger(emoji=not no_emoji)
    fmt = output_format.lower()
    if fmt not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"expected one of {', '.join(OUTPUT_FORMATS)}", param_hint="--format")
    try:
        config = load_config_for_cli(root, descriptor=descriptor, catalog=catalog, preset=preset, emoji=emoji)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    logger = build_cli_logger(emoji=config.emoji, color=config.color)
    try:
        inputs = load_inputs(config)
        environment = resolve(inputs.descriptor, inputs.catalog)
    except ShellEnvError as exc:
        logger.fail(f"resolution failed: {exc}")
        raise typer.Exit(code=1) from exc
    logger.echo(environment.render(cast(OutputFormat, fmt)), nl=False)


@app.command("check")
def check_command(
    root: Path = ROOT_OPTION,
    descriptor: Path | None = DESCRIPTOR_OPTION,
    catalog: Path | None = CATALOG_OPTION,
    preset: str | None = PRESET_OPTION,
    no_emoji: bool = NO_EMOJI_OPTION,
) -> None:
    """Validate the descriptor and report how each tool resolves."""

    emoji = False if no_emoji else None
    logger = build_cli_logger(emoji=not no_emoji)
    try:
        config = load_config_for_cli(root, descriptor=descriptor, catalog=catalog, preset=preset, emoji=emoji)
        inputs = load_inputs(config)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except ShellEnvError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc

    logger = build_cli_logger(emoji=config.emoji, color=config.color)
    statuses = inspect_tools(inputs.descriptor, inputs.catalog)
    console = build_stdout_console(color=config.color)
    console.print(_status_table(statuses))

    for status in statuses:
        if status.declared and status.entry is not None and status.entry.binary_path is None:
            logger.warn(f"tool '{status.name}' provides no binary directory; nothing is added to PATH")
    failures = [status for status in statuses if not status.resolved]
    for status in failures:
        logger.fail(status.error or status.name)
    if failures:
        raise typer.Exit(code=1)

    try:
        environment = resolve(inputs.descriptor, inputs.catalog)
    except ShellEnvError as exc:
        logger.fail(f"resolution failed: {exc}")
        raise typer.Exit(code=1) from exc
    logger.ok(
        f"{len(environment.path_entries)} search-path entries and "
        f"{len(environment.derived)} derived variables resolved ({environment.fingerprint()[:12]})",
    )


@app.command("tools")
def tools_command(
    root: Path = ROOT_OPTION,
    catalog: Path | None = CATALOG_OPTION,
    no_emoji: bool = NO_EMOJI_OPTION,
) -> None:
    """List the tools available in the catalog."""

    emoji = False if no_emoji else None
    logger = build_cli_logger(emoji=not no_emoji)
    try:
        config = load_config_for_cli(root, catalog=catalog, emoji=emoji)
        snapshot = load_catalog(config.catalog_root)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except ShellEnvError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc

    logger = build_cli_logger(emoji=config.emoji, color=config.color)
    if not snapshot.entries:
        logger.info(f"catalog {config.catalog_root} is empty")
        return

    table = Table(title=f"Catalog {snapshot.checksum[:12]}", box=box.SIMPLE, expand=True)
    table.add_column("Tool", style="bold")
    table.add_column("Version")
    table.add_column("Path", overflow="fold")
    table.add_column("Outputs", overflow="fold")
    for entry in sorted(snapshot.entries, key=lambda item: item.name):
        table.add_row(entry.name, entry.version or "-", entry.path, ", ".join(sorted(entry.outputs)) or "-")
    build_stdout_console(color=config.color).print(table)


def _status_table(statuses: tuple[ToolStatus, ...]) -> Table:
    table = Table(title="Tools", box=box.SIMPLE, expand=True)
    table.add_column("Tool", style="bold")
    table.add_column("Declared")
    table.add_column("Status")
    table.add_column("Path", overflow="fold")
    for status in statuses:
        table.add_row(
            status.name,
            "yes" if status.declared else "no",
            "ok" if status.resolved else "missing",
            status.entry.path if status.entry is not None else "-",
        )
    return table


def main() -> None:
    """Run the shellenv CLI."""

    app()


__all__ = ["app", "main"]
