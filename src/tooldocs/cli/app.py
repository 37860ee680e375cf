# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point for the documentation sync."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..config import SyncConfig, load_sync_config
from ..errors import ConfigError, ConfigNotFoundError
from ..orchestrator import SyncOrchestrator
from .shared import EXIT_FATAL, CLIError, CLILogger, build_cli_logger

app = typer.Typer(
    help="Regenerate tool documentation pages from the application's tool catalog.",
    add_completion=False,
)


def load_config(
    root: Path,
    *,
    config_file: Path | None,
    backups: bool,
    logger: CLILogger,
) -> SyncConfig:
    """Return the resolved sync configuration for ``root``.

    Args:
        root: Project root where configuration files are looked up.
        config_file: Optional explicit configuration file.
        backups: ``False`` when the user disabled backups on the command line.
        logger: Logger used for reporting configuration problems.

    Returns:
        SyncConfig: Validated configuration with absolute paths.

    Raises:
        CLIError: If the configuration cannot be loaded.
    """

    overrides = None if backups else {"backups": False}
    try:
        return load_sync_config(root, config_file=config_file, overrides=overrides)
    except ConfigError as exc:
        logger.fail(str(exc))
        raise CLIError(str(exc), exit_code=EXIT_FATAL) from exc


def run_sync(
    root: Path,
    *,
    config_file: Path | None = None,
    backups: bool = True,
    check: bool = False,
    emoji: bool = True,
    no_color: bool = False,
) -> int:
    """Run the documentation sync for ``root`` and return an exit status.

    Args:
        root: Project root holding the configuration.
        config_file: Optional explicit configuration file.
        backups: Whether to snapshot the previous output first.
        check: Compare instead of writing.
        emoji: Whether console output may include emoji.
        no_color: Whether colour output should be disabled.

    Returns:
        int: ``0`` on a clean run, ``1`` when it completed with warnings and
        ``2`` when the run could not start.
    """

    logger = build_cli_logger(emoji=emoji, no_color=no_color)
    try:
        config = load_config(root, config_file=config_file, backups=backups, logger=logger)
    except CLIError as exc:
        return exc.exit_code

    logger.section(f"Tools documentation: {config.source.name} -> {config.output_dir}")
    try:
        report = SyncOrchestrator(config, logger=logger).run(check=check)
    except ConfigNotFoundError as exc:
        logger.fail(f"Error during sync: {exc}")
        return EXIT_FATAL
    return report.exit_code


@app.command()
def sync(
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Project root holding the configuration."),
    ] = Path.cwd(),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Explicit TOML configuration file."),
    ] = None,
    no_backup: Annotated[
        bool,
        typer.Option("--no-backup", help="Skip the snapshot of the previous output."),
    ] = False,
    check: Annotated[
        bool,
        typer.Option("--check", help="Report out-of-date pages without writing anything."),
    ] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji output.")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable colour output.")] = False,
) -> None:
    """Regenerate one page per catalog tool plus the tools overview."""

    exit_code = run_sync(
        root,
        config_file=config_file,
        backups=not no_backup,
        check=check,
        emoji=not no_emoji,
        no_color=no_color,
    )
    raise typer.Exit(code=exit_code)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "load_config", "main", "run_sync", "sync"]
