# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Drive one documentation sync from catalog source to written pages."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Protocol

from .backup import create_backup
from .config import SyncConfig
from .errors import BackupError, ConfigNotFoundError, WriteError
from .lookups import DEFAULT_LOOKUPS, RenderLookups
from .models import ToolDefinition
from .normalizer import CatalogNormalizer, SkippedEntry
from .renderer import ToolPageRenderer, document_filename
from .scanner import line_of


class SyncLogger(Protocol):
    """Progress sink used by :class:`SyncOrchestrator`."""

    def info(self, message: str) -> None: ...

    def ok(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def fail(self, message: str) -> None: ...


class _QuietLogger:
    """Logger discarding every message."""

    def info(self, message: str) -> None:
        """Discard ``message``."""

    def ok(self, message: str) -> None:
        """Discard ``message``."""

    def warn(self, message: str) -> None:
        """Discard ``message``."""

    def fail(self, message: str) -> None:
        """Discard ``message``."""


class SyncStatus(str, Enum):
    """Enumerate the overall outcomes of a sync run."""

    COMPLETED = "completed"
    COMPLETED_WITH_WARNINGS = "completed_with_warnings"


@dataclass(slots=True)
class SyncReport:
    """Capture the outcome of a documentation sync."""

    check_only: bool = False
    processed: list[str] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    write_errors: list[WriteError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    catalog_issues: list[str] = field(default_factory=list)
    stale: list[str] = field(default_factory=list)
    summary_ok: bool = False
    backup_path: Path | None = None
    backup_error: str | None = None
    summary_error: str | None = None

    @property
    def total(self) -> int:
        """Return the number of catalog entries the run looked at."""

        return len(self.processed) + len(self.skipped) + len(self.write_errors)

    @property
    def status(self) -> SyncStatus:
        """Return whether the run finished cleanly or with warnings."""

        if (
            self.skipped
            or self.write_errors
            or self.catalog_issues
            or self.stale
            or self.backup_error
            or not self.summary_ok
        ):
            return SyncStatus.COMPLETED_WITH_WARNINGS
        return SyncStatus.COMPLETED

    @property
    def exit_code(self) -> int:
        """Return the process exit status matching :attr:`status`."""

        return 0 if self.status is SyncStatus.COMPLETED else 1

    def summary_line(self) -> str:
        """Return the final human-readable line enumerating the run's counts."""

        line = (
            f"{self.total} tools: {len(self.processed)} succeeded, "
            f"{len(self.skipped)} skipped, {len(self.write_errors)} failed"
        )
        if self.check_only:
            line += f", {len(self.stale)} out of date"
        return line


class SyncOrchestrator:
    """Read the catalog, render every tool and regenerate the summary page."""

    def __init__(
        self,
        config: SyncConfig,
        *,
        lookups: RenderLookups = DEFAULT_LOOKUPS,
        logger: SyncLogger | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Create an orchestrator for ``config``.

        Args:
            config: Resolved sync settings with absolute paths.
            lookups: Prose tables injected into the renderer.
            logger: Optional progress sink; messages are discarded when omitted.
            clock: Optional callable supplying the backup timestamp.
        """

        self._config = config
        self._logger: SyncLogger = logger or _QuietLogger()
        self._clock = clock
        self._normalizer = CatalogNormalizer(anchor=config.anchor)
        self._renderer = ToolPageRenderer(lookups=lookups, link_prefix=config.link_prefix)

    @property
    def config(self) -> SyncConfig:
        """Return the settings driving this orchestrator."""

        return self._config

    def run(self, *, check: bool = False) -> SyncReport:
        """Execute one sync and return its report.

        Per-entry failures are collected in the report; the batch always runs
        to completion once the source has been read.

        Args:
            check: When ``True`` compare rendered output with the files on disk
                instead of writing; no backup is taken.

        Returns:
            SyncReport: Counts, skipped entries and failures of the run.

        Raises:
            ConfigNotFoundError: If the catalog source is missing or unreadable.
        """

        config = self._config
        logger = self._logger
        logger.info("Checking tools documentation..." if check else "Starting tools documentation sync...")
        source = self._read_source()
        report = SyncReport(check_only=check)

        if config.backups and not check:
            self._backup(report)

        result = self._normalizer.normalize(source)
        for entry in result.skipped:
            logger.warn(f"Skipped {entry.describe()}: {entry.reason}")
        for issue in result.issues:
            logger.warn(f"Malformed catalog: {issue}")
        for message in result.warnings:
            logger.warn(message)
        report.skipped.extend(result.skipped)
        report.warnings.extend(result.warnings)
        report.catalog_issues.extend(result.issues)

        claimed: dict[str, str | None] = {config.summary_filename: None}
        documented: list[ToolDefinition] = []
        for tool in result.tools:
            filename = document_filename(tool.identifier, config.extension)
            if filename in claimed:
                owner = claimed[filename]
                reason = (
                    f"filename {filename} collides with the summary document"
                    if owner is None
                    else f"filename {filename} is already used by {owner}"
                )
                entry = SkippedEntry(tool.identifier, tool.offset, line_of(source, tool.offset), reason)
                logger.warn(f"Skipped {entry.describe()}: {reason}")
                report.skipped.append(entry)
                continue
            claimed[filename] = tool.identifier
            content = self._renderer.render(tool)
            if self._emit(config.output_dir / filename, content, report, label=tool.title):
                report.processed.append(filename)
                documented.append(tool)

        summary = self._renderer.render_summary(documented)
        report.summary_ok = self._emit(
            config.output_dir / config.summary_filename,
            summary,
            report,
            label="tools overview",
            summary=True,
        )

        line = report.summary_line()
        if report.status is SyncStatus.COMPLETED:
            logger.ok(line)
        else:
            logger.warn(line)
        return report

    def _read_source(self) -> str:
        path = self._config.source
        if not path.is_file():
            raise ConfigNotFoundError(path)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigNotFoundError(path, reason=f"unreadable ({exc})") from exc

    def _backup(self, report: SyncReport) -> None:
        now = self._clock() if self._clock is not None else None
        try:
            report.backup_path = create_backup(self._config.output_dir, self._config.backup_dir, now=now)
        except BackupError as exc:
            report.backup_error = str(exc)
            self._logger.warn(f"Backup failed, continuing without one: {exc}")
            return
        if report.backup_path is not None:
            self._logger.info(f"Created backup at {report.backup_path}")

    def _emit(
        self,
        destination: Path,
        content: str,
        report: SyncReport,
        *,
        label: str,
        summary: bool = False,
    ) -> bool:
        """Write or compare one document; return ``True`` when it succeeded."""

        if report.check_only:
            if not _is_current(destination, content):
                report.stale.append(destination.name)
                self._logger.warn(f"{destination.name} is out of date")
            return True
        self._logger.info(f"Generating documentation for {label}...")
        try:
            write_document(destination, content)
        except WriteError as exc:
            if summary:
                report.summary_error = str(exc)
            else:
                report.write_errors.append(exc)
            self._logger.fail(str(exc))
            return False
        self._logger.ok(f"Generated {destination.name}")
        return True


def write_document(destination: Path, content: str) -> None:
    """Write ``content`` to ``destination`` as UTF-8 with ``\\n`` line endings.

    Raises:
        WriteError: If the directory or file cannot be written.
    """

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with destination.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
    except OSError as exc:
        raise WriteError(destination, str(exc)) from exc


def _is_current(destination: Path, content: str) -> bool:
    try:
        return destination.read_bytes() == content.encode("utf-8")
    except OSError:
        return False


__all__ = [
    "SyncLogger",
    "SyncOrchestrator",
    "SyncReport",
    "SyncStatus",
    "write_document",
]
