# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while syncing tool documentation."""

from __future__ import annotations

from pathlib import Path


class ToolDocsError(RuntimeError):
    """Base class for every error raised by the documentation sync."""


class ConfigNotFoundError(ToolDocsError):
    """Raised when the catalog source file cannot be located or read."""

    def __init__(self, path: Path, *, reason: str = "not found") -> None:
        """Create the error for ``path``.

        Args:
            path: Source path that was expected to hold the tool catalog.
            reason: Short description of why the source is unavailable.
        """

        super().__init__(f"App config {reason} at {path}")
        self.path = path


class ConfigError(ToolDocsError):
    """Raised when sync settings are invalid."""


class StructuralScanError(ToolDocsError):
    """Raised when delimiters in the source text do not balance."""

    def __init__(self, offset: int, message: str, *, found_at: int | None = None) -> None:
        """Create the error for the structure opened at ``offset``.

        Args:
            offset: Position of the opening delimiter or anchor in the source text.
            message: Human-readable description of the structural problem.
            found_at: Position of the mismatched closing delimiter, when one was seen.
        """

        super().__init__(f"offset {offset}: {message}")
        self.offset = offset
        self.found_at = found_at


class NormalizationError(ToolDocsError):
    """Raised when a mandatory field is missing or an invariant is violated."""

    def __init__(self, message: str, *, offset: int, field: str | None = None) -> None:
        """Create the error for the object literal starting at ``offset``.

        Args:
            message: Human-readable description of the problem.
            offset: Position of the offending object literal in the source text.
            field: Name of the field that could not be normalised, when known.
        """

        super().__init__(f"offset {offset}: {message}")
        self.offset = offset
        self.field = field


class BackupError(ToolDocsError):
    """Raised when the previous output directory cannot be snapshotted."""


class WriteError(ToolDocsError):
    """Raised when a rendered document cannot be written to disk."""

    def __init__(self, path: Path, message: str) -> None:
        """Create the error for the document destined for ``path``.

        Args:
            path: Destination path of the document.
            message: Description of the filesystem failure.
        """

        super().__init__(f"{path}: {message}")
        self.path = path


__all__ = (
    "BackupError",
    "ConfigError",
    "ConfigNotFoundError",
    "NormalizationError",
    "StructuralScanError",
    "ToolDocsError",
    "WriteError",
)
