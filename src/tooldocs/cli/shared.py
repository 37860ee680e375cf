# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, exit codes)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import section as core_section
from ..logging import warn as core_warn

EXIT_FATAL: Final[int] = 2


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = EXIT_FATAL) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji and colour settings."""

    use_emoji: bool
    use_color: bool | None = None

    def info(self, message: str) -> None:
        """Log a progress message honouring emoji preferences."""

        core_info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        """Log a success message honouring emoji preferences."""

        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        """Log a warning message honouring emoji preferences."""

        core_warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences."""

        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def section(self, title: str) -> None:
        """Render a section header, coloured unless colour output was disabled."""

        core_section(title, use_color=self.use_color is not False)


def build_cli_logger(*, emoji: bool, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided presentation flags.

    Args:
        emoji: Whether log output may include emoji glyphs.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger bound to the shared Rich consoles.
    """

    return CLILogger(use_emoji=emoji, use_color=False if no_color else None)


__all__ = [
    "CLIError",
    "CLILogger",
    "EXIT_FATAL",
    "build_cli_logger",
]
