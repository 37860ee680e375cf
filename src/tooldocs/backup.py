# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Timestamped snapshots of the previously generated documentation."""

from __future__ import annotations

import re
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Final

from .errors import BackupError

BACKUP_PREFIX: Final[str] = "tools"
_UNSAFE_TIMESTAMP_CHARS: Final[re.Pattern[str]] = re.compile(r"[:.]")


def backup_timestamp(moment: datetime) -> str:
    """Return a filesystem-safe ISO-8601 timestamp for ``moment``.

    Colons and periods are replaced by hyphens, e.g.
    ``2025-01-02T03-04-05-678Z``.
    """

    utc = moment.astimezone(UTC)
    iso = utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
    return _UNSAFE_TIMESTAMP_CHARS.sub("-", iso)


def create_backup(output_dir: Path, backup_root: Path, *, now: datetime | None = None) -> Path | None:
    """Copy ``output_dir`` recursively into a timestamped folder under ``backup_root``.

    Args:
        output_dir: Directory holding the previously generated documents.
        backup_root: Directory that receives ``tools-<timestamp>`` snapshots.
        now: Optional moment used for the folder name; defaults to the current time.

    Returns:
        Path | None: Location of the new snapshot, or ``None`` when there was
        nothing to back up.

    Raises:
        BackupError: If the snapshot cannot be created.
    """

    if not output_dir.is_dir():
        return None
    moment = now or datetime.now(UTC)
    destination = backup_root / f"{BACKUP_PREFIX}-{backup_timestamp(moment)}"
    try:
        backup_root.mkdir(parents=True, exist_ok=True)
        shutil.copytree(output_dir, destination)
    except (OSError, shutil.Error) as exc:
        raise BackupError(f"Unable to back up {output_dir} to {destination}: {exc}") from exc
    return destination


__all__ = ["BACKUP_PREFIX", "backup_timestamp", "create_backup"]
