# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for documentation backups."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest

from tooldocs.backup import backup_timestamp, create_backup
from tooldocs.errors import BackupError

MOMENT = datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)


def test_timestamp_is_filesystem_safe() -> None:
    assert backup_timestamp(MOMENT) == "2025-01-02T03-04-05-678Z"


def test_timestamp_is_normalised_to_utc() -> None:
    local = MOMENT.astimezone(timezone(timedelta(hours=2)))
    assert backup_timestamp(local) == "2025-01-02T03-04-05-678Z"


def test_missing_output_directory_needs_no_backup(tmp_path: Path) -> None:
    assert create_backup(tmp_path / "tools", tmp_path / "backups", now=MOMENT) is None
    assert not (tmp_path / "backups").exists()


def test_backup_copies_tree(tmp_path: Path) -> None:
    output = tmp_path / "tools"
    (output / "nested").mkdir(parents=True)
    (output / "http.mdx").write_text("page", encoding="utf-8")
    (output / "nested" / "extra.mdx").write_text("extra", encoding="utf-8")

    destination = create_backup(output, tmp_path / "backups", now=MOMENT)

    assert destination == tmp_path / "backups" / "tools-2025-01-02T03-04-05-678Z"
    assert (destination / "http.mdx").read_text(encoding="utf-8") == "page"
    assert (destination / "nested" / "extra.mdx").read_text(encoding="utf-8") == "extra"


def test_existing_snapshot_raises_backup_error(tmp_path: Path) -> None:
    output = tmp_path / "tools"
    output.mkdir()
    create_backup(output, tmp_path / "backups", now=MOMENT)
    with pytest.raises(BackupError):
        create_backup(output, tmp_path / "backups", now=MOMENT)
