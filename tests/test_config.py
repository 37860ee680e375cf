# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for sync configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from tooldocs.config import SyncConfig, load_sync_config
from tooldocs.errors import ConfigError


def test_defaults_resolve_against_root(tmp_path: Path) -> None:
    root = tmp_path / "docs" / "site"
    root.mkdir(parents=True)
    config = load_sync_config(root)

    assert config.source == (tmp_path / "config" / "site.ts").resolve()
    assert config.output_dir == (root / "tools").resolve()
    assert config.backup_dir == (root / "backups").resolve()
    assert config.backups is True
    assert config.anchor == "toolTypes"
    assert config.extension == ".mdx"


def test_pyproject_table_is_read(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "docs"\n\n[tool.tooldocs]\nsource = "site.ts"\nbackups = false\n',
        encoding="utf-8",
    )
    config = load_sync_config(tmp_path)
    assert config.source == (tmp_path / "site.ts").resolve()
    assert config.backups is False


def test_standalone_file_is_used_without_pyproject_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "docs"\n', encoding="utf-8")
    (tmp_path / "tooldocs.toml").write_text('anchor = "integrations"\n', encoding="utf-8")
    assert load_sync_config(tmp_path).anchor == "integrations"


def test_explicit_file_paths_are_relative_to_the_file(tmp_path: Path) -> None:
    settings = tmp_path / "settings"
    settings.mkdir()
    (settings / "sync.toml").write_text('output_dir = "out"\n', encoding="utf-8")
    config = load_sync_config(tmp_path, config_file=Path("settings/sync.toml"))
    assert config.output_dir == (settings / "out").resolve()


def test_overrides_win_over_file_values(tmp_path: Path) -> None:
    (tmp_path / "tooldocs.toml").write_text("backups = true\n", encoding="utf-8")
    assert load_sync_config(tmp_path, overrides={"backups": False}).backups is False


def test_absolute_paths_are_kept(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere" / "site.ts"
    config = SyncConfig(source=target).resolved(tmp_path / "root")
    assert config.source == target


@pytest.mark.parametrize(
    "content",
    [
        'extension = "mdx"\n',
        'anchor = "tool types"\n',
        'summary_filename = "nested/overview.mdx"\n',
        'colour = "blue"\n',
        "source = [\n",
    ],
)
def test_invalid_settings_raise_config_error(tmp_path: Path, content: str) -> None:
    (tmp_path / "tooldocs.toml").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_sync_config(tmp_path)


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_sync_config(tmp_path, config_file=tmp_path / "absent.toml")
