# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Sync settings and the TOML sources they are loaded from."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .normalizer import DEFAULT_ANCHOR
from .renderer import DEFAULT_EXTENSION, DEFAULT_LINK_PREFIX

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
STANDALONE_FILENAME: Final[str] = "tooldocs.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "tooldocs"


class SyncConfig(BaseModel):
    """Resolved settings driving one documentation sync."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: Path = Field(default=Path("../../config/site.ts"))
    output_dir: Path = Field(default=Path("tools"))
    backup_dir: Path = Field(default=Path("backups"))
    backups: bool = True
    anchor: str = DEFAULT_ANCHOR
    extension: str = DEFAULT_EXTENSION
    summary_filename: str = "overview.mdx"
    link_prefix: str = DEFAULT_LINK_PREFIX

    @field_validator("anchor")
    @classmethod
    def _validate_anchor(cls, value: str) -> str:
        candidate = value.strip()
        if not candidate or not candidate.replace("_", "a").replace("$", "a").isalnum():
            raise ValueError("anchor must be a plain identifier")
        return candidate

    @field_validator("extension")
    @classmethod
    def _validate_extension(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError("extension must start with '.'")
        return value

    @field_validator("summary_filename")
    @classmethod
    def _validate_summary_filename(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value:
            raise ValueError("summary_filename must be a bare filename")
        return value

    def resolved(self, root: Path) -> SyncConfig:
        """Return a copy whose relative paths are anchored at ``root``.

        Args:
            root: Directory relative paths are interpreted against.

        Returns:
            SyncConfig: Configuration with absolute ``source``, ``output_dir``
            and ``backup_dir`` paths.
        """

        base = root.resolve()
        return self.model_copy(
            update={
                "source": _anchor_path(self.source, base),
                "output_dir": _anchor_path(self.output_dir, base),
                "backup_dir": _anchor_path(self.backup_dir, base),
            },
        )


def _anchor_path(path: Path, base: Path) -> Path:
    expanded = path.expanduser()
    if expanded.is_absolute():
        return expanded
    return (base / expanded).resolve()


def load_sync_config(
    root: Path,
    *,
    config_file: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> SyncConfig:
    """Load sync settings for the project rooted at ``root``.

    Sources are consulted in order: an explicit ``config_file``, the
    ``[tool.tooldocs]`` table of ``pyproject.toml``, then ``tooldocs.toml``.
    The first source found wins; defaults fill the remaining keys.

    Args:
        root: Project root used to locate configuration files and resolve paths.
        config_file: Optional explicit TOML file.
        overrides: Optional values applied on top of the file settings.

    Returns:
        SyncConfig: Validated configuration with absolute paths.

    Raises:
        ConfigError: If a file cannot be parsed or holds invalid settings.
    """

    base = root.resolve()
    data: dict[str, Any] = {}
    if config_file is not None:
        path = config_file if config_file.is_absolute() else base / config_file
        if not path.is_file():
            raise ConfigError(f"Configuration file {path} does not exist")
        data = _section(_read_toml(path), path, allow_top_level=True)
        base = path.parent.resolve()
    else:
        pyproject = base / PYPROJECT_FILENAME
        standalone = base / STANDALONE_FILENAME
        if pyproject.is_file():
            data = _section(_read_toml(pyproject), pyproject, allow_top_level=False)
        if not data and standalone.is_file():
            data = _section(_read_toml(standalone), standalone, allow_top_level=True)

    merged = {**data, **dict(overrides or {})}
    try:
        config = SyncConfig(**merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid tooldocs configuration: {exc}") from exc
    return config.resolved(base)


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration from {path}: {exc}") from exc


def _section(document: Mapping[str, Any], path: Path, *, allow_top_level: bool) -> dict[str, Any]:
    """Return the ``[tool.tooldocs]`` table, or the whole document when permitted."""

    tool_table = document.get(PYPROJECT_TOOL_KEY)
    if isinstance(tool_table, Mapping) and PYPROJECT_SECTION_KEY in tool_table:
        section = tool_table[PYPROJECT_SECTION_KEY]
        if not isinstance(section, Mapping):
            raise ConfigError(f"[tool.tooldocs] in {path} must be a table")
        return dict(section)
    if allow_top_level:
        return {key: value for key, value in document.items() if key != PYPROJECT_TOOL_KEY}
    return {}


__all__ = [
    "PYPROJECT_FILENAME",
    "STANDALONE_FILENAME",
    "SyncConfig",
    "load_sync_config",
]
