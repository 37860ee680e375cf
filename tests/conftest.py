# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tooldocs.config import SyncConfig

SITE_CONFIG = """\
import { Globe, Code } from "lucide-react";

export const siteConfig = {
  name: "PLai Framework",
  // toolTypes drive the tool picker in the dashboard
  toolTypes: [
    {
      value: "HTTP",
      title: "API Requests",
      icon: "Globe",
      status: "pro",
      config: [
        { key: "url", type: "text", label: "Server URL", required: true, placeholder: "https://example.com" },
        {
          key: "method",
          type: "select",
          label: "Method",
          choices: [
            { value: "get", label: "GET" },
            { value: "post", label: "POST" },
          ],
        },
        {
          key: "body",
          type: "textarea",
          label: "Request Body",
          helpText: "Use a {token} here",
          condition: { field: "method", value: "post" },
        },
      ],
    },
    {
      value: "CODE_EXECUTOR",
      title: "Code Interpreter",
      icon: "Code",
      config: [],
    },
  ],
};
"""

BROKEN_SITE_CONFIG = """\
export const siteConfig = {
  toolTypes: [
    {
      value: "HTTP",
      title: "API Requests",
      icon: "Globe",
    },
    {
      value: "BROKEN",
      title: "Broken Tool",
      config: [
        { key: "a", type: "text", label: "A" },
    },
    {
      value: "BROWSER",
      title: "Browser",
      icon: "Globe",
    },
  ],
};
"""


@pytest.fixture
def site_config() -> str:
    """Return a well-formed configuration module with two tools."""
    return SITE_CONFIG


@pytest.fixture
def broken_site_config() -> str:
    """Return a configuration module whose middle tool is unbalanced."""
    return BROKEN_SITE_CONFIG


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., SyncConfig]:
    """Return a factory writing ``source`` and building a matching config."""

    def _factory(source: str | None, **overrides: object) -> SyncConfig:
        source_path = tmp_path / "app" / "config" / "site.ts"
        if source is not None:
            source_path.parent.mkdir(parents=True, exist_ok=True)
            source_path.write_text(source, encoding="utf-8")
        values: dict[str, object] = {
            "source": source_path,
            "output_dir": tmp_path / "docs" / "tools",
            "backup_dir": tmp_path / "docs" / "backups",
            "backups": False,
        }
        values.update(overrides)
        return SyncConfig(**values)

    return _factory
