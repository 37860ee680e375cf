# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Generate tool documentation pages from an application's tool catalog."""

from __future__ import annotations

from importlib import metadata

from .models import Choice, ConfigField, FieldCondition, ToolDefinition, ToolStatus
from .normalizer import CatalogNormalizer, NormalizationResult, normalize
from .orchestrator import SyncOrchestrator, SyncReport
from .renderer import ToolPageRenderer, document_filename

__all__ = [
    "CatalogNormalizer",
    "Choice",
    "ConfigField",
    "FieldCondition",
    "NormalizationResult",
    "SyncOrchestrator",
    "SyncReport",
    "ToolDefinition",
    "ToolPageRenderer",
    "ToolStatus",
    "__version__",
    "document_filename",
    "normalize",
]

try:
    __version__ = metadata.version("tooldocs-sync")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
