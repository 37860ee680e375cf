# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typed intermediate model describing catalog tools and their settings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ToolStatus(str, Enum):
    """Enumerate release statuses a catalog tool may advertise."""

    DEFAULT = "default"
    PRO = "pro"
    ALPHA = "alpha"
    PREVIEW = "preview"

    @classmethod
    def from_raw(cls, raw: str) -> ToolStatus | None:
        """Return the status matching ``raw`` or ``None`` when unknown.

        Args:
            raw: Status string as written in the catalog.

        Returns:
            ToolStatus | None: Matching status member, otherwise ``None``.
        """

        try:
            return cls(raw)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class Choice:
    """Selectable option offered by a ``select``-style field."""

    value: str
    label: str


@dataclass(frozen=True, slots=True)
class FieldCondition:
    """Visibility rule tying a field to the value of a sibling field."""

    field: str
    value: str


@dataclass(frozen=True, slots=True)
class ConfigField:
    """Single configuration parameter exposed by a tool."""

    key: str
    input_type: str
    label: str
    required: bool = False
    placeholder: str | None = None
    help_text: str | None = None
    choices: tuple[Choice, ...] = ()
    condition: FieldCondition | None = None


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Tool catalog entry extracted from the application configuration."""

    identifier: str
    title: str
    icon: str = ""
    status: ToolStatus | None = None
    fields: tuple[ConfigField, ...] = ()
    offset: int = 0

    @property
    def field_keys(self) -> tuple[str, ...]:
        """Return configuration keys in declaration order."""

        return tuple(field.key for field in self.fields)


__all__ = (
    "Choice",
    "ConfigField",
    "FieldCondition",
    "ToolDefinition",
    "ToolStatus",
)
