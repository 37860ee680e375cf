# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Build typed tool definitions from the catalog array in the source text."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Final

from .errors import NormalizationError, StructuralScanError
from .extractor import FieldKind, extract_fields
from .models import Choice, ConfigField, FieldCondition, ToolDefinition, ToolStatus
from .scanner import SourceSpan, find_catalog_array, line_of, scan_array

DEFAULT_ANCHOR: Final[str] = "toolTypes"

TOOL_FIELDS: Final[Mapping[str, FieldKind]] = MappingProxyType(
    {
        "value": FieldKind.STRING,
        "title": FieldKind.STRING,
        "icon": FieldKind.STRING,
        "status": FieldKind.STRING,
        "config": FieldKind.ARRAY,
    },
)
CONFIG_FIELDS: Final[Mapping[str, FieldKind]] = MappingProxyType(
    {
        "key": FieldKind.STRING,
        "type": FieldKind.STRING,
        "label": FieldKind.STRING,
        "required": FieldKind.BOOLEAN,
        "placeholder": FieldKind.STRING,
        "helpText": FieldKind.STRING,
        "choices": FieldKind.ARRAY,
        "condition": FieldKind.OBJECT,
    },
)
CHOICE_FIELDS: Final[Mapping[str, FieldKind]] = MappingProxyType(
    {"value": FieldKind.SCALAR, "label": FieldKind.STRING},
)
CONDITION_FIELDS: Final[Mapping[str, FieldKind]] = MappingProxyType(
    {"field": FieldKind.STRING, "value": FieldKind.SCALAR},
)

_IDENTIFIER_HINT: Final[re.Pattern[str]] = re.compile(r"""(?<![\w$])value\s*:\s*["']([^"'\\\n]+)["']""")


@dataclass(frozen=True, slots=True)
class SkippedEntry:
    """Catalog entry that could not be normalised."""

    identifier: str | None
    offset: int
    line: int
    reason: str

    def describe(self) -> str:
        """Return a label identifying the entry for console output."""

        if self.identifier:
            return f"{self.identifier} (line {self.line})"
        return f"entry at line {self.line} (offset {self.offset})"


@dataclass(frozen=True, slots=True)
class NormalizationResult:
    """Tools built from the catalog plus the entries that were skipped."""

    tools: tuple[ToolDefinition, ...] = ()
    skipped: tuple[SkippedEntry, ...] = ()
    warnings: tuple[str, ...] = ()
    issues: tuple[str, ...] = ()

    @property
    def clean(self) -> bool:
        """Return ``True`` when no entry was skipped and the array was well formed."""

        return not self.skipped and not self.issues


@dataclass(slots=True)
class _ResultBuilder:
    """Accumulate normalisation output while walking the catalog."""

    source: str
    tools: list[ToolDefinition] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    def skip(self, offset: int, reason: str, *, identifier: str | None = None) -> None:
        self.skipped.append(
            SkippedEntry(
                identifier=identifier,
                offset=offset,
                line=line_of(self.source, offset),
                reason=reason,
            ),
        )

    def build(self) -> NormalizationResult:
        ordered = sorted(self.skipped, key=lambda entry: entry.offset)
        return NormalizationResult(
            tools=tuple(self.tools),
            skipped=tuple(ordered),
            warnings=tuple(self.warnings),
            issues=tuple(self.issues),
        )


@dataclass(frozen=True, slots=True)
class CatalogNormalizer:
    """Turn the catalog array found after ``anchor`` into tool definitions."""

    anchor: str = DEFAULT_ANCHOR

    def normalize(self, source: str) -> NormalizationResult:
        """Normalise every tool declared in ``source``.

        Entries that are unbalanced or miss mandatory fields are skipped and
        reported; the remaining tools are still returned in source order.

        Args:
            source: Full text of the configuration module.

        Returns:
            NormalizationResult: Tools, skipped entries, soft warnings and
            structural issues not attributable to a single entry.
        """

        builder = _ResultBuilder(source=source)
        try:
            open_index = find_catalog_array(source, self.anchor)
        except StructuralScanError as exc:
            builder.skip(exc.offset, str(exc))
            return builder.build()
        if open_index is None:
            return builder.build()

        scan = scan_array(source, open_index)
        for failure in scan.failures:
            if source[failure.offset] == "{":
                builder.skip(failure.offset, str(failure), identifier=_identifier_hint(source, failure.offset))
            else:
                builder.issues.append(f"{self.anchor} (line {line_of(source, failure.offset)}): {failure}")

        seen: set[str] = set()
        for span in scan.objects:
            try:
                tool = self._build_tool(span, builder.warnings)
            except (NormalizationError, StructuralScanError) as exc:
                builder.skip(span.start, str(exc), identifier=_identifier_hint(source, span.start))
                continue
            if tool.identifier in seen:
                builder.skip(
                    span.start,
                    f"offset {span.start}: duplicate tool identifier '{tool.identifier}'",
                    identifier=tool.identifier,
                )
                continue
            seen.add(tool.identifier)
            builder.tools.append(tool)
        return builder.build()

    def _build_tool(self, span: SourceSpan, warnings: list[str]) -> ToolDefinition:
        fields = extract_fields(span, TOOL_FIELDS, context="tool")
        identifier = fields.require("value")
        title = fields.require("title")
        status: ToolStatus | None = None
        raw_status = fields.optional("status")
        if raw_status is not None:
            status = ToolStatus.from_raw(raw_status)
            if status is None:
                warnings.append(f"{identifier}: ignoring unknown status '{raw_status}'")
        config_span = fields.nested("config")
        config = self._build_fields(config_span, identifier) if config_span is not None else ()
        warnings.extend(_dangling_conditions(identifier, config))
        return ToolDefinition(
            identifier=identifier,
            title=title,
            icon=fields.optional("icon") or "",
            status=status,
            fields=config,
            offset=span.start,
        )

    def _build_fields(self, span: SourceSpan, identifier: str) -> tuple[ConfigField, ...]:
        scan = scan_array(span.source, span.start)
        if scan.failures:
            raise scan.failures[0]
        result: list[ConfigField] = []
        keys: set[str] = set()
        for field_span in scan.objects:
            config_field = _build_field(field_span, identifier)
            if config_field.key in keys:
                raise NormalizationError(
                    f"{identifier} declares config field '{config_field.key}' more than once",
                    offset=field_span.start,
                    field="key",
                )
            keys.add(config_field.key)
            result.append(config_field)
        return tuple(result)


def _build_field(span: SourceSpan, identifier: str) -> ConfigField:
    fields = extract_fields(span, CONFIG_FIELDS, context=f"{identifier} config field")
    key = fields.require("key")
    context = f"{identifier} config field '{key}'"
    fields = replace(fields, context=context)
    choices_span = fields.nested("choices")
    condition_span = fields.nested("condition")
    return ConfigField(
        key=key,
        input_type=fields.require("type"),
        label=fields.require("label"),
        required=fields.flag("required"),
        placeholder=fields.optional("placeholder"),
        help_text=fields.optional("helpText"),
        choices=_build_choices(choices_span, context) if choices_span is not None else (),
        condition=_build_condition(condition_span, context) if condition_span is not None else None,
    )


def _build_choices(span: SourceSpan, context: str) -> tuple[Choice, ...]:
    scan = scan_array(span.source, span.start)
    if scan.failures:
        raise scan.failures[0]
    choices: list[Choice] = []
    for choice_span in scan.objects:
        fields = extract_fields(choice_span, CHOICE_FIELDS, context=f"{context} choice")
        value = fields.require("value")
        choices.append(Choice(value=value, label=fields.optional("label") or value))
    return tuple(choices)


def _build_condition(span: SourceSpan, context: str) -> FieldCondition:
    fields = extract_fields(span, CONDITION_FIELDS, context=f"{context} condition")
    return FieldCondition(field=fields.require("field"), value=fields.require("value"))


def _dangling_conditions(identifier: str, config: tuple[ConfigField, ...]) -> list[str]:
    """Return warnings for conditions that reference no sibling field."""

    keys = {config_field.key for config_field in config}
    warnings: list[str] = []
    for config_field in config:
        condition = config_field.condition
        if condition is None:
            continue
        if condition.field == config_field.key or condition.field not in keys:
            warnings.append(
                f"{identifier}: field '{config_field.key}' depends on unknown field '{condition.field}'",
            )
    return warnings


def _identifier_hint(source: str, offset: int) -> str | None:
    """Best-effort identifier for an entry that failed to normalise."""

    limit = len(source)
    for delimiter in ("[", "}"):
        position = source.find(delimiter, offset + 1)
        if position != -1:
            limit = min(limit, position)
    match = _IDENTIFIER_HINT.search(source, offset, limit)
    return match.group(1) if match is not None else None


def normalize(source_text: str, *, anchor: str = DEFAULT_ANCHOR) -> tuple[ToolDefinition, ...]:
    """Return the tools declared in ``source_text`` in source order.

    Skipped entries are dropped; use :class:`CatalogNormalizer` to inspect them.
    """

    return CatalogNormalizer(anchor=anchor).normalize(source_text).tools


__all__ = [
    "CHOICE_FIELDS",
    "CONDITION_FIELDS",
    "CONFIG_FIELDS",
    "DEFAULT_ANCHOR",
    "TOOL_FIELDS",
    "CatalogNormalizer",
    "NormalizationResult",
    "SkippedEntry",
    "normalize",
]
