# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Anchored extraction of leaf fields from a single object literal."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final, TypeAlias

from .errors import NormalizationError
from .scanner import QUOTES, SourceSpan, span_at, top_level_positions


class FieldKind(str, Enum):
    """Enumerate the literal kinds a recognised field may hold."""

    STRING = "string"
    BOOLEAN = "boolean"
    SCALAR = "scalar"
    ARRAY = "array"
    OBJECT = "object"


FieldValue: TypeAlias = str | bool | SourceSpan

_KEY: Final[re.Pattern[str]] = re.compile(r"""(?<![\w$])(?P<quote>["']?)(?P<name>[A-Za-z_$][\w$]*)(?P=quote)\s*:""")
_STRING_LITERALS: Final[dict[str, re.Pattern[str]]] = {
    '"': re.compile(r'"((?:[^"\\\n]|\\.)*)"', re.DOTALL),
    "'": re.compile(r"'((?:[^'\\\n]|\\.)*)'", re.DOTALL),
    "`": re.compile(r"`((?:[^`\\]|\\.)*)`", re.DOTALL),
}
_BOOLEAN: Final[re.Pattern[str]] = re.compile(r"(true|false)(?![\w$])")
_BARE_SCALAR: Final[re.Pattern[str]] = re.compile(r"[\w$.+-]+")
_ESCAPE: Final[re.Pattern[str]] = re.compile(r"\\(.)", re.DOTALL)
_ESCAPE_TABLE: Final[dict[str, str]] = {"n": "\n", "t": "\t", "r": "\r"}
_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s*")


def unescape(raw: str) -> str:
    """Return ``raw`` with backslash escapes replaced by the characters they denote.

    Args:
        raw: String literal contents without the surrounding quotes.

    Returns:
        str: Literal text, with escaped quotes and backslashes resolved.
    """

    return _ESCAPE.sub(_replace_escape, raw)


def _replace_escape(match: re.Match[str]) -> str:
    char = match.group(1)
    return _ESCAPE_TABLE.get(char, char)


@dataclass(frozen=True, slots=True)
class ExtractedFields:
    """Recognised field values pulled from one object literal."""

    span: SourceSpan
    values: Mapping[str, FieldValue]
    context: str

    def require(self, name: str) -> str:
        """Return the non-empty string stored under ``name``.

        Args:
            name: Field name declared as mandatory by the data model.

        Returns:
            str: Extracted string value.

        Raises:
            NormalizationError: If the field is absent, empty or not a string.
        """

        value = self.values.get(name)
        if not isinstance(value, str) or not value:
            raise NormalizationError(
                f"{self.context} (line {self.span.line}) is missing mandatory field '{name}'",
                offset=self.span.start,
                field=name,
            )
        return value

    def optional(self, name: str) -> str | None:
        """Return the string stored under ``name`` or ``None`` when absent."""

        value = self.values.get(name)
        return value if isinstance(value, str) else None

    def flag(self, name: str, *, default: bool = False) -> bool:
        """Return the boolean stored under ``name`` or ``default``."""

        value = self.values.get(name)
        return value if isinstance(value, bool) else default

    def nested(self, name: str) -> SourceSpan | None:
        """Return the nested literal span stored under ``name``, if any."""

        value = self.values.get(name)
        return value if isinstance(value, SourceSpan) else None


def extract_fields(
    span: SourceSpan,
    kinds: Mapping[str, FieldKind],
    *,
    context: str = "object",
) -> ExtractedFields:
    """Extract the first top-level occurrence of each recognised field.

    Keys nested in inner objects or arrays and text inside string literals are
    never matched, so a choice's ``value`` cannot shadow its tool's ``value``.
    A field whose value does not have the expected kind is reported absent.

    Args:
        span: Object literal to inspect.
        kinds: Recognised field names mapped to their expected literal kinds.
        context: Human-readable description used in error messages.

    Returns:
        ExtractedFields: Values keyed by field name.

    Raises:
        StructuralScanError: If a nested array or object value is unbalanced.
    """

    source = span.source
    positions = top_level_positions(span)
    values: dict[str, FieldValue] = {}
    seen: set[str] = set()
    for match in _KEY.finditer(source, span.body_start, span.body_end):
        if match.start() not in positions:
            continue
        name = match.group("name")
        if name in seen or name not in kinds:
            continue
        seen.add(name)
        value_start = _WHITESPACE.match(source, match.end(), span.body_end).end()
        value = _read_value(span, value_start, kinds[name])
        if value is not None:
            values[name] = value
    return ExtractedFields(span=span, values=values, context=context)


def _read_value(span: SourceSpan, index: int, kind: FieldKind) -> FieldValue | None:
    """Return the literal of ``kind`` starting at ``index`` or ``None``."""

    source = span.source
    limit = span.body_end
    char = source[index : index + 1]
    if kind in {FieldKind.STRING, FieldKind.SCALAR} and char in QUOTES:
        literal = _STRING_LITERALS[char].match(source, index, limit)
        return unescape(literal.group(1)) if literal is not None else None
    if kind is FieldKind.BOOLEAN:
        boolean = _BOOLEAN.match(source, index, limit)
        return boolean.group(1) == "true" if boolean is not None else None
    if kind is FieldKind.SCALAR:
        bare = _BARE_SCALAR.match(source, index, limit)
        return bare.group(0) if bare is not None else None
    if kind is FieldKind.ARRAY and char == "[":
        return span_at(source, index)
    if kind is FieldKind.OBJECT and char == "{":
        return span_at(source, index)
    return None


__all__ = [
    "ExtractedFields",
    "FieldKind",
    "FieldValue",
    "extract_fields",
    "unescape",
]
