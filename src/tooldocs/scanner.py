# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Balanced-delimiter scanning over catalog source text.

The scanner never parses the host language. It walks the text with a small
state machine that skips string literals and comments, keeping a stack of the
``{``/``[`` delimiters seen so far. Regular expressions are only used to find
the catalog anchor and to realign after an unbalanced entry.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Final

from .errors import StructuralScanError

CLOSER_FOR: Final[dict[str, str]] = {"{": "}", "[": "]"}
OPENER_FOR: Final[dict[str, str]] = {"}": "{", "]": "["}
QUOTES: Final[frozenset[str]] = frozenset({'"', "'", "`"})

_ASSIGNMENT: Final[re.Pattern[str]] = re.compile(r"\s*(?::\s*[^=\[\n;]*(?:\[\])*\s*=|[:=])\s*\[")
_LINE_START: Final[re.Pattern[str]] = re.compile(r"^([ \t]*)(\S)", re.MULTILINE)


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Half-open region ``[start, end)`` of the source covering one literal."""

    source: str = field(repr=False)
    start: int
    end: int

    @property
    def text(self) -> str:
        """Return the literal including its delimiters."""

        return self.source[self.start : self.end]

    @property
    def body_start(self) -> int:
        """Return the offset of the first character after the opener."""

        return self.start + 1

    @property
    def body_end(self) -> int:
        """Return the offset of the closing delimiter."""

        return self.end - 1

    @property
    def line(self) -> int:
        """Return the 1-based line number of the opening delimiter."""

        return line_of(self.source, self.start)


@dataclass(frozen=True, slots=True)
class ArrayScan:
    """Outcome of enumerating the object literals of one array."""

    objects: tuple[SourceSpan, ...]
    failures: tuple[StructuralScanError, ...]
    end: int | None


def line_of(text: str, offset: int) -> int:
    """Return the 1-based line number containing ``offset``."""

    return text.count("\n", 0, offset) + 1


def skip_string(text: str, index: int, limit: int | None = None) -> int:
    """Return the index just past the string literal opening at ``index``.

    Backslash escapes are honoured. Single and double quoted strings end at a
    newline when left unterminated, template literals only at their closing
    backtick.

    Args:
        text: Source text being scanned.
        index: Offset of the opening quote character.
        limit: Optional exclusive upper bound for the scan.

    Returns:
        int: Offset after the closing quote, or ``limit`` when none is found.
    """

    stop = len(text) if limit is None else limit
    quote = text[index]
    cursor = index + 1
    while cursor < stop:
        char = text[cursor]
        if char == "\\":
            cursor += 2
            continue
        if char == quote:
            return cursor + 1
        if char == "\n" and quote != "`":
            return cursor
        cursor += 1
    return stop


def iter_code_positions(text: str, start: int, end: int | None = None) -> Iterator[int]:
    """Yield offsets of characters that are not inside strings or comments.

    The opening quote of each string literal is yielded so callers can still
    see that a value starts there; its contents are skipped.

    Args:
        text: Source text being scanned.
        start: Offset where scanning begins.
        end: Optional exclusive upper bound.

    Yields:
        int: Offsets of structural characters in ascending order.
    """

    limit = len(text) if end is None else end
    index = start
    while index < limit:
        char = text[index]
        if char in QUOTES:
            yield index
            index = skip_string(text, index, limit)
            continue
        if char == "/" and index + 1 < limit:
            following = text[index + 1]
            if following == "/":
                newline = text.find("\n", index, limit)
                index = limit if newline == -1 else newline
                continue
            if following == "*":
                close = text.find("*/", index + 2, limit)
                index = limit if close == -1 else close + 2
                continue
        yield index
        index += 1


def find_closing(text: str, start: int, *, opener: str = "{") -> int:
    """Return the offset of the delimiter closing the literal opened before ``start``.

    Args:
        text: Source text being scanned.
        start: Offset immediately after the opening delimiter.
        opener: Opening delimiter, either ``{`` or ``[``.

    Returns:
        int: Offset of the matching closing delimiter.

    Raises:
        StructuralScanError: If a closer of the wrong kind appears or the text
            ends before the literal is closed.
        ValueError: If ``opener`` is not a supported delimiter.
    """

    if opener not in CLOSER_FOR:
        raise ValueError(f"unsupported opening delimiter '{opener}'")
    origin = start - 1
    stack = [opener]
    for index in iter_code_positions(text, start):
        char = text[index]
        if char in CLOSER_FOR:
            stack.append(char)
        elif char in OPENER_FOR:
            expected = CLOSER_FOR[stack[-1]]
            if char != expected:
                raise StructuralScanError(
                    origin,
                    f"expected '{expected}' but found '{char}' on line {line_of(text, index)}",
                    found_at=index,
                )
            stack.pop()
            if not stack:
                return index
    raise StructuralScanError(origin, f"no closing '{CLOSER_FOR[opener]}' before end of text")


def span_at(text: str, open_index: int) -> SourceSpan:
    """Return the span of the literal whose opener sits at ``open_index``.

    Raises:
        StructuralScanError: If the literal is unbalanced.
    """

    closing = find_closing(text, open_index + 1, opener=text[open_index])
    return SourceSpan(text, open_index, closing + 1)


def find_catalog_array(text: str, anchor: str) -> int | None:
    """Locate the opening bracket of the array assigned to ``anchor``.

    Both property (``anchor: [``) and declaration (``anchor: Type[] = [``)
    forms are recognised. Mentions inside strings or comments are ignored.

    Args:
        text: Full source text.
        anchor: Identifier naming the catalog array.

    Returns:
        int | None: Offset of the ``[`` opening the array, or ``None`` when the
        anchor never occurs in code.

    Raises:
        StructuralScanError: If the anchor occurs but no array literal follows it.
    """

    token = re.compile(rf"(?<![\w$]){re.escape(anchor)}(?![\w$])")
    candidates = list(token.finditer(text))
    if not candidates:
        return None
    code_positions = set(iter_code_positions(text, 0))
    first: int | None = None
    for match in candidates:
        start, end = match.start(), match.end()
        if start not in code_positions:
            quote = text[start - 1] if start else ""
            if quote not in QUOTES or start - 1 not in code_positions or text[end : end + 1] != quote:
                continue
            start, end = start - 1, end + 1
        if first is None:
            first = start
        assignment = _ASSIGNMENT.match(text, end)
        if assignment is not None:
            return assignment.end() - 1
    if first is None:
        return None
    raise StructuralScanError(first, f"anchor '{anchor}' is not followed by an array literal")


def scan_array(text: str, open_index: int) -> ArrayScan:
    """Enumerate the top-level object literals of the array opened at ``open_index``.

    An unbalanced object is recorded as a failure and the scan realigns on
    the next sibling (see :func:`_resync`), so one broken entry does not hide
    the entries after it. A stray ``}`` between entries is recorded and
    stepped over.

    Args:
        text: Full source text.
        open_index: Offset of the array's ``[``.

    Returns:
        ArrayScan: Object spans in source order plus any structural failures.
    """

    objects: list[SourceSpan] = []
    failures: list[StructuralScanError] = []
    cursor = open_index + 1
    while True:
        index = _next_significant(text, cursor)
        if index is None:
            failures.append(StructuralScanError(open_index, "no closing ']' before end of text"))
            return ArrayScan(tuple(objects), tuple(failures), None)
        char = text[index]
        if char == "]":
            return ArrayScan(tuple(objects), tuple(failures), index)
        if char == "}":
            failures.append(
                StructuralScanError(index, f"unexpected '}}' inside array on line {line_of(text, index)}"),
            )
            cursor = index + 1
            continue
        if char in QUOTES:
            cursor = skip_string(text, index)
            continue
        if char in CLOSER_FOR:
            try:
                span = span_at(text, index)
            except StructuralScanError as exc:
                failures.append(exc)
                resume = _resync(text, index, exc)
                if resume is None:
                    return ArrayScan(tuple(objects), tuple(failures), None)
                cursor = resume
                continue
            if char == "{":
                objects.append(span)
            cursor = span.end
            continue
        cursor = index + 1


def top_level_positions(span: SourceSpan) -> frozenset[int]:
    """Return code offsets sitting directly inside ``span`` (depth zero)."""

    positions: set[int] = set()
    depth = 0
    for index in iter_code_positions(span.source, span.body_start, span.body_end):
        char = span.source[index]
        if depth == 0:
            positions.add(index)
        if char in CLOSER_FOR:
            depth += 1
        elif char in OPENER_FOR:
            depth -= 1
    return frozenset(positions)


def _next_significant(text: str, cursor: int) -> int | None:
    for index in iter_code_positions(text, cursor):
        if not text[index].isspace():
            return index
    return None


def _resync(text: str, failed_at: int, error: StructuralScanError) -> int | None:
    """Return where scanning resumes after the unbalanced object at ``failed_at``.

    An object opening its own line resumes at the next line with the same
    indentation that opens a sibling or closes the array. Otherwise scanning
    resumes just past the mismatched closer, which most likely ended the
    broken object; a mismatched ``]`` is taken to close the array itself.
    """

    line_start = text.rfind("\n", 0, failed_at) + 1
    indent = text[line_start:failed_at]
    if not indent.strip():
        for match in _LINE_START.finditer(text, failed_at + 1):
            lead, char = match.group(1), match.group(2)
            if lead == indent and char in "{]":
                return match.start(2)
            if len(lead) < len(indent) and char == "]":
                return match.start(2)
    if error.found_at is None:
        return None
    return error.found_at if text[error.found_at] == "]" else error.found_at + 1


__all__ = [
    "ArrayScan",
    "SourceSpan",
    "find_catalog_array",
    "find_closing",
    "iter_code_positions",
    "line_of",
    "scan_array",
    "skip_string",
    "span_at",
    "top_level_positions",
]
