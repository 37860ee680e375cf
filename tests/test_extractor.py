# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for anchored field extraction."""

from __future__ import annotations

import pytest

from tooldocs.errors import NormalizationError
from tooldocs.extractor import FieldKind, extract_fields, unescape
from tooldocs.scanner import SourceSpan, span_at

KINDS = {
    "value": FieldKind.STRING,
    "key": FieldKind.STRING,
    "label": FieldKind.STRING,
    "required": FieldKind.BOOLEAN,
    "config": FieldKind.ARRAY,
    "condition": FieldKind.OBJECT,
}


def _span(text: str) -> SourceSpan:
    return span_at(text, text.index("{"))


def test_extracts_strings_booleans_and_nested_literals() -> None:
    span = _span('{ value: "HTTP", required: true, config: [1, 2], condition: { field: "a" } }')
    fields = extract_fields(span, KINDS)
    assert fields.require("value") == "HTTP"
    assert fields.flag("required") is True
    config = fields.nested("config")
    assert config is not None and config.text == "[1, 2]"
    condition = fields.nested("condition")
    assert condition is not None and condition.text == '{ field: "a" }'


def test_nested_keys_do_not_shadow_outer_fields() -> None:
    span = _span('{ config: [{ value: "inner" }], value: "outer" }')
    assert extract_fields(span, KINDS).require("value") == "outer"


def test_first_top_level_occurrence_wins() -> None:
    span = _span('{ value: "first", value: "second" }')
    assert extract_fields(span, KINDS).require("value") == "first"


def test_key_text_inside_strings_is_not_a_field() -> None:
    span = _span('{ label: "key: nope", key: "real" }')
    fields = extract_fields(span, KINDS)
    assert fields.require("key") == "real"
    assert fields.require("label") == "key: nope"


def test_quoted_keys_and_quote_styles() -> None:
    span = _span("{ \"key\": 'single', 'label': `template` }")
    fields = extract_fields(span, KINDS)
    assert fields.require("key") == "single"
    assert fields.require("label") == "template"


def test_escaped_quotes_are_unescaped() -> None:
    span = _span(r'{ label: "Say \"hi\" \\ done" }')
    assert extract_fields(span, KINDS).require("label") == 'Say "hi" \\ done'


def test_unescape_translates_common_sequences() -> None:
    assert unescape(r"a\nb\tc\'d") == "a\nb\tc'd"


def test_value_of_wrong_kind_is_absent() -> None:
    span = _span('{ required: "yes", config: "none" }')
    fields = extract_fields(span, KINDS)
    assert fields.flag("required") is False
    assert fields.flag("required", default=True) is True
    assert fields.nested("config") is None


def test_scalar_fields_accept_bare_literals() -> None:
    span = _span("{ value: 10, label: 'Ten' }")
    fields = extract_fields(span, {"value": FieldKind.SCALAR, "label": FieldKind.STRING})
    assert fields.require("value") == "10"


def test_unknown_fields_are_ignored() -> None:
    span = _span('{ tooltip: "x", value: "A" }')
    fields = extract_fields(span, KINDS)
    assert "tooltip" not in fields.values
    assert fields.optional("label") is None


def test_require_names_field_and_location() -> None:
    text = 'const a = 1;\nconst b = { label: "" };'
    span = _span(text)
    fields = extract_fields(span, KINDS, context="tool")
    with pytest.raises(NormalizationError) as excinfo:
        fields.require("label")
    assert excinfo.value.field == "label"
    assert excinfo.value.offset == span.start
    assert "tool (line 2) is missing mandatory field 'label'" in str(excinfo.value)
