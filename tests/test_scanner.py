# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for balanced-delimiter scanning."""

from __future__ import annotations

import pytest

from tooldocs.errors import StructuralScanError
from tooldocs.scanner import (
    find_catalog_array,
    find_closing,
    iter_code_positions,
    line_of,
    scan_array,
    span_at,
    top_level_positions,
)


def test_find_closing_matches_nested_delimiters() -> None:
    text = "{ a: { b: [1, { c: 2 }] }, d: 3 }"
    assert find_closing(text, 1) == len(text) - 1


@pytest.mark.parametrize(
    ("noisy", "plain"),
    [
        ('{ a: "x{y]z", b: [1] }', '{ a: "xyz", b: [1] }'),
        ("{ a: 'it\\'s }', b: 2 }", "{ a: 'its', b: 2 }"),
        ("{ a: `tpl ${x} ]`, b: 2 }", "{ a: `tpl`, b: 2 }"),
        ('{ a: "say \\"}\\"" }', '{ a: "say" }'),
    ],
)
def test_delimiters_inside_strings_do_not_move_the_closer(noisy: str, plain: str) -> None:
    assert find_closing(noisy, 1) == len(noisy) - 1
    assert find_closing(plain, 1) == len(plain) - 1


def test_comments_are_ignored() -> None:
    text = "{ // stray }\n  a: 1, /* ] } */ b: 2\n}"
    assert find_closing(text, 1) == len(text) - 1


def test_mismatched_closer_reports_the_opening_offset() -> None:
    text = "const x = { a: [1, 2 }"
    opener = text.index("{")
    with pytest.raises(StructuralScanError) as excinfo:
        find_closing(text, opener + 1)
    assert excinfo.value.offset == opener
    assert "expected ']'" in str(excinfo.value)


def test_unterminated_literal_reports_the_opening_offset() -> None:
    with pytest.raises(StructuralScanError) as excinfo:
        find_closing("{ a: 1", 1)
    assert excinfo.value.offset == 0


def test_find_closing_rejects_unknown_opener() -> None:
    with pytest.raises(ValueError):
        find_closing("(a)", 1, opener="(")


def test_span_at_covers_the_whole_literal() -> None:
    text = "x = [1, [2, 3]];"
    span = span_at(text, text.index("["))
    assert span.text == "[1, [2, 3]]"
    assert span.line == 1


def test_iter_code_positions_skips_string_contents() -> None:
    text = 'a"bc"d'
    assert [text[index] for index in iter_code_positions(text, 0)] == ["a", '"', "d"]


def test_line_of_is_one_based() -> None:
    assert line_of("a\nb\nc", 0) == 1
    assert line_of("a\nb\nc", 4) == 3


def test_find_catalog_array_property_form(site_config: str) -> None:
    index = find_catalog_array(site_config, "toolTypes")
    assert index is not None
    assert site_config[index] == "["
    assert site_config[:index].rstrip().endswith("toolTypes:")


def test_find_catalog_array_declaration_form() -> None:
    text = 'export const toolTypes: ToolType[] = [{ value: "A" }];'
    index = find_catalog_array(text, "toolTypes")
    assert index == text.index("[{")


def test_find_catalog_array_quoted_key() -> None:
    text = '{ "toolTypes": [] }'
    assert find_catalog_array(text, "toolTypes") == text.index("[")


def test_find_catalog_array_ignores_comments_and_strings() -> None:
    text = '// toolTypes: [\nconst label = "toolTypes are listed here";\n'
    assert find_catalog_array(text, "toolTypes") is None


def test_find_catalog_array_missing_anchor() -> None:
    assert find_catalog_array("export const siteConfig = {};", "toolTypes") is None


def test_find_catalog_array_malformed_anchor() -> None:
    text = "const toolTypes = loadTools();"
    with pytest.raises(StructuralScanError) as excinfo:
        find_catalog_array(text, "toolTypes")
    assert excinfo.value.offset == text.index("toolTypes")


def test_find_catalog_array_requires_whole_token() -> None:
    text = "const my_toolTypes = 1;\nconst toolTypes = [];"
    assert find_catalog_array(text, "toolTypes") == text.rindex("[")


def test_scan_array_lists_top_level_objects_in_order(site_config: str) -> None:
    open_index = find_catalog_array(site_config, "toolTypes")
    assert open_index is not None
    scan = scan_array(site_config, open_index)
    assert scan.failures == ()
    assert len(scan.objects) == 2
    assert 'value: "HTTP"' in scan.objects[0].text
    assert 'value: "CODE_EXECUTOR"' in scan.objects[1].text
    assert scan.end is not None and site_config[scan.end] == "]"


def test_scan_array_resyncs_after_an_unbalanced_entry(broken_site_config: str) -> None:
    open_index = find_catalog_array(broken_site_config, "toolTypes")
    assert open_index is not None
    scan = scan_array(broken_site_config, open_index)
    assert [span.text.split('"')[1] for span in scan.objects] == ["HTTP", "BROWSER"]
    assert len(scan.failures) == 1
    broken_offset = broken_site_config.index('value: "BROKEN"')
    failure = scan.failures[0]
    assert failure.offset < broken_offset
    assert broken_site_config[failure.offset] == "{"


def test_scan_array_without_closer_reports_failure() -> None:
    text = "[{ a: 1 }, { b: 2 }"
    scan = scan_array(text, 0)
    assert len(scan.objects) == 2
    assert scan.end is None
    assert scan.failures[0].offset == 0


def test_top_level_positions_exclude_nested_literals() -> None:
    text = '{ a: 1, b: { c: 2 }, "d": [3] }'
    span = span_at(text, 0)
    positions = top_level_positions(span)
    assert text.index("a") in positions
    assert text.index("b") in positions
    assert text.index("c") not in positions
    assert text.index("3") not in positions


def test_scan_array_steps_over_a_stray_closing_brace() -> None:
    text = (
        "const toolTypes = [\n"
        '  { value: "A" },\n'
        '  { value: "B" }},\n'
        '  { value: "C" },\n'
        '  { value: "D" },\n'
        "];\n"
    )
    scan = scan_array(text, text.index("["))
    assert [span.text.split('"')[1] for span in scan.objects] == ["A", "B", "C", "D"]
    assert len(scan.failures) == 1
    assert scan.failures[0].offset == text.index("}},") + 1
    assert scan.end == text.rindex("]")


def test_scan_array_resumes_after_mismatch_on_a_single_line() -> None:
    text = 'const toolTypes = [{ value: "A" }, { value: "B", config: [ }, { value: "C" }];'
    scan = scan_array(text, text.index("["))
    assert [span.text.split('"')[1] for span in scan.objects] == ["A", "C"]
    assert len(scan.failures) == 1
    assert scan.failures[0].offset == text.index('{ value: "B"')
    assert scan.end == text.rindex("]")


def test_mismatched_bracket_on_a_single_line_closes_the_array() -> None:
    text = 'const toolTypes = [{ value: "A" }, { value: "B" ];'
    scan = scan_array(text, text.index("["))
    assert [span.text.split('"')[1] for span in scan.objects] == ["A"]
    assert scan.failures[0].found_at == text.rindex("]")
    assert scan.end == text.rindex("]")
