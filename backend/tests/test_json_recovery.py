"""Tests for recovering JSON from model output."""

import pytest

from services.json_recovery import (
    ParseError,
    close_unclosed_brackets,
    extract_json_text,
    normalize_quotes,
    parse_model_json,
    remove_comments,
    remove_trailing_commas,
    repair_json,
    string_mask,
)


class TestExtraction:
    def test_fenced_block(self):
        raw = 'Here you go:\n```json\n{"score": 80}\n```'
        assert extract_json_text(raw) == '{"score": 80}'

    def test_first_object_fence_when_last_is_not_json(self):
        raw = '```json\n{"a": 1}\n```\nand also\n```\nplain text\n```'
        assert extract_json_text(raw) == '{"a": 1}'

    def test_object_inside_prose(self):
        raw = 'Sure! {"a": {"b": 2}} Hope this helps.'
        assert extract_json_text(raw) == '{"a": {"b": 2}}'

    def test_braces_inside_strings_do_not_end_object(self):
        raw = 'Result: {"a": "}{"} trailing'
        assert extract_json_text(raw) == '{"a": "}{"}'

    def test_byte_order_mark_stripped(self):
        assert parse_model_json("\ufeff{\"a\": 1}") == {"a": 1}


class TestRepairSteps:
    def test_comments_removed_outside_strings(self):
        text = '{"a": 1, // note\n "url": "http://x.io" /* block */}'
        assert parse_model_json(text) == {"a": 1, "url": "http://x.io"}
        assert "http://x.io" in remove_comments(text)

    def test_unquoted_keys(self):
        assert parse_model_json('{name: "Ann", years: 3}') == {"name": "Ann", "years": 3}

    def test_single_quotes_with_embedded_double_quote(self):
        assert normalize_quotes("{'a': 'say \"hi\"'}") == '{"a": "say \\"hi\\""}'
        assert parse_model_json("{'a': 'say \"hi\"'}") == {"a": 'say "hi"'}

    def test_apostrophe_inside_double_quoted_string(self):
        assert parse_model_json('{"a": "it\'s fine", b: 1}') == {"a": "it's fine", "b": 1}

    def test_trailing_commas_outside_strings_only(self):
        text = '{"a": [1, 2,], "b": "x,]",}'
        assert remove_trailing_commas(text) == '{"a": [1, 2], "b": "x,]"}'

    def test_raw_newlines_inside_strings(self):
        assert parse_model_json('{"a": "line1\nline2"}') == {"a": "line1\nline2"}

    def test_string_mask_marks_delimiters(self):
        assert string_mask('a"b"c') == [False, True, True, True, False]


class TestTruncation:
    def test_unclosed_array_and_object(self):
        assert parse_model_json('{"a": [1, 2') == {"a": [1, 2]}

    def test_unterminated_string(self):
        assert parse_model_json('{"a": "hel') == {"a": "hel"}

    def test_dangling_key(self):
        assert close_unclosed_brackets('{"a": 1, "b":') == '{"a": 1, "b": null}'

    def test_dangling_comma(self):
        assert parse_model_json('{"items": [{"x": 1},') == {"items": [{"x": 1}]}


class TestParseModelJson:
    def test_valid_json_unchanged_by_repair(self):
        text = '{"a": [1, 2], "b": {"c": "d"}}'
        assert repair_json(text) == text

    def test_top_level_array(self):
        assert parse_model_json("[1, 2]") == [1, 2]

    def test_failure_carries_raw_and_repaired(self):
        with pytest.raises(ParseError) as exc_info:
            parse_model_json("no json here at all")
        assert exc_info.value.raw == "no json here at all"
        assert exc_info.value.repaired == "no json here at all"
        assert isinstance(exc_info.value, ValueError)
