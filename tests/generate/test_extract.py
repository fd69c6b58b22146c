#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import json

import pytest

from synth_agent.generate.GenerationError import ExtractionError
from synth_agent.generate.GenerationSchema import DataFormat
from synth_agent.generate.extract import (
    extract_csv,
    extract_data,
    extract_json,
    extract_partial_json,
    extract_text,
    find_first_json_value,
    repair_json,
)


class TestExtractJson:
    """Test suite for JSON extraction from raw model output."""

    def test_plain_array(self):
        """Test a clean JSON array is returned as-is."""
        assert extract_json('[{"a": 1}, {"a": 2}]') == [{"a": 1}, {"a": 2}]

    def test_single_object(self):
        """Test a single object is returned as a dict."""
        assert extract_json('{"name": "Bob"}') == {"name": "Bob"}

    def test_fenced_json_with_prose(self):
        """Test a ```json fenced block surrounded by prose."""
        content = 'Here is your data:\n```json\n[{"a": 1}]\n```\nHope this helps!'
        assert extract_json(content) == [{"a": 1}]

    def test_bare_fence(self):
        """Test a fence without language tag."""
        content = '```\n[{"a": 1}]\n```'
        assert extract_json(content) == [{"a": 1}]

    def test_embedded_array_without_fence(self):
        """Test the first balanced array is found inside prose."""
        content = 'Sure! [{"text": "a ] in a string"}] That is all.'
        assert extract_json(content) == [{"text": "a ] in a string"}]

    def test_trailing_commas_are_repaired(self):
        """Test trailing commas before closing brackets are removed."""
        assert extract_json('[{"a": 1,}, {"a": 2},]') == [{"a": 1}, {"a": 2}]

    def test_bare_keys_and_single_quotes_are_repaired(self):
        """Test unquoted keys and single-quoted strings are fixed."""
        assert extract_json("{name: 'Bob', age: 3}") == {"name": "Bob", "age": 3}

    def test_truncated_output_recovers_fragments(self):
        """Test complete objects are recovered from truncated output."""
        content = '[{"a": 1}, {"b": 2}, {"c": '
        assert extract_json(content) == [{"a": 1}, {"b": 2}]

    def test_no_json_raises(self):
        """Test prose without any JSON fails extraction."""
        with pytest.raises(ExtractionError):
            extract_json("Sorry, I cannot help with that.")

    def test_scalar_raises(self):
        """Test a bare scalar is not valid data."""
        with pytest.raises(ExtractionError):
            extract_json("42")

    def test_empty_array_raises(self):
        """Test an empty array is not valid data."""
        with pytest.raises(ExtractionError):
            extract_json("[]")

    def test_inline_bracket_in_prose_is_not_data(self):
        """Test a bracket quoted in prose does not hide records of truncated output."""
        content = 'Here are [2] users: [{"id": 1}, {"id": 2}'
        assert extract_json(content) == [{"id": 1}, {"id": 2}]

    def test_scalar_list_is_kept_without_records(self):
        """Test a list of scalars is still accepted when there are no objects to recover."""
        assert extract_json("Numbers: [1, 2, 3]. Done.") == [1, 2, 3]

    def test_unquoted_object_with_trailing_comma(self):
        """Test bare keys, single quotes, and a trailing comma together."""
        assert extract_json("{name: 'a', age: 5,}") == {"name": "a", "age": 5}

    def test_serialized_records_round_trip(self):
        """Test well-formed JSON comes back unchanged."""
        records = [
            {"id": 1, "name": "Zoë", "tags": ["a", "b"], "active": True, "score": 9.5, "note": None},
            {"id": 2, "name": "Bob", "nested": {"city": "Oslo", "zip": "0150"}},
        ]
        assert extract_json(json.dumps(records)) == records
        assert extract_json(json.dumps(records, indent=2, ensure_ascii=False)) == records
        assert extract_json(json.dumps(records[1])) == records[1]


def test_extract_partial_json_prefers_objects():
    content = 'junk {"a": 1} more junk [1, 2] {"b": 2}'
    assert extract_partial_json(content) == [{"a": 1}, {"b": 2}]


def test_extract_partial_json_flattens_arrays():
    assert extract_partial_json("x [1, 2] y [3]") == [1, 2, 3]


def test_extract_partial_json_nothing():
    assert extract_partial_json("nothing here") == []


def test_find_first_json_value():
    assert find_first_json_value('abc {"x": [1, 2]} def') == '{"x": [1, 2]}'
    assert find_first_json_value("no brackets") is None
    assert find_first_json_value('[{"open": 1}') is None


def test_repair_json():
    assert repair_json('{a: 1, b: [1, 2,],}') == '{"a": 1, "b": [1, 2]}'


class TestExtractCsv:
    """Test suite for CSV extraction from raw model output."""

    def test_fenced_csv(self):
        """Test a ```csv fenced block is extracted."""
        content = "Here you go:\n```csv\nname,age\nBob,3\n```\nEnjoy."
        assert extract_csv(content) == "name,age\nBob,3"

    def test_unfenced_csv(self):
        """Test plain CSV text is trimmed and returned."""
        assert extract_csv("name,age\nBob,3\nAlice,4\n") == "name,age\nBob,3\nAlice,4"

    def test_crlf_is_normalized(self):
        """Test Windows line endings are normalized."""
        assert extract_csv("name,age\r\nBob,3\r\n") == "name,age\nBob,3"

    def test_no_comma_raises(self):
        """Test text without any comma fails extraction."""
        with pytest.raises(ExtractionError):
            extract_csv("name age\nBob 3")

    def test_single_line_raises(self):
        """Test a single line (header only) fails extraction."""
        with pytest.raises(ExtractionError):
            extract_csv("name,age")


def test_extract_text():
    assert extract_text("  Hello world.  \n") == "Hello world."


def test_extract_text_blank_raises():
    with pytest.raises(ExtractionError):
        extract_text(" \n\t ")


def test_extract_data_dispatch():
    assert extract_data('[{"a": 1}]', DataFormat.JSON) == [{"a": 1}]
    assert extract_data("a,b\n1,2", DataFormat.CSV) == "a,b\n1,2"
    assert extract_data(" text ", DataFormat.TEXT) == "text"
