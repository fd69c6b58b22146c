#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import pytest

from synth_agent.generate.GenerationSchema import DataFormat
from synth_agent.generate.similarity import (
    edit_distance,
    is_similar_record,
    record_similarity,
    remove_similarities,
    remove_similarities_csv,
    remove_similarities_json,
    remove_similarities_text,
    string_similarity,
)


def test_record_similarity_ratio():
    assert record_similarity({"a": 1, "b": 2}, {"a": 1, "b": 3}) == pytest.approx(0.5)
    assert record_similarity({"a": 1, "b": 2, "c": 3}, {"a": 1, "b": 2, "c": 4}) == pytest.approx(2 / 3)


def test_record_similarity_uses_larger_key_count():
    """
    A small record is not similar to a larger record it is contained in.
    """
    assert record_similarity({"a": 1}, {"a": 1, "b": 2, "c": 3}) == pytest.approx(1 / 3)


def test_record_similarity_is_type_strict():
    assert record_similarity({"a": 1}, {"a": True}) == 0.0
    assert record_similarity({"a": True}, {"a": 1.0}) == 0.0
    assert record_similarity({"a": 1}, {"a": "1"}) == 0.0
    assert record_similarity({"a": False}, {"a": False}) == 1.0


def test_record_similarity_numbers_compare_by_value():
    """
    JSON has a single number type: `1` and `1.0` are the same value.
    """
    assert record_similarity({"a": 1, "b": 2}, {"a": 1.0, "b": 2.0}) == 1.0
    assert remove_similarities_json([{"a": 1, "b": 2}], [[{"a": 1.0, "b": 2.0}]]) == []


def test_record_similarity_empty_records():
    assert record_similarity({}, {}) == 0.0
    assert not is_similar_record({}, {})


def test_is_similar_record_threshold():
    assert not is_similar_record({"a": 1, "b": 2}, {"a": 1, "b": 3})
    assert is_similar_record({"a": 1, "b": 2, "c": 3}, {"a": 1, "b": 2, "c": 4})
    assert is_similar_record({"a": 1}, {"a": 1})


def test_is_similar_record_non_objects():
    assert is_similar_record(1, 1)
    assert not is_similar_record(1, 2)
    assert not is_similar_record({"a": 1}, [1])


def test_edit_distance():
    assert edit_distance("kitten", "sitting") == 3
    assert edit_distance("", "abc") == 3
    assert edit_distance("ABC", "abc") == 0


def test_string_similarity():
    assert string_similarity("kitten", "sitting") == pytest.approx(4 / 7)
    assert string_similarity("", "") == 1.0
    assert string_similarity("abc", "xyz") == 0.0


def test_remove_similarities_json_drops_similar_records():
    previous = [[{"name": "Alice", "age": 30, "city": "Paris"}]]
    new = [
        {"name": "Alice", "age": 30, "city": "Rome"},
        {"name": "Bob", "age": 41, "city": "Oslo"},
    ]
    assert remove_similarities_json(new, previous) == [{"name": "Bob", "age": 41, "city": "Oslo"}]


def test_remove_similarities_json_accepts_text_and_single_record():
    previous = ['[{"a": 1}]']
    assert remove_similarities_json({"a": 1}, previous) == []
    assert remove_similarities_json('[{"a": 2}]', previous) == [{"a": 2}]


def test_remove_similarities_csv_keeps_header():
    previous = ["name,age\nBob,3"]
    assert remove_similarities_csv("name,age\nBob,3\nAlice,4", previous) == "name,age\nAlice,4"


def test_remove_similarities_text():
    previous = ["The cat sat on a mat"]
    new = "The cat sat on the mat. Dogs bark loudly"
    assert remove_similarities_text(new, previous) == "Dogs bark loudly"


def test_remove_similarities_returns_chunk_unfiltered_on_error():
    """
    A comparison failure keeps the new chunk as it is.
    """
    assert remove_similarities("not json", [[{"a": 1}]], DataFormat.JSON) == "not json"


def test_remove_similarities_dispatch():
    assert remove_similarities([{"a": 1}, {"a": 2}], [[{"a": 1}]], DataFormat.JSON) == [{"a": 2}]
    assert remove_similarities("h\n1\n2", ["h\n1"], DataFormat.CSV) == "h\n2"
