#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import json

import pytest

from synth_agent.generate.GenerationError import MergeError
from synth_agent.generate.GenerationSchema import DataFormat
from synth_agent.generate.merge import count_records, merge_chunks, merge_csv, merge_json, merge_text


def test_merge_json_concatenates_records():
    merged = merge_json([[{"a": 1}], [{"b": 2}, {"c": 3}]])
    assert json.loads(merged) == [{"a": 1}, {"b": 2}, {"c": 3}]
    assert merged == json.dumps([{"a": 1}, {"b": 2}, {"c": 3}], indent=2)


def test_merge_json_recovers_text_chunks():
    merged = merge_json([[{"a": 1}], 'garbage {"b": 2} garbage'])
    assert json.loads(merged) == [{"a": 1}, {"b": 2}]


def test_merge_json_unserializable_raises():
    with pytest.raises(MergeError):
        merge_json([[{"a": object()}]])


def test_merge_csv_keeps_first_header_and_dedupes_lines():
    chunks = ["name,age\nBob,3\nAlice,4", "name,age\nAlice,4\nCarol,5"]
    assert merge_csv(chunks) == "name,age\nBob,3\nAlice,4\nCarol,5"


def test_merge_csv_no_chunks_raises():
    with pytest.raises(MergeError):
        merge_csv([])


def test_merge_text():
    assert merge_text(["First.", "Second."]) == "First.\n\nSecond."


def test_merge_chunks_never_raises():
    """
    Merge failures degrade to a best-effort output.
    """
    merged = merge_chunks([[{"a": object()}]], DataFormat.JSON)
    data = json.loads(merged)
    assert len(data) == 1
    assert "object" in data[0]["a"]

    assert merge_chunks([], DataFormat.CSV) == ""


def test_merge_chunks_dispatch():
    assert merge_chunks(["a,b\n1,2"], DataFormat.CSV) == "a,b\n1,2"
    assert merge_chunks(["x", "y"], DataFormat.TEXT) == "x\n\ny"


def test_count_records():
    assert count_records('[{"a": 1}, {"a": 2}]', DataFormat.JSON) == 2
    assert count_records('{"a": 1}', DataFormat.JSON) == 1
    assert count_records("a,b\n1,2\n\n3,4\n", DataFormat.CSV) == 2
    assert count_records("Some text.", DataFormat.TEXT) == 1
