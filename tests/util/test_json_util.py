#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import pytest

from synth_agent.util.json_util import generate_json_filename, read_json, write_json_exclusive


def test_generate_json_filename():
    assert generate_json_filename("user profiles") == "user_profiles"
    assert generate_json_filename('a/b:c*d?  e') == "a_b_c_d__e"
    assert generate_json_filename("x" * 100, max_length=10) == "x" * 10
    assert generate_json_filename("   ") == "generation"


def test_write_json_exclusive(tmp_path):
    json_filename = tmp_path / "nested" / "record.json"

    write_json_exclusive(json_filename, {"id": "record", "text": "Grüße"})

    assert read_json(json_filename) == {"id": "record", "text": "Grüße"}

    with pytest.raises(FileExistsError):
        write_json_exclusive(json_filename, {"id": "other"})

    assert read_json(json_filename)["id"] == "record"
