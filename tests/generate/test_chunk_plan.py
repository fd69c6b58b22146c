#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import pytest

from synth_agent.generate.GenerationSchema import SizeTier
from synth_agent.generate.chunk_plan import ChunkPlan, get_temperature, plan_chunks


def test_plan_chunks_known_tiers():
    assert plan_chunks("small") == ChunkPlan(chunks=1, tokens_per_chunk=1024)
    assert plan_chunks("medium") == ChunkPlan(chunks=3, tokens_per_chunk=1024)
    assert plan_chunks("large") == ChunkPlan(chunks=8, tokens_per_chunk=1024)


def test_plan_chunks_accepts_enum():
    assert plan_chunks(SizeTier.MEDIUM).chunks == 3


def test_plan_chunks_unknown_tier_falls_back_to_small():
    """
    Unknown tiers are not an error: they resolve to the `small` plan.
    """
    assert plan_chunks("huge") == plan_chunks("small")
    assert plan_chunks("") == plan_chunks("small")
    assert plan_chunks("Medium") == plan_chunks("small")


def test_temperature_single_chunk():
    assert get_temperature(0, 1) == pytest.approx(0.3)


def test_temperature_three_chunks():
    assert get_temperature(0, 3) == pytest.approx(0.3)
    assert get_temperature(1, 3) == pytest.approx(0.6)
    assert get_temperature(2, 3) == pytest.approx(0.9)


def test_temperature_is_monotonic_and_bounded():
    temperatures = [get_temperature(i, 8) for i in range(8)]
    assert temperatures == sorted(temperatures)
    assert temperatures[0] == pytest.approx(0.3)
    assert temperatures[-1] == pytest.approx(0.9)
    assert all(0.3 <= t <= 0.9 + 1e-9 for t in temperatures)
