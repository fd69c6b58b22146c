#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import logging
from dataclasses import dataclass
from typing import Dict

from synth_agent.generate.GenerationSchema import SizeTier

logger = logging.getLogger(__name__)


TEMPERATURE_MIN = 0.3
TEMPERATURE_SPAN = 0.6


@dataclass(frozen=True)
class ChunkPlan:
    """
    Chunk plan.
    """

    chunks: int

    tokens_per_chunk: int


CHUNK_PLANS: Dict[str, ChunkPlan] = {
    SizeTier.SMALL.value: ChunkPlan(chunks=1, tokens_per_chunk=1024),
    SizeTier.MEDIUM.value: ChunkPlan(chunks=3, tokens_per_chunk=1024),
    SizeTier.LARGE.value: ChunkPlan(chunks=8, tokens_per_chunk=1024),
}


def plan_chunks(size_tier: str | SizeTier) -> ChunkPlan:
    """
    Get chunk plan for size tier.
    NOTE: Unknown size tiers resolve to `small`.
    :param size_tier: Size tier.
    :return: Chunk plan.
    """
    key = size_tier.value if isinstance(size_tier, SizeTier) else str(size_tier)

    if key not in CHUNK_PLANS:
        logger.warning(f"Unknown size tier '{key}', using '{SizeTier.SMALL.value}'")
        return CHUNK_PLANS[SizeTier.SMALL.value]

    return CHUNK_PLANS[key]


def get_temperature(chunk_index: int, chunks_total: int) -> float:
    """
    Get sampling temperature for chunk, rising linearly so later chunks are more exploratory.
    :param chunk_index: Chunk index (0-based).
    :param chunks_total: Total number of chunks.
    :return: Temperature.
    """
    if chunks_total <= 1:
        return TEMPERATURE_MIN

    return TEMPERATURE_MIN + TEMPERATURE_SPAN * (chunk_index / (chunks_total - 1))
