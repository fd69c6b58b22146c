#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

from enum import Enum
from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DataFormat(str, Enum):
    JSON = 'JSON'
    CSV = 'CSV'
    TEXT = 'TEXT'

    @classmethod
    def _missing_(cls, value: object):
        # The web front end sends `TXT` and mixed case.
        if isinstance(value, str):
            normalized = value.strip().upper()
            if normalized == 'TXT':
                return cls.TEXT
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class SizeTier(str, Enum):
    SMALL = 'small'
    MEDIUM = 'medium'
    LARGE = 'large'


# One extracted chunk: records (JSON) or text (CSV / TEXT).
ChunkResult = Union[List[Any], str]


class GenerationRequest(BaseModel):
    """
    Immutable input of a single generation.
    NOTE: `size_tier` is a plain string on purpose: unknown tiers fall back to `small` in the planner.
    """

    prompt: str = Field(min_length=1)
    format: DataFormat = DataFormat.JSON
    size_tier: str = SizeTier.SMALL.value

    model_config = ConfigDict(frozen=True)

    @field_validator('size_tier', mode='before')
    @classmethod
    def _size_tier_to_str(cls, value: Any) -> str:
        if isinstance(value, SizeTier):
            return value.value
        return str(value)


class GenerationOutput(BaseModel):
    """
    Merged result of a generation, plus accounting metadata.
    """

    data: str
    format: DataFormat
    chunks_count: int
    total_records: int
    total_tokens: int = 0

    def get_metadata(self) -> dict:
        return {
            "chunks_count": self.chunks_count,
            "total_records": self.total_records,
        }
