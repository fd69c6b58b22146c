#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import json
import logging
from typing import Any, List, Sequence

from synth_agent.generate.GenerationSchema import ChunkResult, DataFormat

logger = logging.getLogger(__name__)


SIMILARITY_THRESHOLD = 0.6

SENTENCE_SEPARATOR = ". "


def _strict_equal(a: Any, b: Any) -> bool:
    """
    Strict equality on JSON values: numbers compare by value (`1` matches `1.0`),
    but values of different JSON types never match (e.g., `1` vs. `True` vs. `"1"`).
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if type(a) is not type(b):
        return False
    return a == b


def record_similarity(new_record: Any, prev_record: Any) -> float:
    """
    Field-overlap ratio between two records.
    Counts keys of the new record whose value equals the previous record's value,
    divided by the larger of the two key counts.
    Non-object records compare by strict equality (1.0 or 0.0).
    :param new_record: Record from the new chunk.
    :param prev_record: Record from a previous chunk.
    :return: Similarity ratio (0.0 for two empty records).
    """
    if not isinstance(new_record, dict) or not isinstance(prev_record, dict):
        return 1.0 if _strict_equal(new_record, prev_record) else 0.0

    denominator = max(len(new_record), len(prev_record))
    if denominator == 0:
        return 0.0

    matches = sum(
        1 for key, value in new_record.items()
        if key in prev_record and _strict_equal(value, prev_record[key])
    )
    return matches / denominator


def is_similar_record(new_record: Any, prev_record: Any) -> bool:
    if not isinstance(new_record, dict) or not isinstance(prev_record, dict):
        return _strict_equal(new_record, prev_record)
    return record_similarity(new_record, prev_record) > SIMILARITY_THRESHOLD


def edit_distance(s1: str, s2: str) -> int:
    """
    Case-insensitive Levenshtein distance (single-row dynamic programming).
    :param s1: First string.
    :param s2: Second string.
    :return: Edit distance.
    """
    s1 = s1.lower()
    s2 = s2.lower()

    costs = list(range(len(s2) + 1))
    for i in range(1, len(s1) + 1):
        last_value = i - 1
        costs[0] = i
        for j in range(1, len(s2) + 1):
            current = costs[j]
            if s1[i - 1] == s2[j - 1]:
                costs[j] = last_value
            else:
                costs[j] = min(last_value, costs[j - 1], current) + 1
            last_value = current
    return costs[len(s2)]


def string_similarity(s1: str, s2: str) -> float:
    """
    Normalized edit-distance similarity: `(max_len - edit_distance) / max_len`.
    :param s1: First string.
    :param s2: Second string.
    :return: Similarity in [0, 1]; 1.0 for two empty strings.
    """
    longer_length = max(len(s1), len(s2))
    if longer_length == 0:
        return 1.0
    return (longer_length - edit_distance(s1, s2)) / float(longer_length)


def _to_records(chunk: Any) -> List[Any]:
    if isinstance(chunk, str):
        chunk = json.loads(chunk)
    return chunk if isinstance(chunk, list) else [chunk]


def remove_similarities_json(new_chunk: Any, previous_chunks: Sequence[Any]) -> List[Any]:
    """
    Drop records of the new chunk that are similar to any record of a previous chunk.
    :param new_chunk: New chunk (records, single record, or JSON text).
    :param previous_chunks: Previously accepted chunks.
    :return: Remaining records.
    """
    new_records = _to_records(new_chunk)
    previous_records = [record for chunk in previous_chunks for record in _to_records(chunk)]

    return [
        new_record for new_record in new_records
        if not any(is_similar_record(new_record, prev_record) for prev_record in previous_records)
    ]


def remove_similarities_csv(new_chunk: str, previous_chunks: Sequence[str]) -> str:
    """
    Drop lines of the new chunk that exactly match a line of a previous chunk.
    The header (first line of the new chunk) is always kept.
    :param new_chunk: New chunk (CSV text).
    :param previous_chunks: Previously accepted chunks.
    :return: Remaining CSV text.
    """
    new_lines = new_chunk.split("\n")
    previous_lines = {line for chunk in previous_chunks for line in chunk.split("\n")}

    header = new_lines[0]
    unique_lines = [header] + [line for line in new_lines[1:] if line == header or line not in previous_lines]
    return "\n".join(unique_lines)


def remove_similarities_text(new_chunk: str, previous_chunks: Sequence[str]) -> str:
    """
    Drop sentences of the new chunk that are similar to a sentence of a previous chunk.
    :param new_chunk: New chunk (text).
    :param previous_chunks: Previously accepted chunks.
    :return: Remaining text.
    """
    new_sentences = new_chunk.split(SENTENCE_SEPARATOR)
    previous_sentences = [sentence for chunk in previous_chunks for sentence in chunk.split(SENTENCE_SEPARATOR)]

    unique_sentences = [
        sentence for sentence in new_sentences
        if not any(
            string_similarity(sentence, prev_sentence) > SIMILARITY_THRESHOLD
            for prev_sentence in previous_sentences
        )
    ]
    return SENTENCE_SEPARATOR.join(unique_sentences)


def remove_similarities(new_chunk: Any, previous_chunks: Sequence[Any], data_format: DataFormat) -> ChunkResult:
    """
    Remove near-duplicates of previous chunks from the new chunk.
    NOTE: On any comparison error, the new chunk is returned unfiltered.
    :param new_chunk: New chunk.
    :param previous_chunks: Chunks accepted strictly before the new chunk, in order.
    :param data_format: Data format.
    :return: Filtered chunk.
    """
    try:
        if data_format == DataFormat.JSON:
            return remove_similarities_json(new_chunk, previous_chunks)
        elif data_format == DataFormat.CSV:
            return remove_similarities_csv(new_chunk, previous_chunks)
        return remove_similarities_text(new_chunk, previous_chunks)

    except Exception as e:
        logger.exception(f"Similarity filter failed for {data_format.value} chunk, keeping it unfiltered: {e}")
        return new_chunk
