#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import json
import logging
from typing import Any, List, Sequence

from synth_agent.generate.GenerationError import MergeError
from synth_agent.generate.GenerationSchema import DataFormat
from synth_agent.generate.extract import extract_partial_json

logger = logging.getLogger(__name__)


def _flatten_json_chunks(chunks: Sequence[Any]) -> List[Any]:
    records: List[Any] = []
    for chunk in chunks:
        if isinstance(chunk, str):
            records.extend(extract_partial_json(chunk))
        elif isinstance(chunk, list):
            records.extend(chunk)
        else:
            records.append(chunk)
    return records


def merge_json(chunks: Sequence[Any]) -> str:
    """
    Merge JSON chunks into one pretty-printed array.
    :param chunks: Chunks (records).
    :return: JSON text.
    :raises MergeError: If the records cannot be serialized.
    """
    try:
        return json.dumps(_flatten_json_chunks(chunks), ensure_ascii=False, indent=2)
    except (TypeError, ValueError) as e:
        raise MergeError(f"Merging JSON chunks failed: {e}") from e


def merge_json_fallback(chunks: Sequence[Any]) -> str:
    records: List[Any] = []
    for chunk in chunks:
        records.extend(chunk if isinstance(chunk, list) else [chunk])
    return json.dumps(records, ensure_ascii=False, indent=2, default=str)


def merge_csv(chunks: Sequence[str]) -> str:
    """
    Merge CSV chunks: header of the first chunk, then the ordered union of all data lines.
    :param chunks: Chunks (CSV text, header line first).
    :return: CSV text.
    :raises MergeError: If there are no chunks or a chunk is not text.
    """
    try:
        first_chunk, *rest_chunks = chunks
        lines = first_chunk.split("\n")
        header = lines[0]

        data_lines = lines[1:]
        for chunk in rest_chunks:
            data_lines.extend(chunk.split("\n")[1:])
    except (ValueError, AttributeError) as e:
        raise MergeError(f"Merging CSV chunks failed: {e}") from e

    return "\n".join([header, *dict.fromkeys(data_lines)])


def merge_text(chunks: Sequence[str]) -> str:
    return "\n\n".join(chunks)


def merge_chunks(chunks: Sequence[Any], data_format: DataFormat) -> str:
    """
    Merge accepted chunks into one output blob.
    NOTE: Never raises on merge failure; a degraded output is returned instead.
    :param chunks: Accepted chunks, in order.
    :param data_format: Data format.
    :return: Merged output.
    """
    try:
        if data_format == DataFormat.JSON:
            return merge_json(chunks)
        elif data_format == DataFormat.CSV:
            return merge_csv(chunks)
        return merge_text(chunks)

    except MergeError as e:
        logger.warning(f"{e} – using best-effort output")
        if data_format == DataFormat.JSON:
            return merge_json_fallback(chunks)
        return "\n\n".join(str(chunk) for chunk in chunks)


def count_records(merged: str, data_format: DataFormat) -> int:
    """
    Count records in merged output.
    :param merged: Merged output.
    :param data_format: Data format.
    :return: Array length (JSON), number of non-empty data lines (CSV), or 1 (TEXT).
    """
    if data_format == DataFormat.JSON:
        try:
            data = json.loads(merged)
        except json.JSONDecodeError:
            return 1
        return len(data) if isinstance(data, list) else 1

    if data_format == DataFormat.CSV:
        return len([line for line in merged.split("\n")[1:] if line.strip()])

    return 1
