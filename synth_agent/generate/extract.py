#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import json
import logging
import re
from typing import Any, Iterator, List, Optional

from synth_agent.generate.GenerationError import ExtractionError
from synth_agent.generate.GenerationSchema import ChunkResult, DataFormat

logger = logging.getLogger(__name__)


JSON_FENCE_RE = re.compile(r"```json\s*(.*?)```", re.DOTALL | re.IGNORECASE)
BARE_FENCE_RE = re.compile(r"```[a-zA-Z]*\s*(.*?)```", re.DOTALL)
CSV_FENCE_RE = re.compile(r"```csv\s*\n(.*?)\n```", re.DOTALL | re.IGNORECASE)
CSV_UNFENCED_RE = re.compile(r"([^`]+)")

TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")
BARE_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_][\w\-]*)(\s*:)")
SINGLE_QUOTED_RE = re.compile(r"'([^'\"\\]*)'")

OBJECT_FRAGMENT_RE = re.compile(r"\{[^{}]*\}")
ARRAY_FRAGMENT_RE = re.compile(r"\[[^\[\]]*\]")


def repair_json(text: str) -> str:
    """
    Repair common LLM JSON malformations.
    - Remove trailing commas before closing brackets
    - Quote bare object keys
    - Turn single-quoted strings into double-quoted strings
    :param text: JSON-like text.
    :return: Repaired text (not guaranteed to be valid JSON).
    """
    prev = None
    while prev != text:
        prev = text
        text = TRAILING_COMMA_RE.sub(r"\1", text)

    text = BARE_KEY_RE.sub(r'\1"\2"\3', text)
    text = SINGLE_QUOTED_RE.sub(r'"\1"', text)
    return text


def parse_json_lenient(text: str) -> Optional[Any]:
    """
    Parse JSON, retrying once on the repaired text.
    :param text: JSON-like text.
    :return: Parsed value, or None if both attempts fail.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    try:
        return json.loads(repair_json(text))
    except json.JSONDecodeError:
        return None


def find_first_json_value(text: str) -> Optional[str]:
    """
    Find the first bracket-delimited JSON array or object in text, respecting double-quoted strings.
    :param text: Text.
    :return: Substring, or None if there is no balanced array or object.
    """
    start_obj = text.find("{")
    start_arr = text.find("[")
    if start_obj == -1 and start_arr == -1:
        return None

    if start_obj == -1 or (start_arr != -1 and start_arr < start_obj):
        start, open_c, close_c = start_arr, "[", "]"
    else:
        start, open_c, close_c = start_obj, "{", "}"

    depth = 0
    in_str = False
    esc = False

    for i in range(start, len(text)):
        ch = text[i]
        if in_str:
            if esc:
                esc = False
            elif ch == "\\":
                esc = True
            elif ch == '"':
                in_str = False
            continue

        if ch == '"':
            in_str = True
        elif ch == open_c:
            depth += 1
        elif ch == close_c:
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    return None


def _iter_json_candidates(content: str) -> Iterator[str]:
    for pattern in (JSON_FENCE_RE, BARE_FENCE_RE):
        match = pattern.search(content)
        if match:
            yield match.group(1).strip()

    value = find_first_json_value(content)
    if value is not None:
        yield value


def extract_partial_json(content: str) -> List[Any]:
    """
    Recover whatever JSON fragments can be parsed from broken output.
    Individual flat objects are collected first; flat arrays only if no object could be recovered.
    :param content: Raw model output.
    :return: Recovered records (empty if nothing could be recovered).
    """
    results: List[Any] = []

    for pattern in (OBJECT_FRAGMENT_RE, ARRAY_FRAGMENT_RE):
        for match in pattern.findall(content):
            parsed = parse_json_lenient(match)
            if parsed:
                results.append(parsed)
        if results:
            break

    if all(isinstance(item, dict) for item in results):
        return results

    flattened: List[Any] = []
    for item in results:
        if isinstance(item, list):
            flattened.extend(item)
        else:
            flattened.append(item)
    return flattened


def _has_records(data: Any) -> bool:
    if isinstance(data, dict):
        return True
    return isinstance(data, list) and any(isinstance(item, dict) for item in data)


def extract_json(content: str) -> List[Any] | dict:
    """
    Extract JSON data from model output.
    A candidate holding records (objects) wins over recovered fragments;
    a list without objects (e.g., `[2]` quoted in prose) is only used if no object can be recovered.
    :param content: Raw model output.
    :return: Records (list) or a single object (dict).
    :raises ExtractionError: If no non-empty array or object can be extracted.
    """
    data: Any = None

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        fallback: Optional[List[Any]] = None

        for candidate in _iter_json_candidates(content):
            parsed = parse_json_lenient(candidate)
            if _has_records(parsed):
                data = parsed
                break
            if isinstance(parsed, list) and parsed and fallback is None:
                fallback = parsed

        if data is None:
            recovered = extract_partial_json(content)
            if _has_records(recovered) or not fallback:
                data = recovered
                if data:
                    logger.warning(f"Recovered {len(data)} JSON fragment(s) from malformed output")
            else:
                data = fallback

    if not isinstance(data, (list, dict)):
        raise ExtractionError(f"Failed to extract valid JSON data (got {type(data).__name__})")

    if not data:
        raise ExtractionError("Extracted JSON data is empty")

    return data


def extract_csv(content: str) -> str:
    """
    Extract CSV data from model output.
    :param content: Raw model output.
    :return: CSV text (header line first).
    :raises ExtractionError: If the text has no comma or no line break.
    """
    content = content.replace("\r\n", "\n")

    match = CSV_FENCE_RE.search(content) or CSV_UNFENCED_RE.match(content)
    if match:
        csv_content = match.group(1).strip()
        if "," in csv_content and "\n" in csv_content:
            return csv_content

    raise ExtractionError("Failed to extract valid CSV data")


def extract_text(content: str) -> str:
    """
    Extract plain text from model output.
    :param content: Raw model output.
    :return: Trimmed text.
    :raises ExtractionError: If the text is blank.
    """
    text = content.strip()
    if not text:
        raise ExtractionError("Extracted text is empty")
    return text


def extract_data(content: str, data_format: DataFormat) -> ChunkResult | dict:
    """
    Extract data for the given format from raw model output.
    :param content: Raw model output.
    :param data_format: Data format.
    :return: Extracted chunk.
    :raises ExtractionError: On failure.
    """
    if data_format == DataFormat.JSON:
        return extract_json(content)
    elif data_format == DataFormat.CSV:
        return extract_csv(content)
    return extract_text(content)
