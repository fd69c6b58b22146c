#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import os
import pathlib
import urllib.parse
from datetime import datetime, timezone
from typing import Any, Dict


def format_time(timestamp: float) -> str:
    """
    Format timestamp as UTC.
    :param timestamp: Timestamp.
    :return: Timestamp formatted as UTC.
    """
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.strftime('%Y-%m-%d %H:%M:%S')


def format_file(file_path: str | pathlib.Path) -> str:
    """
    Format file path as file:// URI, escaping special characters like spaces.
    :param file_path: File path.
    :return: File path formatted as file:// URI.
    """
    abs_path = pathlib.Path(file_path).resolve()

    # On Windows, pathlib will produce a path like "C:\path\to\file"
    # We need to convert it to /C:/path/to/file for proper file:// URI
    if os.name == 'nt':
        uri_path = '/' + str(abs_path).replace('\\', '/')
    else:
        uri_path = str(abs_path)

    return f"file://{urllib.parse.quote(uri_path, safe='/')}"


def format_brief(text: str, max_len: int = 80) -> str:
    """
    Format text as brief single-line string.
    :param text: Text.
    :param max_len: Maximum string length.
    :return: Brief string.
    """
    brief = text.replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t")
    return f"{brief[:max_len]}…" if len(brief) > max_len else f"{brief}"


def format_history_record(record: Dict[str, Any]) -> str:
    """
    Format stored generation record as one line.
    :param record: Stored record.
    :return: Line like `2025-04-05 12:34:56 · JSON · medium · 3 chunk(s) · 42 record(s) · <prompt>`.
    """
    metadata = record.get("metadata", {})
    created_at = datetime.fromisoformat(record["created_at"]).timestamp()
    return " · ".join([
        format_time(created_at),
        record.get("format", "?"),
        record.get("data_size", "?"),
        f"{metadata.get('chunks_count', 0)} chunk(s)",
        f"{metadata.get('total_records', 0)} record(s)",
        format_brief(record.get("prompt", "")),
    ])
