#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import json
import os
import re
from pathlib import Path
from typing import Dict, Any


def generate_json_filename(prompt: str, max_length: int = 80) -> str:
    """
    Generate a clean base name from a prompt (without extension).
    :param prompt: The prompt text.
    :param max_length: Maximum base name length.
    :return: Clean base name.
    """
    # Remove or replace problematic characters for filenames
    clean_prompt = re.sub(r'[<>:"/\\|?*\x00-\x1f]', '_', prompt)

    # Replace multiple whitespace with single spaces and strip
    clean_prompt = re.sub(r'\s+', ' ', clean_prompt).strip()

    # Replace spaces with underscores
    clean_prompt = clean_prompt.replace(' ', '_')

    if len(clean_prompt) > max_length:
        clean_prompt = clean_prompt[:max_length]

    return clean_prompt or "generation"


def write_json_exclusive(json_filename: Path, data: Dict[str, Any]) -> None:
    """
    Write data to a new JSON file.
    :param json_filename: JSON filename.
    :param data: Data.
    :raises FileExistsError: If the file already exists.
    """
    json_filename.parent.mkdir(parents=True, exist_ok=True)

    with open(json_filename, 'x', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=4)


def read_json(json_filename: Path) -> Dict[str, Any]:
    with open(json_filename, 'r', encoding='utf-8') as f:
        return json.load(f)


def write_json_atomic(json_filename: Path, data: Dict[str, Any]) -> None:
    """
    Write data to JSON file, replacing it atomically.
    :param json_filename: JSON filename.
    :param data: Data.
    """
    json_filename.parent.mkdir(parents=True, exist_ok=True)

    temp_filename = json_filename.with_suffix(".tmp")
    with open(temp_filename, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=4)
    os.replace(temp_filename, json_filename)
