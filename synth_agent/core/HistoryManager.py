#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from synth_agent.generate.GenerationSchema import DataFormat, GenerationOutput, GenerationRequest
from synth_agent.util.format import format_file
from synth_agent.util.json_util import generate_json_filename, read_json, write_json_exclusive

logger = logging.getLogger(__name__)


def append_unique_suffix(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Resolve a name collision by appending a random suffix to the record ID.
    :param record: Record.
    :return: New record with unique-suffixed ID.
    """
    return {**record, "id": f"{record['id']}_{uuid.uuid4().hex[:6]}"}


class HistoryStoreError(Exception):
    """
    History store error (all insert attempts failed).
    """
    pass


class InsertRetryPolicy:
    """
    Bounded insert retry policy.

    Name collisions are resolved by the injected strategy and retried immediately;
    other I/O errors are retried after a linearly growing delay.
    """

    def __init__(
            self,
            max_retries: int = 3,
            delay_s: float = 1.0,
            resolve_collision: Callable[[Dict[str, Any]], Dict[str, Any]] = append_unique_suffix,
    ):
        """
        Initialize insert retry policy.
        :param max_retries: Maximum number of attempts.
        :param delay_s: Base delay between attempts after I/O errors (in seconds).
        :param resolve_collision: Strategy returning a changed record after a name collision.
        """
        self.max_retries = max_retries
        self.delay_s = delay_s
        self.resolve_collision = resolve_collision

    def run(self, insert: Callable[[Dict[str, Any]], str], record: Dict[str, Any]) -> str:
        """
        Insert record, retrying within budget.
        :param insert: Insert function returning the record ID.
        :param record: Record.
        :return: Record ID.
        :raises HistoryStoreError: If all attempts fail.
        """
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                return insert(record)

            except FileExistsError as e:
                last_error = e
                record = self.resolve_collision(record)
                logger.warning(f"Storage attempt {attempt} of {self.max_retries} collided, retrying as '{record['id']}'")

            except OSError as e:
                last_error = e
                logger.warning(f"Storage attempt {attempt} of {self.max_retries} failed: {e}")
                if attempt < self.max_retries:
                    time.sleep(self.delay_s * attempt)

        raise HistoryStoreError(f"Storing record failed after {self.max_retries} attempt(s): {last_error}")


@dataclass
class StoreResult:
    """
    Store result.
    """

    stored: bool

    record_id: Optional[str] = field(default=None)

    error: Optional[str] = field(default=None)


class HistoryManager:
    """
    History manager.

    Stores each generation as one JSON file in the history directory.
    """

    MAX_RECORD_BYTES = 1024 * 1024

    def __init__(self, history_path: Path, retry_policy: Optional[InsertRetryPolicy] = None):
        """
        Initialize history manager.
        :param history_path: History directory.
        :param retry_policy: Insert retry policy (optional).
        """
        self.history_path = history_path
        self.retry_policy = retry_policy or InsertRetryPolicy()

    def _insert(self, record: Dict[str, Any]) -> str:
        json_filename = self.history_path / f"{record['id']}.json"
        write_json_exclusive(json_filename, record)
        logger.info(f"Generation stored: {format_file(json_filename)}")
        return record['id']

    @staticmethod
    def build_record(request: GenerationRequest, output: GenerationOutput) -> Dict[str, Any]:
        """
        Build record for generation.
        Large JSON data is stored minified.
        :param request: Generation request.
        :param output: Generation output.
        :return: Record.
        """
        record = {
            "id": generate_json_filename(request.prompt),
            "prompt": request.prompt,
            "format": request.format.value,
            "data_size": request.size_tier,
            "generated_data": output.data,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "status": "success",
            "metadata": output.get_metadata(),
        }

        record_bytes = len(json.dumps(record, ensure_ascii=False).encode("utf-8"))
        if record_bytes > HistoryManager.MAX_RECORD_BYTES and output.format == DataFormat.JSON:
            logger.warning(f"Large data detected ({record_bytes} bytes), minifying before storage")
            record["generated_data"] = json.dumps(json.loads(output.data), ensure_ascii=False, separators=(",", ":"))

        return record

    def store(self, request: GenerationRequest, output: GenerationOutput) -> StoreResult:
        """
        Store generation.
        NOTE: Storage failure is reported in the result, as the generated data is still valid.
        :param request: Generation request.
        :param output: Generation output.
        :return: Store result.
        """
        record = self.build_record(request, output)

        try:
            record_id = self.retry_policy.run(self._insert, record)
        except HistoryStoreError as e:
            logger.error(f"{e}")
            return StoreResult(stored=False, error="Data generated successfully but storage failed")

        return StoreResult(stored=True, record_id=record_id)

    def list(self) -> List[Dict[str, Any]]:
        """
        List stored generations, oldest first.
        :return: Records.
        """
        if not self.history_path.exists():
            return []

        records = []
        for json_filename in self.history_path.glob("*.json"):
            try:
                records.append(read_json(json_filename))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Skipping unreadable history file {format_file(json_filename)}: {e}")

        return sorted(records, key=lambda record: record.get("created_at", ""))

    def load(self, record_id: str) -> Dict[str, Any]:
        """
        Load stored generation.
        :param record_id: Record ID.
        :return: Record.
        :raises FileNotFoundError: If there is no such record.
        """
        return read_json(self.history_path / f"{record_id}.json")
