#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import typer
import logging
from pathlib import Path
from copy import deepcopy
from typing import Dict, Any, List
from abc import ABC, abstractmethod

from synth_agent.util.format import format_file
from synth_agent.util.json_util import read_json, write_json_atomic

logger = logging.getLogger(__name__)


class StorageManager(ABC):
    """
    Storage manager for a JSON settings file.

    The file is created from defaults on first use. An existing file must hold every default key
    and pass `validate()`; otherwise the CLI exits, as nothing can run on a broken profile.
    """

    def __init__(self, file_path: Path, default: Dict[str, Any]) -> None:
        """
        Initialize storage manager.
        :param file_path: File path.
        :param default: Default data.
        """
        self.file_path = file_path
        self.default = default

        try:
            if self.file_path.exists():
                self.data: Dict[str, Any] = read_json(self.file_path)
                self._check(missing_keys=sorted(self.default.keys() - self.data.keys()))
                logger.debug(f"Loaded existing file: {format_file(self.file_path)}")
            else:
                self.data = deepcopy(self.default)
                self.save()
                logger.info(f"Created default file: {format_file(self.file_path)}")

        except (OSError, ValueError) as e:
            logger.error(f"Failed to load file: {format_file(self.file_path)}: {e}")
            raise typer.Exit(code=1)

    def _check(self, missing_keys: List[str]) -> None:
        problems = [f"Missing key '{key}'" for key in missing_keys] or self.validate()
        if problems:
            for problem in problems:
                logger.error(f"{problem} in file: {format_file(self.file_path)}")
            raise typer.Exit(code=1)

    def save(self) -> None:
        """
        Validate and save file.
        """
        self._check(missing_keys=[])
        write_json_atomic(self.file_path, self.data)
        logger.debug(f"Saved file: {format_file(self.file_path)}")

    @abstractmethod
    def validate(self) -> List[str]:
        """
        Validate data.
        :return: Problems found (empty if data is valid).
        """
        raise NotImplementedError
