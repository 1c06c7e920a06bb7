import json
import logging
import os
from typing import Any, Dict, List

log = logging.getLogger(__name__)


class DataUnavailable(Exception):
    """Raised when a backing JSON file is missing, unparseable or of the wrong shape."""


class JsonFileStore:
    """
    Whole-file JSON store with ``load``/``save``.

    Every mutation is a read-modify-write of the entire file. There is no
    locking: callers assume a single writer per file.
    """

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Any:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as e:
            raise DataUnavailable(f"{self.path}: {e}") from e

    def load_records(self) -> List[Dict]:
        """Strict read of a list of JSON objects; any other shape is DataUnavailable."""
        data = self.load()
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise DataUnavailable(f"{self.path}: expected a list of objects")
        return data

    def records_or_default(self) -> List[Dict]:
        try:
            return self.load_records()
        except DataUnavailable as e:
            log.debug("Falling back to empty records path=%s reason=%s", self.path, e)
            return []

    def save(self, data: Any) -> None:
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)
