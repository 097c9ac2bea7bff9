"""Row storage on top of a JSON list file.

Stands in for the hosted row store: every repository keeps its table as a
list of dicts in one file. Reads fail loudly (StorageError) instead of
returning an empty table, because callers such as the booking conflict check
must be able to tell "no rows" from "could not look".
"""
import json
import os
import shutil
import tempfile
import logging
from pathlib import Path
from threading import Lock, RLock
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

_locks: Dict[str, RLock] = {}
_locks_guard = Lock()


class StorageError(RuntimeError):
    """A data file could not be read or written."""


def _lock_for(path: Path) -> RLock:
    # one lock per file, shared by every repository instance in the process
    key = str(path.resolve())
    with _locks_guard:
        return _locks.setdefault(key, RLock())


class JsonStore:
    def __init__(self, path):
        self.path = Path(path)
        self.lock = _lock_for(self.path)

    def load(self) -> List[dict]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                rows = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read %s: %s", self.path, e)
            raise StorageError(f"Could not read {self.path.name}") from e
        if not isinstance(rows, list):
            raise StorageError(f"{self.path.name} does not contain a list")
        return rows

    def save(self, rows: List[dict]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.stem}_", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    json.dump(rows, tmp, indent=2, ensure_ascii=False)
                shutil.move(tmp_path, self.path)
            finally:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
        except OSError as e:
            logger.error("Failed to write %s: %s", self.path, e)
            raise StorageError(f"Could not write {self.path.name}") from e

    def update(self, change: Callable[[List[dict]], List[dict]]) -> List[dict]:
        '''Load, apply ``change`` and save under the store lock.'''
        with self.lock:
            rows = change(self.load())
            self.save(rows)
            return rows


__all__ = ['JsonStore', 'StorageError']
