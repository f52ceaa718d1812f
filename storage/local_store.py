#Purpose: Local-only persistence.
#One JSON file per table ({key: document}) under LOCAL_STORE_PATH.
#Used on its own in local mode and as the offline mirror in cloud mode.

from __future__ import annotations

import json
import os
import tempfile
import threading
from typing import Any, Dict, Optional


class JsonFileStore:
    """
    Key-value store backed by a single JSON file.

    Every write rewrites the file through a temp file + os.replace, so a
    crash mid-write leaves the previous version intact.
    """

    def __init__(self, directory: str, table: str):
        self.directory = directory
        self.table = table
        self.path = os.path.join(directory, f"{table}.json")
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, data: Dict[str, Any]) -> None:
        os.makedirs(self.directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{self.table}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    # --- KeyValueStore ---

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._read().get(key)

    def put(self, key: str, value: Dict[str, Any]) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)

    def all(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return self._read()
