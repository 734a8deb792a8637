"""JSON file KV store — every key lives in a single JSON object on disk.

The file is the local analogue of browser storage: it is read once when the
store is opened and rewritten in full after each mutation.
"""

import json
import os
from pathlib import Path

import structlog

from shared.kvstore.port import KVStore

logger = structlog.get_logger(__name__)


class JsonFileKVStore(KVStore):
    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._data = self._read()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Ignoring unreadable store file", path=str(self.path))
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring store file without a top-level object", path=str(self.path))
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(self._data, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()
