"""JSON file storage: durable across process restarts.

The whole key space is kept in a single JSON object on disk and rewritten on
every change. Concurrent writers are not coordinated; the last write wins.
"""

import json
from pathlib import Path

import structlog

from shared.storage.port import LocalStorage, StorageWriteError

logger = structlog.get_logger(__name__)


class JsonFileStorage(LocalStorage):
    """Key-value storage persisted to one JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Unreadable storage file, treating as empty", path=str(self.path), error=str(exc))
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file does not hold an object, treating as empty", path=str(self.path))
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StorageWriteError(f"Could not write {self.path}: {exc}") from exc

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
