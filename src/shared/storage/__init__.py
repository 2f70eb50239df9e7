"""Local storage factory.

Provides open_storage() to pick an implementation:
- MemoryStorage when no path is configured (session-only)
- JsonFileStorage when a file path is given (survives restarts)
"""

from pathlib import Path

from shared.storage.file_adapter import JsonFileStorage
from shared.storage.memory_adapter import MemoryStorage
from shared.storage.port import LocalStorage, StorageWriteError

__all__ = ["JsonFileStorage", "LocalStorage", "MemoryStorage", "StorageWriteError", "open_storage"]


def open_storage(path: str | Path | None = None) -> LocalStorage:
    """Return file-backed storage for ``path``, or in-memory storage when it is None."""
    if path is None:
        return MemoryStorage()
    return JsonFileStorage(path)
