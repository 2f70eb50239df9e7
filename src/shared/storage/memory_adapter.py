"""In-memory storage for development and testing.

Values live only as long as the process. An optional byte quota mimics the
browser's storage limit so quota-exceeded handling can be exercised.
"""

from shared.storage.port import LocalStorage, StorageWriteError


class MemoryStorage(LocalStorage):
    """Dictionary-backed storage with an optional size quota."""

    def __init__(self, quota_bytes: int | None = None) -> None:
        self.quota_bytes = quota_bytes
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = sum(len(k) + len(v) for k, v in self._data.items() if k != key)
            if used + len(key) + len(value) > self.quota_bytes:
                raise StorageWriteError(f"Storage quota of {self.quota_bytes} bytes exceeded writing {key!r}")
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
