"""Local storage port (abstract interface).

A small string key-value store standing in for the browser's localStorage.
The cart and the auth session serialize themselves into it so they survive
a restart. Adapters decide where the bytes actually live.
"""

from abc import ABC, abstractmethod


class StorageWriteError(Exception):
    """A value could not be written (quota exceeded, disk full, read-only file)."""


class LocalStorage(ABC):
    """Abstract key-value storage interface."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one.

        Raises:
            StorageWriteError: the value could not be persisted.
        """
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is a no-op."""
        ...
