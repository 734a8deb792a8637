"""KV store port — abstract interface for flat key/value persistence.

Values are opaque strings (serialized collections). There are no
transactions and no expiry: a write replaces the whole value.
"""

from abc import ABC, abstractmethod


class KVStore(ABC):
    """Abstract interface for key/value storage backends."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None when absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``. Removing a missing key is not an error."""
