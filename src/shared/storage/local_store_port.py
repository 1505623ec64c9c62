"""Local key-value store port: the browser-local storage analogue.

Values are strings. Calls are synchronous so a cart mutation and its
persistence happen in the same step.
"""

from abc import ABC, abstractmethod


class KeyValueStorePort(ABC):
    """Abstract interface for durable local key-value storage."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete `key`. Removing an absent key does nothing."""
        ...
