from __future__ import annotations

from abc import ABC, abstractmethod


class IKeyValueStore(ABC):
    """Port for a string key-value store (local storage style).

    Implementations raise `PersistenceError` when the backend fails.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""
