from __future__ import annotations

import threading
from dataclasses import dataclass, field

from src.app.ports.output import IKeyValueStore


@dataclass(slots=True)
class InMemoryKeyValueStore(IKeyValueStore):
    """Process-local store; contents are lost on restart."""

    items: dict[str, str] = field(default_factory=dict)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self.items[key] = value
