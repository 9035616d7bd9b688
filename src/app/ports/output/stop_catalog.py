from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.exceptions import StopNotFoundError
from src.domain.models import Stop


class IStopCatalog(ABC):
    """Port for the static set of stops known to the app."""

    @abstractmethod
    def list_stops(self) -> tuple[Stop, ...]:
        raise NotImplementedError

    def get_stop(self, stop_id: str) -> Stop:
        for stop in self.list_stops():
            if stop.id == stop_id:
                return stop
        raise StopNotFoundError(f"Unknown stop: {stop_id}")
