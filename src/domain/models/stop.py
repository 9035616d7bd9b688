from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Stop:
    """A fixed boarding location from the static stop catalog."""

    id: str
    name: str
    location: GeoPoint

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise ValueError("Stop id must not be blank")
        if not self.name.strip():
            raise ValueError(f"Stop {self.id} has a blank name")
