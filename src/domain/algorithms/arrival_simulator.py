from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Mapping

from src.domain.models import ArrivalEvent
from src.domain.models.arrival import as_utc

# Typical destinations of a few GTT lines in Turin.
TURIN_HEADSIGNS: Mapping[str, tuple[str, ...]] = {
    "4": ("Falchera", "Strada del Drosso"),
    "10": ("Via Massari", "Piazza Statuto"),
    "13": ("Piazza Gran Madre", "Piazza Campanella"),
    "15": ("Sassi Superga", "Via Brissogne"),
    "16": (
        "Piazza Sabotino Circolare Destra",
        "Piazza Sabotino Circolare Sinistra",
    ),
    "18": ("Piazzale Caio Mario", "Piazza Sofia"),
    "55": ("Grosso Capolinea", "Piazza Farini"),
    "68": ("Via Frejus", "Corso Casale"),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class ArrivalSimulator:
    """Generates plausible arrival predictions for a stop.

    This is fixture data for demos and tests, not a prediction model. Every
    random draw goes through `rng`, so a seeded `random.Random` together with
    a fixed `clock` reproduces the exact same events.
    """

    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], datetime] = _utcnow
    headsigns_by_route: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(TURIN_HEADSIGNS)
    )

    max_routes: int = 4
    max_events_per_route: int = 3
    delay_probability: float = 0.3

    def generate(
        self, stop_id: str, *, now: datetime | None = None
    ) -> tuple[ArrivalEvent, ...]:
        return tuple(
            ArrivalEvent.from_mapping(record)
            for record in self.generate_records(stop_id, now=now)
        )

    def generate_records(
        self, stop_id: str, *, now: datetime | None = None
    ) -> list[dict[str, Any]]:
        """Raw feed records: camelCase keys and ISO-8601 UTC arrival times."""

        now = as_utc(now) if now is not None else as_utc(self.clock())
        stamp_ms = int(now.timestamp() * 1000)
        stop_suffix = stop_id.split("-", 1)[-1]

        route_keys = list(self.headsigns_by_route)
        if not route_keys:
            return []

        records: list[dict[str, Any]] = []
        for route_idx in range(self.rng.randint(1, self.max_routes)):
            route_key = self.rng.choice(route_keys)
            headsigns = self.headsigns_by_route.get(route_key) or (
                f"Destination {route_idx + 1}A",
                f"Destination {route_idx + 1}B",
            )

            for i in range(self.rng.randint(1, self.max_events_per_route)):
                # Later events of the same route are spread further out.
                minutes_until = i * (self.rng.random() * 10 + 8) + (
                    self.rng.random() * 5 + 2
                )
                delay_s = 0
                if self.rng.random() > 1.0 - self.delay_probability:
                    # Mostly late, occasionally up to 30 s early.
                    delay_s = self.rng.randrange(180) - 30

                scheduled = now + timedelta(minutes=minutes_until, seconds=-delay_s)
                if scheduled < now and minutes_until > 1:
                    continue

                records.append(
                    {
                        "tripId": f"Trip-{stop_suffix}-{route_idx}-{i}-{stamp_ms}",
                        "routeId": f"Line-{route_key}",
                        "arrivalTime": scheduled.isoformat(),
                        "delay": delay_s,
                        "headsign": self.rng.choice(headsigns),
                    }
                )

        return records
