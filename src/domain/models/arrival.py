from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Mapping

from src.domain.exceptions import InvalidArrivalError

logger = logging.getLogger(__name__)


class DelaySeverity(str, Enum):
    ON_TIME = "on_time"
    SLIGHT_DELAY = "slight_delay"
    SIGNIFICANT_DELAY = "significant_delay"


def as_utc(value: datetime) -> datetime:
    # Naive datetimes are treated as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(raw: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; returns None when it cannot be parsed."""

    if isinstance(raw, datetime):
        return as_utc(raw)
    if not isinstance(raw, str) or not raw.strip():
        return None
    text = raw.strip()
    # fromisoformat only accepts a trailing 'Z' on 3.11+.
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class ArrivalEvent:
    """One predicted vehicle arrival at a stop.

    `scheduled_time` is None when the upstream timestamp was unparseable; such
    events have no effective time and are ordered after every valid one.
    """

    trip_id: str
    route_id: str
    scheduled_time: datetime | None
    delay_s: int = 0
    headsign: str | None = None

    @property
    def effective_time(self) -> datetime | None:
        if self.scheduled_time is None:
            return None
        return self.scheduled_time + timedelta(seconds=self.delay_s)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ArrivalEvent":
        """Build an event from a loosely-typed record (camelCase or snake_case keys)."""

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in raw and raw[key] is not None:
                    return raw[key]
            return None

        trip_id = str(pick("tripId", "trip_id") or "").strip()
        if not trip_id:
            raise InvalidArrivalError("Arrival record is missing a trip id")

        route_id = str(pick("routeId", "route_id") or "").strip()
        if not route_id:
            raise InvalidArrivalError(f"Arrival {trip_id} is missing a route id")

        delay_raw = pick("delay", "delay_s", "delaySeconds")
        if delay_raw is None:
            delay_s = 0
        elif isinstance(delay_raw, bool) or not isinstance(delay_raw, (int, float)):
            raise InvalidArrivalError(f"Arrival {trip_id} has a non-numeric delay")
        elif isinstance(delay_raw, float) and not delay_raw.is_integer():
            raise InvalidArrivalError(f"Arrival {trip_id} has a fractional delay")
        else:
            delay_s = int(delay_raw)

        time_raw = pick("arrivalTime", "scheduled_time", "scheduledTime")
        scheduled_time = parse_timestamp(time_raw)
        if scheduled_time is None:
            logger.warning(
                "Unparseable arrival time for trip %s: %r", trip_id, time_raw
            )

        headsign = pick("headsign")
        if headsign is not None:
            headsign = str(headsign).strip() or None

        return cls(
            trip_id=trip_id,
            route_id=route_id,
            scheduled_time=scheduled_time,
            delay_s=delay_s,
            headsign=headsign,
        )
