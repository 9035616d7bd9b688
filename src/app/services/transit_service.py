from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

from src.app.ports.output import IStopCatalog
from src.domain.algorithms.arrival_simulator import ArrivalSimulator
from src.domain.algorithms.arrivals import (
    classify_delay,
    format_relative,
    order_arrivals,
)
from src.domain.algorithms.geo_utils import nearby_stops
from src.domain.exceptions import StopNotFoundError
from src.domain.models import ArrivalEvent, DelaySeverity, GeoPoint, Stop

from .simulated_transport import SimulatedTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ArrivalRow:
    """One line of a stop's arrival board, ready for display."""

    trip_id: str
    route_id: str
    headsign: str | None
    effective_time: datetime | None
    delay_s: int
    severity: DelaySeverity
    label: str


def build_arrival_board(
    events: Iterable[ArrivalEvent], *, now: datetime
) -> tuple[ArrivalRow, ...]:
    return tuple(
        ArrivalRow(
            trip_id=e.trip_id,
            route_id=e.route_id,
            headsign=e.headsign,
            effective_time=e.effective_time,
            delay_s=e.delay_s,
            severity=classify_delay(e.delay_s),
            label=format_relative(e.effective_time, now),
        )
        for e in order_arrivals(events)
    )


@dataclass(slots=True)
class TransitDataService:
    """Stop and arrival data access used by the map and the stop sheet.

    The pure queries run locally; `stops_transport` / `arrivals_transport`
    optionally put a simulated network round-trip in front of them.
    """

    catalog: IStopCatalog
    simulator: ArrivalSimulator
    stops_transport: SimulatedTransport | None = None
    arrivals_transport: SimulatedTransport | None = None

    async def get_nearby_stops(
        self, center: GeoPoint, radius_m: float
    ) -> tuple[Stop, ...]:
        if self.stops_transport is not None:
            await self.stops_transport.round_trip("nearby stops lookup")

        found = nearby_stops(center, radius_m, self.catalog.list_stops())
        logger.debug(
            "Found %d stops within %.0fm of (%.5f, %.5f)",
            len(found),
            radius_m,
            center.lat,
            center.lon,
        )
        return found

    def get_stop(self, stop_id: str) -> Stop:
        return self.catalog.get_stop(stop_id)

    async def get_realtime_arrivals(
        self, stop_id: str, *, now: datetime | None = None
    ) -> tuple[ArrivalEvent, ...]:
        if self.arrivals_transport is not None:
            await self.arrivals_transport.round_trip("real-time arrivals fetch")

        events = self.simulator.generate(stop_id, now=now)
        logger.debug("Generated %d arrivals for %s", len(events), stop_id)
        return order_arrivals(events)

    async def get_arrival_board(
        self, stop_id: str, *, now: datetime | None = None
    ) -> tuple[ArrivalRow, ...]:
        now = now or datetime.now(timezone.utc)
        events = await self.get_realtime_arrivals(stop_id, now=now)
        return build_arrival_board(events, now=now)

    async def find_routes(self, origin: GeoPoint, destination: GeoPoint) -> tuple:
        # Placeholder until a trip planner (e.g. OpenTripPlanner) is wired in.
        logger.warning(
            "Route search is not implemented; (%.5f, %.5f) -> (%.5f, %.5f)",
            origin.lat,
            origin.lon,
            destination.lat,
            destination.lon,
        )
        return ()

    @staticmethod
    def resolve_stop_by_name(name: str, stops: Iterable[Stop]) -> Stop:
        """Case-insensitive exact name match among `stops`."""

        wanted = name.strip().lower()
        for stop in stops:
            if stop.name.lower() == wanted:
                return stop
        raise StopNotFoundError(f"No stop named '{name}' in the current view")
