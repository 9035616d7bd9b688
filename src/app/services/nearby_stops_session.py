from __future__ import annotations

import logging
from dataclasses import dataclass, field

from src.domain.algorithms.geo_utils import haversine_distance_m
from src.domain.exceptions import DataFetchError
from src.domain.models import GeoPoint, Stop

from .transit_service import TransitDataService

logger = logging.getLogger(__name__)

DEFAULT_CENTER = GeoPoint(lat=45.0703, lon=7.6869)  # Turin city centre
DEFAULT_RADIUS_M = 1000.0
DEFAULT_REQUERY_THRESHOLD_M = 200.0


@dataclass(slots=True)
class NearbyStopsSession:
    """Map-side state for the "stops around me" view.

    One instance per map session. The displayed center follows every move,
    while the backend is only asked again once the center drifts more than
    `requery_threshold_m` from where the last query was made.

    Requests are numbered and only the latest one issued may touch the state;
    a lookup superseded by a newer one is dropped whether it succeeds or fails.
    """

    transit: TransitDataService
    radius_m: float = DEFAULT_RADIUS_M
    requery_threshold_m: float = DEFAULT_REQUERY_THRESHOLD_M

    center: GeoPoint = DEFAULT_CENTER
    last_queried_center: GeoPoint | None = None
    stops: tuple[Stop, ...] = ()
    error: str | None = None

    _issued_seq: int = field(default=0, init=False, repr=False)

    def should_requery(self, new_center: GeoPoint) -> bool:
        if self.last_queried_center is None:
            return True
        moved_m = haversine_distance_m(self.last_queried_center, new_center)
        return moved_m > self.requery_threshold_m

    async def move_to(self, new_center: GeoPoint) -> bool:
        """Pan the map; returns True if a new lookup was applied."""

        self.center = new_center
        if not self.should_requery(new_center):
            return False
        return await self.refresh(new_center)

    async def refresh(self, center: GeoPoint | None = None) -> bool:
        """Look up stops around `center` (default: current center) right away.

        Returns True when the response was applied, False when it was
        superseded or the lookup failed. Failures keep the previously shown
        stops.
        """

        target = center or self.center
        self._issued_seq += 1
        seq = self._issued_seq
        self.last_queried_center = target

        try:
            stops = await self.transit.get_nearby_stops(target, self.radius_m)
        except DataFetchError as exc:
            if seq != self._issued_seq:
                return False
            logger.warning("Nearby stops lookup #%d failed: %s", seq, exc)
            self.error = "Could not load nearby stops. Pull to retry."
            return False

        if seq != self._issued_seq:
            logger.debug(
                "Dropping superseded nearby stops response #%d (latest #%d)",
                seq,
                self._issued_seq,
            )
            return False

        self.stops = stops
        self.error = None
        return True
