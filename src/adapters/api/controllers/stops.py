from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query

from src.adapters.api.dependencies import (
    get_favorites_service,
    get_runtime_config,
    get_transit_service,
)
from src.adapters.api.schemas.routes import GeoPointSchema
from src.adapters.api.schemas.stops import (
    ArrivalBoardSchema,
    ArrivalRowSchema,
    NearbyStopSchema,
    StopSchema,
)
from src.adapters.config import RuntimeConfig
from src.app.services.favorites_service import FavoritesService
from src.app.services.transit_service import TransitDataService
from src.domain.algorithms.geo_utils import nearest_stops
from src.domain.models import GeoPoint, Stop

router = APIRouter(prefix="/stops", tags=["stops"])


def _stop_to_schema(stop: Stop, *, is_favorite: bool) -> StopSchema:
    return StopSchema(
        stop_id=stop.id,
        name=stop.name,
        location=GeoPointSchema(lat=stop.location.lat, lon=stop.location.lon),
        is_favorite=is_favorite,
    )


@router.get("/nearby", response_model=list[NearbyStopSchema])
async def list_nearby_stops(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
    radius_m: float | None = Query(default=None, ge=0.0, le=50_000.0),
    limit: int | None = Query(default=None, ge=1, le=100),
    transit: TransitDataService = Depends(get_transit_service),
    favorites: FavoritesService = Depends(get_favorites_service),
    config: RuntimeConfig = Depends(get_runtime_config),
) -> list[NearbyStopSchema]:
    center = GeoPoint(lat=lat, lon=lon)
    radius = radius_m if radius_m is not None else config.nearby_radius_m
    stops = await transit.get_nearby_stops(center, radius)
    favorite_ids = set(await favorites.get_favorite_ids())

    # Closest first for list views; the map does not care about order.
    scored = nearest_stops(center, stops, limit=limit)
    return [
        NearbyStopSchema(
            **_stop_to_schema(s, is_favorite=s.id in favorite_ids).model_dump(),
            distance_m=round(d, 1),
        )
        for d, s in scored
    ]


@router.get("/{stop_id}", response_model=StopSchema)
async def get_stop(
    stop_id: str,
    transit: TransitDataService = Depends(get_transit_service),
    favorites: FavoritesService = Depends(get_favorites_service),
) -> StopSchema:
    stop = transit.get_stop(stop_id)
    return _stop_to_schema(stop, is_favorite=await favorites.is_favorite(stop.id))


@router.get("/{stop_id}/arrivals", response_model=ArrivalBoardSchema)
async def get_arrivals(
    stop_id: str,
    transit: TransitDataService = Depends(get_transit_service),
    favorites: FavoritesService = Depends(get_favorites_service),
) -> ArrivalBoardSchema:
    stop = transit.get_stop(stop_id)
    now = datetime.now(timezone.utc)
    rows = await transit.get_arrival_board(stop.id, now=now)

    return ArrivalBoardSchema(
        stop=_stop_to_schema(stop, is_favorite=await favorites.is_favorite(stop.id)),
        fetched_at=now,
        arrivals=[
            ArrivalRowSchema(
                trip_id=r.trip_id,
                route_id=r.route_id,
                headsign=r.headsign,
                effective_time=r.effective_time,
                delay_s=r.delay_s,
                severity=r.severity.value,
                label=r.label,
            )
            for r in rows
        ],
    )
