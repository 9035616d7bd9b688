from __future__ import annotations

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_transit_service
from src.adapters.api.schemas.routes import RouteOptionSchema, RouteRequestSchema
from src.app.services.transit_service import TransitDataService
from src.domain.models import GeoPoint

router = APIRouter(tags=["routes"])


@router.post("/routes", response_model=list[RouteOptionSchema])
async def plan_route(
    req: RouteRequestSchema,
    service: TransitDataService = Depends(get_transit_service),
) -> list[RouteOptionSchema]:
    stops = service.catalog.list_stops()

    if req.origin is not None:
        origin = GeoPoint(lat=req.origin.lat, lon=req.origin.lon)
    else:
        origin = service.resolve_stop_by_name(
            req.origin_stop_name or "", stops
        ).location

    if req.destination is not None:
        destination = GeoPoint(lat=req.destination.lat, lon=req.destination.lon)
    else:
        destination = service.resolve_stop_by_name(
            req.destination_stop_name or "", stops
        ).location

    options = await service.find_routes(origin, destination)
    return [RouteOptionSchema.model_validate(o) for o in options]
