from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from src.adapters.api.schemas.routes import GeoPointSchema


class StopSchema(BaseModel):
    stop_id: str
    name: str
    location: GeoPointSchema
    is_favorite: bool = False


class NearbyStopSchema(StopSchema):
    distance_m: float


class ArrivalRowSchema(BaseModel):
    trip_id: str
    route_id: str
    headsign: str | None = None
    effective_time: datetime | None = None
    delay_s: int
    severity: str
    label: str


class ArrivalBoardSchema(BaseModel):
    stop: StopSchema
    fetched_at: datetime
    arrivals: list[ArrivalRowSchema]
