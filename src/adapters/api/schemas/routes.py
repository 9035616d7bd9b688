from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class RouteRequestSchema(BaseModel):
    """Either coordinates or a stop name for each end of the trip."""

    origin: GeoPointSchema | None = None
    destination: GeoPointSchema | None = None
    origin_stop_name: str | None = None
    destination_stop_name: str | None = None

    @model_validator(mode="after")
    def _require_both_ends(self) -> "RouteRequestSchema":
        if self.origin is None and not self.origin_stop_name:
            raise ValueError("origin or origin_stop_name is required")
        if self.destination is None and not self.destination_stop_name:
            raise ValueError("destination or destination_stop_name is required")
        return self


class RouteStepSchema(BaseModel):
    type: str
    description: str
    line: str | None = None


class RouteOptionSchema(BaseModel):
    summary: str
    duration_min: float
    transfers: int
    steps: list[RouteStepSchema] = []
