from __future__ import annotations

import math
from dataclasses import dataclass

from src.domain.exceptions.geo import InvalidCoordinateError


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and math.isfinite(self.lon)):
            raise InvalidCoordinateError(
                f"Non-finite coordinate: ({self.lat}, {self.lon})"
            )
        if not (-90.0 <= self.lat <= 90.0):
            raise InvalidCoordinateError(f"Invalid latitude: {self.lat}")
        if not (-180.0 <= self.lon <= 180.0):
            raise InvalidCoordinateError(f"Invalid longitude: {self.lon}")
