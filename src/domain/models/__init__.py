from .arrival import ArrivalEvent, DelaySeverity
from .geo import GeoPoint
from .stop import Stop

__all__ = [
    "ArrivalEvent",
    "DelaySeverity",
    "GeoPoint",
    "Stop",
]
