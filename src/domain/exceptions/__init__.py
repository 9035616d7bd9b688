from .geo import InvalidCoordinateError
from .transit import (
    DataFetchError,
    InvalidArrivalError,
    PersistenceError,
    StopNotFoundError,
    TorinoGoError,
)

__all__ = [
    "DataFetchError",
    "InvalidArrivalError",
    "InvalidCoordinateError",
    "PersistenceError",
    "StopNotFoundError",
    "TorinoGoError",
]
