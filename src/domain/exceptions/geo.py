from .transit import TorinoGoError


class InvalidCoordinateError(TorinoGoError, ValueError):
    """Raised for latitude/longitude values outside their valid range."""
