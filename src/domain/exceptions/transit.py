class TorinoGoError(Exception):
    """Base exception for the transit backend."""


class InvalidArrivalError(TorinoGoError, ValueError):
    """Raised when an arrival record is missing required fields."""


class StopNotFoundError(TorinoGoError, LookupError):
    """Raised when a stop id or name does not match any known stop."""


class DataFetchError(TorinoGoError):
    """Raised by the integration layer when a backend call fails.

    Always transient: callers should keep last-known-good data and allow a retry.
    """


class PersistenceError(TorinoGoError):
    """Raised by key-value store adapters when a read or write fails."""
