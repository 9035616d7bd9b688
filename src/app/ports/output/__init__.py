from .key_value_store import IKeyValueStore
from .stop_catalog import IStopCatalog

__all__ = [
    "IKeyValueStore",
    "IStopCatalog",
]
