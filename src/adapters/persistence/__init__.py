from .dynamodb_key_value_store import DynamoDbKeyValueStore
from .fixture_stop_catalog import FixtureStopCatalog
from .json_file_key_value_store import JsonFileKeyValueStore
from .memory_key_value_store import InMemoryKeyValueStore

__all__ = [
    "DynamoDbKeyValueStore",
    "FixtureStopCatalog",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
