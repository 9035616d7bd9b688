from __future__ import annotations

import os
import time
from dataclasses import dataclass

from botocore.exceptions import BotoCoreError, ClientError

from src.adapters.aws import dynamodb_client
from src.app.ports.output import IKeyValueStore
from src.domain.exceptions import PersistenceError


@dataclass(slots=True)
class DynamoDbKeyValueStore(IKeyValueStore):
    """Stores string values in a DynamoDB table keyed by `key`.

    Env vars:
      - FAVORITES_TABLE (default: torinogo-kv)
      - ENDPOINT_URL (preferred for LocalStack)
      - AWS_REGION
    """

    table_name: str | None = None

    def _table(self) -> str:
        return self.table_name or os.getenv("FAVORITES_TABLE") or "torinogo-kv"

    def get_item(self, key: str) -> str | None:
        try:
            resp = dynamodb_client().get_item(
                TableName=self._table(),
                Key={"key": {"S": key}},
                ConsistentRead=True,
            )
        except (BotoCoreError, ClientError) as exc:
            raise PersistenceError(f"DynamoDB read failed for {key}: {exc}") from exc

        item = resp.get("Item")
        if not item:
            return None
        return item.get("value", {}).get("S")

    def set_item(self, key: str, value: str) -> None:
        now_ms = int(time.time() * 1000)
        try:
            dynamodb_client().put_item(
                TableName=self._table(),
                Item={
                    "key": {"S": key},
                    "value": {"S": value},
                    "updated_at_ms": {"N": str(now_ms)},
                },
            )
        except (BotoCoreError, ClientError) as exc:
            raise PersistenceError(f"DynamoDB write failed for {key}: {exc}") from exc
