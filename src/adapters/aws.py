from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

import boto3
from botocore.client import BaseClient

from src.adapters.config import env_bool

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBClient
else:
    DynamoDBClient = BaseClient  # type: ignore[misc,assignment]

DEFAULT_REGION = "eu-south-1"
DEFAULT_LOCALSTACK_URL = "http://localhost:4566"


@dataclass(frozen=True, slots=True)
class AwsSettings:
    """Where the favorites table lives.

    `endpoint_url` is None for real AWS. It is taken from ENDPOINT_URL when
    set; otherwise USE_LOCALSTACK points it at LOCALSTACK_ENDPOINT_URL.
    """

    region: str
    endpoint_url: str | None = None

    @staticmethod
    def from_env() -> "AwsSettings":
        endpoint_url = (os.getenv("ENDPOINT_URL") or "").strip() or None
        if endpoint_url is None and env_bool("USE_LOCALSTACK", False):
            endpoint_url = (
                os.getenv("LOCALSTACK_ENDPOINT_URL") or DEFAULT_LOCALSTACK_URL
            )

        return AwsSettings(
            region=(os.getenv("AWS_REGION") or "").strip() or DEFAULT_REGION,
            endpoint_url=endpoint_url,
        )


@lru_cache(maxsize=4)
def _dynamodb_client_for(settings: AwsSettings) -> DynamoDBClient:
    # boto3 sessions are not thread-safe; each cached client owns one.
    session = boto3.session.Session(region_name=settings.region)
    return session.client("dynamodb", endpoint_url=settings.endpoint_url)


def dynamodb_client() -> DynamoDBClient:
    """DynamoDB client for the current environment, reused across calls."""

    return _dynamodb_client_for(AwsSettings.from_env())
