"""DynamoDB access helpers.

Builds boto3 resources from Django settings so that every caller talks
to the same region/endpoint.  ``DYNAMODB_ENDPOINT_URL`` points the
client at DynamoDB Local during development; leave it unset for AWS.
"""

from __future__ import annotations

from typing import Any

import boto3
import structlog
from django.conf import settings

logger = structlog.get_logger(__name__)


def get_dynamodb_resource() -> Any:
    """Return a boto3 DynamoDB service resource configured from settings."""
    return boto3.resource(
        "dynamodb",
        region_name=settings.AWS_REGION,
        endpoint_url=settings.DYNAMODB_ENDPOINT_URL,
    )


def get_products_table(resource: Any = None) -> Any:
    """Return the ``Table`` resource holding product items."""
    resource = resource or get_dynamodb_resource()
    return resource.Table(settings.PRODUCTS_TABLE)


def create_products_table(resource: Any, table_name: str) -> Any:
    """Create the products table keyed by ``id`` and wait until it exists."""
    table = resource.create_table(
        TableName=table_name,
        KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    table.wait_until_exists()
    logger.info("dynamodb.table_created", table=table_name)
    return table
