"""
DynamoDB table definition and connection.

Single-table layout (see dao/user_dao.py for the item shapes):
  PK (S, HASH)  /  SK (S, RANGE)
No GSIs: every access is by key, plus a full scan for the listing.
"""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

from user_directory.core.config import Settings

logger = logging.getLogger(__name__)

ATTRIBUTE_DEFINITIONS = [
    {"AttributeName": "PK", "AttributeType": "S"},
    {"AttributeName": "SK", "AttributeType": "S"},
]

KEY_SCHEMA = [
    {"AttributeName": "PK", "KeyType": "HASH"},
    {"AttributeName": "SK", "KeyType": "RANGE"},
]


def get_client(settings: Settings) -> Any:
    return boto3.client(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url,
    )


def table_exists(client: Any, table_name: str) -> bool:
    try:
        client.describe_table(TableName=table_name)
        return True
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceNotFoundException":
            return False
        raise


def create_table(client: Any, table_name: str) -> dict:
    """Create the table and block until it is ACTIVE."""
    resp = client.create_table(
        TableName=table_name,
        AttributeDefinitions=ATTRIBUTE_DEFINITIONS,
        KeySchema=KEY_SCHEMA,
        BillingMode="PAY_PER_REQUEST",
    )
    waiter = client.get_waiter("table_exists")
    waiter.wait(TableName=table_name, WaiterConfig={"Delay": 2, "MaxAttempts": 30})
    return resp


def connect_table(settings: Settings) -> Any:
    """
    Return a boto3 Table resource for the configured table.

    table.load() issues a DescribeTable, so any table or connection problem
    raises here rather than on the first request.
    """
    if settings.create_table_if_missing:
        client = get_client(settings)
        if not table_exists(client, settings.dynamodb_table_name):
            logger.info("Creating table '%s'", settings.dynamodb_table_name)
            create_table(client, settings.dynamodb_table_name)

    dynamodb = boto3.resource(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url,
    )
    table = dynamodb.Table(settings.dynamodb_table_name)
    table.load()
    logger.info(
        "Connected to DynamoDB table '%s' (%s)",
        settings.dynamodb_table_name,
        settings.dynamodb_endpoint_url or settings.aws_region,
    )
    return table
