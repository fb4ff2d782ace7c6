"""
Create (or verify) the UserDirectory DynamoDB table.

Usage:
    # Against real AWS (reads credentials from env / ~/.aws)
    poetry run python scripts/create_table.py

    # Against DynamoDB Local (docker run -p 8000:8000 amazon/dynamodb-local)
    poetry run python scripts/create_table.py --local
"""

import argparse
import sys

from botocore.exceptions import ClientError

from user_directory.core.config import get_settings
from user_directory.core.database import create_table, get_client, table_exists

LOCAL_ENDPOINT = "http://localhost:8000"


# ── Helpers ───────────────────────────────────────────────────────────────────

def print_table_summary(client, table_name: str) -> None:
    desc = client.describe_table(TableName=table_name)["Table"]
    print(f"\nTable:  {desc['TableName']}")
    print(f"Status: {desc['TableStatus']}")
    print(f"ARN:    {desc['TableArn']}")
    print(f"Items:  {desc.get('ItemCount', 0)}")


# ── Main ──────────────────────────────────────────────────────────────────────

def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create the UserDirectory DynamoDB table.")
    parser.add_argument(
        "--local",
        action="store_true",
        help=f"Target DynamoDB Local at {LOCAL_ENDPOINT} (overrides DYNAMODB_ENDPOINT_URL)",
    )
    parser.add_argument(
        "--table-name",
        default=settings.dynamodb_table_name,
        help=f"Override table name (default: {settings.dynamodb_table_name})",
    )
    args = parser.parse_args()

    if args.local:
        settings = settings.model_copy(update={"dynamodb_endpoint_url": LOCAL_ENDPOINT})

    client = get_client(settings)
    target = settings.dynamodb_endpoint_url or f"AWS DynamoDB ({settings.aws_region})"
    print(f"Target: {target}")
    print(f"Table:  {args.table_name}\n")

    if table_exists(client, args.table_name):
        print(f"Table '{args.table_name}' already exists — skipping creation.")
        print_table_summary(client, args.table_name)
        sys.exit(0)

    print(f"Creating table '{args.table_name}' …")
    try:
        create_table(client, args.table_name)
    except ClientError as e:
        print(f"ERROR: {e.response['Error']['Message']}", file=sys.stderr)
        sys.exit(1)

    print_table_summary(client, args.table_name)
    print("\nDone. Table is ready.")


if __name__ == "__main__":
    main()
