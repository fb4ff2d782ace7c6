from decimal import Decimal
from typing import Any

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

# Key attributes never leave the DAO layer
_INTERNAL_KEYS = frozenset({"PK", "SK", "entityType"})


def _to_python(obj: Any) -> Any:
    """Recursively convert DynamoDB Decimal to int / float."""
    if isinstance(obj, Decimal):
        return int(obj) if obj % 1 == 0 else float(obj)
    if isinstance(obj, dict):
        return {k: _to_python(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_to_python(i) for i in obj]
    return obj


def is_condition_failure(exc: ClientError) -> bool:
    """
    True when a write was rejected by its ConditionExpression.

    Single-item writes report ConditionalCheckFailedException; transactions
    report TransactionCanceledException with one reason per item, where any
    ConditionalCheckFailed entry means a guarded item was already there (or
    already gone).
    """
    error = exc.response.get("Error", {})
    code = error.get("Code")
    if code == "ConditionalCheckFailedException":
        return True
    if code != "TransactionCanceledException":
        return False
    reasons = exc.response.get("CancellationReasons") or []
    if any(r.get("Code") == "ConditionalCheckFailed" for r in reasons):
        return True
    return "ConditionalCheckFailed" in error.get("Message", "")


def condition_failed_at(exc: ClientError, index: int) -> bool:
    """True when item `index` of a cancelled transaction failed its condition."""
    reasons = exc.response.get("CancellationReasons") or []
    return len(reasons) > index and reasons[index].get("Code") == "ConditionalCheckFailed"


class BaseDAO:
    def __init__(self, table: Any) -> None:
        self._table = table

    @property
    def table_name(self) -> str:
        return self._table.name

    @property
    def _client(self) -> Any:
        # The resource's client keeps boto3's Python <-> DynamoDB type conversion
        return self._table.meta.client

    def _clean(self, item: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in _to_python(item).items() if k not in _INTERNAL_KEYS}

    def _build_update_expr(
        self, fields: dict[str, Any]
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        """
        Build a SET UpdateExpression from a flat dict of {field: value}.
        All field names are aliased to avoid DynamoDB reserved-word collisions.

        Returns (expression, ExpressionAttributeNames, ExpressionAttributeValues).
        """
        parts: list[str] = []
        names: dict[str, str] = {}
        values: dict[str, Any] = {}

        for i, (key, val) in enumerate(fields.items()):
            n = f"#f{i}"
            v = f":v{i}"
            names[n] = key
            values[v] = val
            parts.append(f"{n} = {v}")

        return "SET " + ", ".join(parts), names, values

    def _item_exists_condition(self) -> Attr:
        return Attr("PK").exists()

    def _scan_all(self, **kwargs: Any) -> list[dict[str, Any]]:
        """Scan every page. DynamoDB caps each page at 1 MB."""
        items: list[dict[str, Any]] = []
        last_key: dict | None = None
        while True:
            if last_key:
                kwargs["ExclusiveStartKey"] = last_key
            resp = self._table.scan(**kwargs)
            items.extend(resp.get("Items", []))
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                break
        return items
