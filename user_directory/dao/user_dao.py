"""
UserDAO

DynamoDB layout:
  PK = USER#<userUniqueId>    SK = PROFILE    the user record
  PK = EMAIL#<userEmail>      SK = UNIQUE     claim item enforcing email uniqueness

The profile and its email claim are always written together in one
TransactWriteItems call, each guarded by attribute_not_exists(PK), so a
taken id or a taken email cancels the whole insert. Deletes and email
changes release the claim in the same transaction as the profile write.
"""

from datetime import datetime, timezone
from typing import Any

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from user_directory.dao.base import BaseDAO, condition_failed_at

_NOT_EXISTS = "attribute_not_exists(PK)"
_EXISTS = "attribute_exists(PK)"
# A claim may only be released by the user holding it
_OWNED_CLAIM = "attribute_not_exists(PK) OR userUniqueId = :uid"


class UserDAO(BaseDAO):

    SK = "PROFILE"
    EMAIL_SK = "UNIQUE"

    @staticmethod
    def _pk(user_id: str) -> str:
        return f"USER#{user_id}"

    @staticmethod
    def _email_pk(email: str) -> str:
        return f"EMAIL#{email}"

    def _key(self, user_id: str) -> dict[str, str]:
        return {"PK": self._pk(user_id), "SK": self.SK}

    def _email_key(self, email: str) -> dict[str, str]:
        return {"PK": self._email_pk(email), "SK": self.EMAIL_SK}

    def _email_claim(self, email: str, user_id: str) -> dict[str, Any]:
        return {
            **self._email_key(email),
            "entityType": "USER_EMAIL",
            "userUniqueId": user_id,
        }

    # ── Write ─────────────────────────────────────────────────────────────────

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a user and claim its email.

        Required in data: userUniqueId, userName, userEmail, userAge,
                          dateOfBirth, address
        Raises ClientError (TransactionCanceledException) if the id or the
        email is already taken.
        """
        now = datetime.now(timezone.utc).isoformat()
        user_id = data["userUniqueId"]
        item = {
            **self._key(user_id),
            "entityType": "USER",
            "userUniqueId": user_id,
            "userName": data["userName"],
            "userEmail": data["userEmail"],
            "userAge": data["userAge"],
            "dateOfBirth": data["dateOfBirth"],
            "address": data["address"],
            "createdAt": now,
            "updatedAt": now,
        }
        self._client.transact_write_items(
            TransactItems=[
                {
                    "Put": {
                        "TableName": self.table_name,
                        "Item": item,
                        "ConditionExpression": _NOT_EXISTS,
                    }
                },
                {
                    "Put": {
                        "TableName": self.table_name,
                        "Item": self._email_claim(data["userEmail"], user_id),
                        "ConditionExpression": _NOT_EXISTS,
                    }
                },
            ]
        )
        return self._clean(item)

    def update(self, user_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        """
        SET only the given fields. Returns the updated user, or None if
        no user has this id.

        When userEmail changes, the old claim is dropped and the new one put
        in the same transaction as the profile update; a taken email raises
        ClientError (TransactionCanceledException). The profile write is
        guarded on the email read here, so a concurrent email change makes
        the transaction re-read and try again.
        """
        while True:
            current = self.get(user_id)
            if not current:
                return None

            changes = {**fields, "updatedAt": datetime.now(timezone.utc).isoformat()}
            expr, names, values = self._build_update_expr(changes)
            new_email = changes.get("userEmail")

            if new_email is None or new_email == current["userEmail"]:
                try:
                    resp = self._table.update_item(
                        Key=self._key(user_id),
                        UpdateExpression=expr,
                        ExpressionAttributeNames=names,
                        ExpressionAttributeValues=values,
                        ConditionExpression=self._item_exists_condition(),
                        ReturnValues="ALL_NEW",
                    )
                except ClientError as exc:
                    # Deleted between the read and the write
                    if exc.response["Error"]["Code"] == "ConditionalCheckFailedException":
                        return None
                    raise
                return self._clean(resp["Attributes"])

            try:
                self._client.transact_write_items(
                    TransactItems=[
                        {
                            "Update": {
                                "TableName": self.table_name,
                                "Key": self._key(user_id),
                                "UpdateExpression": expr,
                                "ExpressionAttributeNames": names,
                                "ExpressionAttributeValues": {
                                    **values,
                                    ":old": current["userEmail"],
                                },
                                "ConditionExpression": f"{_EXISTS} AND userEmail = :old",
                            }
                        },
                        {
                            "Delete": {
                                "TableName": self.table_name,
                                "Key": self._email_key(current["userEmail"]),
                                "ConditionExpression": _OWNED_CLAIM,
                                "ExpressionAttributeValues": {":uid": user_id},
                            }
                        },
                        {
                            "Put": {
                                "TableName": self.table_name,
                                "Item": self._email_claim(new_email, user_id),
                                "ConditionExpression": _NOT_EXISTS,
                            }
                        },
                    ]
                )
            except ClientError as exc:
                if condition_failed_at(exc, 0):
                    continue
                raise
            return self.get(user_id)

    def delete(self, user_id: str) -> dict[str, Any] | None:
        """
        Delete the user and release its email in one transaction.
        Returns the deleted user or None.
        """
        while True:
            current = self.get(user_id)
            if not current:
                return None
            try:
                self._client.transact_write_items(
                    TransactItems=[
                        {
                            "Delete": {
                                "TableName": self.table_name,
                                "Key": self._key(user_id),
                                "ConditionExpression": f"{_EXISTS} AND userEmail = :email",
                                "ExpressionAttributeValues": {":email": current["userEmail"]},
                            }
                        },
                        {
                            "Delete": {
                                "TableName": self.table_name,
                                "Key": self._email_key(current["userEmail"]),
                                "ConditionExpression": _OWNED_CLAIM,
                                "ExpressionAttributeValues": {":uid": user_id},
                            }
                        },
                    ]
                )
            except ClientError as exc:
                # Removed or re-emailed since the read
                if condition_failed_at(exc, 0):
                    continue
                raise
            return current

    # ── Read ──────────────────────────────────────────────────────────────────

    def get(self, user_id: str) -> dict[str, Any] | None:
        resp = self._table.get_item(Key=self._key(user_id))
        item = resp.get("Item")
        return self._clean(item) if item else None

    def list_all(self) -> list[dict[str, Any]]:
        """Every user, in scan order. Email claim items are filtered out."""
        items = self._scan_all(FilterExpression=Attr("entityType").eq("USER"))
        return [self._clean(item) for item in items]

    def is_empty(self) -> bool:
        """True when no user item exists. Stops at the first page holding one."""
        kwargs: dict[str, Any] = {
            "FilterExpression": Attr("entityType").eq("USER"),
            "ProjectionExpression": "PK, entityType",
        }
        while True:
            resp = self._table.scan(**kwargs)
            if resp.get("Items"):
                return False
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                return True
            kwargs["ExclusiveStartKey"] = last_key
