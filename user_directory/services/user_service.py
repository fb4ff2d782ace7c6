"""
UserService — the create / read / update / delete contract shared by the
JSON API and the web forms.

Responsibilities:
  - Shape canonical request models into DynamoDB items (ISO dates, default
    country, drop unset fields)
  - Classify DynamoDB failures: a rejected uniqueness condition becomes
    DuplicateUserError, anything else StoreError
  - Seed the sample users on an empty table

Absence is a None return, never an exception. The service knows nothing
about HTTP; each router maps outcomes to its own responses.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from user_directory.core.errors import DuplicateUserError, StoreError, UserDirectoryError
from user_directory.dao.base import is_condition_failure
from user_directory.dao.user_dao import UserDAO
from user_directory.models.user import UserCreateRequest, UserUpdateRequest
from user_directory.services.sample_users import SAMPLE_USERS

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY = "Jordan"


@contextmanager
def _store_errors() -> Iterator[None]:
    try:
        yield
    except ClientError as exc:
        if is_condition_failure(exc):
            raise DuplicateUserError() from exc
        raise StoreError(exc.response.get("Error", {}).get("Message") or str(exc)) from exc
    except BotoCoreError as exc:
        raise StoreError(str(exc)) from exc


class UserService:

    def __init__(self, dao: UserDAO, default_country: str = DEFAULT_COUNTRY) -> None:
        self._dao = dao
        self._default_country = default_country

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _address_item(self, address: dict[str, Any]) -> dict[str, Any]:
        item = {k: v for k, v in address.items() if v is not None}
        if not item.get("country"):
            item["country"] = self._default_country
        return item

    # ── Read ──────────────────────────────────────────────────────────────────

    def list_all(self) -> list[dict[str, Any]]:
        with _store_errors():
            return self._dao.list_all()

    def get(self, user_id: str) -> dict[str, Any] | None:
        with _store_errors():
            return self._dao.get(user_id)

    # ── Write ─────────────────────────────────────────────────────────────────

    def create(self, body: UserCreateRequest) -> dict[str, Any]:
        """Raises DuplicateUserError if the id or email is taken."""
        data = body.model_dump()
        data["dateOfBirth"] = body.dateOfBirth.isoformat()
        data["address"] = self._address_item(data["address"])
        with _store_errors():
            user = self._dao.create(data)
        logger.info("Created user %s", user["userUniqueId"])
        return user

    def update(self, user_id: str, body: UserUpdateRequest) -> dict[str, Any] | None:
        """
        Apply only the fields set on body. Returns the updated user, or None
        if no user has this id. With nothing to apply the current record is
        returned untouched.
        """
        fields = body.model_dump(exclude_none=True)
        if "dateOfBirth" in fields:
            fields["dateOfBirth"] = body.dateOfBirth.isoformat()
        if "address" in fields:
            fields["address"] = self._address_item(fields["address"])
        if not fields:
            return self.get(user_id)

        with _store_errors():
            user = self._dao.update(user_id, fields)
        if user:
            logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(fields)))
        return user

    def delete(self, user_id: str) -> dict[str, Any] | None:
        with _store_errors():
            user = self._dao.delete(user_id)
        if user:
            logger.info("Deleted user %s", user_id)
        return user

    # ── Bootstrap ─────────────────────────────────────────────────────────────

    def seed_if_empty(self) -> int:
        """
        Insert SAMPLE_USERS when the table holds no user at all. Any existing
        user, whatever its id, skips seeding. Returns how many were added;
        per-user failures are logged and skipped.
        """
        with _store_errors():
            empty = self._dao.is_empty()
        if not empty:
            logger.info("Users already present, skipping sample data")
            return 0

        added = 0
        for sample in SAMPLE_USERS:
            try:
                self.create(UserCreateRequest.model_validate(sample))
                added += 1
            except UserDirectoryError as exc:
                logger.error("Error adding sample user %s: %s", sample["userUniqueId"], exc)
        logger.info("Added %d sample users to the database", added)
        return added
