"""
Browser form input.

The HTML forms post a flat field set (street, city, ... next to the user
fields). UserForm collects it and converts it to the same request models
the JSON API receives, so the service only ever sees one shape.
Blank inputs count as "not supplied".
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from user_directory.core.errors import UserValidationError, format_validation_errors
from user_directory.models.user import UserCreateRequest, UserUpdateRequest

ADDRESS_FIELDS = ("street", "city", "state", "zipCode", "country")


def _without_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


class UserForm(BaseModel):
    userUniqueId: str | None = None
    userName: str | None = None
    userEmail: str | None = None
    userAge: str | None = None
    dateOfBirth: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipCode: str | None = None
    country: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    def _address(self) -> dict[str, Any]:
        return _without_none({f: getattr(self, f) for f in ADDRESS_FIELDS})

    def _user_fields(self) -> dict[str, Any]:
        return _without_none(
            {
                "userName": self.userName,
                "userEmail": self.userEmail,
                "userAge": self.userAge,
                "dateOfBirth": self.dateOfBirth,
            }
        )

    def to_create_request(self) -> UserCreateRequest:
        """Raises UserValidationError when a required field is missing or malformed."""
        data = self._user_fields()
        if self.userUniqueId is not None:
            data["userUniqueId"] = self.userUniqueId
        data["address"] = self._address()
        try:
            return UserCreateRequest.model_validate(data)
        except ValidationError as exc:
            raise UserValidationError(format_validation_errors(exc.errors())) from exc

    def to_update_request(self) -> UserUpdateRequest:
        """
        Only non-blank fields are carried over. The address is replaced as a
        whole when any one of its fields is filled in.
        """
        data = self._user_fields()
        address = self._address()
        if address:
            data["address"] = address
        try:
            return UserUpdateRequest.model_validate(data)
        except ValidationError as exc:
            raise UserValidationError(format_validation_errors(exc.errors())) from exc
