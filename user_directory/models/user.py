"""
Pydantic schemas for the User module.

Create and update requests are the canonical input shape: the JSON API
parses them straight from the body, the web forms build them through
UserForm (models/forms.py). The service turns them into DynamoDB items.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import BaseModel, StringConstraints, field_validator

# Required text: surrounding whitespace is stripped, nothing left is an error
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _age_as_text(value: Any) -> Any:
    """userAge is stored as text; accept a JSON number too."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# ── Address ───────────────────────────────────────────────────────────────────

class Address(BaseModel):
    """Required on create. country falls back to the configured default."""
    street: NonBlankStr
    city: NonBlankStr
    state: NonBlankStr
    zipCode: NonBlankStr
    country: str | None = None

    @field_validator("country", mode="before")
    @classmethod
    def blank_country(cls, value: Any) -> Any:
        return _blank_to_none(value)


class AddressUpdate(BaseModel):
    """Replaces the whole stored address; no sub-field is required, blanks are dropped."""
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipCode: str | None = None
    country: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class AddressResponse(BaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipCode: str | None = None
    country: str | None = None


# ── Requests ──────────────────────────────────────────────────────────────────

class UserCreateRequest(BaseModel):
    userUniqueId: NonBlankStr
    userName: NonBlankStr
    userEmail: NonBlankStr
    userAge: NonBlankStr
    dateOfBirth: date
    address: Address

    @field_validator("userAge", mode="before")
    @classmethod
    def age_as_text(cls, value: Any) -> Any:
        return _age_as_text(value)


class UserUpdateRequest(BaseModel):
    """
    Only supplied fields are written. Omit a field to leave it unchanged.
    A supplied name, email or age must not be blank; a blank dateOfBirth or
    address counts as not supplied.
    """
    userName: NonBlankStr | None = None
    userEmail: NonBlankStr | None = None
    userAge: NonBlankStr | None = None
    dateOfBirth: date | None = None
    address: AddressUpdate | None = None

    @field_validator("userAge", mode="before")
    @classmethod
    def age_as_text(cls, value: Any) -> Any:
        return _age_as_text(value)

    @field_validator("dateOfBirth", "address", mode="before")
    @classmethod
    def blank_is_unset(cls, value: Any) -> Any:
        return _blank_to_none(value)


# ── Responses ─────────────────────────────────────────────────────────────────

class UserResponse(BaseModel):
    userUniqueId: str
    userName: str
    userEmail: str
    userAge: str
    dateOfBirth: date
    address: AddressResponse
    createdAt: str
    updatedAt: str


class UserListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[UserResponse]


class UserDataResponse(BaseModel):
    success: bool = True
    data: UserResponse


class UserMessageResponse(BaseModel):
    success: bool = True
    message: str
    data: UserResponse


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
