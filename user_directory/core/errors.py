"""
Error taxonomy shared by the service layer and both request surfaces.

Not-found is not an exception: lookups return None and each surface
decides what absence means (404 for the API, a no-op for the web forms).
"""

from __future__ import annotations

from typing import Any


class UserDirectoryError(Exception):
    """Base class for every failure the service layer reports."""


class DuplicateUserError(UserDirectoryError):
    """userUniqueId or userEmail is already taken."""

    def __init__(self, message: str = "User with this ID or email already exists") -> None:
        super().__init__(message)


class UserValidationError(UserDirectoryError):
    """Input could not be turned into a valid User request."""


class StoreError(UserDirectoryError):
    """Any other DynamoDB / botocore failure. The message is the driver's."""


class ApiError(Exception):
    """
    Raised by JSON API routes. Rendered by the exception handler in main.py
    as the {"success": false, "error": ...} envelope.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def format_validation_errors(errors: list[dict[str, Any]]) -> str:
    """
    Flatten pydantic / FastAPI validation errors into one message, e.g.
    "address.street: Field required; dateOfBirth: Input should be a valid date".
    The leading "body" segment FastAPI adds to request-body errors is dropped.
    """
    parts: list[str] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        msg = err.get("msg", "Invalid value")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"
