"""
FastAPI dependency functions shared across all route modules.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from user_directory.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    """
    Return the UserService built at startup.

    The lifespan in main.py owns the DynamoDB table and attaches the
    service to app.state; routes never open their own connection.
    """
    return request.app.state.user_service


# ── Convenient type aliases for route signatures ───────────────────────────────

UserServiceDep = Annotated[UserService, Depends(get_user_service)]
