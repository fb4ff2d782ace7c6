"""
Users JSON API — mounted at /api/users

Every response uses the envelope {success, ...}; failures are raised as
ApiError and rendered as {success: false, error} by main.py.

  not found       → 404
  duplicate key   → 400
  other failures  → 500 on reads and deletes, 400 on creates and updates
"""

from fastapi import APIRouter, status

from user_directory.api.deps import UserServiceDep
from user_directory.core.errors import ApiError, StoreError, UserDirectoryError
from user_directory.models.user import (
    ErrorResponse,
    UserCreateRequest,
    UserDataResponse,
    UserListResponse,
    UserMessageResponse,
    UserUpdateRequest,
)

router = APIRouter()

NOT_FOUND = "User not found"

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


# ── GET /api/users  ───────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=UserListResponse,
    responses=_ERRORS,
    summary="List users",
)
def list_users(svc: UserServiceDep) -> UserListResponse:
    """Return every user, unordered and unpaginated."""
    try:
        users = svc.list_all()
    except StoreError as exc:
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    return UserListResponse(count=len(users), data=users)


# ── POST /api/users  ──────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=UserMessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Create user",
)
def create_user(body: UserCreateRequest, svc: UserServiceDep) -> UserMessageResponse:
    try:
        user = svc.create(body)
    except UserDirectoryError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(exc))
    return UserMessageResponse(message="User created successfully", data=user)


# ── GET /api/users/{userUniqueId}  ────────────────────────────────────────────

@router.get(
    "/{userUniqueId}",
    response_model=UserDataResponse,
    responses=_ERRORS,
    summary="Get user",
)
def get_user(userUniqueId: str, svc: UserServiceDep) -> UserDataResponse:
    try:
        user = svc.get(userUniqueId)
    except StoreError as exc:
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    if not user:
        raise ApiError(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    return UserDataResponse(data=user)


# ── PUT /api/users/{userUniqueId}  ────────────────────────────────────────────

@router.put(
    "/{userUniqueId}",
    response_model=UserMessageResponse,
    responses=_ERRORS,
    summary="Update user",
)
def update_user(
    userUniqueId: str,
    body: UserUpdateRequest,
    svc: UserServiceDep,
) -> UserMessageResponse:
    """Update any subset of fields. A supplied address replaces the stored one."""
    try:
        user = svc.update(userUniqueId, body)
    except UserDirectoryError as exc:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(exc))
    if not user:
        raise ApiError(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    return UserMessageResponse(message="User updated successfully", data=user)


# ── DELETE /api/users/{userUniqueId}  ─────────────────────────────────────────

@router.delete(
    "/{userUniqueId}",
    response_model=UserMessageResponse,
    responses=_ERRORS,
    summary="Delete user",
)
def delete_user(userUniqueId: str, svc: UserServiceDep) -> UserMessageResponse:
    try:
        user = svc.delete(userUniqueId)
    except UserDirectoryError as exc:
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    if not user:
        raise ApiError(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    return UserMessageResponse(message="User deleted successfully", data=user)
