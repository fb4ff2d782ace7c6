"""
Browser routes — mounted at /

Every route answers with the full listing page. Failures are logged and
never shown to the browser: the page always reflects what is stored now.
"""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from user_directory.api.deps import UserServiceDep
from user_directory.core.errors import DuplicateUserError, StoreError, UserDirectoryError
from user_directory.models.forms import UserForm
from user_directory.services.user_service import UserService

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()

UserFormData = Annotated[UserForm, Form()]


def _render_listing(request: Request, svc: UserService) -> HTMLResponse:
    try:
        users = svc.list_all()
    except StoreError as exc:
        logger.error("Error fetching users: %s", exc)
        users = []
    return templates.TemplateResponse(request, "home.html", {"data": users})


# ── GET /  ────────────────────────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse, summary="User listing page")
def home(request: Request, svc: UserServiceDep) -> HTMLResponse:
    return _render_listing(request, svc)


# ── POST /  ───────────────────────────────────────────────────────────────────

@router.post("/", response_class=HTMLResponse, summary="Add user from form")
def add_user(request: Request, form: UserFormData, svc: UserServiceDep) -> HTMLResponse:
    try:
        svc.create(form.to_create_request())
    except DuplicateUserError as exc:
        logger.warning("Error adding user %s: %s", form.userUniqueId, exc)
    except UserDirectoryError as exc:
        logger.error("Error adding user %s: %s", form.userUniqueId, exc)
    return _render_listing(request, svc)


# ── POST /delete  ─────────────────────────────────────────────────────────────

@router.post("/delete", response_class=HTMLResponse, summary="Delete user from form")
def delete_user(request: Request, form: UserFormData, svc: UserServiceDep) -> HTMLResponse:
    if not form.userUniqueId:
        logger.warning("Delete submitted without userUniqueId")
        return _render_listing(request, svc)
    try:
        if svc.delete(form.userUniqueId) is None:
            logger.info("Delete: no user %s", form.userUniqueId)
    except UserDirectoryError as exc:
        logger.error("Error deleting user %s: %s", form.userUniqueId, exc)
    return _render_listing(request, svc)


# ── POST /update  ─────────────────────────────────────────────────────────────

@router.post("/update", response_class=HTMLResponse, summary="Update user from form")
def update_user(request: Request, form: UserFormData, svc: UserServiceDep) -> HTMLResponse:
    """Blank inputs leave the stored value alone."""
    if not form.userUniqueId:
        logger.warning("Update submitted without userUniqueId")
        return _render_listing(request, svc)
    try:
        if svc.update(form.userUniqueId, form.to_update_request()) is None:
            logger.info("Update: no user %s", form.userUniqueId)
    except UserDirectoryError as exc:
        logger.error("Error updating user %s: %s", form.userUniqueId, exc)
    return _render_listing(request, svc)
