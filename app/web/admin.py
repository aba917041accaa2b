"""Admin web interface routes."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import AuthContext, DbSession, resolve_token
from app.core.errors import AppError, AuthError, NotFoundError
from app.core.settings import settings
from app.schemas.auth import LiveCheckRequest, LiveCheckResponse
from app.services.account_service import AccountService
from app.services.check_scheduler import CheckScheduler
from app.services.user_service import UserService
from app.web.forms import ENTITY_FORMS, EntityForm, describe_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], include_in_schema=False)
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

TOKEN_COOKIE = "access_token"

# One pending availability check per admin and field
check_scheduler = CheckScheduler()


async def get_admin_context(request: Request, db: AsyncSession) -> Optional[AuthContext]:
    """Resolve the token stored in the admin cookie, or None if not logged in."""
    try:
        return await resolve_token(db, request.cookies.get(TOKEN_COOKIE))
    except AppError:
        return None


def _login_redirect() -> RedirectResponse:
    return RedirectResponse(url="/admin/login", status_code=status.HTTP_303_SEE_OTHER)


def _entity_or_404(slug: str) -> EntityForm:
    entity = ENTITY_FORMS.get(slug)
    if entity is None:
        raise NotFoundError("Page not found")
    return entity


def _list_redirect(entity: EntityForm, message: str) -> RedirectResponse:
    return RedirectResponse(
        url=f"/admin/{entity.slug}?" + urlencode({"message": message}),
        status_code=status.HTTP_303_SEE_OTHER,
    )


def _nav() -> list:
    return [(form.slug, form.title) for form in ENTITY_FORMS.values()]


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request):
    """Login form."""
    context = {"title": "Sign in", "error": None, "username": ""}
    return templates.TemplateResponse(request, "admin/login.html", context)


@router.post("/login", response_class=HTMLResponse)
async def login_submit(request: Request, db: DbSession):
    """Check credentials and keep the issued token in an HttpOnly cookie."""
    form = await request.form()
    username = str(form.get("username") or "")
    password = str(form.get("password") or "")

    try:
        token = await AccountService(db).authenticate(username, password)
    except AppError as exc:
        context = {"title": "Sign in", "error": exc.message, "username": username}
        return templates.TemplateResponse(
            request, "admin/login.html", context, status_code=exc.status_code
        )

    response = RedirectResponse(url="/admin/", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        httponly=True,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60,
    )
    return response


@router.get("/logout")
async def logout():
    response = _login_redirect()
    response.delete_cookie(TOKEN_COOKIE)
    return response


@router.post("/check/{field}", response_model=LiveCheckResponse)
async def live_check(request: Request, field: str, data: LiveCheckRequest, db: DbSession):
    """Availability check fired on every keystroke of a form field.

    Checks wait for the debounce delay; a newer value for the same field
    supersedes the pending one, which then answers ``superseded``.
    """
    auth = await get_admin_context(request, db)
    if auth is None:
        raise AuthError("Missing or invalid token")

    accounts = AccountService(db)
    if field == "username":
        check = accounts.check_username
    elif field == "email":
        check = accounts.check_email
    else:
        raise NotFoundError(f"No availability check for '{field}'")

    value = data.value.strip()
    result = await check_scheduler.run(f"{auth.user.id}:{field}", lambda: check(value))
    if result is None:
        return LiveCheckResponse(superseded=True)
    return LiveCheckResponse(available=result.available, message=result.message)


@router.get("/", response_class=HTMLResponse)
async def admin_dashboard(request: Request, db: DbSession):
    """Admin dashboard."""
    auth = await get_admin_context(request, db)
    if auth is None:
        return _login_redirect()

    service = UserService(db)
    context = {
        "title": "Dashboard",
        "nav": _nav(),
        "current_user": auth.user,
        "stats": await service.stats(),
        "recent_users": await service.recent(),
    }
    return templates.TemplateResponse(request, "admin/dashboard.html", context)


@router.get("/{slug}", response_class=HTMLResponse)
async def admin_list(request: Request, slug: str, db: DbSession):
    """List page for any entity."""
    auth = await get_admin_context(request, db)
    if auth is None:
        return _login_redirect()

    entity = _entity_or_404(slug)
    records = await entity.service(db).list()
    rows = [
        {"id": record.id, "cells": [accessor(record) for _, accessor in entity.columns]}
        for record in records
    ]
    context = {
        "title": entity.title,
        "nav": _nav(),
        "current_user": auth.user,
        "entity": entity,
        "rows": rows,
        "message": request.query_params.get("message"),
    }
    return templates.TemplateResponse(request, "admin/list.html", context)


async def _render_form(
    request: Request,
    db: AsyncSession,
    auth: AuthContext,
    entity: EntityForm,
    values: Dict[str, Any],
    record_id: Optional[int] = None,
    error: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
):
    creating = record_id is None
    context = {
        "title": f"{'New' if creating else 'Edit'} {entity.singular}",
        "nav": _nav(),
        "current_user": auth.user,
        "entity": entity,
        "fields": entity.visible_fields(creating),
        "choices": await entity.load_choices(db),
        "values": values,
        "record_id": record_id,
        "creating": creating,
        "error": error,
    }
    return templates.TemplateResponse(
        request, "admin/form.html", context, status_code=status_code
    )


async def _save(
    request: Request,
    db: AsyncSession,
    auth: AuthContext,
    entity: EntityForm,
    record_id: Optional[int] = None,
) -> Response:
    """Validate and persist a submitted form; re-render it with a banner on error."""
    creating = record_id is None
    form = await request.form()
    values = entity.submitted_values(form, creating)

    try:
        data = entity.parse(values, creating)
        service = entity.service(db)
        if creating:
            await service.create(data)
        else:
            extra = {}
            if entity.upload_field and getattr(form.get(entity.upload_field), "filename", None):
                extra[entity.upload_field] = form.get(entity.upload_field)
            await service.update(record_id, data, **extra)
    except SchemaValidationError as exc:
        return await _render_form(
            request, db, auth, entity, values, record_id,
            error=describe_errors(entity, exc), status_code=status.HTTP_400_BAD_REQUEST,
        )
    except AppError as exc:
        return await _render_form(
            request, db, auth, entity, values, record_id,
            error=exc.message, status_code=exc.status_code,
        )
    except IntegrityError:
        await db.rollback()
        await db.refresh(auth.user)
        return await _render_form(
            request, db, auth, entity, values, record_id,
            error="A unique value is already in use", status_code=status.HTTP_400_BAD_REQUEST,
        )

    action = "created" if creating else "updated"
    logger.info(f"Admin {auth.user.username} {action} {entity.singular}")
    return _list_redirect(entity, f"{entity.singular.capitalize()} {action}")


@router.get("/{slug}/new", response_class=HTMLResponse)
async def admin_new(request: Request, slug: str, db: DbSession):
    auth = await get_admin_context(request, db)
    if auth is None:
        return _login_redirect()
    entity = _entity_or_404(slug)
    return await _render_form(request, db, auth, entity, values={})


@router.post("/{slug}/new", response_class=HTMLResponse)
async def admin_create(request: Request, slug: str, db: DbSession):
    auth = await get_admin_context(request, db)
    if auth is None:
        return _login_redirect()
    return await _save(request, db, auth, _entity_or_404(slug))


@router.get("/{slug}/{record_id}/edit", response_class=HTMLResponse)
async def admin_edit(request: Request, slug: str, record_id: int, db: DbSession):
    auth = await get_admin_context(request, db)
    if auth is None:
        return _login_redirect()
    entity = _entity_or_404(slug)
    try:
        record = await entity.service(db).get(record_id)
    except NotFoundError as exc:
        return _list_redirect(entity, exc.message)
    return await _render_form(
        request, db, auth, entity, entity.initial_values(record), record_id
    )


@router.post("/{slug}/{record_id}/edit", response_class=HTMLResponse)
async def admin_update(request: Request, slug: str, record_id: int, db: DbSession):
    auth = await get_admin_context(request, db)
    if auth is None:
        return _login_redirect()
    return await _save(request, db, auth, _entity_or_404(slug), record_id)


@router.post("/{slug}/{record_id}/delete")
async def admin_delete(request: Request, slug: str, record_id: int, db: DbSession):
    auth = await get_admin_context(request, db)
    if auth is None:
        return _login_redirect()
    entity = _entity_or_404(slug)
    try:
        await entity.service(db).delete(record_id)
    except NotFoundError as exc:
        return _list_redirect(entity, exc.message)
    logger.info(f"Admin {auth.user.username} deleted {entity.singular} {record_id}")
    return _list_redirect(entity, f"{entity.singular.capitalize()} deleted")
