import json
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.api.deps import FORM_MEDIA_TYPES, body_media_type, is_json_media_type
from app.core.config import settings
from app.core.db import get_db
from app.core.errors import AuthenticationFailure
from app.core.logging import get_logger
from app.schemas.user import LoginForm, RegisterForm
from app.services.auth import authenticate, register_member
from app.services.flash import flash, get_flashed_messages

logger = get_logger(__name__)

router = APIRouter(prefix="/login", tags=["users"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))

LOGIN_MESSAGE = "loginMessage"
MISSING_CREDENTIALS_MESSAGE = "Email and password are required"


def _redirect(path: str) -> RedirectResponse:
    return RedirectResponse(url=path, status_code=302)


async def _read_fields(request: Request) -> dict:
    media_type = body_media_type(request)
    if is_json_media_type(media_type):
        try:
            data = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {}
        return data if isinstance(data, dict) else {}
    if media_type in FORM_MEDIA_TYPES or not media_type:
        form = await request.form()
        return dict(form)
    # anything else reads as missing credentials
    return {}


def _render(request: Request, title: str, page: str):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": title,
            "page": page,
            "messages": get_flashed_messages(request, LOGIN_MESSAGE),
        },
    )


@router.get("")
def login_page(request: Request):
    return _render(request, "Login", "login")


@router.get("/register")
def register_page(request: Request):
    return _render(request, "Register", "register")


@router.post("")
def login(request: Request, fields: dict = Depends(_read_fields), db: Session = Depends(get_db)):
    try:
        credentials = LoginForm.model_validate(fields)
    except ValidationError:
        flash(request, LOGIN_MESSAGE, MISSING_CREDENTIALS_MESSAGE)
        return _redirect(settings.LOGIN_PATH)

    try:
        result = authenticate(db, credentials.email, credentials.password)
    except AuthenticationFailure as exc:
        flash(request, LOGIN_MESSAGE, exc.flash_message)
        return _redirect(settings.LOGIN_PATH)

    response = _redirect(result.redirect_to)
    # the token goes back to the browser; nothing is kept server-side
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=result.token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.post("/register")
def register(request: Request, fields: dict = Depends(_read_fields), db: Session = Depends(get_db)):
    try:
        form = RegisterForm.model_validate(fields)
    except ValidationError:
        flash(request, LOGIN_MESSAGE, MISSING_CREDENTIALS_MESSAGE)
        return _redirect(f"{settings.LOGIN_PATH}/register")

    if register_member(db, form.email, form.password) is None:
        logger.warning("Registration refused, email already registered")
        flash(request, LOGIN_MESSAGE, "Email already registered")
        return _redirect(f"{settings.LOGIN_PATH}/register")

    flash(request, LOGIN_MESSAGE, "Account created, please log in")
    return _redirect(settings.LOGIN_PATH)
