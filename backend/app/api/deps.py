from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.core.errors import Forbidden, Unauthorized
from app.models.user import Role, User
from app.schemas.user import TokenUserInfo
from app.services.auth import create_token_user_info, decode_user_token

bearer_scheme = HTTPBearer(auto_error=False)

FORM_MEDIA_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def body_media_type(request: Request) -> str:
    """Lower-cased media type of the request body, parameters stripped."""
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()


def is_json_media_type(media_type: str) -> bool:
    return media_type == "application/json" or media_type.endswith("+json")


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> TokenUserInfo:
    # header first, then the cookie set by the login flow
    token = credentials.credentials if credentials else request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise Unauthorized()
    claims = decode_user_token(token)

    # the stored role wins over the one baked into the token
    user = db.get(User, claims.id)
    if user is None:
        raise Unauthorized("Account no longer exists")
    return create_token_user_info(user)


def require_role(min_role: Role):
    """Dependency factory: allow callers whose role ranks at least min_role."""

    def checker(current: TokenUserInfo = Depends(get_current_user)) -> TokenUserInfo:
        if current.role.rank < min_role.rank:
            raise Forbidden()
        return current

    return checker
