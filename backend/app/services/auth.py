from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AuthenticationFailure, Unauthorized
from app.core.logging import get_logger
from app.models.user import Role, User
from app.schemas.user import TokenUserInfo

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

NO_USER_MESSAGE = "No User Found"
BAD_CREDENTIALS_MESSAGE = "Invalid Credentials, please try again"


@dataclass
class LoginResult:
    user: User
    user_info: TokenUserInfo
    token: str
    redirect_to: str


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_token_user_info(user: User) -> TokenUserInfo:
    return TokenUserInfo.model_validate(user)


def create_user_jwt_token(user: User, expires_delta: timedelta | None = None) -> str:
    info = create_token_user_info(user)
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    claims = {
        "sub": str(info.id),
        "email": info.email,
        "role": info.role.value,
        "exp": expire,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_user_token(token: str) -> TokenUserInfo:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return TokenUserInfo(id=payload["sub"], email=payload["email"], role=payload["role"])
    except (JWTError, KeyError, ValidationError):
        raise Unauthorized("Could not validate credentials")


def redirect_for(role: Role) -> str:
    if role != Role.MEMBER:
        return settings.ADMIN_PATH
    return settings.SHOP_PATH


def authenticate(db: Session, email: str, password: str) -> LoginResult:
    """
    Run the login sequence: lookup, verify, record the login, issue a token.

    Raises AuthenticationFailure (nothing written) when the account is missing
    or the password does not match.
    """
    user = db.query(User).filter_by(email=email).first()
    if not user:
        logger.warning("No User Found. Signin Failed")
        raise AuthenticationFailure(NO_USER_MESSAGE, "unknown email")

    if not verify_password(password, user.hashed_password):
        logger.warning("Invalid Credentials. SignIn Failed (user %s)", user.id)
        raise AuthenticationFailure(BAD_CREDENTIALS_MESSAGE, "password mismatch")

    user.last_login = datetime.now(timezone.utc)
    db.commit()

    user_info = create_token_user_info(user)
    token = create_user_jwt_token(user)
    logger.info("User %s signed in as %s", user.id, user_info.role.value)
    return LoginResult(
        user=user,
        user_info=user_info,
        token=token,
        redirect_to=redirect_for(user_info.role),
    )


def register_member(db: Session, email: str, password: str) -> User | None:
    """Create a MEMBER account; returns None when the email is already taken."""
    if db.query(User).filter_by(email=email).first():
        return None
    user = User(email=email, hashed_password=hash_password(password), role=Role.MEMBER)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered member %s", user.id)
    return user
