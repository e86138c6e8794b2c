from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.logging import get_logger

logger = get_logger(__name__)


class StoreError(Exception):
    """Base for errors that map onto an HTTP status."""

    status_code = 500
    message = "Server Error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def body(self) -> dict:
        return {"message": self.message}


class InvalidIdentifier(StoreError):
    # 503 is the status existing clients rely on for a non-numeric id
    status_code = 503
    message = "Id must be a number, please try again"


class IdentifierOutOfRange(InvalidIdentifier):
    """Numeric, but outside what the id column can hold."""


class NotFound(StoreError):
    status_code = 404
    message = "No product was found"


class NormalizationError(StoreError):
    status_code = 400

    def __init__(self, field: str, reason: str = "is invalid"):
        self.field = field
        super().__init__(f"{field} {reason}")

    def body(self) -> dict:
        return {"message": self.message, "field": self.field}


class PersistenceFailure(StoreError):
    status_code = 500

    def body(self) -> dict:
        return {"error": "Server Error"}


class Unauthorized(StoreError):
    status_code = 401
    message = "Not authenticated"


class Forbidden(StoreError):
    status_code = 403
    message = "Insufficient role"


class AuthenticationFailure(Exception):
    """Bad credentials or unknown account; carries the flash text shown to the user."""

    def __init__(self, flash_message: str, reason: str):
        super().__init__(reason)
        self.flash_message = flash_message
        self.reason = reason


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
        return JSONResponse(status_code=exc.status_code, content=exc.body(), headers=headers)

    @app.exception_handler(SQLAlchemyError)
    async def persistence_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Unhandled persistence error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Server Error"})
