"""
Domain exceptions and their HTTP mapping.

Services raise these instead of HTTPException so the booking and OTP logic
can be exercised without a request. `register_exception_handlers` turns them
into the JSON error envelope the frontend expects:

    {"success": false, "error": "<code>", "message": "<text>"}
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from eventz.core.logging import get_logger

logger = get_logger(__name__)


class EventzError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"success": False, "error": self.code, "message": self.message}


class ValidationError(EventzError):
    """Missing or malformed caller input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class AuthenticationError(EventzError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "authentication_failed"


class PermissionDeniedError(EventzError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "permission_denied"


class NotFoundError(EventzError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ConflictError(EventzError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class BookingConflictError(ConflictError):
    """Booking row changed between read and write."""

    code = "booking_conflict"


class InvalidTokenError(EventzError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_token"


class ExpiredError(EventzError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "token_expired"


class CouponExpiredError(EventzError):
    status_code = status.HTTP_410_GONE
    code = "coupon_expired"


class PersistenceError(EventzError):
    """The database is unreachable or rejected the statement."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "persistence_error"


async def eventz_error_handler(request: Request, exc: EventzError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("database_error", error=str(exc), path=request.url.path)
    error = PersistenceError("Database operation failed")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EventzError, eventz_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
