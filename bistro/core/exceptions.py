"""
Application error taxonomy and FastAPI exception handlers

Every failure leaves the API as ``{"status", "title", "message"}``.
"""

from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "The server encountered an unexpected condition"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def title(self) -> str:
        return HTTPStatus(self.status_code).phrase


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid body data"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "The request requires user authentication"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to access this resource"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "The requested resource could not be found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "The request conflicts with the current state of the resource"


class ServerError(AppError):
    pass


class InsufficientCapacityError(ConflictError):
    """No combination of free tables can seat the party"""

    default_message = "Guests exceed our capacity"

    def __init__(self, guests: int, capacity: int, message: Optional[str] = None):
        self.guests = guests
        self.capacity = capacity
        super().__init__(message)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status": status_code,
            "title": HTTPStatus(status_code).phrase,
            "message": message,
        },
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Server error", path=request.url.path, error=exc.message)
    else:
        logger.info("Client error", path=request.url.path, status=exc.status_code, error=exc.message)
    return _error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Validation error", path=request.url.path, errors=exc.errors())
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid body data")


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # Plain function: SlowAPIMiddleware calls it without awaiting
    logger.info("Rate limit exceeded", path=request.url.path, limit=str(exc.detail))
    return _error_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        "Too many requests, please try again later",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception", path=request.url.path, exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        AppError.default_message,
    )


EXCEPTION_HANDLERS = {
    AppError: app_error_handler,
    StarletteHTTPException: http_exception_handler,
    RequestValidationError: validation_error_handler,
    RateLimitExceeded: rate_limit_exceeded_handler,
    Exception: unhandled_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
