"""
API error types and the exception handlers that render them.

Every error leaves the API as ``{"message": ...}``.  Store failures are
logged together with the driver exception that caused them; the client
only sees the message unless the application runs with ``DEBUG``
enabled.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StoreError(ApiError):
    """A database call failed.  The driver exception is chained as ``__cause__``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database operation failed"


class AuthMissingError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized access"


class AuthInvalidError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden access"


def _root_cause(exc: BaseException) -> BaseException:
    while exc.__cause__ is not None:
        exc = exc.__cause__
    return exc


def register_error_handlers(app: FastAPI, debug: bool = False) -> None:
    """Install handlers rendering every error as ``{"message": ...}``."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        content: Dict[str, Any] = {"message": exc.message}
        if exc.status_code >= 500:
            cause = _root_cause(exc)
            logger.error(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc.message,
                exc_info=(type(cause), cause, cause.__traceback__),
            )
            if debug and cause is not exc:
                content["error"] = repr(cause)
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("%s %s raised an unhandled error", request.method, request.url.path)
        content: Dict[str, Any] = {"message": ApiError.default_message}
        if debug:
            content["error"] = repr(exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)
