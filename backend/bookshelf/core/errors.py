"""
API error type and the handlers that render it.

Every error response has the same envelope::

    {"message": "user not found"}
    {"message": "bad request", "error": "UNIQUE constraint failed: users.email"}
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.core.logging import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """An error that maps directly onto an HTTP response."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        error: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.error = error
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class NotFoundError(ApiError):
    def __init__(self, message: str) -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, message)


class BadRequestError(ApiError):
    def __init__(self, message: str, *, error: str | None = None) -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, message, error=error)


class UnauthorizedError(ApiError):
    def __init__(self, message: str) -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, message)


class ForbiddenError(ApiError):
    def __init__(self, message: str = "You do not have access to this data") -> None:
        super().__init__(status.HTTP_403_FORBIDDEN, message)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("api_error", status=exc.status_code, message=exc.message, path=request.url.path)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Error when parsing data", "error": details},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope-producing handlers to `app`."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)


def db_error_message(exc: Exception) -> str:
    """Driver-level message for a database error, without the SQL echo."""
    return str(getattr(exc, "orig", None) or exc)
