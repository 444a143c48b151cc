import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


class AppError(Exception):
    """Base error carrying the HTTP status it should be reported with."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Validation failed"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Insufficient permissions"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Resource already exists"


def sqlstate_of(exc: BaseException) -> Optional[str]:
    """Return the SQLSTATE code behind a database error, if one can be found."""
    orig = getattr(exc, "orig", exc)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code

    # SQLite carries no SQLSTATE, only the message
    text = str(orig)
    if "UNIQUE constraint failed" in text:
        return UNIQUE_VIOLATION
    if "FOREIGN KEY constraint failed" in text:
        return FOREIGN_KEY_VIOLATION
    return None


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "; ".join(parts) or "Validation failed"


def translate_error(exc: BaseException) -> Tuple[int, str]:
    if isinstance(exc, ValidationError):
        return 400, exc.message
    if isinstance(exc, RequestValidationError):
        return 400, _format_validation_errors(exc)
    if isinstance(exc, UnauthorizedError):
        return 401, exc.message

    if isinstance(exc, SQLAlchemyError) or hasattr(exc, "orig") or hasattr(exc, "pgcode"):
        code = sqlstate_of(exc)
        if code == UNIQUE_VIOLATION:
            return 409, "Resource already exists"
        if code == FOREIGN_KEY_VIOLATION:
            return 400, "Invalid reference"

    if isinstance(exc, AppError):
        return exc.status_code, exc.message
    if isinstance(exc, StarletteHTTPException):
        return exc.status_code, str(exc.detail)
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int):
        return status_code, str(exc)

    return 500, "Internal Server Error"


def error_response(request: Request, exc: BaseException) -> JSONResponse:
    status_code, message = translate_error(exc)
    if status_code >= 500:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    else:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, status_code, message)

    headers = getattr(exc, "headers", None)
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "statusCode": status_code,
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "path": request.url.path,
        },
        headers=headers,
    )


async def _handle(request: Request, exc: Exception) -> JSONResponse:
    return error_response(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _handle)
    app.add_exception_handler(RequestValidationError, _handle)
    app.add_exception_handler(StarletteHTTPException, _handle)
    app.add_exception_handler(IntegrityError, _handle)
    app.add_exception_handler(SQLAlchemyError, _handle)
    app.add_exception_handler(Exception, _handle)
