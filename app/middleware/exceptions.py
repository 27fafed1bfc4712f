from typing import Optional
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.schemas.response import ErrorResponse
import logging

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


class FieldValidationError(HTTPException):
    """Business-rule validation failure tied to one input field."""

    def __init__(self, *, field: str, message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
        self.field = field


def _error_json(status_code: int, message: str, field: Optional[str] = None, headers=None) -> JSONResponse:
    body = ErrorResponse(message=message, field=field).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _first_error_field(error: dict) -> Optional[str]:
    parts = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
    return ".".join(parts) or None


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = _first_error_field(first)
    message = first.get("msg", "Invalid input")
    logger.warning(f"Validation error on {request.method} {request.url.path}: {field}: {message}")
    return _error_json(status.HTTP_400_BAD_REQUEST, message, field)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {message}")
    return _error_json(exc.status_code, message, getattr(exc, "field", None), headers=getattr(exc, "headers", None))


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return _error_json(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
