# backend/app/core/errors.py
"""
Exception handlers that render every failure as ``{"error", "message"}``.

Request binding failures (missing field, empty string, bad JSON) become
400 "Bad Request" with a message naming the offending field. Business
errors raised by services keep their own status code and label.
"""
from http import HTTPStatus
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.app.core.config import settings
from backend.app.core.exceptions import QuizoraError
from backend.app.core.logging import get_logger
from backend.app.schemas.user import ErrorResponse

logger = get_logger(__name__)

# Labels clients see in validation messages
FIELD_LABELS = {
    "name": "Name",
    "msisdn": "MSISDN",
    "password": "Password",
}


def describe_validation_error(err: Dict[str, Any]) -> str:
    """Turn one pydantic error dict into a sentence naming the field."""
    err_type = err.get("type", "")
    if err_type == "json_invalid":
        return "Request body is not valid JSON"

    loc = err.get("loc", ())
    field = loc[-1] if len(loc) > 1 and isinstance(loc[-1], str) else None
    label = FIELD_LABELS.get(field, field) if field else "Request body"
    ctx = err.get("ctx") or {}

    if err_type == "missing":
        return f"{label} is required"
    if err_type == "string_too_short":
        if err.get("input") == "":
            return f"{label} is required"
        min_length = ctx.get("min_length")
        return f"{label} must be at least {min_length} characters (min={min_length})"
    if err_type == "string_too_long":
        max_length = ctx.get("max_length")
        return f"{label} must be at most {max_length} characters (max={max_length})"
    if err_type == "string_type":
        return f"{label} must be a string"
    return f"{label}: {err.get('msg', 'invalid value')}"


def _error_response(status_code: int, error: str, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
        headers=headers,
    )


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception with its traceback and render it as 500.

    The message is generic in production and the exception text elsewhere.
    """
    logger.error(
        "Unhandled exception: %s",
        exc,
        extra={"method": request.method, "path": request.url.path},
        exc_info=exc,
    )
    message = (
        "An internal error occurred. Please try again later."
        if settings.is_production
        else str(exc)
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", message
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI app."""

    @app.exception_handler(QuizoraError)
    async def quizora_exception_handler(request: Request, exc: QuizoraError):
        return _error_response(exc.status_code, exc.error, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = "; ".join(describe_validation_error(err) for err in exc.errors())
        logger.info(
            "Request validation failed: %s",
            message,
            extra={"method": request.method, "path": request.url.path},
        )
        return _error_response(status.HTTP_400_BAD_REQUEST, "Bad Request", message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handles framework HTTP errors (404, 405, ...)."""
        try:
            label = HTTPStatus(exc.status_code).phrase
        except ValueError:
            label = "Error"
        return _error_response(
            exc.status_code,
            label,
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        return internal_error_response(request, exc)
