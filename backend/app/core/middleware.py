# backend/app/core/middleware.py
"""
HTTP middleware: CORS policy and request tracing/logging.
"""
import time
import uuid
from typing import List

from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import Response

from backend.app.core.errors import internal_error_response
from backend.app.core.logging import get_logger

logger = get_logger(__name__)

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Origin", "Content-Type", "Accept", "Authorization"]
CORS_EXPOSE_HEADERS = ["Content-Length"]

CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"


class PreflightCORSMiddleware(CORSMiddleware):
    """
    Starlette's CORSMiddleware, answering successful preflights with
    204 No Content instead of 200 "OK".
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response

        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() not in ("content-length", "content-type")
        }
        return Response(status_code=204, headers=headers)


def build_cors_middleware_options(origins: List[str]) -> dict:
    """Keyword arguments for ``app.add_middleware(PreflightCORSMiddleware, ...)``."""
    return {
        "allow_origins": origins,
        "allow_credentials": True,
        "allow_methods": CORS_ALLOW_METHODS,
        "allow_headers": CORS_ALLOW_HEADERS,
        "expose_headers": CORS_EXPOSE_HEADERS,
    }


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with a correlation id and a request id and logs its
    outcome.

    The correlation id is taken from the incoming X-Correlation-ID header
    when the caller supplies one, so a chain of services shares it.
    """

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or uuid.uuid4().hex
        request_id = uuid.uuid4().hex
        request.state.correlation_id = correlation_id
        request.state.request_id = request_id

        context = {
            "correlation_id": correlation_id,
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }
        logger.debug("HTTP request started", extra=context)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            # The 500 must still pass back through CORS and carry tracing headers
            response = internal_error_response(request, exc)

        context["status_code"] = response.status_code
        context["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
        user_id = getattr(request.state, "user_id", None)
        if user_id is not None:
            context["user_id"] = user_id

        if response.status_code >= 500:
            logger.error("HTTP request completed with server error", extra=context)
        elif response.status_code >= 400:
            logger.warning("HTTP request completed with client error", extra=context)
        else:
            logger.info("HTTP request completed successfully", extra=context)

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
