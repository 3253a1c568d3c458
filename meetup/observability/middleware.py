"""
FastAPI middleware for observability.

Request timing logs and X-Correlation-ID propagation. Clients poll the
session view every few seconds, so successful polls and health probes are
logged at DEBUG to keep INFO readable.

Dependencies: starlette, meetup.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from meetup.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

_QUIET_ROUTES = {("GET", "/api/messages"), ("GET", "/api/health"), ("GET", "/api/health/db")}


def _log_level_for(method: str, path: str, status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    if (method, path) in _QUIET_ROUTES:
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status and duration."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method, path = request.method, request.url.path

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.exception(
                "%s %s raised",
                method,
                path,
                extra={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.log(
            _log_level_for(method, path, response.status_code),
            "%s %s -> %d (%.2f ms)",
            method,
            path,
            response.status_code,
            duration_ms,
            extra={"status_code": response.status_code, "duration_ms": duration_ms},
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's X-Correlation-ID or mint one, and echo it back."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
