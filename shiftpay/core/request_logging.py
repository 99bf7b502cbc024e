# shiftpay/core/request_logging.py
"""
Request logging middleware for tracking all HTTP requests.
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from shiftpay.core.logging_config import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs all HTTP requests with timing and status codes.

    Adds a unique request ID to each request for tracing.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"{request.method} {request.url.path} - 500 ({duration_ms:.2f}ms) - unhandled error",
                extra={"extra_fields": _log_data(request, request_id, 500, duration_ms)},
                exc_info=True,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        status_code = response.status_code
        message = f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)"
        extra = {"extra_fields": _log_data(request, request_id, status_code, duration_ms)}

        if status_code >= 500:
            logger.error(message, extra=extra)
        elif status_code >= 400:
            logger.warning(message, extra=extra)
        elif request.url.path == "/health":
            # Health checks only at DEBUG (reduces noise)
            logger.debug(message, extra=extra)
        else:
            logger.info(message, extra=extra)

        response.headers["X-Request-ID"] = request_id
        return response


def _log_data(request: Request, request_id: str, status_code: int, duration_ms: float) -> dict:
    return {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "duration_ms": round(duration_ms, 2),
    }
