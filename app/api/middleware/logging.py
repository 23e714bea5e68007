# 📄 File: app/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Writes down every request the app receives and how it went, tagging each with a
# reference number so one request can be followed through the logs.
# 🧪 Purpose (Technical Summary):
# Request logging middleware: reuses or generates X-Request-ID, binds it (and later the
# authenticated user) into the logging context vars, logs method, path, status and
# duration, and echoes the id on the response.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, app.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# app.main (middleware registration)

import logging
import time
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.shared.utils.logging import log_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = ("/health", "/health/ready")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Per-request correlation id and access log."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        with log_context(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(f"{request.method} {request.url.path} failed after {duration_ms:.1f}ms")
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
            logger.log(
                level,
                f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.1f}ms)",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                },
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
