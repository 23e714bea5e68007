# 📄 File: app/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Catches every error in the app and turns it into the same friendly error message format,
# without ever showing internal details to the outside world.
# 🧪 Purpose (Technical Summary):
# Error envelope builder, FastAPI exception handlers for the MarketplaceException hierarchy,
# request validation and rate limiting, plus a last-resort middleware rendering unexpected
# exceptions as 500 INTERNAL_SERVER_ERROR with request correlation.
# 🔗 Dependencies:
# FastAPI, starlette, slowapi, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# app.main (middleware and exception handler registration), authentication middleware

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from app.shared.core.exceptions import MarketplaceException

logger = logging.getLogger(__name__)


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Render the standard error envelope.

    ``{"error": {"code", "message", "details", "timestamp", "request_id"}}``
    """
    content = {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": request_id,
        }
    }
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


async def marketplace_exception_handler(request: Request, exc: MarketplaceException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")

    return create_error_response(
        exc.status_code,
        exc.error_code,
        exc.message,
        details=exc.details,
        request_id=_request_id(request),
    )


def _format_validation_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return errors


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _format_validation_errors(exc)
    logger.info(f"Request validation failed on {request.method} {request.url.path}: {errors}")
    return create_error_response(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Request validation failed",
        details={"errors": errors},
        request_id=_request_id(request),
    )


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(f"Rate limit exceeded on {request.url.path}: {exc.detail}")
    return create_error_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        "RATE_LIMITED",
        "Too many requests, please try again later",
        details={"limit": str(exc.detail)},
        request_id=_request_id(request),
    )


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Renders exceptions no handler claimed as a generic 500 response.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except MarketplaceException as exc:
            return await marketplace_exception_handler(request, exc)
        except Exception as exc:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
            return create_error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_SERVER_ERROR",
                "An internal server error occurred",
                request_id=_request_id(request),
            )
