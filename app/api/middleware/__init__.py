# 📄 File: app/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# The checkpoints every request walks through: who is calling, what got logged, and how
# errors are turned into a friendly, consistent answer.
# 🧪 Purpose (Technical Summary):
# ASGI middleware package. Order in app.main, outermost first: CORS, RequestLoggingMiddleware,
# ErrorHandlingMiddleware, AuthenticationMiddleware.
# 🔗 Dependencies:
# Starlette BaseHTTPMiddleware
# 🔄 Connected Modules / Calls From:
# app.main

from .authentication import AuthenticationMiddleware
from .error_handling import ErrorHandlingMiddleware
from .logging import RequestLoggingMiddleware

__all__ = ["AuthenticationMiddleware", "ErrorHandlingMiddleware", "RequestLoggingMiddleware"]
