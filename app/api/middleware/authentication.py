# 📄 File: app/api/middleware/authentication.py
# 🧭 Purpose (Layman Explanation):
# The doorman: when a request carries a login token, it checks the token is genuine and
# notes who the caller is (and what kind of account they have) for the rest of the app.
# 🧪 Purpose (Technical Summary):
# Bearer-token middleware. A valid JWT populates request.state with the user id, email,
# role and active flag loaded from the users table (the role is never trusted from the
# token). An invalid or expired token is rejected with a 401 envelope. Requests without a
# token pass through; route dependencies decide whether authentication is required.
# 🔗 Dependencies:
# app.shared.core.security (python-jose), user repository, app.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# app.main (middleware registration), app.shared.core.dependencies (reads request.state)

import logging
from typing import Optional

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

from app.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.shared.core.exceptions import AuthenticationError
from app.shared.core.security import verify_token
from app.shared.infrastructure.database.session import get_session
from app.shared.utils.logging import bind_user

from .error_handling import create_error_response

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Resolves the bearer token, when present, into request.state."""

    async def dispatch(self, request: Request, call_next) -> Response:
        authorization = request.headers.get("Authorization")
        token = extract_bearer_token(authorization)

        if authorization and token is None:
            return self._unauthorized(request, "Invalid authorization header")

        if token:
            try:
                payload = verify_token(token)
                async with get_session() as session:
                    user = await UserRepositoryImpl(session).get_by_id(payload["sub"])
            except AuthenticationError as e:
                return self._unauthorized(request, e.message)

            if user is None:
                logger.warning(f"Token subject {payload['sub']} no longer exists")
                return self._unauthorized(request, "Could not validate credentials")

            request.state.user_id = user.id
            request.state.user_email = user.email
            request.state.user_role = user.role.value
            request.state.is_active = user.is_active
            request.state.token_payload = payload
            bind_user(user.id)

        return await call_next(request)

    def _unauthorized(self, request: Request, message: str) -> Response:
        return create_error_response(
            status.HTTP_401_UNAUTHORIZED,
            "AUTHENTICATION_ERROR",
            message,
            request_id=getattr(request.state, "request_id", None),
            headers={"WWW-Authenticate": "Bearer"},
        )
