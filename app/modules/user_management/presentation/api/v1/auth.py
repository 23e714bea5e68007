# 📄 File: app/modules/user_management/presentation/api/v1/auth.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for signing up, logging in and asking "who am I?" for every kind of
# marketplace user.
#
# 🧪 Purpose (Technical Summary):
# FastAPI authentication endpoints: registration, rate-limited credential login issuing
# JWT bearer tokens, and the current-user profile.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - app.modules.user_management.domain.services.auth_service
# - app.modules.user_management.presentation.api.schemas.auth_schemas
# - slowapi for rate limiting
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted at /api/auth)
# - Customer, restaurant and delivery front-ends

"""
Authentication API Endpoints

Endpoints:
- POST /register: Account registration
- POST /login: Email/password authentication with rate limiting
- GET /me: Current user profile
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from app.modules.user_management.domain.services.auth_service import AuthService
from app.modules.user_management.presentation.api.schemas.auth_schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserResponse,
)
from app.shared.config.settings import get_settings
from app.shared.core.dependencies import CurrentUser, get_current_user
from app.shared.core.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

auth_router = APIRouter()


@auth_router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user account",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Invalid registration data or email already registered"},
    }
)
async def register(
    registration_data: RegisterRequest,
    auth_service: AuthService = Depends(),
) -> UserResponse:
    """
    Register a new customer, restaurant owner or delivery partner account.
    """
    user = await auth_service.register(
        name=registration_data.name,
        email=registration_data.email,
        password=registration_data.password,
        role=registration_data.role,
        phone=registration_data.phone,
        address=registration_data.address,
    )
    return UserResponse.from_domain(user)


@auth_router.post(
    "/login",
    response_model=LoginResponse,
    summary="Authenticate with email and password",
    responses={
        401: {"description": "Invalid credentials"},
        403: {"description": "Account suspended or inactive"},
        429: {"description": "Too many login attempts"},
    }
)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    credentials: LoginRequest,
    auth_service: AuthService = Depends(),
) -> LoginResponse:
    """
    Authenticate a user and issue a bearer token.

    Args:
        request: FastAPI request object for rate limiting
        credentials: Email and password
        auth_service: Injected authentication service

    Returns:
        LoginResponse: Access token and user profile
    """
    user, token = await auth_service.authenticate(credentials.email, credentials.password)
    return LoginResponse(
        access_token=token,
        expires_in=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserResponse.from_domain(user),
    )


@auth_router.get(
    "/me",
    response_model=UserResponse,
    summary="Get the authenticated user's profile",
)
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(),
) -> UserResponse:
    user = await auth_service.get_user(current_user.user_id)
    return UserResponse.from_domain(user)
