# 📄 File: app/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts the food delivery marketplace, connects all its parts
# (customers, restaurants, riders, orders, payments) and makes sure everything is ready to
# handle requests from the apps.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: lifespan (logging, dev schema creation,
# event bus subscriptions, engine and client shutdown), middleware stack, exception handlers
# rendering the error envelope, repository dependency bindings and router registration.
#
# 🔗 Dependencies:
# - FastAPI framework, slowapi, uvicorn
# - app.shared.config (settings, database)
# - app.api (middleware, routers)
# - module repository interfaces and SQLAlchemy implementations
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - Tests (httpx ASGITransport)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.middleware.authentication import AuthenticationMiddleware
from app.api.middleware.error_handling import (
    ErrorHandlingMiddleware,
    create_error_response,
    marketplace_exception_handler,
    rate_limit_exception_handler,
    validation_exception_handler,
)
from app.api.middleware.logging import RequestLoggingMiddleware
from app.api.v1.router import root_router
from app.modules.delivery_partners.domain.repositories.partner_repository import DeliveryPartnerRepository
from app.modules.delivery_partners.infrastructure.database.partner_repository_impl import (
    DeliveryPartnerRepositoryImpl,
)
from app.modules.orders.application.handlers.event_handlers import RealtimeForwardingHandler
from app.modules.orders.domain.events.handlers import OrderAuditHandler
from app.modules.orders.domain.repositories.order_repository import OrderRepository
from app.modules.orders.infrastructure.database.order_repository_impl import OrderRepositoryImpl
from app.modules.payments.infrastructure.external.gateway_client import close_payment_gateway
from app.modules.restaurants.domain.repositories.restaurant_repository import RestaurantRepository
from app.modules.restaurants.infrastructure.database.restaurant_repository_impl import RestaurantRepositoryImpl
from app.modules.user_management.domain.repositories.user_repository import UserRepository
from app.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from app.shared.config.database import create_tables, db_config
from app.shared.config.settings import get_settings
from app.shared.core.event_bus import get_event_bus, reset_event_bus
from app.shared.core.exceptions import MarketplaceException
from app.shared.core.rate_limiter import limiter
from app.shared.infrastructure.realtime.connection_registry import (
    get_connection_registry,
    reset_connection_registry,
)
from app.shared.utils.logging import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


def register_event_handlers() -> None:
    """Subscribe the audit log and realtime fan-out to domain events."""
    event_bus = get_event_bus()
    event_bus.subscribe(OrderAuditHandler())
    event_bus.subscribe(RealtimeForwardingHandler())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown: logging, development schema creation,
    event subscriptions, realtime registry and external client cleanup.
    """
    setup_logging()
    logger.info(f"🍔 {settings.APP_NAME} starting up ({settings.ENVIRONMENT})...")

    if settings.is_development:
        await create_tables()
        logger.info("✅ Database tables ensured")

    register_event_handlers()
    get_connection_registry()
    logger.info("✅ Event handlers subscribed")

    try:
        yield
    finally:
        logger.info(f"🔄 {settings.APP_NAME} shutting down...")
        await close_payment_gateway()
        await db_config.close_async_engine()
        reset_event_bus()
        reset_connection_registry()
        logger.info("✅ Shutdown complete")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MarketplaceException, marketplace_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        code = "NOT_FOUND" if exc.status_code == 404 else f"HTTP_{exc.status_code}"
        return create_error_response(
            exc.status_code,
            code,
            str(exc.detail),
            details={"path": request.url.path},
            request_id=getattr(request.state, "request_id", None),
            headers=getattr(exc, "headers", None),
        )


def create_application() -> FastAPI:
    """
    Application factory function.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION (last added runs first)
    # =========================================================================

    app.add_middleware(AuthenticationMiddleware)
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.state.limiter = limiter

    # =========================================================================
    # REPOSITORY BINDINGS
    # =========================================================================

    app.dependency_overrides[UserRepository] = UserRepositoryImpl
    app.dependency_overrides[RestaurantRepository] = RestaurantRepositoryImpl
    app.dependency_overrides[DeliveryPartnerRepository] = DeliveryPartnerRepositoryImpl
    app.dependency_overrides[OrderRepository] = OrderRepositoryImpl

    register_exception_handlers(app)
    app.include_router(root_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "health_check": "/health",
            "api_base": "/api",
        }

    return app


app = create_application()


def main():
    """Run the development server (``python -m app.main``)."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
