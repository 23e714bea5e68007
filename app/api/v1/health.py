# 📄 File: app/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# Tells load balancers and monitoring whether the app is up, and whether it can reach its
# database and is ready to take orders.
# 🧪 Purpose (Technical Summary):
# Liveness (no dependencies) and readiness (database round trip) probes.
# 🔗 Dependencies:
# FastAPI, app.shared.config (settings, database health)
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, load balancers, container orchestration

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.shared.config.database import check_database_health
from app.shared.config.settings import get_settings
from app.shared.infrastructure.realtime.connection_registry import get_connection_registry

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get(
    "/health",
    summary="Liveness probe",
    description="Basic health check for load balancers and monitoring",
)
async def health_check() -> JSONResponse:
    settings = get_settings()
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }
    )


@health_router.get(
    "/health/ready",
    summary="Readiness probe",
    description="Returns 200 once the database is reachable",
)
async def readiness_probe() -> JSONResponse:
    db_health = await check_database_health()
    timestamp = datetime.now(timezone.utc).isoformat()

    if db_health["status"] != "healthy":
        logger.warning(f"Readiness probe failed: {db_health}")
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "database_unhealthy", "timestamp": timestamp},
        )

    return JSONResponse(
        status_code=200,
        content={
            "status": "ready",
            "timestamp": timestamp,
            "database": db_health,
            "realtime_connections": get_connection_registry().connection_count,
        },
    )
