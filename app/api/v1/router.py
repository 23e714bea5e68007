# 📄 File: app/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director: sends each request to the part of the app that handles it, such as
# orders, restaurants, riders, payments or the admin area.
# 🧪 Purpose (Technical Summary):
# Aggregates module routers under the /api prefix plus the unprefixed health and realtime
# routers.
# 🔗 Dependencies:
# FastAPI, module presentation routers
# 🔄 Connected Modules / Calls From:
# app.main

import logging

from fastapi import APIRouter

from app.modules.admin.presentation.api.v1.admin import admin_router
from app.modules.delivery_partners.presentation.api.v1.partners import partners_router
from app.modules.orders.presentation.api.v1.orders import orders_router
from app.modules.payments.presentation.api.v1.payments import payments_router
from app.modules.restaurants.presentation.api.v1.restaurants import restaurants_router
from app.modules.user_management.presentation.api.v1.auth import auth_router

from .health import health_router
from .realtime import realtime_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

# (router, prefix, tag)
MODULE_ROUTERS = [
    (auth_router, "/auth", "Authentication"),
    (restaurants_router, "/restaurants", "Restaurants"),
    (partners_router, "/delivery-partners", "Delivery Partners"),
    (orders_router, "/orders", "Orders"),
    (payments_router, "/payment", "Payments"),
    (admin_router, "/admin", "Admin"),
]

api_router = APIRouter(prefix=API_PREFIX)

for router, prefix, tag in MODULE_ROUTERS:
    api_router.include_router(router, prefix=prefix, tags=[tag])
    logger.debug(f"Mounted {tag} router at {API_PREFIX}{prefix}")

root_router = APIRouter()
root_router.include_router(health_router, tags=["Health Check"])
root_router.include_router(realtime_router, tags=["Realtime"])
root_router.include_router(api_router)
