# 📄 File: app/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects every group of web endpoints (accounts, restaurants, riders, orders, payments,
# admin) plus the health checks and the live-updates socket.
# 🧪 Purpose (Technical Summary):
# Version 1 router package. ``router.root_router`` mounts module routers under /api and the
# health and websocket routers at the root.
# 🔗 Dependencies:
# FastAPI APIRouter, module presentation layers
# 🔄 Connected Modules / Calls From:
# app.main

"""
API v1

Routes:
- /api/auth, /api/restaurants, /api/delivery-partners
- /api/orders, /api/payment, /api/admin
- /health, /health/ready, /ws
"""
