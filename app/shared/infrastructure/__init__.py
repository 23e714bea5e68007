# 📄 File: app/shared/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# The plumbing: database sessions, calls to outside services and live connections to the apps.
# 🧪 Purpose (Technical Summary):
# Infrastructure package: request-scoped AsyncSession management, the aiohttp/tenacity
# APIClient base and the in-memory realtime connection registry.
# 🔗 Dependencies:
# SQLAlchemy, aiohttp, tenacity
# 🔄 Connected Modules / Calls From:
# repositories, payment gateway client, app.api.v1.realtime, event handlers
