# 📄 File: app/shared/config/__init__.py
# 🧭 Purpose (Layman Explanation):
# Where the backend reads its settings and learns how to reach the database.
# 🧪 Purpose (Technical Summary):
# Configuration package: environment-driven Settings (pydantic-settings) and the async
# SQLAlchemy engine/session factory.
# 🔗 Dependencies:
# pydantic-settings, SQLAlchemy
# 🔄 Connected Modules / Calls From:
# app.main, app.shared.*, repositories, migrations/env.py

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
