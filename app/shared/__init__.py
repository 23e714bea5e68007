# 📄 File: app/shared/__init__.py
# 🧭 Purpose (Layman Explanation):
# The toolbox every part of the marketplace shares: settings, database access, security,
# error types, logging and small helpers.
# 🧪 Purpose (Technical Summary):
# Cross-cutting infrastructure package (config, core, infrastructure, utils). Has no
# dependency on any module under app.modules.
# 🔗 Dependencies:
# pydantic-settings, SQLAlchemy, python-jose, passlib, slowapi, python-json-logger, aiohttp
# 🔄 Connected Modules / Calls From:
# every module under app.modules, app.api, app.main
