# 📄 File: app/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# The front door of the backend: the web addresses the apps call and the checks every request passes through.
# 🧪 Purpose (Technical Summary):
# HTTP layer package: versioned routers (v1) and the ASGI middleware stack.
# 🔗 Dependencies:
# FastAPI, Starlette
# 🔄 Connected Modules / Calls From:
# app.main
