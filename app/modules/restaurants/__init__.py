# 📄 File: app/modules/restaurants/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything about restaurants: signing up, approval, opening hours and the menu.
# 🧪 Purpose (Technical Summary):
# Restaurant bounded context: aggregate with embedded menu items, repository, service and API router.
# 🔗 Dependencies:
# app.shared, app.modules.user_management
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.modules.orders
