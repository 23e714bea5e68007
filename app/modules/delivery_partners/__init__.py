# 📄 File: app/modules/delivery_partners/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything about riders: signing up, approval, going online and reporting where they are.
# 🧪 Purpose (Technical Summary):
# Delivery partner bounded context: aggregate, repository, service, location events and API router.
# 🔗 Dependencies:
# app.shared
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.modules.orders
