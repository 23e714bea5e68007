# 📄 File: app/modules/__init__.py
# 🧭 Purpose (Layman Explanation):
# Holds one folder per part of the marketplace: accounts, restaurants, riders, orders, payments and the admin view.
# 🧪 Purpose (Technical Summary):
# Bounded-context packages, each split into domain, application, infrastructure and presentation layers.
# 🔗 Dependencies:
# app.shared
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.main
