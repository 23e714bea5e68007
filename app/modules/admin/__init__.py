# 📄 File: app/modules/admin/__init__.py
# 🧭 Purpose (Layman Explanation):
# The admin's overview of the whole marketplace.
# 🧪 Purpose (Technical Summary):
# Admin reporting context: dashboard aggregation over the other modules' repositories.
# 🔗 Dependencies:
# app.modules.* repositories
# 🔄 Connected Modules / Calls From:
# app.api.v1.router
