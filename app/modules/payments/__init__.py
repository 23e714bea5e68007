# 📄 File: app/modules/payments/__init__.py
# 🧭 Purpose (Layman Explanation):
# Talks to the payment company and keeps orders in step with what was paid.
# 🧪 Purpose (Technical Summary):
# Payment reconciliation context: signature checks, webhook handling and the gateway client.
# 🔗 Dependencies:
# app.shared, app.modules.orders
# 🔄 Connected Modules / Calls From:
# app.api.v1.router
