# 📄 File: app/modules/orders/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything about an order, from the moment it is placed until it is delivered and rated.
# 🧪 Purpose (Technical Summary):
# Order bounded context: CQRS commands/queries, lifecycle rules, pricing, settlement and realtime events.
# 🔗 Dependencies:
# app.shared, app.modules.restaurants, app.modules.delivery_partners
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.modules.payments, app.modules.admin
