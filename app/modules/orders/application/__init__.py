# 📄 File: app/modules/orders/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# The layer that turns requests about orders into actions on the order core.
# 🧪 Purpose (Technical Summary):
# CQRS application layer of the orders module: commands, queries and their handlers.
# 🔗 Dependencies:
# app.modules.orders.domain
# 🔄 Connected Modules / Calls From:
# app.modules.orders.presentation.api
