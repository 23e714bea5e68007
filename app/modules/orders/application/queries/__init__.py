# 📄 File: app/modules/orders/application/queries/__init__.py
# 🧭 Purpose (Layman Explanation):
# The questions a user can ask about orders.
# 🧪 Purpose (Technical Summary):
# CQRS query definitions for the order read side.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# app.modules.orders.application.handlers.query_handlers, orders API

from .get_order import GetOrderQuery, ListOrdersQuery

__all__ = ["GetOrderQuery", "ListOrdersQuery"]
