# 📄 File: app/modules/orders/application/commands/__init__.py
# 🧭 Purpose (Layman Explanation):
# The things a user can ask the ordering system to DO.
# 🧪 Purpose (Technical Summary):
# CQRS command definitions for the order write side.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# app.modules.orders.application.handlers.command_handlers, orders API

from .add_tracking import AddTrackingCommand
from .assign_partner import AssignPartnerCommand
from .create_order import CreateOrderCommand, OrderLineInput
from .rate_order import RateOrderCommand
from .update_order_status import UpdateOrderStatusCommand

__all__ = [
    "AddTrackingCommand",
    "AssignPartnerCommand",
    "CreateOrderCommand",
    "OrderLineInput",
    "RateOrderCommand",
    "UpdateOrderStatusCommand",
]
