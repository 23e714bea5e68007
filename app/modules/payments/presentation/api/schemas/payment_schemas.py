# 📄 File: app/modules/payments/presentation/api/schemas/payment_schemas.py
# 🧭 Purpose (Layman Explanation):
# The forms used to start a payment, confirm it, refund it or pay a restaurant out.
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the payment reconciliation endpoints.
# 🔗 Dependencies:
# pydantic, app.modules.orders.presentation.api.schemas.order_schemas
# 🔄 Connected Modules / Calls From:
# app.modules.payments.presentation.api.v1.payments

from typing import Optional

from pydantic import BaseModel, Field

from app.modules.orders.presentation.api.schemas.order_schemas import OrderResponse


class CreatePaymentOrderRequest(BaseModel):
    order_id: str = Field(..., min_length=1)


class CreatePaymentOrderResponse(BaseModel):
    order_id: str
    gateway_order_id: str
    amount: int = Field(..., description="Amount in minor currency units")
    currency: str
    key_id: str


class VerifyPaymentRequest(BaseModel):
    gateway_order_id: str = Field(..., min_length=1)
    payment_id: str = Field(..., min_length=1)
    signature: str = Field(..., min_length=1)


class RefundRequest(BaseModel):
    order_id: str = Field(..., min_length=1)
    amount: Optional[float] = Field(None, gt=0, description="Partial refund amount; full refund when omitted")


class RefundResponse(BaseModel):
    refund_id: Optional[str] = None
    amount: Optional[int] = None
    order: OrderResponse


class TransferRequest(BaseModel):
    order_id: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1, description="Connected account of the restaurant")


class TransferResponse(BaseModel):
    order_id: str
    transfer_id: Optional[str] = None
    account_id: str
    amount: int
    currency: str


class WebhookAck(BaseModel):
    status: str
    event: Optional[str] = None
