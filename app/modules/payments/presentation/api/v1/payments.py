# 📄 File: app/modules/payments/presentation/api/v1/payments.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for paying: start a checkout, confirm it, receive the payment company's
# notifications, and let admins refund or pay restaurants out.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router for payment reconciliation. The webhook reads the raw body so the HMAC is
# computed over exactly the bytes the gateway signed.
#
# 🔗 Dependencies:
# - FastAPI router, Request, Header
# - app.modules.payments.domain.services.payment_service
# - app.shared.core.dependencies (authentication and role guards)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted at /api/payment)

"""
Payment API Endpoints

Endpoints:
- POST /create-order: Open a gateway order for an order (customer)
- POST /verify: Verify checkout signature and mark paid
- POST /webhook: Gateway notifications (signed, unauthenticated)
- POST /refund: Refund a paid order (admin)
- POST /transfer: Transfer restaurant earnings (admin)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from app.modules.orders.presentation.api.schemas.order_schemas import OrderResponse
from app.modules.payments.domain.services.payment_service import PaymentService
from app.modules.payments.presentation.api.schemas.payment_schemas import (
    CreatePaymentOrderRequest,
    CreatePaymentOrderResponse,
    RefundRequest,
    RefundResponse,
    TransferRequest,
    TransferResponse,
    VerifyPaymentRequest,
    WebhookAck,
)
from app.shared.core.dependencies import (
    ROLE_CUSTOMER,
    CurrentUser,
    get_current_admin_user,
    get_current_user,
    require_role,
)

logger = logging.getLogger(__name__)

payments_router = APIRouter()


@payments_router.post(
    "/create-order",
    response_model=CreatePaymentOrderResponse,
    summary="Create a gateway order for checkout",
)
async def create_payment_order(
    payload: CreatePaymentOrderRequest,
    current_user: CurrentUser = Depends(require_role(ROLE_CUSTOMER)),
    payment_service: PaymentService = Depends(),
) -> CreatePaymentOrderResponse:
    result = await payment_service.create_gateway_order(payload.order_id, current_user)
    return CreatePaymentOrderResponse(**result)


@payments_router.post(
    "/verify",
    response_model=OrderResponse,
    summary="Verify a checkout signature",
    responses={400: {"description": "Invalid payment signature"}},
)
async def verify_payment(
    payload: VerifyPaymentRequest,
    current_user: CurrentUser = Depends(get_current_user),
    payment_service: PaymentService = Depends(),
) -> OrderResponse:
    order = await payment_service.verify(
        payload.gateway_order_id,
        payload.payment_id,
        payload.signature,
        current_user,
    )
    return OrderResponse.from_domain(order)


@payments_router.post(
    "/webhook",
    response_model=WebhookAck,
    summary="Payment gateway webhook",
    responses={400: {"description": "Invalid webhook signature"}},
)
async def payment_webhook(
    request: Request,
    x_signature: Optional[str] = Header(None, alias="x-signature"),
    payment_service: PaymentService = Depends(),
) -> WebhookAck:
    body = await request.body()
    result = await payment_service.handle_webhook(body, x_signature)
    return WebhookAck(**result)


@payments_router.post(
    "/refund",
    response_model=RefundResponse,
    summary="Refund a paid order (admin)",
)
async def refund_payment(
    payload: RefundRequest,
    current_user: CurrentUser = Depends(get_current_admin_user),
    payment_service: PaymentService = Depends(),
) -> RefundResponse:
    result = await payment_service.refund(payload.order_id, current_user.user_id, amount=payload.amount)
    return RefundResponse(
        refund_id=result["refund_id"],
        amount=result["amount"],
        order=OrderResponse.from_domain(result["order"]),
    )


@payments_router.post(
    "/transfer",
    response_model=TransferResponse,
    summary="Transfer restaurant earnings (admin)",
)
async def transfer_earnings(
    payload: TransferRequest,
    current_user: CurrentUser = Depends(get_current_admin_user),
    payment_service: PaymentService = Depends(),
) -> TransferResponse:
    result = await payment_service.transfer(payload.order_id, payload.account_id, current_user.user_id)
    return TransferResponse(**result)
