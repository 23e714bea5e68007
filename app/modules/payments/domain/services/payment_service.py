# 📄 File: app/modules/payments/domain/services/payment_service.py
# 🧭 Purpose (Layman Explanation):
# Keeps orders in step with the payment company: opens a payment for an order, confirms the
# order once the money arrives, cancels it when payment fails, and handles refunds and
# payouts to restaurants.
#
# 🧪 Purpose (Technical Summary):
# Payment reconciliation service. Signatures are verified (HMAC-SHA256, constant time)
# before any order is touched; orders are loaded with a row lock; ``mark_paid`` and
# ``mark_failed`` are idempotent so gateway redeliveries and client retries are harmless.
# Status changes go through OrderTransitionService so their side effects and realtime
# notifications are identical to API-driven transitions.
#
# 🔗 Dependencies:
# - app.modules.orders.domain (order model, repository, lifecycle, transition service)
# - app.modules.payments.domain.services.signature
# - app.modules.payments.infrastructure.external.gateway_client
# - app.shared.utils.logging (business events)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.payments.presentation.api.v1.payments

import json
import logging
from typing import Any, Dict, Optional

from fastapi import Depends

from app.modules.orders.domain.models.order import (
    Order,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from app.modules.orders.domain.repositories.order_repository import OrderRepository
from app.modules.orders.domain.services.lifecycle import can_transition, is_terminal
from app.modules.orders.domain.services.transition_service import OrderTransitionService
from app.modules.payments.domain.services.signature import (
    verify_payment_signature,
    verify_webhook_signature,
)
from app.modules.payments.infrastructure.external.gateway_client import (
    PaymentGatewayClient,
    get_payment_gateway,
)
from app.shared.config.settings import get_settings
from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import (
    AuthorizationError,
    ExternalServiceError,
    InvalidStateError,
    NotFoundError,
    PaymentSignatureError,
    ValidationError,
)
from app.shared.utils.helpers import to_minor_units
from app.shared.utils.logging import log_business_event

logger = logging.getLogger(__name__)

PAYMENT_FAILED_REASON = "Payment failed"
REFUNDED_REASON = "Payment refunded"

WEBHOOK_PAYMENT_CAPTURED = "payment.captured"
WEBHOOK_PAYMENT_FAILED = "payment.failed"


class PaymentService:
    """
    Payment reconciliation for orders.
    """

    def __init__(
        self,
        order_repository: OrderRepository = Depends(),
        transition_service: OrderTransitionService = Depends(),
        gateway: PaymentGatewayClient = Depends(get_payment_gateway),
    ):
        self.order_repository = order_repository
        self.transition_service = transition_service
        self.gateway = gateway
        self.settings = get_settings()

    # =========================================================================
    # CHECKOUT
    # =========================================================================

    async def create_gateway_order(self, order_id: str, current_user: CurrentUser) -> Dict[str, Any]:
        """
        Open (or reuse) the gateway order used by the client checkout.

        Returns:
            Dict with ``order_id``, ``gateway_order_id``, ``amount`` (minor
            units), ``currency`` and ``key_id``
        """
        order = await self._load_locked(order_id)
        if order.customer_id != current_user.user_id:
            raise AuthorizationError("Not authorized to pay for this order", resource_type="order", resource_id=order.id)
        if order.payment_method == PaymentMethod.CASH:
            raise InvalidStateError("Cash orders are paid on delivery", rule="online_payment_method")
        if order.payment_status != PaymentStatus.PENDING:
            raise InvalidStateError(
                f"Order payment is already {order.payment_status.value}",
                rule="payment_pending",
                current_state=order.payment_status.value,
            )
        if is_terminal(order.status):
            raise InvalidStateError(
                "Order can no longer be paid",
                rule="payable_status",
                current_state=order.status.value,
            )

        amount = to_minor_units(order.total)
        gateway_order_id = order.payment_details.gateway_order_id

        if gateway_order_id is None:
            gateway_order = await self.gateway.create_order(
                amount=amount,
                currency=self.settings.PAYMENT_CURRENCY,
                receipt=f"order_{order.order_number}",
                notes={"order_id": order.id},
            )
            gateway_order_id = gateway_order.get("id")
            if not gateway_order_id:
                raise ExternalServiceError("Payment gateway returned no order id", service_name=self.gateway.api_name)

            order.payment_details = order.payment_details.model_copy(update={"gateway_order_id": gateway_order_id})
            order = await self.order_repository.update(order)
            log_business_event(
                logger,
                "payment.order_created",
                f"Gateway order {gateway_order_id} created for order {order.order_number}",
                entity_id=order.id,
                entity_type="order",
                gateway_order_id=gateway_order_id,
                amount=amount,
            )

        return {
            "order_id": order.id,
            "gateway_order_id": gateway_order_id,
            "amount": amount,
            "currency": self.settings.PAYMENT_CURRENCY,
            "key_id": self.settings.PAYMENT_GATEWAY_KEY_ID,
        }

    async def verify(
        self,
        gateway_order_id: str,
        payment_id: str,
        signature: str,
        current_user: CurrentUser,
    ) -> Order:
        """
        Verify the checkout callback signature and mark the order paid.

        Raises:
            PaymentSignatureError: If the signature does not match
        """
        secret = self._require_secret(self.settings.PAYMENT_GATEWAY_KEY_SECRET)
        if not verify_payment_signature(gateway_order_id, payment_id, signature, secret):
            logger.warning(f"Payment signature mismatch for gateway order {gateway_order_id}")
            raise PaymentSignatureError()

        order = await self.order_repository.get_by_gateway_order_id(gateway_order_id)
        if order is None:
            raise NotFoundError("Order not found", resource_type="order", resource_id=gateway_order_id)
        if order.customer_id != current_user.user_id and not current_user.is_admin():
            raise AuthorizationError("Not authorized to verify this payment", resource_type="order", resource_id=order.id)

        return await self.mark_paid(order, payment_id, signature, actor_id=current_user.user_id)

    # =========================================================================
    # WEBHOOK
    # =========================================================================

    async def handle_webhook(self, body: bytes, signature: Optional[str]) -> Dict[str, Any]:
        """
        Process a signed gateway webhook delivery.

        Unknown events and unknown orders are acknowledged so the gateway does
        not keep redelivering them.
        """
        secret = self._require_secret(self.settings.PAYMENT_WEBHOOK_SECRET)
        if not verify_webhook_signature(body, signature, secret):
            logger.warning("Rejected webhook with invalid signature")
            raise PaymentSignatureError("Invalid webhook signature")

        try:
            event = json.loads(body)
            event_type = event["event"]
        except (ValueError, KeyError, TypeError):
            raise ValidationError("Malformed webhook payload")

        if event_type not in (WEBHOOK_PAYMENT_CAPTURED, WEBHOOK_PAYMENT_FAILED):
            logger.info(f"Ignoring webhook event {event_type}")
            return {"status": "ignored", "event": event_type}

        try:
            payment = event["payload"]["payment"]["entity"]
            gateway_order_id = payment["order_id"]
            payment_id = payment["id"]
        except (KeyError, TypeError):
            raise ValidationError("Webhook payload has no payment entity")

        order = await self.order_repository.get_by_gateway_order_id(gateway_order_id)
        if order is None:
            logger.warning(f"Webhook {event_type} for unknown gateway order {gateway_order_id}")
            return {"status": "ignored", "event": event_type}

        if event_type == WEBHOOK_PAYMENT_CAPTURED:
            await self.mark_paid(order, payment_id)
        else:
            await self.mark_failed(order)
        return {"status": "processed", "event": event_type}

    # =========================================================================
    # RECONCILIATION
    # =========================================================================

    async def mark_paid(
        self,
        order: Order,
        transaction_id: str,
        signature: Optional[str] = None,
        actor_id: Optional[str] = None,
    ) -> Order:
        """
        Record a captured payment on a locked order; confirms a pending order.

        Repeating the call with the same transaction id changes nothing.
        """
        if order.payment_status == PaymentStatus.PAID:
            if order.payment_details.transaction_id != transaction_id:
                logger.warning(
                    f"Order {order.order_number} already paid by {order.payment_details.transaction_id}, "
                    f"ignoring capture {transaction_id}"
                )
            return order
        if order.payment_status == PaymentStatus.REFUNDED:
            logger.warning(f"Ignoring capture {transaction_id} for refunded order {order.order_number}")
            return order

        order.payment_status = PaymentStatus.PAID
        order.payment_details = order.payment_details.model_copy(
            update={"transaction_id": transaction_id, "signature": signature}
        )

        if order.status == OrderStatus.PENDING:
            order = await self.transition_service.transition(order, OrderStatus.CONFIRMED, actor_id=actor_id)
        else:
            if is_terminal(order.status):
                logger.warning(f"Payment captured for {order.status.value} order {order.order_number}")
            order = await self.order_repository.update(order)

        log_business_event(
            logger,
            "payment.captured",
            f"Payment captured for order {order.order_number}",
            entity_id=order.id,
            entity_type="order",
            transaction_id=transaction_id,
            amount=str(order.total),
        )
        return order

    async def mark_failed(self, order: Order, actor_id: Optional[str] = None) -> Order:
        """Record a failed payment; cancels the order while it is still cancellable."""
        if order.payment_status == PaymentStatus.FAILED:
            return order
        if order.payment_status in (PaymentStatus.PAID, PaymentStatus.REFUNDED):
            logger.warning(
                f"Ignoring payment failure for order {order.order_number} "
                f"with payment status {order.payment_status.value}"
            )
            return order

        order.payment_status = PaymentStatus.FAILED
        if can_transition(order.status, OrderStatus.CANCELLED):
            order = await self.transition_service.transition(
                order,
                OrderStatus.CANCELLED,
                actor_id=actor_id,
                reason=PAYMENT_FAILED_REASON,
            )
        else:
            order = await self.order_repository.update(order)

        log_business_event(
            logger,
            "payment.failed",
            f"Payment failed for order {order.order_number}",
            entity_id=order.id,
            entity_type="order",
        )
        return order

    # =========================================================================
    # ADMIN OPERATIONS
    # =========================================================================

    async def refund(self, order_id: str, actor_id: str, amount: Optional[float] = None) -> Dict[str, Any]:
        """Refund a captured payment and cancel the order if it is still open."""
        order = await self._load_locked(order_id)
        if order.payment_status != PaymentStatus.PAID or not order.payment_details.transaction_id:
            raise InvalidStateError(
                "Only paid orders can be refunded",
                rule="refund_requires_payment",
                current_state=order.payment_status.value,
            )

        minor_amount = to_minor_units(amount) if amount is not None else None
        if minor_amount is not None and minor_amount > to_minor_units(order.total):
            raise ValidationError("Refund amount exceeds order total", field="amount", value=amount)

        refund = await self.gateway.refund(order.payment_details.transaction_id, amount=minor_amount)

        order.payment_status = PaymentStatus.REFUNDED
        if can_transition(order.status, OrderStatus.CANCELLED):
            order = await self.transition_service.transition(
                order,
                OrderStatus.CANCELLED,
                actor_id=actor_id,
                reason=REFUNDED_REASON,
            )
        else:
            order = await self.order_repository.update(order)

        log_business_event(
            logger,
            "payment.refunded",
            f"Payment refunded for order {order.order_number}",
            entity_id=order.id,
            entity_type="order",
            refund_id=refund.get("id"),
            actor_id=actor_id,
        )
        return {"order": order, "refund_id": refund.get("id"), "amount": refund.get("amount", minor_amount)}

    async def transfer(self, order_id: str, account_id: str, actor_id: str) -> Dict[str, Any]:
        """
        Pay a settled order's restaurant earnings out to a connected account.

        An order is paid out once; repeating the call returns the recorded
        transfer without contacting the gateway.
        """
        order = await self._load_locked(order_id)
        if order.status != OrderStatus.DELIVERED or not order.is_settled:
            raise InvalidStateError(
                "Only settled, delivered orders can be transferred",
                rule="transfer_requires_settlement",
                current_state=order.status.value,
            )
        if order.payment_status != PaymentStatus.PAID or not order.payment_details.transaction_id:
            raise InvalidStateError(
                "Order has no captured online payment",
                rule="transfer_requires_payment",
                current_state=order.payment_status.value,
            )

        amount = to_minor_units(order.restaurant_earnings)
        if order.payment_details.transfer_id:
            if order.payment_details.transfer_account_id != account_id:
                raise InvalidStateError(
                    "Restaurant earnings were already transferred to another account",
                    rule="single_transfer",
                    current_state=order.payment_details.transfer_id,
                )
            logger.info(f"Order {order.order_number} already transferred as {order.payment_details.transfer_id}")
            return self._transfer_result(order, amount)

        result = await self.gateway.transfer(
            order.payment_details.transaction_id,
            account_id=account_id,
            amount=amount,
            currency=self.settings.PAYMENT_CURRENCY,
        )

        transfers = result.get("items") or [result]
        transfer_id = transfers[0].get("id") if transfers else None
        if not transfer_id:
            raise ExternalServiceError("Payment gateway returned no transfer id", service_name=self.gateway.api_name)

        order.payment_details = order.payment_details.model_copy(
            update={"transfer_id": transfer_id, "transfer_account_id": account_id}
        )
        order = await self.order_repository.update(order)

        log_business_event(
            logger,
            "payment.transferred",
            f"Restaurant earnings of order {order.order_number} transferred",
            entity_id=order.id,
            entity_type="order",
            transfer_id=transfer_id,
            account_id=account_id,
            amount=amount,
            actor_id=actor_id,
        )
        return self._transfer_result(order, amount)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _transfer_result(self, order: Order, amount: int) -> Dict[str, Any]:
        return {
            "order_id": order.id,
            "transfer_id": order.payment_details.transfer_id,
            "account_id": order.payment_details.transfer_account_id,
            "amount": amount,
            "currency": self.settings.PAYMENT_CURRENCY,
        }

    async def _load_locked(self, order_id: str) -> Order:
        order = await self.order_repository.get_for_update(order_id)
        if order is None:
            raise NotFoundError("Order not found", resource_type="order", resource_id=order_id)
        return order

    def _require_secret(self, secret: str) -> str:
        if not secret:
            logger.error("Payment secret is not configured")
            raise ExternalServiceError("Payment gateway is not configured", service_name="payment-gateway")
        return secret
