# 📄 File: app/modules/payments/infrastructure/external/gateway_client.py
# 🧭 Purpose (Layman Explanation):
# Talks to the payment company: opens a payment for an order, gives money back, and passes
# a restaurant its share.
# 🧪 Purpose (Technical Summary):
# Payment gateway REST client built on the shared APIClient (aiohttp + tenacity retry,
# HTTP basic auth with key id/secret). Amounts are in minor units. Writes carry an
# idempotency key derived from the receipt or payment id. A process-wide instance
# is exposed through the ``get_payment_gateway`` dependency.
# 🔗 Dependencies:
# app.shared.infrastructure.external_apis.api_client, app.shared.config.settings
# 🔄 Connected Modules / Calls From:
# PaymentService, app.main (shutdown), tests (dependency override)

import logging
from typing import Any, Dict, Optional

from app.shared.config.settings import get_settings
from app.shared.infrastructure.external_apis.api_client import APIClient

logger = logging.getLogger(__name__)


class PaymentGatewayClient(APIClient):
    """Client for the payment gateway's orders, refunds and transfers APIs."""

    def __init__(
        self,
        base_url: str,
        key_id: str,
        key_secret: str,
        timeout: int = 15,
        max_retries: int = 3,
    ):
        super().__init__(
            base_url=base_url,
            api_name="payment-gateway",
            username=key_id,
            password=key_secret,
            timeout=timeout,
            max_retries=max_retries,
        )
        self.key_id = key_id

    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Create a gateway order; returns the gateway's order object (``id``, ``amount``...)."""
        return await self.request(
            "POST",
            "orders",
            json={"amount": amount, "currency": currency, "receipt": receipt, "notes": notes or {}},
            idempotency_key=receipt,
        )

    async def refund(self, payment_id: str, amount: Optional[int] = None) -> Dict[str, Any]:
        """Refund a captured payment, fully when ``amount`` is omitted."""
        body = {"amount": amount} if amount is not None else {}
        return await self.request(
            "POST",
            f"payments/{payment_id}/refund",
            json=body,
            idempotency_key=f"refund-{payment_id}",
        )

    async def transfer(
        self,
        payment_id: str,
        account_id: str,
        amount: int,
        currency: str,
    ) -> Dict[str, Any]:
        """Route part of a captured payment to a connected account."""
        return await self.request(
            "POST",
            f"payments/{payment_id}/transfers",
            json={"transfers": [{"account": account_id, "amount": amount, "currency": currency}]},
            idempotency_key=f"transfer-{payment_id}",
        )


_gateway: Optional[PaymentGatewayClient] = None


def get_payment_gateway() -> PaymentGatewayClient:
    """Process-wide gateway client, created from settings on first use."""
    global _gateway
    if _gateway is None:
        config = get_settings().get_payment_gateway_config()
        _gateway = PaymentGatewayClient(
            base_url=config["base_url"],
            key_id=config["key_id"],
            key_secret=config["key_secret"],
            timeout=config["timeout"],
            max_retries=config["max_retries"],
        )
    return _gateway


async def close_payment_gateway() -> None:
    global _gateway
    if _gateway is not None:
        await _gateway.close()
        _gateway = None
