# 📄 File: app/modules/payments/domain/services/signature.py
# 🧭 Purpose (Layman Explanation):
# Checks the "seal" the payment company puts on its messages, so nobody can fake a
# payment confirmation.
# 🧪 Purpose (Technical Summary):
# HMAC-SHA256 signing and constant-time verification for checkout callbacks
# (``"<gateway_order_id>|<payment_id>"`` with the key secret) and webhooks (raw body with
# the webhook secret).
# 🔗 Dependencies:
# hmac, hashlib
# 🔄 Connected Modules / Calls From:
# PaymentService, unit tests

import hashlib
import hmac
from typing import Optional, Union


def compute_signature(message: Union[str, bytes], secret: str) -> str:
    """Hex HMAC-SHA256 of ``message`` keyed with ``secret``."""
    if isinstance(message, str):
        message = message.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def _matches(expected: str, received: Optional[str]) -> bool:
    if not received:
        return False
    try:
        candidate = received.strip().lower().encode("ascii")
    except UnicodeEncodeError:
        return False
    return hmac.compare_digest(expected.encode("ascii"), candidate)


def verify_payment_signature(
    gateway_order_id: str,
    payment_id: str,
    signature: Optional[str],
    secret: str,
) -> bool:
    """Verify the signature returned to the client after checkout."""
    return _matches(compute_signature(f"{gateway_order_id}|{payment_id}", secret), signature)


def verify_webhook_signature(body: bytes, signature: Optional[str], secret: str) -> bool:
    """Verify a webhook delivery against its raw request body."""
    return _matches(compute_signature(body, secret), signature)
