"""Payment and webhook signature checks."""

import hashlib
import hmac

from app.modules.payments.domain.services.signature import (
    compute_signature,
    verify_payment_signature,
    verify_webhook_signature,
)

SECRET = "gateway-test-secret"


def test_compute_signature_is_hex_hmac_sha256():
    expected = hmac.new(SECRET.encode(), b"gw_1|pay_1", hashlib.sha256).hexdigest()
    assert compute_signature("gw_1|pay_1", SECRET) == expected


def test_payment_signature_round_trip():
    signature = compute_signature("gw_1|pay_1", SECRET)

    assert verify_payment_signature("gw_1", "pay_1", signature, SECRET)
    assert verify_payment_signature("gw_1", "pay_1", signature.upper(), SECRET)


def test_payment_signature_rejects_other_payment():
    signature = compute_signature("gw_1|pay_1", SECRET)

    assert not verify_payment_signature("gw_1", "pay_2", signature, SECRET)
    assert not verify_payment_signature("gw_1", "pay_1", signature, "other-secret")


def test_missing_signature_is_rejected():
    assert not verify_payment_signature("gw_1", "pay_1", None, SECRET)
    assert not verify_payment_signature("gw_1", "pay_1", "", SECRET)


def test_webhook_signature_covers_exact_body():
    body = b'{"event":"payment.captured"}'
    signature = compute_signature(body, SECRET)

    assert verify_webhook_signature(body, signature, SECRET)
    assert not verify_webhook_signature(body + b" ", signature, SECRET)


def test_non_ascii_signature_is_a_mismatch():
    assert not verify_payment_signature("gw_1", "pay_1", "é" * 64, SECRET)
    assert not verify_webhook_signature(b"{}", "\xe9" * 64, SECRET)
