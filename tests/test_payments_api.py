"""Checkout, signature verification, webhooks, refunds and transfers."""

import json

import pytest

from app.modules.payments.domain.services.signature import compute_signature
from tests.conftest import deliver, place_order, register_and_login

GATEWAY_SECRET = "gateway-test-secret"
WEBHOOK_SECRET = "webhook-test-secret"


async def open_checkout(client, customer, order_id):
    response = await client.post("/api/payment/create-order", json={"order_id": order_id}, headers=customer["headers"])
    assert response.status_code == 200, response.text
    return response.json()


async def verify(client, session, gateway_order_id, payment_id="pay_1", signature=None):
    if signature is None:
        signature = compute_signature(f"{gateway_order_id}|{payment_id}", GATEWAY_SECRET)
    return await client.post(
        "/api/payment/verify",
        json={"gateway_order_id": gateway_order_id, "payment_id": payment_id, "signature": signature},
        headers=session["headers"],
    )


async def send_webhook(client, event, signature=None):
    body = json.dumps(event).encode()
    if signature is None:
        signature = compute_signature(body, WEBHOOK_SECRET)
    return await client.post(
        "/api/payment/webhook",
        content=body,
        headers={"content-type": "application/json", "x-signature": signature},
    )


def payment_event(event_type, gateway_order_id, payment_id="pay_1"):
    return {
        "event": event_type,
        "payload": {"payment": {"entity": {"id": payment_id, "order_id": gateway_order_id}}},
    }


@pytest.fixture
async def card_order(client, customer, restaurant):
    return await place_order(client, customer, restaurant, payment_method="card")


class TestCheckout:
    async def test_creates_gateway_order_once(self, client, customer, card_order, gateway):
        first = await open_checkout(client, customer, card_order["id"])
        second = await open_checkout(client, customer, card_order["id"])

        assert first["gateway_order_id"] == "gw_order_1"
        assert first["amount"] == 35000
        assert first["currency"] == "INR"
        assert first["key_id"] == "key_test"
        assert second["gateway_order_id"] == first["gateway_order_id"]
        assert len(gateway.orders) == 1
        assert gateway.orders[0]["notes"] == {"order_id": card_order["id"]}

    async def test_cash_orders_have_no_checkout(self, client, customer, restaurant):
        order = await place_order(client, customer, restaurant, payment_method="cash")

        response = await client.post(
            "/api/payment/create-order", json={"order_id": order["id"]}, headers=customer["headers"]
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_STATE"

    async def test_only_the_customer_pays(self, client, card_order):
        stranger = await register_and_login(client, "stranger@example.com")

        response = await client.post(
            "/api/payment/create-order", json={"order_id": card_order["id"]}, headers=stranger["headers"]
        )

        assert response.status_code == 403


class TestVerify:
    async def test_valid_signature_confirms_order(self, client, customer, card_order):
        checkout = await open_checkout(client, customer, card_order["id"])

        response = await verify(client, customer, checkout["gateway_order_id"])

        assert response.status_code == 200
        body = response.json()
        assert body["payment_status"] == "paid"
        assert body["status"] == "confirmed"

    async def test_repeated_verification_is_idempotent(self, client, customer, card_order):
        checkout = await open_checkout(client, customer, card_order["id"])
        await verify(client, customer, checkout["gateway_order_id"])

        response = await verify(client, customer, checkout["gateway_order_id"])

        assert response.status_code == 200
        assert response.json()["status"] == "confirmed"
        assert response.json()["payment_status"] == "paid"

    async def test_bad_signature(self, client, customer, card_order):
        checkout = await open_checkout(client, customer, card_order["id"])

        response = await verify(client, customer, checkout["gateway_order_id"], signature="deadbeef")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SIGNATURE"

        order = (await client.get(f"/api/orders/{card_order['id']}", headers=customer["headers"])).json()
        assert order["payment_status"] == "pending"

    async def test_non_ascii_signature_is_rejected(self, client, customer, card_order):
        checkout = await open_checkout(client, customer, card_order["id"])

        response = await verify(client, customer, checkout["gateway_order_id"], signature="é" * 64)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SIGNATURE"


class TestWebhook:
    async def test_captured_payment_is_processed_once(self, client, customer, card_order):
        checkout = await open_checkout(client, customer, card_order["id"])
        event = payment_event("payment.captured", checkout["gateway_order_id"])

        first = await send_webhook(client, event)
        second = await send_webhook(client, event)

        assert first.status_code == 200
        assert first.json() == {"status": "processed", "event": "payment.captured"}
        assert second.status_code == 200

        order = (await client.get(f"/api/orders/{card_order['id']}", headers=customer["headers"])).json()
        assert order["payment_status"] == "paid"
        assert order["status"] == "confirmed"

    async def test_failed_payment_cancels_order(self, client, customer, owner, card_order):
        checkout = await open_checkout(client, customer, card_order["id"])

        response = await send_webhook(client, payment_event("payment.failed", checkout["gateway_order_id"]))

        assert response.json()["status"] == "processed"
        order = (await client.get(f"/api/orders/{card_order['id']}", headers=customer["headers"])).json()
        assert order["payment_status"] == "failed"
        assert order["status"] == "cancelled"
        assert order["cancellation_reason"] == "Payment failed"

        mine = (await client.get("/api/restaurants/me", headers=owner["headers"])).json()
        assert mine["total_revenue"] == 0.0

    async def test_unknown_event_is_ignored(self, client):
        response = await send_webhook(client, {"event": "refund.processed", "payload": {}})

        assert response.status_code == 200
        assert response.json() == {"status": "ignored", "event": "refund.processed"}

    async def test_unknown_order_is_ignored(self, client):
        response = await send_webhook(client, payment_event("payment.captured", "gw_order_404"))

        assert response.status_code == 200
        assert response.json()["status"] == "ignored"

    async def test_bad_signature_is_rejected(self, client, customer, card_order):
        checkout = await open_checkout(client, customer, card_order["id"])

        response = await send_webhook(
            client,
            payment_event("payment.captured", checkout["gateway_order_id"]),
            signature=compute_signature(b"something else", WEBHOOK_SECRET),
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SIGNATURE"

    async def test_non_ascii_header_signature_is_rejected(self, client, customer, card_order):
        checkout = await open_checkout(client, customer, card_order["id"])
        body = json.dumps(payment_event("payment.captured", checkout["gateway_order_id"])).encode()

        response = await client.post(
            "/api/payment/webhook",
            content=body,
            headers={"content-type": "application/json", "x-signature": b"\xe9" * 64},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SIGNATURE"

    async def test_missing_signature_is_rejected(self, client):
        response = await client.post("/api/payment/webhook", content=b"{}")

        assert response.status_code == 400


class TestAdminOperations:
    async def test_refund(self, client, admin, customer, card_order, gateway):
        checkout = await open_checkout(client, customer, card_order["id"])
        await verify(client, customer, checkout["gateway_order_id"], payment_id="pay_42")

        response = await client.post("/api/payment/refund", json={"order_id": card_order["id"]}, headers=admin["headers"])

        assert response.status_code == 200, response.text
        body = response.json()
        assert body["refund_id"] == "rfnd_1"
        assert body["order"]["payment_status"] == "refunded"
        assert body["order"]["status"] == "cancelled"
        assert gateway.refunds[0]["payment_id"] == "pay_42"

    async def test_partial_refund_cannot_exceed_total(self, client, admin, customer, card_order):
        checkout = await open_checkout(client, customer, card_order["id"])
        await verify(client, customer, checkout["gateway_order_id"])

        response = await client.post(
            "/api/payment/refund",
            json={"order_id": card_order["id"], "amount": 1000},
            headers=admin["headers"],
        )

        assert response.status_code == 400

    async def test_unpaid_order_cannot_be_refunded(self, client, admin, card_order):
        response = await client.post("/api/payment/refund", json={"order_id": card_order["id"]}, headers=admin["headers"])

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Only paid orders can be refunded"

    async def test_refund_requires_admin(self, client, customer, card_order):
        response = await client.post(
            "/api/payment/refund", json={"order_id": card_order["id"]}, headers=customer["headers"]
        )

        assert response.status_code == 403

    async def test_transfer_restaurant_earnings(self, client, admin, customer, owner, rider, partner, card_order, gateway):
        checkout = await open_checkout(client, customer, card_order["id"])
        await verify(client, customer, checkout["gateway_order_id"])
        await deliver(client, card_order["id"], owner, rider)

        response = await client.post(
            "/api/payment/transfer",
            json={"order_id": card_order["id"], "account_id": "acc_spice_route"},
            headers=admin["headers"],
        )

        assert response.status_code == 200, response.text
        body = response.json()
        assert body["transfer_id"] == "trf_1"
        assert body["amount"] == 27000
        assert gateway.transfers[0]["account"] == "acc_spice_route"

    async def test_transfer_requires_settlement(self, client, admin, card_order):
        response = await client.post(
            "/api/payment/transfer",
            json={"order_id": card_order["id"], "account_id": "acc_spice_route"},
            headers=admin["headers"],
        )

        assert response.status_code == 400

    async def test_repeated_transfer_pays_out_once(
        self, client, admin, customer, owner, rider, partner, card_order, gateway
    ):
        checkout = await open_checkout(client, customer, card_order["id"])
        await verify(client, customer, checkout["gateway_order_id"])
        await deliver(client, card_order["id"], owner, rider)
        payload = {"order_id": card_order["id"], "account_id": "acc_spice_route"}

        first = await client.post("/api/payment/transfer", json=payload, headers=admin["headers"])
        second = await client.post("/api/payment/transfer", json=payload, headers=admin["headers"])

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["transfer_id"] == first.json()["transfer_id"] == "trf_1"
        assert len(gateway.transfers) == 1

        other = await client.post(
            "/api/payment/transfer",
            json={"order_id": card_order["id"], "account_id": "acc_elsewhere"},
            headers=admin["headers"],
        )
        assert other.status_code == 400
        assert other.json()["error"]["code"] == "INVALID_STATE"
        assert len(gateway.transfers) == 1
