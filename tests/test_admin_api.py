"""Admin dashboard, user administration and reports."""

import pytest

from tests.conftest import PASSWORD, deliver, place_order, register_and_login, set_status


async def test_dashboard_counts_and_revenue(client, admin, customer, owner, rider, partner, restaurant):
    delivered = await place_order(client, customer, restaurant)
    await deliver(client, delivered["id"], owner, rider)
    await place_order(client, customer, restaurant)

    response = await client.get("/api/admin/dashboard", headers=admin["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["users"]["total"] == 4
    assert body["users"]["by_role"] == {"admin": 1, "customer": 1, "restaurant": 1, "delivery": 1}
    assert body["restaurants"]["by_status"] == {"active": 1}
    assert body["delivery_partners"]["by_status"] == {"active": 1}
    assert body["orders"]["total"] == 2
    assert body["orders"]["by_status"] == {"delivered": 1, "pending": 1}
    assert body["revenue"]["gross_revenue"] == pytest.approx(350.0)
    assert body["revenue"]["platform_earnings"] == pytest.approx(64.0)
    assert body["revenue"]["restaurant_earnings"] == pytest.approx(270.0)
    assert body["revenue"]["delivery_partner_earnings"] == pytest.approx(16.0)


async def test_empty_dashboard(client, admin):
    response = await client.get("/api/admin/dashboard", headers=admin["headers"])

    assert response.status_code == 200
    assert response.json()["orders"] == {"total": 0, "by_status": {}}
    assert response.json()["revenue"]["gross_revenue"] == 0.0


async def test_dashboard_requires_admin(client, customer):
    response = await client.get("/api/admin/dashboard", headers=customer["headers"])

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


async def test_dashboard_requires_authentication(client):
    response = await client.get("/api/admin/dashboard")

    assert response.status_code == 401


class TestUserAdministration:
    async def test_list_users_filters_and_paginates(self, client, admin, customer, owner, rider):
        await register_and_login(client, "second.customer@example.com", name="Asha Rao")

        response = await client.get(
            "/api/admin/users", params={"role": "customer", "limit": 1}, headers=admin["headers"]
        )
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert body["pages"] == 2
        assert len(body["items"]) == 1
        assert "password_hash" not in body["items"][0]

        response = await client.get("/api/admin/users", params={"search": "ASHA"}, headers=admin["headers"])
        assert [u["email"] for u in response.json()["items"]] == ["second.customer@example.com"]

    async def test_suspended_user_is_locked_out(self, client, admin, customer):
        user_url = f"/api/admin/users/{customer['user']['id']}/status"

        response = await client.put(user_url, json={"status": "suspended"}, headers=admin["headers"])
        assert response.status_code == 200
        assert response.json()["status"] == "suspended"

        me = await client.get("/api/auth/me", headers=customer["headers"])
        assert me.status_code == 403

        relogin = await client.post("/api/auth/login", json={"email": "customer@example.com", "password": PASSWORD})
        assert relogin.status_code == 403

        suspended = await client.get("/api/admin/users", params={"status": "suspended"}, headers=admin["headers"])
        assert suspended.json()["total"] == 1

        response = await client.put(user_url, json={"status": "active"}, headers=admin["headers"])
        assert response.status_code == 200
        assert (await client.get("/api/auth/me", headers=customer["headers"])).status_code == 200

    async def test_only_active_or_suspended(self, client, admin, customer):
        response = await client.put(
            f"/api/admin/users/{customer['user']['id']}/status",
            json={"status": "inactive"},
            headers=admin["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_admin_cannot_suspend_self(self, client, admin):
        response = await client.put(
            f"/api/admin/users/{admin['user']['id']}/status",
            json={"status": "suspended"},
            headers=admin["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_STATE"

    async def test_unknown_user(self, client, admin):
        response = await client.put(
            "/api/admin/users/no-such-user/status", json={"status": "suspended"}, headers=admin["headers"]
        )

        assert response.status_code == 404

    async def test_user_admin_requires_admin(self, client, customer, owner):
        listing = await client.get("/api/admin/users", headers=customer["headers"])
        assert listing.status_code == 403

        change = await client.put(
            f"/api/admin/users/{owner['user']['id']}/status",
            json={"status": "suspended"},
            headers=customer["headers"],
        )
        assert change.status_code == 403


class TestReports:
    async def test_report_aggregates_orders(self, client, admin, customer, owner, rider, partner, restaurant):
        delivered = await place_order(client, customer, restaurant)
        await deliver(client, delivered["id"], owner, rider)
        await client.put(f"/api/orders/{delivered['id']}/rating", json={"rating": 4}, headers=customer["headers"])
        cancelled = await place_order(client, customer, restaurant)
        response = await set_status(client, cancelled["id"], "cancelled", owner["headers"], reason="Out of stock")
        assert response.status_code == 200

        response = await client.get("/api/admin/reports", headers=admin["headers"])

        assert response.status_code == 200
        body = response.json()
        assert body["revenue"]["total_orders"] == 2
        assert body["revenue"]["billed_orders"] == 1
        assert body["revenue"]["total_revenue"] == pytest.approx(350.0)
        assert body["revenue"]["average_order_value"] == pytest.approx(350.0)
        assert body["revenue"]["platform_earnings"] == pytest.approx(64.0)
        assert body["orders_by_status"] == {"delivered": 1, "cancelled": 1}

        top_restaurant = body["top_restaurants"][0]
        assert top_restaurant["restaurant_id"] == restaurant["id"]
        assert top_restaurant["name"] == "Spice Route"
        assert top_restaurant["total_orders"] == 1
        assert top_restaurant["average_rating"] == pytest.approx(4.0)

        top_partner = body["top_delivery_partners"][0]
        assert top_partner["delivery_partner_id"] == partner["id"]
        assert top_partner["name"] == "rider"
        assert top_partner["total_deliveries"] == 1
        assert top_partner["total_earnings"] == pytest.approx(16.0)

    async def test_report_window_excludes_orders(self, client, admin, customer, restaurant):
        await place_order(client, customer, restaurant)

        response = await client.get(
            "/api/admin/reports",
            params={"start_date": "2999-01-01T00:00:00Z", "end_date": "2999-12-31T00:00:00Z"},
            headers=admin["headers"],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["revenue"]["total_orders"] == 0
        assert body["revenue"]["average_order_value"] == 0.0
        assert body["orders_by_status"] == {}
        assert body["top_restaurants"] == []

    async def test_report_window_must_be_ordered(self, client, admin):
        response = await client.get(
            "/api/admin/reports",
            params={"start_date": "2026-02-01T00:00:00Z", "end_date": "2026-01-01T00:00:00Z"},
            headers=admin["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
