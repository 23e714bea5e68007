"""Order placement, lifecycle, tracking, assignment and rating."""

import pytest

from tests.conftest import (
    DELIVERY_ADDRESS,
    assign,
    deliver,
    move_to_ready,
    place_order,
    register_and_login,
    set_status,
)


class TestPlacement:
    async def test_totals_and_initial_state(self, client, customer, restaurant):
        order = await place_order(client, customer, restaurant, quantity=2)

        assert order["subtotal"] == 300.0
        assert order["tax"] == 30.0
        assert order["delivery_fee"] == 20.0
        assert order["total"] == 350.0
        assert order["status"] == "pending"
        assert order["payment_status"] == "pending"
        assert order["payment_method"] == "cash"
        assert order["order_number"].startswith("ORD")
        assert order["items"][0]["name"] == "Paneer Tikka"
        assert order["items"][0]["line_total"] == 300.0
        assert order["estimated_delivery_time"] is not None
        assert order["tracking"] == []

    async def test_placement_updates_restaurant_and_customer(self, client, customer, owner, restaurant):
        await place_order(client, customer, restaurant)

        mine = (await client.get("/api/restaurants/me", headers=owner["headers"])).json()
        assert mine["total_orders"] == 1
        assert mine["total_revenue"] == 350.0

        me = (await client.get("/api/auth/me", headers=customer["headers"])).json()
        assert me["total_orders"] == 1
        assert me["total_spent"] == 350.0

    async def test_below_minimum(self, client, customer, owner, restaurant):
        created = await client.post(
            f"/api/restaurants/{restaurant['id']}/menu",
            json={"name": "Lassi", "description": "Sweet yogurt drink", "price": 50, "category": "beverages",
                  "preparation_time": 5},
            headers=owner["headers"],
        )
        response = await client.post(
            "/api/orders",
            json={
                "restaurant_id": restaurant["id"],
                "items": [{"menu_item_id": created.json()["id"], "quantity": 1}],
                "delivery_address": DELIVERY_ADDRESS,
            },
            headers=customer["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Order amount below minimum"

    async def test_closed_restaurant(self, client, customer, owner, restaurant):
        await client.put(f"/api/restaurants/{restaurant['id']}", json={"is_open": False}, headers=owner["headers"])

        response = await client.post(
            "/api/orders",
            json={
                "restaurant_id": restaurant["id"],
                "items": [{"menu_item_id": restaurant["menu_item_id"], "quantity": 1}],
                "delivery_address": DELIVERY_ADDRESS,
            },
            headers=customer["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Restaurant is not accepting orders"

    async def test_only_customers_place_orders(self, client, owner, restaurant):
        response = await client.post(
            "/api/orders",
            json={
                "restaurant_id": restaurant["id"],
                "items": [{"menu_item_id": restaurant["menu_item_id"], "quantity": 1}],
                "delivery_address": DELIVERY_ADDRESS,
            },
            headers=owner["headers"],
        )

        assert response.status_code == 403

    async def test_empty_items_rejected(self, client, customer, restaurant):
        response = await client.post(
            "/api/orders",
            json={"restaurant_id": restaurant["id"], "items": [], "delivery_address": DELIVERY_ADDRESS},
            headers=customer["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestVisibility:
    async def test_other_customer_cannot_view(self, client, customer, restaurant):
        order = await place_order(client, customer, restaurant)
        stranger = await register_and_login(client, "stranger@example.com")

        response = await client.get(f"/api/orders/{order['id']}", headers=stranger["headers"])

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Not authorized to view this order"

    async def test_participants_can_view(self, client, customer, owner, admin, restaurant):
        order = await place_order(client, customer, restaurant)

        for session in (customer, owner, admin):
            response = await client.get(f"/api/orders/{order['id']}", headers=session["headers"])
            assert response.status_code == 200

    async def test_list_is_scoped_to_caller(self, client, customer, owner, restaurant):
        await place_order(client, customer, restaurant)
        stranger = await register_and_login(client, "stranger@example.com")

        assert (await client.get("/api/orders", headers=customer["headers"])).json()["total"] == 1
        assert (await client.get("/api/orders", headers=owner["headers"])).json()["total"] == 1
        assert (await client.get("/api/orders", headers=stranger["headers"])).json()["total"] == 0

    async def test_list_filters_by_status(self, client, customer, owner, restaurant):
        order = await place_order(client, customer, restaurant)
        await place_order(client, customer, restaurant)
        await set_status(client, order["id"], "confirmed", owner["headers"])

        response = await client.get("/api/orders", params={"status": "confirmed"}, headers=customer["headers"])

        assert response.json()["total"] == 1
        assert response.json()["items"][0]["id"] == order["id"]

    async def test_unknown_order(self, client, customer):
        response = await client.get("/api/orders/does-not-exist", headers=customer["headers"])

        assert response.status_code == 404


class TestStatusChanges:
    async def test_customer_cannot_change_status(self, client, customer, restaurant):
        order = await place_order(client, customer, restaurant)

        response = await set_status(client, order["id"], "confirmed", customer["headers"])

        assert response.status_code == 403

    async def test_illegal_transition(self, client, customer, owner, restaurant):
        order = await place_order(client, customer, restaurant)

        response = await set_status(client, order["id"], "delivered", owner["headers"])

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_STATE"

    async def test_pickup_requires_partner(self, client, customer, owner, restaurant):
        order = await place_order(client, customer, restaurant)
        await move_to_ready(client, order["id"], owner)

        response = await set_status(client, order["id"], "picked-up", owner["headers"])

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "A delivery partner must be assigned first"

    async def test_cancellation_reverses_revenue(self, client, customer, owner, restaurant):
        order = await place_order(client, customer, restaurant)

        response = await set_status(client, order["id"], "cancelled", owner["headers"], reason="Out of paneer")

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        assert response.json()["cancellation_reason"] == "Out of paneer"

        mine = (await client.get("/api/restaurants/me", headers=owner["headers"])).json()
        assert mine["total_revenue"] == 0.0
        assert mine["total_orders"] == 1

    async def test_terminal_status_is_final(self, client, customer, owner, restaurant):
        order = await place_order(client, customer, restaurant)
        await set_status(client, order["id"], "rejected", owner["headers"])

        response = await set_status(client, order["id"], "confirmed", owner["headers"])

        assert response.status_code == 400

    async def test_delivery_settles_earnings(self, client, customer, owner, rider, partner, restaurant):
        order = await place_order(client, customer, restaurant)

        delivered = await deliver(client, order["id"], owner, rider)

        assert delivered["status"] == "delivered"
        assert delivered["delivery_time"] is not None
        assert delivered["earnings"]["delivery_partner"] == 16.0
        assert delivered["earnings"]["restaurant"] == 270.0
        assert delivered["earnings"]["platform"] == 64.0
        assert delivered["earnings"]["commission"] == 10.0

        mine = (await client.get("/api/restaurants/me", headers=owner["headers"])).json()
        assert mine["total_earnings"] == 270.0

        profile = (await client.get("/api/delivery-partners/me", headers=rider["headers"])).json()
        assert profile["total_deliveries"] == 1
        assert profile["total_earnings"] == 16.0
        assert profile["current_order_id"] is None

    async def test_partner_limited_to_delivery_statuses(self, client, customer, owner, rider, partner, restaurant):
        order = await place_order(client, customer, restaurant)
        await set_status(client, order["id"], "confirmed", owner["headers"])
        await assign(client, order["id"], rider)

        response = await set_status(client, order["id"], "preparing", rider["headers"])

        assert response.status_code == 403


class TestAssignment:
    async def test_self_assignment(self, client, customer, owner, rider, partner, restaurant):
        order = await place_order(client, customer, restaurant)
        await set_status(client, order["id"], "confirmed", owner["headers"])

        assigned = await assign(client, order["id"], rider)

        assert assigned["delivery_partner_id"] == partner["id"]
        profile = (await client.get("/api/delivery-partners/me", headers=rider["headers"])).json()
        assert profile["current_order_id"] == order["id"]

    async def test_pending_order_is_not_assignable(self, client, customer, rider, partner, restaurant):
        order = await place_order(client, customer, restaurant)

        response = await client.put(f"/api/orders/{order['id']}/assign", json={}, headers=rider["headers"])

        assert response.status_code == 400

    async def test_partner_carries_one_order(self, client, customer, owner, rider, partner, restaurant):
        first = await place_order(client, customer, restaurant)
        second = await place_order(client, customer, restaurant)
        for order in (first, second):
            await set_status(client, order["id"], "confirmed", owner["headers"])
        await assign(client, first["id"], rider)

        response = await client.put(f"/api/orders/{second['id']}/assign", json={}, headers=rider["headers"])

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Delivery partner is already on an order"

    async def test_restaurant_names_the_partner(self, client, customer, owner, partner, restaurant):
        order = await place_order(client, customer, restaurant)
        await set_status(client, order["id"], "confirmed", owner["headers"])

        missing = await client.put(f"/api/orders/{order['id']}/assign", json={}, headers=owner["headers"])
        assert missing.status_code == 400

        response = await client.put(
            f"/api/orders/{order['id']}/assign",
            json={"delivery_partner_id": partner["id"]},
            headers=owner["headers"],
        )
        assert response.status_code == 200
        assert response.json()["delivery_partner_id"] == partner["id"]

    async def test_cancellation_frees_partner(self, client, customer, owner, rider, partner, restaurant):
        order = await place_order(client, customer, restaurant)
        await set_status(client, order["id"], "confirmed", owner["headers"])
        await assign(client, order["id"], rider)

        await set_status(client, order["id"], "cancelled", owner["headers"])

        profile = (await client.get("/api/delivery-partners/me", headers=rider["headers"])).json()
        assert profile["current_order_id"] is None


class TestTracking:
    async def test_only_assigned_partner_tracks(self, client, customer, owner, partner, restaurant):
        order = await place_order(client, customer, restaurant)
        other = await register_and_login(client, "other-rider@example.com", role="delivery")

        response = await client.put(
            f"/api/orders/{order['id']}/tracking",
            json={"status": "picked-up", "coordinates": [77.6, 12.9]},
            headers=other["headers"],
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Only the assigned delivery partner can update tracking"

    async def test_tracking_is_appended_in_order(self, client, customer, owner, rider, partner, restaurant):
        order = await place_order(client, customer, restaurant)
        await move_to_ready(client, order["id"], owner)
        await assign(client, order["id"], rider)
        await set_status(client, order["id"], "picked-up", rider["headers"])

        for coordinates in ([77.60, 12.90], [77.61, 12.91]):
            response = await client.put(
                f"/api/orders/{order['id']}/tracking",
                json={"status": "delivering", "coordinates": coordinates},
                headers=rider["headers"],
            )
            assert response.status_code == 200, response.text

        body = response.json()
        assert body["status"] == "picked-up"
        assert [entry["sequence"] for entry in body["tracking"]] == [1, 2]
        assert body["tracking"][1]["location"]["coordinates"] == [77.61, 12.91]

        profile = (await client.get("/api/delivery-partners/me", headers=rider["headers"])).json()
        assert profile["current_location"]["coordinates"] == [77.61, 12.91]

    async def test_tracking_status_must_be_delivery_side(self, client, customer, owner, rider, partner, restaurant):
        order = await place_order(client, customer, restaurant)
        await set_status(client, order["id"], "confirmed", owner["headers"])
        await assign(client, order["id"], rider)

        response = await client.put(
            f"/api/orders/{order['id']}/tracking",
            json={"status": "preparing", "coordinates": [77.6, 12.9]},
            headers=rider["headers"],
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("coordinates", [[77.6, 12.9, 0.0], [77.6], ["a", "b"]])
    async def test_tracking_needs_a_coordinate_pair(
        self, client, customer, owner, rider, partner, restaurant, coordinates
    ):
        order = await place_order(client, customer, restaurant)
        await move_to_ready(client, order["id"], owner)
        await assign(client, order["id"], rider)
        await set_status(client, order["id"], "picked-up", rider["headers"])

        response = await client.put(
            f"/api/orders/{order['id']}/tracking",
            json={"status": "delivering", "coordinates": coordinates},
            headers=rider["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

        current = (await client.get(f"/api/orders/{order['id']}", headers=rider["headers"])).json()
        assert current["tracking"] == []


class TestRating:
    async def test_rating_updates_running_averages(self, client, customer, owner, rider, partner, restaurant):
        first = await place_order(client, customer, restaurant)
        await deliver(client, first["id"], owner, rider)
        response = await client.put(f"/api/orders/{first['id']}/rating", json={"rating": 4}, headers=customer["headers"])
        assert response.status_code == 200
        assert response.json()["rating"] == 4

        second = await place_order(client, customer, restaurant)
        await deliver(client, second["id"], owner, rider)
        response = await client.put(
            f"/api/orders/{second['id']}/rating",
            json={"rating": 5, "review": "Hot and fast"},
            headers=customer["headers"],
        )
        assert response.status_code == 200

        mine = (await client.get("/api/restaurants/me", headers=owner["headers"])).json()
        assert mine["rating"] == pytest.approx(4.5)
        assert mine["total_ratings"] == 2

        profile = (await client.get("/api/delivery-partners/me", headers=rider["headers"])).json()
        assert profile["rating"] == pytest.approx(4.5)

    async def test_rate_once(self, client, customer, owner, rider, partner, restaurant):
        order = await place_order(client, customer, restaurant)
        await deliver(client, order["id"], owner, rider)
        await client.put(f"/api/orders/{order['id']}/rating", json={"rating": 3}, headers=customer["headers"])

        response = await client.put(f"/api/orders/{order['id']}/rating", json={"rating": 5}, headers=customer["headers"])

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Order has already been rated"

    async def test_rating_requires_delivery(self, client, customer, restaurant):
        order = await place_order(client, customer, restaurant)

        response = await client.put(f"/api/orders/{order['id']}/rating", json={"rating": 5}, headers=customer["headers"])

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Can only rate delivered orders"

    async def test_only_the_customer_rates(self, client, customer, owner, restaurant):
        order = await place_order(client, customer, restaurant)

        response = await client.put(f"/api/orders/{order['id']}/rating", json={"rating": 5}, headers=owner["headers"])

        assert response.status_code == 403

    async def test_rating_range(self, client, customer, restaurant):
        order = await place_order(client, customer, restaurant)

        response = await client.put(f"/api/orders/{order['id']}/rating", json={"rating": 6}, headers=customer["headers"])

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
