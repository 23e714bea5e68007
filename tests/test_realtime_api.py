"""Websocket authentication and room entitlement."""

from app.api.v1.realtime import _parse_message, authenticate_websocket, can_join_room
from app.shared.infrastructure.realtime.connection_registry import delivery_room, order_room
from tests.conftest import place_order, register_and_login


async def test_authenticate_with_login_token(client, customer):
    user = await authenticate_websocket(customer["token"])

    assert user.user_id == customer["user"]["id"]
    assert user.role == "customer"


async def test_reject_missing_or_bad_token(client):
    assert await authenticate_websocket(None) is None
    assert await authenticate_websocket("garbage") is None


async def test_reject_suspended_account(client, admin, customer):
    response = await client.put(
        f"/api/admin/users/{customer['user']['id']}/status",
        json={"status": "suspended"},
        headers=admin["headers"],
    )
    assert response.status_code == 200

    assert await authenticate_websocket(customer["token"]) is None


async def test_order_room_follows_view_policy(client, customer, owner, restaurant):
    order = await place_order(client, customer, restaurant)
    stranger = await register_and_login(client, "stranger@example.com")

    assert await can_join_room(await authenticate_websocket(customer["token"]), order_room(order["id"]))
    assert await can_join_room(await authenticate_websocket(owner["token"]), order_room(order["id"]))
    assert not await can_join_room(await authenticate_websocket(stranger["token"]), order_room(order["id"]))
    assert not await can_join_room(await authenticate_websocket(customer["token"]), order_room("missing"))


async def test_delivery_room_belongs_to_partner_and_admin(client, admin, customer, rider, partner):
    room = delivery_room(partner["id"])

    assert await can_join_room(await authenticate_websocket(rider["token"]), room)
    assert await can_join_room(await authenticate_websocket(admin["token"]), room)
    assert not await can_join_room(await authenticate_websocket(customer["token"]), room)


def test_message_parsing():
    assert _parse_message({"action": "join", "room": "order:1"}) == ("join", "order:1")
    assert _parse_message({"action": "shout", "room": "order:1"}) == (None, None)
    assert _parse_message(["join"]) == (None, None)
