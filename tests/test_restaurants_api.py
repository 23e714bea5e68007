"""Restaurant registration, moderation and menu management."""

from tests.conftest import register_and_login, restaurant_payload


async def test_new_restaurant_is_pending_and_hidden(client, owner, customer):
    response = await client.post("/api/restaurants", json=restaurant_payload(), headers=owner["headers"])
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "pending"
    assert body["commission"] == 10.0
    assert body["owner_id"] == owner["user"]["id"]

    listing = await client.get("/api/restaurants")
    assert listing.json()["total"] == 0

    hidden = await client.get(f"/api/restaurants/{body['id']}", headers=customer["headers"])
    assert hidden.status_code == 404

    own_view = await client.get(f"/api/restaurants/{body['id']}", headers=owner["headers"])
    assert own_view.status_code == 200


async def test_one_restaurant_per_owner(client, owner):
    await client.post("/api/restaurants", json=restaurant_payload(), headers=owner["headers"])
    response = await client.post("/api/restaurants", json=restaurant_payload(name="Second"), headers=owner["headers"])

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "DUPLICATE_RESOURCE"


async def test_customer_cannot_register_restaurant(client, customer):
    response = await client.post("/api/restaurants", json=restaurant_payload(), headers=customer["headers"])

    assert response.status_code == 403


async def test_active_restaurant_is_listed_with_menu(client, restaurant):
    listing = await client.get("/api/restaurants", params={"cuisine": "Indian"})

    assert listing.status_code == 200
    body = listing.json()
    assert body["total"] == 1
    assert body["page"] == 1
    assert body["items"][0]["menu"][0]["name"] == "Paneer Tikka"
    assert body["items"][0]["menu"][0]["price"] == 150.0


async def test_only_admin_changes_status(client, owner, restaurant):
    response = await client.put(
        f"/api/restaurants/{restaurant['id']}/status",
        json={"status": "suspended"},
        headers=owner["headers"],
    )

    assert response.status_code == 403


async def test_owner_cannot_change_commission(client, owner, restaurant):
    response = await client.put(
        f"/api/restaurants/{restaurant['id']}",
        json={"description": "Now with tandoor", "commission": 0},
        headers=owner["headers"],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["description"] == "Now with tandoor"
    assert body["commission"] == 10.0


async def test_other_owner_cannot_edit(client, restaurant):
    stranger = await register_and_login(client, "stranger@example.com", role="restaurant")

    response = await client.put(
        f"/api/restaurants/{restaurant['id']}",
        json={"name": "Hijacked"},
        headers=stranger["headers"],
    )

    assert response.status_code == 403


async def test_menu_item_update_and_remove(client, owner, restaurant):
    item_url = f"/api/restaurants/{restaurant['id']}/menu/{restaurant['menu_item_id']}"

    response = await client.put(item_url, json={"price": 175.5, "is_available": False}, headers=owner["headers"])
    assert response.status_code == 200
    assert response.json()["price"] == 175.5
    assert response.json()["is_available"] is False

    response = await client.delete(item_url, headers=owner["headers"])
    assert response.status_code == 204

    response = await client.delete(item_url, headers=owner["headers"])
    assert response.status_code == 404


async def test_suspension_closes_restaurant(client, admin, restaurant):
    response = await client.put(
        f"/api/restaurants/{restaurant['id']}/status",
        json={"status": "suspended"},
        headers=admin["headers"],
    )

    assert response.status_code == 200
    assert response.json()["is_open"] is False


async def test_my_restaurant(client, owner, restaurant):
    response = await client.get("/api/restaurants/me", headers=owner["headers"])

    assert response.status_code == 200
    assert response.json()["id"] == restaurant["id"]
