"""Delivery partner onboarding, availability and location."""

from tests.conftest import register_and_login

VEHICLE = {"type": "scooter", "number": "KA05XY9876", "color": "red"}


async def test_register_partner_starts_pending(client, rider):
    response = await client.post("/api/delivery-partners", json={"vehicle": VEHICLE}, headers=rider["headers"])

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "pending"
    assert body["is_online"] is False
    assert body["user_id"] == rider["user"]["id"]


async def test_customer_cannot_register_as_partner(client, customer):
    response = await client.post("/api/delivery-partners", json={"vehicle": VEHICLE}, headers=customer["headers"])

    assert response.status_code == 403


async def test_pending_partner_cannot_go_online(client, rider):
    created = await client.post("/api/delivery-partners", json={"vehicle": VEHICLE}, headers=rider["headers"])
    partner_id = created.json()["id"]

    response = await client.put(
        f"/api/delivery-partners/{partner_id}/availability",
        json={"is_online": True},
        headers=rider["headers"],
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_STATE"


async def test_active_partner_goes_online(client, rider, partner):
    response = await client.put(
        f"/api/delivery-partners/{partner['id']}/availability",
        json={"is_online": True},
        headers=rider["headers"],
    )

    assert response.status_code == 200
    assert response.json()["is_online"] is True
    assert response.json()["is_verified"] is True


async def test_location_update(client, rider, partner):
    response = await client.put(
        f"/api/delivery-partners/{partner['id']}/location",
        json={"coordinates": [77.61, 12.93]},
        headers=rider["headers"],
    )

    assert response.status_code == 200
    assert response.json()["current_location"]["coordinates"] == [77.61, 12.93]


async def test_location_rejects_out_of_range(client, rider, partner):
    response = await client.put(
        f"/api/delivery-partners/{partner['id']}/location",
        json={"coordinates": [200, 12.93]},
        headers=rider["headers"],
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_other_rider_cannot_view_or_update(client, partner):
    other = await register_and_login(client, "other-rider@example.com", role="delivery")

    viewed = await client.get(f"/api/delivery-partners/{partner['id']}", headers=other["headers"])
    assert viewed.status_code == 403

    moved = await client.put(
        f"/api/delivery-partners/{partner['id']}/location",
        json={"coordinates": [0, 0]},
        headers=other["headers"],
    )
    assert moved.status_code == 403


async def test_admin_lists_partners(client, admin, partner):
    response = await client.get("/api/delivery-partners", params={"status": "active"}, headers=admin["headers"])

    assert response.status_code == 200
    assert response.json()["total"] == 1


async def test_list_requires_admin(client, rider, partner):
    response = await client.get("/api/delivery-partners", headers=rider["headers"])

    assert response.status_code == 403
