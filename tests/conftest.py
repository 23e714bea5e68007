# 📄 File: tests/conftest.py
# 🧭 Purpose (Layman Explanation):
# Prepares a throwaway database, a fake payment provider and ready-made users so each
# test can exercise the marketplace the way the apps do.
# 🧪 Purpose (Technical Summary):
# Pytest fixtures: test environment variables (set before the app is imported), a fresh
# SQLite schema per test, event bus wiring, an httpx AsyncClient over ASGITransport, a fake
# gateway bound through dependency_overrides and helpers that walk users and restaurants
# through registration and approval.
# 🔗 Dependencies:
# pytest, pytest-asyncio, httpx, aiosqlite
# 🔄 Connected Modules / Calls From:
# every test module under tests/

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="food-delivery-tests-")

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["ENVIRONMENT"] = "testing"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_FORMAT"] = "text"
os.environ["PAYMENT_GATEWAY_KEY_ID"] = "key_test"
os.environ["PAYMENT_GATEWAY_KEY_SECRET"] = "gateway-test-secret"
os.environ["PAYMENT_WEBHOOK_SECRET"] = "webhook-test-secret"

from typing import Any, Dict, List, Optional  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.main import app, register_event_handlers  # noqa: E402
from app.modules.payments.infrastructure.external.gateway_client import get_payment_gateway  # noqa: E402
from app.modules.user_management.domain.models.user import User, UserRole  # noqa: E402
from app.modules.user_management.infrastructure.database.user_repository_impl import (  # noqa: E402
    UserRepositoryImpl,
)
from app.shared.config.database import create_tables, db_config, drop_tables  # noqa: E402
from app.shared.core.event_bus import reset_event_bus  # noqa: E402
from app.shared.core.security import get_password_hash  # noqa: E402
from app.shared.infrastructure.database.session import get_session  # noqa: E402
from app.shared.infrastructure.realtime.connection_registry import reset_connection_registry  # noqa: E402

PASSWORD = "secret123"
ADMIN_EMAIL = "admin@example.com"

DELIVERY_ADDRESS = {
    "street": "12 MG Road",
    "city": "Bengaluru",
    "zip_code": "560001",
    "coordinates": {"type": "Point", "coordinates": [77.5946, 12.9716]},
}


class FakePaymentGateway:
    """Records calls instead of talking to the gateway."""

    api_name = "payment-gateway"
    key_id = "key_test"

    def __init__(self):
        self.orders: List[Dict[str, Any]] = []
        self.refunds: List[Dict[str, Any]] = []
        self.transfers: List[Dict[str, Any]] = []

    async def create_order(self, amount, currency, receipt, notes=None):
        gateway_order = {
            "id": f"gw_order_{len(self.orders) + 1}",
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
        }
        self.orders.append(gateway_order)
        return gateway_order

    async def refund(self, payment_id, amount=None):
        refund = {"id": f"rfnd_{len(self.refunds) + 1}", "payment_id": payment_id, "amount": amount}
        self.refunds.append(refund)
        return refund

    async def transfer(self, payment_id, account_id, amount, currency):
        transfer = {
            "id": f"trf_{len(self.transfers) + 1}",
            "payment_id": payment_id,
            "account": account_id,
            "amount": amount,
            "currency": currency,
        }
        self.transfers.append(transfer)
        return {"items": [transfer]}


@pytest.fixture
def gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture(autouse=True)
async def database():
    await drop_tables()
    await create_tables()
    yield
    await db_config.close_async_engine()


@pytest.fixture(autouse=True)
def event_bus_wiring():
    reset_event_bus()
    reset_connection_registry()
    register_event_handlers()
    yield
    reset_event_bus()
    reset_connection_registry()


@pytest.fixture
async def client(gateway):
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.pop(get_payment_gateway, None)


# =============================================================================
# HELPERS
# =============================================================================

def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register_and_login(
    client: AsyncClient,
    email: str,
    role: str = "customer",
    name: Optional[str] = None,
) -> Dict[str, Any]:
    response = await client.post(
        "/api/auth/register",
        json={"name": name or email.split("@")[0], "email": email, "password": PASSWORD, "role": role},
    )
    assert response.status_code == 201, response.text
    return await login(client, email)


async def login(client: AsyncClient, email: str, password: str = PASSWORD) -> Dict[str, Any]:
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    body = response.json()
    return {"token": body["access_token"], "user": body["user"], "headers": auth_headers(body["access_token"])}


async def create_admin(client: AsyncClient) -> Dict[str, Any]:
    async with get_session() as session:
        await UserRepositoryImpl(session=session).create(
            User(
                name="Admin",
                email=ADMIN_EMAIL,
                password_hash=get_password_hash(PASSWORD),
                role=UserRole.ADMIN,
            )
        )
    return await login(client, ADMIN_EMAIL)


def restaurant_payload(**overrides) -> Dict[str, Any]:
    payload = {
        "name": "Spice Route",
        "description": "North Indian kitchen",
        "cuisine": "Indian",
        "address": {"street": "1 Church Street", "city": "Bengaluru"},
        "location": {"type": "Point", "coordinates": [77.6, 12.97]},
        "contact": {"phone": "+919876543210", "email": "kitchen@example.com"},
        "minimum_order": 100,
        "delivery_fee": 20,
        "is_open": True,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def admin(client):
    return await create_admin(client)


@pytest.fixture
async def customer(client):
    return await register_and_login(client, "customer@example.com")


@pytest.fixture
async def owner(client):
    return await register_and_login(client, "owner@example.com", role="restaurant")


@pytest.fixture
async def rider(client):
    return await register_and_login(client, "rider@example.com", role="delivery")


@pytest.fixture
async def restaurant(client, owner, admin):
    """An approved, open restaurant with one 150.00 dish on the menu."""
    response = await client.post("/api/restaurants", json=restaurant_payload(), headers=owner["headers"])
    assert response.status_code == 201, response.text
    restaurant_id = response.json()["id"]

    response = await client.post(
        f"/api/restaurants/{restaurant_id}/menu",
        json={
            "name": "Paneer Tikka",
            "description": "Grilled cottage cheese",
            "price": 150,
            "category": "main-course",
            "preparation_time": 15,
        },
        headers=owner["headers"],
    )
    assert response.status_code == 201, response.text
    menu_item_id = response.json()["id"]

    response = await client.put(
        f"/api/restaurants/{restaurant_id}/status",
        json={"status": "active"},
        headers=admin["headers"],
    )
    assert response.status_code == 200, response.text

    return {"id": restaurant_id, "menu_item_id": menu_item_id}


@pytest.fixture
async def partner(client, rider, admin):
    """An approved delivery partner profile for ``rider``."""
    response = await client.post(
        "/api/delivery-partners",
        json={"vehicle": {"type": "motorcycle", "number": "KA01AB1234"}},
        headers=rider["headers"],
    )
    assert response.status_code == 201, response.text
    partner_id = response.json()["id"]

    response = await client.put(
        f"/api/delivery-partners/{partner_id}/status",
        json={"status": "active"},
        headers=admin["headers"],
    )
    assert response.status_code == 200, response.text
    return {"id": partner_id}


async def place_order(
    client: AsyncClient,
    customer: Dict[str, Any],
    restaurant: Dict[str, Any],
    quantity: int = 2,
    payment_method: str = "cash",
) -> Dict[str, Any]:
    response = await client.post(
        "/api/orders",
        json={
            "restaurant_id": restaurant["id"],
            "items": [{"menu_item_id": restaurant["menu_item_id"], "quantity": quantity}],
            "delivery_address": DELIVERY_ADDRESS,
            "payment_method": payment_method,
        },
        headers=customer["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()


async def set_status(client: AsyncClient, order_id: str, status: str, headers: Dict[str, str], **extra):
    return await client.put(f"/api/orders/{order_id}/status", json={"status": status, **extra}, headers=headers)


async def move_to_ready(client: AsyncClient, order_id: str, owner: Dict[str, Any]) -> None:
    for status in ("confirmed", "preparing", "ready"):
        response = await set_status(client, order_id, status, owner["headers"])
        assert response.status_code == 200, response.text


async def assign(client: AsyncClient, order_id: str, rider: Dict[str, Any]) -> Dict[str, Any]:
    response = await client.put(f"/api/orders/{order_id}/assign", json={}, headers=rider["headers"])
    assert response.status_code == 200, response.text
    return response.json()


async def deliver(client: AsyncClient, order_id: str, owner: Dict[str, Any], rider: Dict[str, Any]) -> Dict[str, Any]:
    """Walk an order from its current pre-ready status to delivered."""
    current = (await client.get(f"/api/orders/{order_id}", headers=owner["headers"])).json()["status"]
    steps = ("confirmed", "preparing", "ready")
    for status in steps[steps.index(current) + 1:] if current in steps else steps:
        response = await set_status(client, order_id, status, owner["headers"])
        assert response.status_code == 200, response.text
    await assign(client, order_id, rider)
    for status in ("picked-up", "delivering", "delivered"):
        response = await set_status(client, order_id, status, rider["headers"])
        assert response.status_code == 200, response.text
    return response.json()
