"""Shared fixtures: an in-memory record store seeded with one user per role."""

import pytest
from fastapi.testclient import TestClient

from shiptrack.main import app
from shiptrack.schemas import Principal
from shiptrack.security.utils import create_access_token
from shiptrack.services.notification_service import NotificationService
from shiptrack.services.shipment_service import ShipmentService
from shiptrack.store.record_store import MemoryCollection, RecordStore

USERS = [
    {"id": 1, "username": "ada", "email": "ada@example.com", "role": "admin"},
    {"id": 3, "username": "otto", "email": "otto@example.com", "role": "operator"},
    {"id": 4, "username": "olga", "email": "olga@example.com", "role": "operator"},
    {"id": 5, "username": "carl", "email": "carl@example.com", "role": "carrier"},
    {"id": 6, "username": "cora", "email": "cora@example.com", "role": "carrier"},
    {"id": 7, "username": "cy", "email": "cy@example.com", "role": "customer"},
    {"id": 8, "username": "cleo", "email": "cleo@example.com", "role": "customer"},
]


def principal_for(user_id: int) -> Principal:
    user = next(u for u in USERS if u["id"] == user_id)
    return Principal(id=user["id"], username=user["username"], role=user["role"])


@pytest.fixture
def store() -> RecordStore:
    seed = {"users": USERS}
    return RecordStore(lambda name: MemoryCollection(name, seed.get(name)))


@pytest.fixture
def notifications(store) -> NotificationService:
    return NotificationService(store)


@pytest.fixture
def service(store, notifications) -> ShipmentService:
    return ShipmentService(store, notifications)


@pytest.fixture
def admin():
    return principal_for(1)


@pytest.fixture
def operator():
    return principal_for(3)


@pytest.fixture
def other_operator():
    return principal_for(4)


@pytest.fixture
def carrier():
    return principal_for(5)


@pytest.fixture
def other_carrier():
    return principal_for(6)


@pytest.fixture
def customer():
    return principal_for(7)


@pytest.fixture
def client(store):
    previous = app.state.store
    app.state.store = store
    try:
        yield TestClient(app)
    finally:
        app.state.store = previous


@pytest.fixture
def auth_headers():
    """Bearer headers for a seeded user id."""
    def _headers(user_id: int) -> dict:
        user = next(u for u in USERS if u["id"] == user_id)
        token, _ = create_access_token(user)
        return {"Authorization": f"Bearer {token}"}
    return _headers
