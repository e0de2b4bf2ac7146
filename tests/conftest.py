import pytest
from fastapi.testclient import TestClient

from ticketdash import server
from tests.fakes import FakeSource

DEMO_EMAIL = "ops@example.com"
DEMO_PASSWORD = "letmein"


@pytest.fixture
def records():
    return [
        {"name": "Ayu Santoso", "email": "ayu@example.com",
         "order_id": "ORD-001", "type_ticket": "VIP",
         "date_ticket": "2024-01-10", "qty": 2, "total_paid": 900000,
         "status": "1", "clock_in": None},
        {"name": "Budi Wijaya", "email": "budi@example.com",
         "order_id": "ORD-002", "type_ticket": "Regular",
         "date_ticket": "2024-01-02", "qty": 1, "total_paid": 150000,
         "status": "check in", "clock_in": "2024-01-02T09:00:00"},
        {"name": "Citra Dewi", "email": "citra@example.com",
         "order_id": "ORD-003", "type_ticket": "Regular",
         "date_ticket": "2024-01-02", "qty": 3, "total_paid": 0,
         "status": "0", "clock_in": None},
        {"name": "Eko Pratama", "email": "eko@example.com",
         "order_id": "ORD-004", "type_ticket": "VIP",
         "date_ticket": "2024-01-10", "qty": 1, "total_paid": 450000,
         "status": "refunded", "clock_in": None},
    ]


@pytest.fixture
def source(records):
    return FakeSource(payload={"data": records})


@pytest.fixture
def client(monkeypatch, source):
    monkeypatch.setattr(server, "AUTH_EMAIL", DEMO_EMAIL)
    monkeypatch.setattr(server, "AUTH_PASSWORD", DEMO_PASSWORD)
    server.app.dependency_overrides[server.participants_source] = (
        lambda: source
    )
    with TestClient(server.app) as c:
        yield c
    server.app.dependency_overrides.clear()


@pytest.fixture
def signed_in(client):
    resp = client.post(
        "/login",
        data={"email": DEMO_EMAIL, "password": DEMO_PASSWORD,
              "next": "/dashboard"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    return client
