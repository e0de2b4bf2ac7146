"""Tests for the mock participants API."""

from fastapi.testclient import TestClient

from ticketdash import mockapi
from ticketdash.model import aggregate


def test_requires_bearer_token():
    client = TestClient(mockapi.app)
    assert client.get("/participants").status_code == 401
    resp = client.get("/participants",
                      headers={"Authorization": "Bearer wrong"})
    assert resp.status_code == 401


def test_serves_participants():
    client = TestClient(mockapi.app)
    resp = client.get(
        "/participants",
        headers={"Authorization": f"Bearer {mockapi.MOCK_API_TOKEN}"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalData"] == len(body["data"])
    assert body["data"][0]["qty"] == "abc"


def test_dataset_is_reproducible():
    assert mockapi.make_participants(30) == mockapi.make_participants(30)
    assert mockapi.make_participants(0) == []


def test_dataset_aggregates_cleanly():
    data = mockapi.make_participants(200)
    statuses = {r["status"] for r in data}
    assert {"0", "1", "check in"} <= statuses
    s = aggregate(data)
    assert s.sold_ticket_count > 0
    assert 0 < s.conversion_rate < 100
    assert [p.date for p in s.by_date] == sorted(p.date for p in s.by_date)
