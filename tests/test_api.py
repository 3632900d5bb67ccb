from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from lombard.app import create_app
from lombard.repositories.json_storage import JsonClientRepository

PAYLOAD = {
    "last_name": "Ivanov",
    "first_name": "Petr",
    "patronymic": "Sergeevich",
    "passport_series": "1234",
    "passport_number": "567890",
    "phone_number": "+7 (999) 000-00-00",
    "email": "ivanov@example.com",
    "birth_date": "1990-05-15",
    "gender": "Male",
}


@pytest.fixture()
def api(tmp_path):
    app = create_app(JsonClientRepository(tmp_path / "clients.json"))
    with TestClient(app) as client:
        yield client


def test_create_and_fetch_client(api):
    resp = api.post("/clients", json=PAYLOAD)
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == 1
    assert body["gender"] == "Male"
    assert body["age"] >= 36

    resp = api.get("/clients/1")
    assert resp.status_code == 200
    assert resp.json()["email"] == "ivanov@example.com"


def test_listing_returns_summaries(api):
    api.post("/clients", json=PAYLOAD)
    resp = api.get("/clients", params={"offset": 0, "count": 10})
    assert resp.status_code == 200
    (summary,) = resp.json()
    assert summary["passport_number"] == "567890"
    assert "email" not in summary
    assert "birth_date" not in summary

    assert api.get("/clients", params={"count": 0}).status_code == 422
    assert api.get("/clients", params={"count": 1000}).status_code == 422
    assert api.get("/clients/count").json() == {"count": 1}


def test_error_statuses(api):
    assert api.post("/clients", json=PAYLOAD).status_code == 201

    duplicate = dict(PAYLOAD, phone_number="79990000001", email="")
    resp = api.post("/clients", json=duplicate)
    assert resp.status_code == 409
    assert "passport" in resp.json()["detail"]

    invalid = dict(PAYLOAD, passport_series="12")
    assert api.post("/clients", json=invalid).status_code == 422

    assert api.get("/clients/99").status_code == 404
    assert api.put("/clients/99", json=PAYLOAD).status_code == 404


def test_update_search_sort_delete(api):
    api.post("/clients", json=PAYLOAD)
    api.post(
        "/clients",
        json=dict(PAYLOAD, last_name="Sidorov", passport_number="000002", phone_number="79990000002", email=""),
    )

    resp = api.put("/clients/1", json=dict(PAYLOAD, email="new@example.com"))
    assert resp.status_code == 200
    assert resp.json()["email"] == "new@example.com"

    found = api.get("/clients/search", params={"last_name": "sid"}).json()
    assert [c["id"] for c in found] == [2]
    found = api.get("/clients/search", params={"phone": "79990000000"}).json()
    assert [c["id"] for c in found] == [1]
    assert api.get("/clients/search").status_code == 422

    assert api.post("/clients/sort", params={"field": "last_name", "ascending": False}).status_code == 200
    assert [c["last_name"] for c in api.get("/clients").json()] == ["Sidorov", "Ivanov"]
    assert api.post("/clients/sort", params={"field": "email"}).status_code == 422

    assert api.delete("/clients/1").status_code == 200
    assert api.delete("/clients/1").status_code == 404
    assert api.get("/clients/count").json() == {"count": 1}


def test_health(api):
    assert api.get("/health").json() == {"ok": True}
