import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from evaltrack.main import app
from evaltrack.repositories import requests_repo
from tests.factories import make_request_doc


def test_api_root(client):
    assert client.get("/api").json() == {"message": "API is running"}


def test_create_assigns_reference_and_defaults(client):
    res = client.post("/api/requests", json={
        "email": "buyer@example.com",
        "name": "Buyer",
        "projectTitle": "Solar rooftop",
        "referenceNumber": "9999",
        "timestamp": "1999-01-01T00:00:00Z",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["referenceNumber"] == "0001"
    assert body["timestamp"].startswith("20")
    assert body["status"] == 0
    assert body["detailedStatus"] == "pending"
    assert body["statusHistory"] == []
    assert body["projectTitle"] == "Solar rooftop"
    assert body["formattedTimestamp"]
    assert body["id"]


def test_create_requires_email_and_name(client):
    res = client.post("/api/requests", json={"name": "No email"})
    assert res.status_code == 400
    assert res.json() == {"detail": "email is required"}
    assert client.get("/api/requests").json() == []


def test_sequential_creation_is_dense(client, new_request):
    refs = [new_request()["referenceNumber"] for _ in range(3)]
    assert refs == ["0001", "0002", "0003"]


def test_delete_then_create_keeps_numbers_dense(client, new_request):
    first, second, third = new_request(), new_request(), new_request()

    res = client.delete(f"/api/requests/{second['id']}")
    assert res.status_code == 200
    newest = new_request()

    items = client.get("/api/requests").json()
    refs = {r["id"]: r["referenceNumber"] for r in items}
    assert sorted(refs.values()) == ["0001", "0002", "0003"]
    assert refs[first["id"]] == "0001"
    assert refs[third["id"]] == "0002"
    assert refs[newest["id"]] == "0003"


def test_delete_missing_request(client):
    res = client.delete("/api/requests/does-not-exist")
    assert res.status_code == 404
    assert res.json()["detail"] == "Request not found"


def test_bulk_delete_resets_counter(client, new_request):
    new_request()
    new_request()

    res = client.delete("/api/requests")
    assert res.status_code == 200
    assert res.json()["deletedCount"] == 2
    assert client.get("/api/requests").json() == []
    assert new_request()["referenceNumber"] == "0001"


def test_startup_initializes_counter_from_seeded_data(mock_db, upload_dir, seed):
    seed([make_request_doc(f"{i:04d}", i) for i in range(1, 8)])
    with TestClient(app) as c:
        res = c.post("/api/requests", json={"email": "x@example.com", "name": "X"})
    assert res.json()["referenceNumber"] == "0008"


@pytest.mark.asyncio
async def test_concurrent_creation_yields_unique_dense_numbers(mock_db):
    n = 25
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        responses = await asyncio.gather(*[
            ac.post("/api/requests", json={"email": f"c{i}@example.com", "name": f"C{i}"})
            for i in range(n)
        ])

    assert all(r.status_code == 201 for r in responses)
    refs = sorted(r.json()["referenceNumber"] for r in responses)
    assert refs == [f"{i:04d}" for i in range(1, n + 1)]


def test_list_filters_by_assigned_to(client, new_request):
    new_request(assignedTo="Ana")
    new_request(assignedTo="Ben")
    new_request(assignedTo="Ana")

    res = client.get("/api/requests", params={"assignedTo": "Ana"})
    assert [r["referenceNumber"] for r in res.json()] == ["0001", "0003"]
    assert len(client.get("/api/requests").json()) == 3


def test_get_single_request(client, new_request):
    created = new_request()
    assert client.get(f"/api/requests/{created['id']}").json()["referenceNumber"] == "0001"
    assert client.get("/api/requests/nope").status_code == 404


def test_update_detailed_status_endpoint(client, new_request):
    created = new_request()
    url = f"/api/requests/{created['id']}/updateDetailedStatus"

    res = client.put(url, json={
        "detailedStatus": "done-system-sizing",
        "statusRemarks": "sized for 5kW",
        "timestamp": "2024-04-02T10:00:00Z",
        "actor": "ana",
    })
    assert res.status_code == 200
    body = res.json()
    assert body["detailedStatus"] == "done-system-sizing"
    assert len(body["statusHistory"]) == 1
    assert body["statusHistory"][0]["remarks"] == "sized for 5kW"


def test_update_detailed_status_rejects_unknown_value(client, new_request):
    created = new_request()
    url = f"/api/requests/{created['id']}/updateDetailedStatus"

    res = client.put(url, json={"detailedStatus": "bogus-status", "statusRemarks": ""})
    assert res.status_code == 400
    assert "bogus-status" in res.json()["detail"]
    assert client.get(f"/api/requests/{created['id']}").json()["statusHistory"] == []


def test_update_detailed_status_rejects_malformed_bodies(client, new_request):
    created = new_request()
    url = f"/api/requests/{created['id']}/updateDetailedStatus"

    res = client.put(url, json={"detailedStatus": 5})
    assert res.status_code == 400
    assert res.json() == {"detail": "Invalid detailedStatus: 5"}

    res = client.put(url, json={"statusRemarks": "no status"})
    assert res.status_code == 400
    assert res.json() == {"detail": "detailedStatus is required"}

    assert client.get(f"/api/requests/{created['id']}").json()["statusHistory"] == []


def test_update_detailed_status_missing_request(client):
    res = client.put("/api/requests/nope/updateDetailedStatus", json={"detailedStatus": "pending"})
    assert res.status_code == 404


def test_update_remarks_endpoint(client, new_request):
    created = new_request()
    url = f"/api/requests/{created['id']}/updateRemarks"

    assert client.put(url, json={}).status_code == 400
    res = client.put(url, json={"remarks": 5})
    assert res.status_code == 400
    assert res.json() == {"detail": "Invalid remarks: 5"}
    res = client.put(url, json={"remarks": ""})
    assert res.status_code == 200
    assert res.json()["remarks"] == ""
    assert client.put("/api/requests/nope/updateRemarks", json={"remarks": "x"}).status_code == 404


def test_coarse_status_update_endpoint(client, new_request):
    created = new_request()
    url = f"/api/requests/{created['id']}"

    res = client.put(url, json={"status": 3, "assignedTo": "Ben", "cancellationReason": "duplicate"})
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == 3
    assert body["assignedTo"] == "Ben"
    assert body["cancellationReason"] == "duplicate"
    assert body["canceledAt"]

    assert client.put(url, json={"status": 9}).status_code == 400
    assert client.put("/api/requests/nope", json={"status": 1}).status_code == 404


def test_coarse_status_rejects_booleans(client, new_request):
    created = new_request()
    url = f"/api/requests/{created['id']}"

    res = client.put(url, json={"status": True})
    assert res.status_code == 400
    assert res.json() == {"detail": "Invalid status: True"}
    assert client.get(url).json()["status"] == 0


def test_reset_counter_requires_confirmation(client, new_request):
    new_request()
    new_request()

    assert client.post("/api/reset-counter").status_code == 400
    assert client.post("/api/reset-counter", json={"confirm": False}).status_code == 400

    res = client.post("/api/reset-counter", json={"confirm": True})
    assert res.status_code == 200
    assert res.json()["seq"] == 0
    assert "warning" in res.json()
    # los datos se conservan
    assert len(client.get("/api/requests").json()) == 2


def test_statuses_listing(client):
    body = client.get("/api/statuses").json()
    assert body["status"] == {"0": "Pending", "1": "Ongoing", "2": "Completed", "3": "Canceled"}
    assert len(body["detailedStatus"]) == 25
    assert body["detailedStatus"][0] == "pending"


def test_storage_failure_maps_to_500(client, monkeypatch):
    async def broken(filt=None):
        raise PyMongoError("connection refused")

    monkeypatch.setattr(requests_repo, "list_all", broken)
    res = client.get("/api/requests")
    assert res.status_code == 500
    assert res.json() == {"detail": "Storage error", "error": "connection refused"}
