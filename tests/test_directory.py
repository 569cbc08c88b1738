from datetime import datetime, timezone

import pytest

from evaltrack.services import stats_service
from evaltrack.utils.dates import format_display
from tests.factories import make_request_doc

SUPPLIER = {
    "email": "sales@acme.ph",
    "category": "Electrical",
    "classification": "Distributor",
    "companyName": "ACME Power",
    "address": "12 Rizal St",
    "location": "Makati",
    "account": "ACC-1",
    "contactNumber": "+63 900 000 0000",
    "contactEmail": "jo@acme.ph",
    "contactPerson": "Jo Cruz",
}


def test_format_display_uses_manila_time():
    dt = datetime(2024, 1, 1, 0, 5, 9, tzinfo=timezone.utc)
    assert format_display(dt) == "01/01/2024, 8:05:09 AM"
    assert format_display(datetime(2024, 1, 1, 5, 0)) == "01/01/2024, 1:00:00 PM"


def test_create_and_list_suppliers(client):
    res = client.post("/api/suppliers", json=SUPPLIER)
    assert res.status_code == 201
    body = res.json()
    assert body["website"] == ""
    assert body["formattedTimestamp"]
    assert body["id"]

    listed = client.get("/api/suppliers").json()
    assert [s["companyName"] for s in listed] == ["ACME Power"]


def test_supplier_requires_contact_person(client):
    payload = {k: v for k, v in SUPPLIER.items() if k != "contactPerson"}
    res = client.post("/api/suppliers", json=payload)
    assert res.status_code == 400
    assert res.json() == {"detail": "contactPerson is required"}


def test_team_member_not_found(client):
    assert client.get("/api/teamMembers/Nobody").status_code == 404
    assert client.get("/api/teamMembers").json() == []


def test_completion_and_efficiency_rates():
    assert stats_service.completion_rate(1, 2, 1) == 50
    assert stats_service.completion_rate(0, 0, 0) == 0
    tasks = [
        {"dateNeeded": "2024-05-10", "completedAt": datetime(2024, 5, 9, tzinfo=timezone.utc)},
        {"dateNeeded": "2024-05-10", "completedAt": datetime(2024, 5, 12, tzinfo=timezone.utc)},
        {"dateNeeded": None},
    ]
    assert stats_service.efficiency_rate(tasks) == "33.33"
    assert stats_service.efficiency_rate([]) == "0.00"


def test_month_range_wraps_december():
    start, end = stats_service.month_range(12, 2024)
    assert start == datetime(2024, 12, 1, tzinfo=timezone.utc)
    assert end == datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_team_member_stats_endpoint(client, seed):
    seed([
        make_request_doc("0001", 1, assignedTo="Ana", status=1),
        make_request_doc("0002", 2, assignedTo="Ana", status=2,
                         completedAt=datetime(2024, 3, 2, tzinfo=timezone.utc), dateNeeded="2024-03-05"),
        make_request_doc("0003", 3, assignedTo="Ana", status=3),
        make_request_doc("0004", 4, assignedTo="Ben", status=2),
        make_request_doc("0005", 5, status=1),
    ])

    rows = {r["name"]: r for r in client.get("/api/teamMembers/stats").json()}
    assert set(rows) == {"Ana", "Ben"}
    ana = rows["Ana"]
    assert (ana["openTasks"], ana["closedTasks"], ana["canceledTasks"]) == (1, 1, 1)
    assert ana["completionRate"] == 33
    assert ana["efficiencyRate"] == "33.33"
    assert len(ana["tasks"]) == 3
    assert rows["Ben"]["completionRate"] == 100

    only_ben = client.get("/api/teamMembers/stats", params={"evaluatorId": "Ben"}).json()
    assert len(only_ben) == 1 and only_ben[0]["closedTasks"] == 1


def test_team_member_stats_month_filter_and_unknown_evaluator(client, seed):
    seed([make_request_doc("0001", 1, assignedTo="Ana", status=1)])

    march = client.get("/api/teamMembers/stats", params={"month": 3, "year": 2024}).json()
    assert [r["name"] for r in march] == ["Ana"]
    assert client.get("/api/teamMembers/stats", params={"month": 4, "year": 2024}).json() == []

    ghost = client.get("/api/teamMembers/stats", params={"evaluatorId": "Ghost"}).json()
    assert ghost == [{
        "name": "Ghost", "openTasks": 0, "closedTasks": 0, "canceledTasks": 0,
        "tasks": [], "completionRate": 0, "efficiencyRate": "0.00",
    }]


@pytest.fixture
def pi_record(client):
    res = client.post("/api/pi-monitoring", json={
        "piNumber": "PI-2024-001",
        "supplierName": "ACME Power",
        "requestReference": "0001",
        "amount": 125000.5,
    })
    assert res.status_code == 201
    return res.json()


def test_pi_record_defaults(pi_record):
    assert pi_record["status"] == "open"
    assert pi_record["currency"] == "PHP"
    assert pi_record["id"]


def test_pi_record_update_and_filters(client, pi_record):
    url = f"/api/pi-monitoring/{pi_record['id']}"
    res = client.put(url, json={"status": "for-payment", "remarks": "approved by finance"})
    assert res.status_code == 200
    assert res.json()["status"] == "for-payment"
    assert res.json()["piNumber"] == "PI-2024-001"

    assert len(client.get("/api/pi-monitoring", params={"status": "for-payment"}).json()) == 1
    assert client.get("/api/pi-monitoring", params={"supplierName": "Other"}).json() == []
    assert client.get(url).json()["remarks"] == "approved by finance"


def test_pi_record_rejects_unknown_status(client, pi_record):
    url = f"/api/pi-monitoring/{pi_record['id']}"
    res = client.put(url, json={"status": "lost"})
    assert res.status_code == 400
    assert "lost" in res.json()["detail"]
    assert client.get("/api/pi-monitoring", params={"status": "lost"}).status_code == 400


def test_pi_record_delete(client, pi_record):
    url = f"/api/pi-monitoring/{pi_record['id']}"
    assert client.delete(url).status_code == 200
    assert client.get(url).status_code == 404
    assert client.delete(url).status_code == 404
    assert client.put(url, json={"remarks": "x"}).status_code == 404
