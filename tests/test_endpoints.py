"""
Tests for the meal ledger HTTP endpoints.

Ledger routes run against the in-memory store with a fixed user (see
``ledger_client`` in test_fixtures); the full flow test at the bottom runs
against SQLite with real registration and login.
"""

from decimal import Decimal

from test_fixtures import (
    client,
    ledger_client,
    fake_store,
    db_client,
    session_factory,
    make_record,
    date_span,
    unique_email,
)


EXAMPLE_LEDGER_FLOW = """
Meal Ledger Flow
================

1. RECONCILE A RANGE
   POST /ledger/reconcile
   {"start": "2024-01-01", "end": "2024-01-03"}

   Response: 200 OK
   {
       "range": {"start": "2024-01-01", "end": "2024-01-03"},
       "records": [{"id": "...", "date": "2024-01-01", "breakfast": false, "dinner": false, ...}, ...],
       "rows": [{"date": "2024-01-01", "breakfast": false, "dinner": false, "total": 0}, ...],
       "summary": {"selected_count": 0, "total_cost": "0", "remaining": "1000", ...}
   }

2. TOGGLE A MEAL
   POST /ledger/toggle
   {"record": {"id": "...", "date": "2024-01-02", "breakfast": false, "dinner": false},
    "slot": "breakfast"}

   Response: 200 OK
   {"record": {..., "breakfast": true}, "status": "confirmed"}

3. SUMMARY / REPORT
   GET /ledger/summary?start=2024-01-01&end=2024-01-03
   GET /ledger/report?start=2024-01-01&end=2024-01-03   (text/plain)

4. RESET
   DELETE /ledger?start=2024-01-01&end=2024-01-03

   Response: 200 OK
   {"deleted": 3, "range": null}
"""


def test_reconcile_returns_full_range(ledger_client):
    client, user_id, store = ledger_client

    response = client.post("/ledger/reconcile", json={"start": "2024-01-01", "end": "2024-01-03"})

    assert response.status_code == 200
    body = response.json()
    assert body["range"] == {"start": "2024-01-01", "end": "2024-01-03"}
    assert [r["date"] for r in body["records"]] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert all(r["owner"] == str(user_id) for r in body["records"])
    assert [row["total"] for row in body["rows"]] == [0, 0, 0]
    assert body["summary"]["selected_count"] == 0
    assert Decimal(body["summary"]["remaining"]) == Decimal("1000")
    assert len(store.rows) == 3


def test_reconcile_twice_inserts_once(ledger_client):
    client, _, store = ledger_client
    payload = {"start": "2024-03-01", "end": "2024-03-31"}

    first = client.post("/ledger/reconcile", json=payload).json()
    second = client.post("/ledger/reconcile", json=payload).json()

    assert [r["id"] for r in first["records"]] == [r["id"] for r in second["records"]]
    assert store.count("insert") == 1


def test_get_ledger_without_range_returns_all_rows(ledger_client):
    client, user_id, store = ledger_client
    for d in reversed(date_span("2024-01-01", 4)):
        store.put(make_record(d, breakfast=True, owner=user_id))

    response = client.get("/ledger")

    assert response.status_code == 200
    body = response.json()
    assert body["range"] is None
    assert [r["date"] for r in body["records"]] == [
        "2024-01-01",
        "2024-01-02",
        "2024-01-03",
        "2024-01-04",
    ]
    assert body["summary"]["breakfast_count"] == 4
    assert store.count("insert") == 0


def test_toggle_persisted_record(ledger_client):
    client, user_id, store = ledger_client
    stored = store.put(make_record("2024-01-02", dinner=True, owner=user_id))

    response = client.post(
        "/ledger/toggle",
        json={
            "record": {
                "id": str(stored.id),
                "date": "2024-01-02",
                "breakfast": False,
                "dinner": True,
            },
            "slot": "breakfast",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "confirmed"
    assert body["record"]["id"] == str(stored.id)
    assert body["record"]["breakfast"] is True
    assert body["record"]["dinner"] is True
    assert store.rows[stored.id].breakfast is True


def test_toggle_unsaved_record_creates_row(ledger_client):
    client, user_id, store = ledger_client

    response = client.post(
        "/ledger/toggle",
        json={"record": {"date": "2024-02-10"}, "slot": "dinner"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["record"]["id"] is not None
    assert body["record"]["dinner"] is True
    assert body["record"]["breakfast"] is False
    assert len(store.rows) == 1


def test_summary_over_budget(ledger_client):
    client, user_id, store = ledger_client
    for d in date_span("2024-03-01", 20):
        store.put(make_record(d, breakfast=True, dinner=True, owner=user_id))

    response = client.get("/ledger/summary", params={"start": "2024-03-01", "end": "2024-03-20"})

    assert response.status_code == 200
    body = response.json()
    assert body["selected_count"] == 40
    assert Decimal(body["total_cost"]) == Decimal("1600")
    assert Decimal(body["remaining"]) == Decimal("-600")
    assert body["over_budget"] is True
    assert Decimal(body["overage"]) == Decimal("600")


def test_report_is_plain_text(ledger_client):
    client, user_id, store = ledger_client
    store.put(make_record("2024-01-01", breakfast=True, owner=user_id))

    response = client.get("/ledger/report", params={"start": "2024-01-01", "end": "2024-01-01"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "Food Purchase Report" in response.text
    assert "Total meals selected: 1" in response.text


def test_reset_deletes_range_and_clears_active_range(ledger_client):
    client, user_id, store = ledger_client
    for d in date_span("2024-01-01", 5):
        store.put(make_record(d, breakfast=True, owner=user_id))

    response = client.delete("/ledger", params={"start": "2024-01-02", "end": "2024-01-04"})

    assert response.status_code == 200
    assert response.json() == {"deleted": 3, "range": None}
    assert sorted(str(r.date) for r in store.rows.values()) == ["2024-01-01", "2024-01-05"]


def test_health_check():
    response = client.get("/health-check")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_database_health(db_client):
    response = db_client.get("/health/database")

    assert response.status_code == 200
    assert response.json() == {"database": "ok"}


# =============================================================================
# FULL FLOW AGAINST SQLITE
# =============================================================================


def test_full_flow_register_login_reconcile_toggle_reset(db_client):
    email = unique_email("flow")
    created = db_client.post(
        "/users", json={"email": email, "password": "correct-horse", "full_name": "Flow User"}
    )
    assert created.status_code == 201

    login = db_client.post("/users/login", json={"email": email, "password": "correct-horse"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    ledger = db_client.post(
        "/ledger/reconcile", json={"start": "2024-01-01", "end": "2024-01-07"}, headers=headers
    ).json()
    assert len(ledger["records"]) == 7

    target = ledger["records"][3]
    toggled = db_client.post(
        "/ledger/toggle",
        json={
            "record": {
                "id": target["id"],
                "date": target["date"],
                "breakfast": target["breakfast"],
                "dinner": target["dinner"],
            },
            "slot": "dinner",
        },
        headers=headers,
    )
    assert toggled.status_code == 200
    assert toggled.json()["record"]["dinner"] is True

    summary = db_client.get(
        "/ledger/summary", params={"start": "2024-01-01", "end": "2024-01-07"}, headers=headers
    ).json()
    assert summary["selected_count"] == 1
    assert Decimal(summary["total_cost"]) == Decimal("40")

    reset = db_client.delete(
        "/ledger", params={"start": "2024-01-01", "end": "2024-01-07"}, headers=headers
    )
    assert reset.json()["deleted"] == 7

    after = db_client.get(
        "/ledger", params={"start": "2024-01-01", "end": "2024-01-07"}, headers=headers
    ).json()
    assert after["records"] == []
