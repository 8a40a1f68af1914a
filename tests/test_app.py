from __future__ import annotations

from datetime import date

import jwt
import pytest

from src.self_attendance.self_attendance.main import create_app
from src.self_attendance.self_attendance.storage.memory_store import InMemoryKeyValueStore


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def client(monkeypatch, kv):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(kv_store=kv)
    return app.test_client()


def _login(client, user_id="u1", name="Ann"):
    resp = client.post("/login", json={"id": user_id, "displayName": name})
    assert resp.status_code == 200
    return resp


def test_attendance_routes_require_login(client):
    assert client.get("/api/attendance").status_code == 401
    assert client.post("/api/attendance/toggle", json={"date": "2024-03-05"}).status_code == 401
    assert client.get("/api/attendance/chart").status_code == 401
    assert client.get("/attendance.csv").status_code == 401


def test_login_with_credential(client):
    token = jwt.encode({"sub": "42", "name": "Ann"}, "not-checked-by-the-app-0123456789abcdef", algorithm="HS256")

    resp = client.post("/login", json={"credential": token})

    assert resp.get_json()["user"] == {"id": "42", "displayName": "Ann"}
    assert client.get("/api/me").get_json()["user"]["id"] == "42"


def test_login_with_bad_credential(client):
    resp = client.post("/login", json={"credential": "bogus"})

    assert resp.status_code == 401
    assert client.get("/api/me").get_json() == {"authenticated": False}


def test_toggle_summary_chart_and_export(client, kv):
    _login(client)

    resp = client.post("/api/attendance/toggle", json={"date": "2024-03-05"})
    assert resp.get_json() == {"success": True, "result": "marked", "is_marked": True}
    client.post("/api/attendance/toggle", json={"date": "2024-03-20"})
    client.post("/api/attendance/toggle", json={"date": "2024-04-01"})

    summary = client.get("/api/attendance?date=2024-03-05").get_json()
    assert summary["total_days_present"] == 3
    assert summary["month"] == "2024-03"
    assert [r["date"] for r in summary["month_records"]] == ["2024-03-20", "2024-03-05"]
    assert summary["is_marked"] is True

    chart = client.get("/api/attendance/chart?month=2024-03").get_json()
    assert len(chart["labels"]) == 31
    values = chart["series"][0]["values"]
    assert values[4] == 1 and values[19] == 1 and sum(values) == 2
    assert chart["title"] == "March 2024 Attendance Analytics"

    resp = client.get("/attendance.csv")
    assert resp.mimetype == "text/csv"
    assert "attendance.csv" in resp.headers["Content-Disposition"]
    lines = resp.get_data(as_text=True).split("\n")
    assert lines[0] == "Date,Time"
    assert [line.split(",")[0] for line in lines[1:]] == ["2024-04-01", "2024-03-20", "2024-03-05"]

    assert kv.load("attendanceData_u1") is not None


def test_toggle_twice_unmarks(client):
    _login(client)
    client.post("/api/attendance/toggle", json={"date": "2024-03-05"})

    resp = client.post("/api/attendance/toggle", json={"date": "2024-03-05"})

    assert resp.get_json()["result"] == "unmarked"
    assert client.get("/api/attendance?date=2024-03-05").get_json()["history"] == []


def test_future_toggle_is_rejected(client):
    _login(client)
    future = date(date.today().year + 1, 1, 1).isoformat()

    resp = client.post("/api/attendance/toggle", json={"date": future})

    assert resp.get_json()["result"] == "rejected_future"
    assert client.get(f"/api/attendance?date={future}").get_json()["is_selectable"] is False


def test_bad_input_is_400(client):
    _login(client)

    assert client.post("/api/attendance/toggle", json={"date": "05/03/2024"}).status_code == 400
    assert client.get("/api/attendance/chart?month=2024-13").status_code == 400


def test_users_are_isolated_and_logout_ends_session(client):
    _login(client, "u1")
    client.post("/api/attendance/toggle", json={"date": "2024-03-05"})
    client.post("/logout")

    assert client.get("/api/attendance").status_code == 401

    _login(client, "u2", "Bob")
    assert client.get("/api/attendance").get_json()["history"] == []

    client.post("/logout")
    _login(client, "u1")
    assert len(client.get("/api/attendance").get_json()["history"]) == 1


def test_login_requires_an_id(client):
    resp = client.post("/login", json={"displayName": "Nobody"})

    assert resp.status_code == 401


@pytest.mark.parametrize("remember, permanent", [("false", False), ("0", False), ("true", True), ("on", True)])
def test_remember_me_form_values(client, remember, permanent):
    resp = client.post("/login", data={"id": "u1", "displayName": "Ann", "remember_me": remember})

    assert resp.status_code == 200
    assert ("Expires=" in resp.headers["Set-Cookie"]) is permanent
