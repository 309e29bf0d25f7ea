from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from flask import Flask

from attendance_records.attendance.controller import register
from attendance_records.attendance.model import AttendanceRecord, RecordListing
from attendance_records.attendance.presenter import RecordPresenter
from attendance_records.attendance.service import AttendanceService
from attendance_records.container import Container
from attendance_records.core.exceptions import InternalError
from attendance_records.database.connection import MongoConfig, MongoConnection

IST = timezone(timedelta(hours=5, minutes=30))


class InMemoryAttendance:
    def __init__(self, seq: int = 0):
        self._records: dict[int, AttendanceRecord] = {}
        self._seq = seq

    def next_id(self, *, max_id: int) -> Optional[int]:
        if self._seq >= max_id:
            return None
        self._seq += 1
        return self._seq

    def release_id(self, *, record_id: int) -> bool:
        if self._seq != record_id:
            return False
        self._seq -= 1
        return True

    def insert(self, record: AttendanceRecord) -> None:
        self._records[record.record_id] = record

    def set_checkout(self, *, record_id: int, checkout_time: datetime) -> Optional[AttendanceRecord]:
        if record_id not in self._records:
            return None
        self._records[record_id] = replace(self._records[record_id], checkout_time=checkout_time)
        return self._records[record_id]

    def get_latest_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        items = [r for r in self._records.values() if r.user_id == user_id]
        return max(items, key=lambda r: (r.checkin_time, r.record_id)) if items else None

    def list_all(self) -> RecordListing:
        return RecordListing(records=list(self._records.values()))


class UnreachableAttendance(InMemoryAttendance):
    def list_all(self) -> RecordListing:
        raise InternalError("Could not fetch records: connection refused")


def _client(repo):
    app = Flask(__name__)
    app.config["TESTING"] = True
    container = Container(
        conn=MongoConnection(MongoConfig(uri="mongodb://unused", database="attendance_db", collection="records")),
        attendance_repo=repo,
        attendance_service=AttendanceService(repo),
        presenter=RecordPresenter(IST),
    )
    register(app, container)
    return app.test_client()


@pytest.fixture
def client():
    return _client(InMemoryAttendance())


def test_checkin_returns_rendered_record(client):
    resp = client.post("/v1/attendance/checkin", json={"user_id": "u1", "username": "Alice"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["id"] == "1"
    assert body["user_id"] == "u1"
    assert body["username"] == "Alice"
    assert body["checkin_time"].endswith(" IST")
    assert body["checkout_time"] == ""
    assert body["status_message"] == "User checked in successfully."


def test_checkin_with_missing_fields_uses_empty_strings(client):
    resp = client.post("/v1/attendance/checkin", json={})

    assert resp.status_code == 200
    assert resp.get_json()["user_id"] == ""


def test_checkout_then_get_latest(client):
    client.post("/v1/attendance/checkin", json={"user_id": "u1", "username": "Alice"})

    out = client.post("/v1/attendance/checkout", json={"record_id": "1"})
    assert out.status_code == 200
    assert out.get_json()["checkout_time"].endswith(" IST")
    assert out.get_json()["status_message"] == "User checked out successfully."

    latest = client.get("/v1/attendance/u1")
    assert latest.status_code == 200
    assert latest.get_json()["id"] == "1"
    assert latest.get_json()["checkout_time"] != ""
    assert latest.get_json()["status_message"] == "Record found."


def test_checkout_accepts_numeric_record_id(client):
    client.post("/v1/attendance/checkin", json={"user_id": "u1", "username": "Alice"})

    assert client.post("/v1/attendance/checkout", json={"record_id": 1}).status_code == 200


def test_checkout_with_bad_id_is_400(client):
    resp = client.post("/v1/attendance/checkout", json={"record_id": "abc"})

    assert resp.status_code == 400
    assert resp.get_json() == {"code": "INVALID_ARGUMENT", "message": "Invalid record ID format"}


def test_checkout_of_missing_record_is_404(client):
    resp = client.post("/v1/attendance/checkout", json={"record_id": "7"})

    assert resp.status_code == 404
    assert resp.get_json()["code"] == "NOT_FOUND"


def test_latest_for_unknown_user_is_404(client):
    resp = client.get("/v1/attendance/ghost")

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "No records found for this user"


def test_exhausted_id_space_is_429():
    client = _client(InMemoryAttendance(seq=999))

    resp = client.post("/v1/attendance/checkin", json={"user_id": "u1", "username": "Alice"})

    assert resp.status_code == 429
    assert resp.get_json()["code"] == "RESOURCE_EXHAUSTED"


def test_storage_failure_is_500():
    client = _client(UnreachableAttendance())

    resp = client.get("/v1/attendance")

    assert resp.status_code == 500
    assert resp.get_json()["code"] == "INTERNAL"


def test_list_all_empty_then_two_records(client):
    assert client.get("/v1/attendance").get_json() == {"records": []}

    client.post("/v1/attendance/checkin", json={"user_id": "u1", "username": "Alice"})
    client.post("/v1/attendance/checkin", json={"user_id": "u2", "username": "Bob"})

    records = client.get("/v1/attendance").get_json()["records"]
    assert {(r["id"], r["username"]) for r in records} == {("1", "Alice"), ("2", "Bob")}
    assert all(r["status_message"] == "Record retrieved." for r in records)
