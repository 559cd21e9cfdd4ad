"""Tests for the records microservice."""
import logging
import re
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from capstone_platform.capstone_platform.common.models import Record


def record_data(**extra):
    data = {
        "AccountID": 1,
        "ContactRole": "Supervisor",
        "StudentCount": 4,
        "AcadYear": "2023/2024",
        "Title": "Smart Parking System",
        "CompanyName": "Acme Pte Ltd",
        "CompanyPOC": "Jane Doe",
        "Description": "Sensor network for car park occupancy",
    }
    data.update(extra)
    return data


@pytest.fixture
def seeded_records(records_client):
    created = []
    for acad_year, title in [
        ("2023/2024", "Smart Parking System"),
        ("2023/2024", "Campus Food Ordering App"),
        ("2024/2025", "Smart Energy Dashboard"),
        ("2024/2025", "Library Booking Portal"),
    ]:
        response = records_client.post("/api/records", json=record_data(AcadYear=acad_year, Title=title))
        assert response.status_code == 202
        created.append(response.json())
    return created


def titles(response):
    return [r["Title"] for r in response.json()]


def test_create_record(records_client):
    response = records_client.post("/api/records", json=record_data())
    assert response.status_code == 202

    body = response.json()
    assert isinstance(body["ID"], int)
    assert body["AccountID"] == 1
    assert body["StudentCount"] == 4
    assert body["CompanyPOC"] == "Jane Doe"
    assert body["IsDeleted"] is False
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", body["CreationDate"])


def test_create_record_forces_not_deleted(records_client):
    body = records_client.post("/api/records", json=record_data(IsDeleted=True, ID=77)).json()
    assert body["IsDeleted"] is False
    assert body["ID"] != 77


def test_create_record_missing_fields_take_zero_values(records_client):
    body = records_client.post("/api/records", json={"Title": "Bare"}).json()
    assert body["AccountID"] == 0
    assert body["StudentCount"] == 0
    assert body["Description"] == ""


def test_create_record_malformed_json(records_client, db_session):
    response = records_client.post(
        "/api/records", content="not json at all", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert db_session.query(Record).count() == 0


def test_create_record_wrong_type(records_client, db_session):
    response = records_client.post("/api/records", json=record_data(StudentCount="many"))
    assert response.status_code == 400
    assert db_session.query(Record).count() == 0


def test_create_record_store_error(records_client, caplog):
    with patch(
        "sqlalchemy.orm.Session.commit",
        side_effect=OperationalError("INSERT", {}, Exception("server has gone away")),
    ):
        with caplog.at_level(logging.ERROR):
            response = records_client.post("/api/records", json=record_data())
    assert response.status_code == 500
    assert response.json()["detail"] == "Error creating new capstone record"
    assert "server has gone away" in caplog.text


def test_read_records_no_filters(records_client, seeded_records):
    response = records_client.get("/api/records")
    assert response.status_code == 202
    assert titles(response) == [r["Title"] for r in seeded_records]


def test_read_records_empty(records_client):
    response = records_client.get("/api/records")
    assert response.status_code == 202
    assert response.json() == []


def test_read_records_by_title(records_client, seeded_records):
    response = records_client.get("/api/records", params={"title": "Smart"})
    assert titles(response) == ["Smart Parking System", "Smart Energy Dashboard"]


def test_read_records_by_title_substring(records_client, seeded_records):
    response = records_client.get("/api/records", params={"title": "Booking"})
    assert titles(response) == ["Library Booking Portal"]


def test_read_records_by_acad_year(records_client, seeded_records):
    response = records_client.get("/api/records", params={"ay": "2024/2025"})
    assert titles(response) == ["Smart Energy Dashboard", "Library Booking Portal"]


def test_read_records_acad_year_is_exact(records_client, seeded_records):
    response = records_client.get("/api/records", params={"ay": "2024"})
    assert response.json() == []


def test_read_records_by_acad_year_and_title(records_client, seeded_records):
    response = records_client.get("/api/records", params={"ay": "2023/2024", "title": "Smart"})
    assert titles(response) == ["Smart Parking System"]


def test_read_records_empty_filters_are_ignored(records_client, seeded_records):
    response = records_client.get("/api/records", params={"ay": "", "title": ""})
    assert len(response.json()) == 4


def test_read_records_title_wildcards_are_literal(records_client, seeded_records):
    records_client.post("/api/records", json=record_data(Title="100% Uptime"))
    response = records_client.get("/api/records", params={"title": "%"})
    assert titles(response) == ["100% Uptime"]


def test_read_records_excludes_deleted(records_client, seeded_records):
    deleted = seeded_records[0]
    assert records_client.delete(f"/api/records/{deleted['ID']}").status_code == 202

    assert deleted["Title"] not in titles(records_client.get("/api/records"))
    assert titles(records_client.get("/api/records", params={"title": "Smart"})) == ["Smart Energy Dashboard"]


def test_read_records_store_error(records_client):
    with patch(
        "sqlalchemy.orm.Query.all",
        side_effect=OperationalError("SELECT", {}, Exception("lost connection")),
    ):
        response = records_client.get("/api/records")
    assert response.status_code == 500
    assert response.json()["detail"] == "Error iterating over rows"


def test_update_record(records_client, seeded_records):
    target = seeded_records[1]
    response = records_client.put(
        f"/api/records/{target['ID']}", json={"Title": "Campus Food Delivery App", "StudentCount": 6}
    )
    assert response.status_code == 202
    body = response.json()
    assert body["Title"] == "Campus Food Delivery App"
    assert body["StudentCount"] == 6
    assert body["AcadYear"] == target["AcadYear"]
    assert body["CreationDate"] == target["CreationDate"]


def test_update_missing_record(records_client):
    assert records_client.put("/api/records/404", json={"Title": "x"}).status_code == 404


def test_delete_record_is_soft(records_client, seeded_records, db_session):
    target = seeded_records[2]
    response = records_client.delete(f"/api/records/{target['ID']}")
    assert response.status_code == 202
    assert response.json()["IsDeleted"] is True

    stored = db_session.query(Record).filter(Record.id == target["ID"]).one()
    assert stored.is_deleted is True
    assert records_client.delete(f"/api/records/{target['ID']}").status_code == 404
