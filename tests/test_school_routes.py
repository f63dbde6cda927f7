from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from school_api.db.mongodb import get_mongo_db
from school_api.main import app

MISSING_ID = "64b7f0c2a1b2c3d4e5f60718"


def create(client, headers, payload):
    response = client.post("/api/schools", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_returns_record_with_id_and_timestamps(client, auth_headers, school_payload):
    body = create(client, auth_headers, school_payload)

    assert len(body["_id"]) == 24
    for key, value in school_payload.items():
        assert body[key] == value
    assert body["created_at"]
    assert body["updated_at"]


def test_created_record_is_retrievable(client, auth_headers, school_payload):
    created = create(client, auth_headers, school_payload)

    response = client.get(f"/api/schools/{created['_id']}", headers=auth_headers)

    assert response.status_code == 200
    fetched = response.json()
    assert fetched["_id"] == created["_id"]
    for key, value in school_payload.items():
        assert fetched[key] == value


def test_duplicate_domain_is_rejected(client, auth_headers, school_payload):
    create(client, auth_headers, school_payload)
    second = dict(school_payload, en_name="Another School")

    response = client.post("/api/schools", json=second, headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Error creating school"}
    assert len(client.get("/api/schools", headers=auth_headers).json()) == 1


@pytest.mark.parametrize("missing", [
    "fa_name", "en_name", "domain", "storage_bucket",
    "mariadb_db_name", "mariadb_username", "mariadb_password",
])
def test_create_missing_required_field(client, auth_headers, school_payload, missing):
    del school_payload[missing]

    response = client.post("/api/schools", json=school_payload, headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Error creating school"}


def test_create_without_body(client, auth_headers):
    response = client.post("/api/schools", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Error creating school"}


def test_unknown_fields_are_not_stored(client, auth_headers, school_payload, mongo_db):
    body = create(client, auth_headers, dict(school_payload, principal="Someone"))

    assert "principal" not in body
    assert "principal" not in mongo_db["schools"].find_one({})


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_unknown_id_returns_404(client, auth_headers, method):
    kwargs = {"json": {"en_name": "Renamed"}} if method == "put" else {}

    response = client.request(method.upper(), f"/api/schools/{MISSING_ID}", headers=auth_headers, **kwargs)

    assert response.status_code == 404
    assert response.json() == {"msg": "School not found"}


@pytest.mark.parametrize("method, message", [
    ("get", "Error fetching school"),
    ("put", "Error updating school"),
    ("delete", "Error deleting school"),
])
def test_malformed_id_returns_500(client, auth_headers, method, message):
    kwargs = {"json": {"en_name": "Renamed"}} if method == "put" else {}

    response = client.request(method.upper(), "/api/schools/not-an-id", headers=auth_headers, **kwargs)

    assert response.status_code == 500
    assert response.json() == {"error": message}


def test_update_is_reflected_by_later_get(client, auth_headers, school_payload):
    created = create(client, auth_headers, school_payload)
    before = client.get(f"/api/schools/{created['_id']}", headers=auth_headers).json()

    response = client.put(
        f"/api/schools/{created['_id']}",
        json={"en_name": "Renamed School", "storage_bucket": "new-bucket"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["en_name"] == "Renamed School"
    assert updated["storage_bucket"] == "new-bucket"
    assert updated["fa_name"] == school_payload["fa_name"]
    # not refreshed on update
    assert updated["updated_at"] == before["updated_at"]

    fetched = client.get(f"/api/schools/{created['_id']}", headers=auth_headers).json()
    assert fetched == updated


def test_update_with_empty_body_returns_current_record(client, auth_headers, school_payload):
    created = create(client, auth_headers, school_payload)

    response = client.put(f"/api/schools/{created['_id']}", json={}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["domain"] == school_payload["domain"]


@pytest.mark.parametrize("changes", [{"en_name": ""}, {"domain": None}, {"mariadb_password": 42}])
def test_update_revalidates_fields(client, auth_headers, school_payload, changes):
    created = create(client, auth_headers, school_payload)

    response = client.put(f"/api/schools/{created['_id']}", json=changes, headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Error updating school"}
    fetched = client.get(f"/api/schools/{created['_id']}", headers=auth_headers).json()
    assert fetched["en_name"] == school_payload["en_name"]
    assert fetched["domain"] == school_payload["domain"]


def test_update_to_taken_domain_is_rejected(client, auth_headers, school_payload):
    create(client, auth_headers, school_payload)
    other = create(client, auth_headers, dict(school_payload, domain="other.school.example"))

    response = client.put(
        f"/api/schools/{other['_id']}",
        json={"domain": school_payload["domain"]},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Error updating school"}


def test_delete_then_get_returns_404(client, auth_headers, school_payload):
    created = create(client, auth_headers, school_payload)

    response = client.delete(f"/api/schools/{created['_id']}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"msg": "School deleted successfully"}
    assert client.get(f"/api/schools/{created['_id']}", headers=auth_headers).status_code == 404


def test_list_returns_live_records_in_insertion_order(client, auth_headers, school_payload):
    ids = [
        create(client, auth_headers, dict(school_payload, domain=f"school{i}.example"))["_id"]
        for i in range(3)
    ]
    client.delete(f"/api/schools/{ids[1]}", headers=auth_headers)

    response = client.get("/api/schools", headers=auth_headers)

    assert response.status_code == 200
    assert [school["_id"] for school in response.json()] == [ids[0], ids[2]]


def test_list_empty(client, auth_headers):
    response = client.get("/api/schools", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == []


def test_store_failure_returns_500(auth_headers):
    broken_db = MagicMock()
    broken_db.__getitem__.return_value.find.side_effect = ServerSelectionTimeoutError("down")
    app.dependency_overrides[get_mongo_db] = lambda: broken_db
    try:
        response = TestClient(app).get("/api/schools", headers=auth_headers)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Error fetching schools"}
    assert "down" not in response.text


@pytest.mark.parametrize("path, message", [
    ("", "Error fetching schools"),
    ("/{id}", "Error fetching school"),
])
def test_stored_document_missing_fields_returns_500(client, auth_headers, mongo_db, path, message):
    legacy_id = mongo_db["schools"].insert_one(
        {"fa_name": "قدیمی", "en_name": "Legacy School", "domain": "legacy.example"}
    ).inserted_id

    response = client.get("/api/schools" + path.format(id=legacy_id), headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": message}


def test_timestamps_are_returned_in_utc(client, auth_headers, school_payload):
    created = create(
        client, auth_headers, dict(school_payload, created_at="2024-01-01T12:00:00+03:30")
    )
    fetched = client.get(f"/api/schools/{created['_id']}", headers=auth_headers).json()

    assert created["created_at"] == fetched["created_at"] == "2024-01-01T08:30:00Z"
    assert created["updated_at"] == fetched["updated_at"]
    assert fetched["updated_at"].endswith("Z")
