import mongomock
import pytest
from fastapi.testclient import TestClient

from school_api.core.auth import create_access_token
from school_api.db.mongodb import get_mongo_db, init_mongo_indexes
from school_api.main import app


@pytest.fixture
def mongo_db():
    db = mongomock.MongoClient()["school_registry_test"]
    init_mongo_indexes(db)
    return db


@pytest.fixture
def client(mongo_db):
    # no context manager: the startup hook (real MongoClient) stays off
    app.dependency_overrides[get_mongo_db] = lambda: mongo_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_access_token({"sub": "admin@example.com", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def school_payload():
    return {
        "fa_name": "مدرسه نمونه",
        "en_name": "Sample School",
        "domain": "sample.school.example",
        "storage_bucket": "sample-school-bucket",
        "mariadb_db_name": "sample_school",
        "mariadb_username": "sample_user",
        "mariadb_password": "s3cret",
    }
