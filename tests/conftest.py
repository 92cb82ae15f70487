from collections.abc import Iterator

import mongomock
import pytest
from fastapi.testclient import TestClient

import profile_store
from api.security import create_access_token
from app import app
from config import Settings, get_settings


TEST_SETTINGS = Settings(
    mongodb_uri="mongodb://localhost:27017",
    mongodb_db="devconnector_test",
    jwt_secret="test-secret",
    github_token="",
    github_api_url="https://api.github.com",
    github_timeout_seconds=5.0,
    log_level="INFO",
)


@pytest.fixture
def mongo(monkeypatch):
    client = mongomock.MongoClient()
    monkeypatch.setattr(profile_store, "_client", client)
    monkeypatch.setattr(profile_store, "get_settings", lambda: TEST_SETTINGS)
    return client[TEST_SETTINGS.mongodb_db]


@pytest.fixture
def client(mongo) -> Iterator[TestClient]:
    app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _create_user(mongo, name: str) -> str:
    result = mongo["users"].insert_one(
        {
            "name": name,
            "email": f"{name.split()[0].lower()}@example.com",
            "avatar": f"//www.gravatar.com/avatar/{name.split()[0].lower()}",
        }
    )
    return str(result.inserted_id)


@pytest.fixture
def user_id(mongo) -> str:
    return _create_user(mongo, "Ada Lovelace")


@pytest.fixture
def other_user_id(mongo) -> str:
    return _create_user(mongo, "Grace Hopper")


@pytest.fixture
def auth_headers(user_id) -> dict[str, str]:
    return {"x-auth-token": create_access_token(user_id, TEST_SETTINGS.jwt_secret)}


@pytest.fixture
def other_auth_headers(other_user_id) -> dict[str, str]:
    return {"x-auth-token": create_access_token(other_user_id, TEST_SETTINGS.jwt_secret)}


@pytest.fixture
def profile(client, auth_headers) -> dict:
    resp = client.post(
        "/api/profile",
        json={"status": "Developer", "skills": "python, go"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    return resp.json()

