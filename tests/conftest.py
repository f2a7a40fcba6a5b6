import os
import tempfile
import uuid

# configuration is read at import time, so the environment is prepared first
_db_dir = tempfile.mkdtemp(prefix="notes-tests-")
os.environ["URL_DATABASE"] = "sqlite+aiosqlite:///" + os.path.join(_db_dir, "test.db")
os.environ["ACCESS_TOKEN_SECRET"] = "verysecretkatthatnobodyknows"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["PASSWORD_HASHING"] = "false"

import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.fixture(scope="session")
def tester():
    with TestClient(app=app) as client:
        yield client


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def new_user(tester):
    """Registers a fresh user and returns its creds, record and auth headers."""

    def register(full_name: str = "Test User", password: str = "testpassword"):
        email = f"{uuid.uuid4().hex[:12]}@example.com"
        response = tester.post(
            url="/create-account",
            json={"fullName": full_name, "email": email, "password": password},
        )
        assert response.status_code == 201
        body = response.json()

        return {
            "email": email,
            "password": password,
            "user": body["user"],
            "token": body["accessToken"],
            "headers": bearer(body["accessToken"]),
        }

    return register


@pytest.fixture
def add_note(tester):
    def create(headers: dict, **fields):
        payload = {"title": "Title", "content": "Content"}
        payload.update(fields)
        response = tester.post(url="/add-note", json=payload, headers=headers)
        assert response.status_code == 201
        return response.json()["note"]

    return create
