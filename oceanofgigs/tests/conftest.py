import os
import pytest
from fastapi.testclient import TestClient

# Human-readable log output while running tests
os.environ.setdefault("LOG_FORMAT", "console")

from oceanofgigs.config import Settings
from oceanofgigs.main import app
from oceanofgigs.store import build_store, get_store


@pytest.fixture()
def store():
    # Fresh seeded store per test; ids always start at 1
    return build_store(Settings())


@pytest.fixture()
def client(store):
    # Override the dependency to use the test store
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(client):
    def _make_user(username="alice", role="student", **extra):
        body = {
            "username": username,
            "password": "password123",
            "role": role,
            "name": username.title(),
            "email": f"{username}@example.com",
        }
        body.update(extra)
        r = client.post("/api/users", json=body)
        assert r.status_code == 201, r.text
        return r.json()

    return _make_user


@pytest.fixture()
def make_gig(client):
    def _make_gig(recruiter_id, title="Landing page", **extra):
        body = {
            "title": title,
            "description": "Build a marketing landing page",
            "minPrice": 100,
            "maxPrice": 250,
            "isPriceHourly": False,
            "recruiterId": recruiter_id,
            "companyName": "Acme",
        }
        body.update(extra)
        r = client.post("/api/gigs", json=body)
        assert r.status_code == 201, r.text
        return r.json()

    return _make_gig
