# tests/conftest.py
import os
from datetime import datetime, timedelta, timezone

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.core.database import Base, build_engine, get_db  # noqa: E402
from app.main import app  # noqa: E402

PASSWORD = "Secret#123"

engine = build_engine("sqlite://")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def reset_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def future_date(days: int = 7) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


@pytest.fixture
def register(client):
    counter = {"n": 0}

    def _register(name: str | None = None, email: str | None = None, password: str = PASSWORD):
        counter["n"] += 1
        n = counter["n"]
        body = {
            "name": name or f"User {n}",
            "email": email or f"user{n}@example.com",
            "password": password,
        }
        r = client.post("/api/users", json=body)
        assert r.status_code == 201, r.json()
        return r.json()

    return _register


@pytest.fixture
def owner(register):
    return register(email="owner@example.com")


@pytest.fixture
def owner_id(owner):
    return owner["id"]


def login(client, email: str, password: str = PASSWORD) -> dict:
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.json()
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def auth_headers(client, owner):
    return login(client, owner["email"])


@pytest.fixture
def ticket_payload(owner_id):
    def _payload(**overrides):
        body = {
            "title": "Summer Fest",
            "description": "Outdoor concert",
            "type": "concert",
            "venue": "Central Park",
            "status": "open",
            "priority": "high",
            "dueDate": future_date(),
            "createdBy": owner_id,
        }
        body.update(overrides)
        return body

    return _payload


@pytest.fixture
def create_ticket(client, auth_headers, ticket_payload):
    def _create(**overrides):
        r = client.post("/api/tickets", json=ticket_payload(**overrides), headers=auth_headers)
        assert r.status_code == 201, r.json()
        return r.json()

    return _create
