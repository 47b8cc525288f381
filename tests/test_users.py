# tests/test_users.py
import pytest
from conftest import PASSWORD, login

from app.core.security import decode_access_token


def test_root_and_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["message"] == "Server is running.."

    r2 = client.get("/health")
    assert r2.status_code == 200
    assert r2.json()["status"] == "ok"


def test_register_returns_public_fields_only(client):
    r = client.post(
        "/api/users",
        json={"name": "Ada Lovelace", "email": "ada@example.com", "password": PASSWORD},
    )
    assert r.status_code == 201
    data = r.json()
    assert set(data) == {"id", "name", "email"}
    assert data["name"] == "Ada Lovelace"
    assert data["email"] == "ada@example.com"
    assert PASSWORD not in r.text


def test_register_duplicate_email_rejected(client, register):
    register(email="dup@example.com")
    r = client.post(
        "/api/users",
        json={"name": "Someone", "email": "dup@example.com", "password": PASSWORD},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "User already exists"


def test_register_reports_first_failing_field_only(client):
    # name and password are both bad; name is declared first
    r = client.post(
        "/api/users",
        json={"name": "Al", "email": "al@example.com", "password": "weak"},
    )
    assert r.status_code == 400
    assert r.json() == {"message": "Name should have at least 3 characters"}


def test_register_validation_messages(client):
    cases = [
        ({"email": "x@example.com", "password": PASSWORD}, "Name is required"),
        ({"name": "N" * 31, "email": "x@example.com", "password": PASSWORD},
         "Name should have at most 30 characters"),
        ({"name": 123, "email": "x@example.com", "password": PASSWORD},
         "Name should be a type of text"),
        ({"name": "Valid", "email": "not-an-email", "password": PASSWORD}, "Invalid email format"),
        ({"name": "Valid", "password": PASSWORD}, "Email is required"),
        ({"name": "Valid", "email": "x@example.com"}, "Password is required"),
        ({"name": "Valid", "email": "x@example.com", "password": "Ab1!"},
         "Password should have at least 8 characters"),
        ({"name": "Valid", "email": "x@example.com", "password": "Abcdefgh1!" * 3},
         "Password should have at most 20 characters"),
    ]
    for body, message in cases:
        r = client.post("/api/users", json=body)
        assert r.status_code == 400, body
        assert r.json()["message"] == message, body


def test_register_password_needs_every_character_class(client):
    weak = ["abcdefg1!", "ABCDEFG1!", "Abcdefgh!", "Abcdefgh1"]
    for password in weak:
        r = client.post(
            "/api/users",
            json={"name": "Valid", "email": "x@example.com", "password": password},
        )
        assert r.status_code == 400, password
        assert r.json()["message"].startswith("Password must contain at least one uppercase")


def test_login_token_resolves_to_user(client, register):
    user = register(email="login@example.com")
    headers = login(client, "login@example.com")
    token = headers["Authorization"].split(" ", 1)[1]
    assert decode_access_token(token) == user["id"]


def test_login_wrong_password_is_401(client, register):
    register(email="login@example.com")
    r = client.post("/api/auth/login", json={"email": "login@example.com", "password": "Wrong#123"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid email or password"


def test_login_unknown_email_is_401_not_500(client):
    r = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": PASSWORD})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid email or password"


def test_login_validation(client):
    r = client.post("/api/auth/login", json={"email": "bad", "password": PASSWORD})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid email format"

    r2 = client.post("/api/auth/login", json={"email": "a@example.com", "password": ""})
    assert r2.status_code == 400
    assert r2.json()["message"] == "Password is not allowed to be empty"

    # no strength rules on login
    r3 = client.post("/api/auth/login", json={"email": "a@example.com", "password": "x"})
    assert r3.status_code == 401


def test_non_object_body_rejected(client):
    r = client.post("/api/users", json=["not", "an", "object"])
    assert r.status_code == 400


def test_register_unknown_field_rejected(client):
    r = client.post(
        "/api/users",
        json={"name": "Valid", "email": "x@example.com", "password": PASSWORD, "role": "admin"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == '"role" is not allowed'

    # declared fields are checked first
    r2 = client.post(
        "/api/users",
        json={"name": "Al", "email": "x@example.com", "password": PASSWORD, "role": "admin"},
    )
    assert r2.json()["message"] == "Name should have at least 3 characters"


def test_register_keeps_email_as_submitted(client):
    r = client.post(
        "/api/users",
        json={"name": "Bob", "email": "Bob@Example.COM", "password": PASSWORD},
    )
    assert r.status_code == 201
    assert r.json()["email"] == "Bob@Example.COM"
    login(client, "Bob@Example.COM")


def test_login_with_overlong_password_is_401(client, register):
    register(email="long@example.com")
    r = client.post(
        "/api/auth/login", json={"email": "long@example.com", "password": "Aa1!" * 25}
    )
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid email or password"


def test_duplicate_email_caught_by_unique_constraint(db, register, monkeypatch):
    from app.core.exceptions import Conflict
    from app.user import repository

    register(email="race@example.com")
    # the prior lookup misses, as when another request registers in between
    monkeypatch.setattr(repository, "find_by_email", lambda db, email: None)
    with pytest.raises(Conflict):
        repository.create_user(db, "Racer", "race@example.com", "hash")
