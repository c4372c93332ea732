"""
Tests for login, lockout over HTTP and the other auth routes.
"""
from datetime import datetime, timedelta, timezone

from salon.auth.models import UserRole
from salon.auth.service import get_credential_store
from salon.core.clock import utcnow

PASSWORD = "correct-horse"


def login(client, username="admin", password=PASSWORD, path="/api/auth/login"):
    return client.post(path, json={"username": username, "password": password})


def test_login_success(client, db, admin_user, tokens):
    response = login(client)
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"] == {"username": "admin", "role": "admin"}
    assert tokens.verify(data["token"]).identity == admin_user.id

    db.refresh(admin_user)
    assert admin_user.last_login is not None


def test_login_alias(client, admin_user):
    assert login(client, path="/login").status_code == 200


def test_missing_fields_are_rejected(client):
    response = client.post("/api/auth/login", json={"username": "admin"})
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "validation error"
    assert data["message"] == "Username and password are required"
    assert data["errors"] == [{"field": "password", "message": "password is required"}]


def test_unknown_user(client):
    response = login(client, username="nobody")
    assert response.status_code == 401
    assert response.json()["error"] == "invalid credentials"


def test_wrong_password_counts_attempts(client, db, admin_user):
    for _ in range(3):
        response = login(client, password="wrong")
        assert response.status_code == 401
        assert response.json()["error"] == "invalid credentials"
    db.refresh(admin_user)
    assert admin_user.login_attempts == 3


def test_fifth_failure_locks_and_correct_password_is_refused(client, db, admin_user):
    for _ in range(4):
        assert login(client, password="wrong").json()["error"] == "invalid credentials"

    fifth = login(client, password="wrong")
    assert fifth.status_code == 401
    body = fifth.json()
    assert body["error"] == "account locked"
    assert body["minutes_remaining"] > 0
    assert "Try again in" in body["message"]

    sixth = login(client)
    assert sixth.status_code == 401
    assert sixth.json()["error"] == "account locked"

    # Refused attempts during the lock are not counted again
    db.refresh(admin_user)
    assert admin_user.login_attempts == 5


def test_success_resets_counter(client, db, admin_user):
    for _ in range(3):
        login(client, password="wrong")
    assert login(client).status_code == 200
    db.refresh(admin_user)
    assert admin_user.login_attempts == 0
    assert admin_user.lock_until is None


def test_expired_lock_starts_new_streak(client, db, admin_user):
    admin_user.login_attempts = 5
    admin_user.lock_until = utcnow() - timedelta(minutes=1)
    db.commit()

    response = login(client, password="wrong")
    assert response.json()["error"] == "invalid credentials"
    db.refresh(admin_user)
    assert admin_user.login_attempts == 1
    assert admin_user.lock_until is None


def test_login_rate_limit(client):
    for _ in range(10):
        assert login(client, username="nobody").status_code == 401
    response = login(client, username="nobody")
    assert response.status_code == 429
    assert response.json()["error"] == "rate limit exceeded"


def test_logout(client, auth_headers):
    response = client.post("/api/auth/logout", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_refresh_token(client, auth_headers, admin_user, tokens):
    response = client.post("/api/auth/refresh-token", headers=auth_headers)
    assert response.status_code == 200
    claims = tokens.verify(response.json()["token"])
    assert claims.identity == admin_user.id
    assert claims.expires_at - datetime.now(timezone.utc) <= timedelta(hours=24)


def test_refresh_token_remember(client, auth_headers, tokens):
    response = client.post("/api/auth/refresh-token", headers=auth_headers, json={"remember": True})
    claims = tokens.verify(response.json()["token"])
    assert claims.expires_at - datetime.now(timezone.utc) > timedelta(days=6)


def test_refresh_requires_token(client):
    assert client.post("/api/auth/refresh-token").status_code == 401


def test_me(client, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.json() == {"username": "admin", "role": "admin"}


def test_admin_creates_operator(client, auth_headers):
    payload = {"username": "stylist", "password": "long-enough", "role": "user"}
    response = client.post("/api/auth/users", headers=auth_headers, json=payload)
    assert response.status_code == 201
    assert response.json() == {"username": "stylist", "role": "user"}

    duplicate = client.post("/api/auth/users", headers=auth_headers, json=payload)
    assert duplicate.status_code == 400
    assert duplicate.json()["error"] == "username taken"


def test_operator_cannot_create_users(client, db, headers_for):
    operator = get_credential_store(db).create_user("stylist", "long-enough", UserRole.USER)
    response = client.post(
        "/api/auth/users",
        headers=headers_for(operator),
        json={"username": "other", "password": "long-enough"},
    )
    assert response.status_code == 403
    assert response.json()["error"] == "forbidden"


def test_change_password(client, auth_headers):
    wrong = client.post(
        "/api/auth/change-password",
        headers=auth_headers,
        json={"current_password": "nope", "new_password": "brand-new-pass"},
    )
    assert wrong.status_code == 401

    ok = client.post(
        "/api/auth/change-password",
        headers=auth_headers,
        json={"current_password": PASSWORD, "new_password": "brand-new-pass"},
    )
    assert ok.status_code == 200
    assert login(client, password="brand-new-pass").status_code == 200


def test_blank_password_is_checked_not_rejected(client, db, admin_user):
    response = login(client, password="   ")
    assert response.status_code == 401
    assert response.json()["error"] == "invalid credentials"
    db.refresh(admin_user)
    assert admin_user.login_attempts == 1


def test_blank_username_is_rejected(client):
    response = client.post("/api/auth/login", json={"username": "  ", "password": "x"})
    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "username", "message": "username is required"}]
