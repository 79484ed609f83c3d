import hashlib
from datetime import timedelta

from syncworks import rate_limiter
from syncworks.models import User
from syncworks.security_utils import (
    create_access_token,
    decode_access_token,
    hash_password,
    needs_rehash,
    verify_password,
)


def legacy_hash(password, salt="pepper"):
    digest = hashlib.pbkdf2_hmac("sha512", password.encode(), salt.encode(), 10000, dklen=64).hex()
    return f"{salt}:{digest}"


class TestPasswordHashing:
    def test_round_trip(self):
        hashed = hash_password("correct horse")
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)
        assert not needs_rehash(hashed)

    def test_legacy_hash_verifies_and_needs_rehash(self):
        hashed = legacy_hash("old-password")
        assert verify_password("old-password", hashed)
        assert not verify_password("other", hashed)
        assert needs_rehash(hashed)

    def test_empty_inputs(self):
        assert not verify_password("", hash_password("x"))
        assert not verify_password("x", None)


class TestTokens:
    def test_round_trip(self):
        token = create_access_token({"sub": "user-1"})
        assert decode_access_token(token)["sub"] == "user-1"

    def test_expired_token(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-1))
        assert decode_access_token(token) is None

    def test_garbage_token(self):
        assert decode_access_token("not-a-token") is None


def test_login_success(client, make_user):
    make_user(email="owner@example.com", password="secret-pass")
    response = client.post("/api/auth/login", json={"email": "Owner@Example.com", "password": "secret-pass"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["token_type"] == "bearer"
    assert body["data"]["email"] == "owner@example.com"
    assert body["data"]["last_login_at"] is not None
    assert decode_access_token(body["access_token"])["sub"] == body["data"]["id"]


def test_login_wrong_password_and_unknown_user(client, make_user):
    make_user(email="owner@example.com", password="secret-pass")
    wrong = client.post("/api/auth/login", json={"email": "owner@example.com", "password": "nope"})
    unknown = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "nope"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["error"] == unknown.json()["error"] == "Invalid email or password"


def test_login_inactive_user(client, make_user):
    make_user(email="owner@example.com", password="secret-pass", is_active=False)
    response = client.post("/api/auth/login", json={"email": "owner@example.com", "password": "secret-pass"})
    assert response.status_code == 401


def test_login_requires_both_fields(client):
    response = client.post("/api/auth/login", json={"email": "owner@example.com"})
    assert response.status_code == 400


def test_login_upgrades_legacy_hash(client, db):
    user = User(email="legacy@example.com", password_hash=legacy_hash("old-password"), role="referrer")
    db.add(user)
    db.commit()

    response = client.post("/api/auth/login", json={"email": "legacy@example.com", "password": "old-password"})
    assert response.status_code == 200

    db.expire_all()
    upgraded = db.get(User, user.id).password_hash
    assert upgraded.startswith("$")
    assert verify_password("old-password", upgraded)


def test_login_rate_limited(client, make_user, monkeypatch):
    monkeypatch.setattr(rate_limiter, "RATE_LIMIT_ENABLED", True)
    make_user(email="owner@example.com", password="secret-pass")

    body = {"email": "owner@example.com", "password": "wrong"}
    statuses = [client.post("/api/auth/login", json=body).status_code for _ in range(11)]
    assert statuses[:10] == [401] * 10
    assert statuses[10] == 429


def test_check_with_bearer_token(client, make_user):
    user = make_user()
    token = create_access_token({"sub": user.id})
    response = client.get("/api/auth/check", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["authenticated"] is True
    assert response.json()["data"]["id"] == user.id


def test_check_with_user_headers(client, make_user):
    user = make_user()
    by_id = client.get("/api/auth/check", headers={"x-user-id": user.id})
    by_email = client.get("/api/auth/check", headers={"x-user-email": "OWNER@example.com"})
    assert by_id.json()["data"]["email"] == by_email.json()["data"]["email"] == "owner@example.com"


def test_check_failures(client, make_user):
    missing = client.get("/api/auth/check")
    assert missing.status_code == 401
    assert missing.json() == {
        "success": False,
        "error": "No authentication information provided",
        "authenticated": False,
    }

    inactive = make_user(email="off@example.com", is_active=False)
    response = client.get("/api/auth/check", headers={"x-user-id": inactive.id})
    assert response.status_code == 401
    assert response.json()["authenticated"] is False

    bad_token = client.get("/api/auth/check", headers={"Authorization": "Bearer garbage"})
    assert bad_token.status_code == 401
