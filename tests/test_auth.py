from conftest import auth_headers, signup

from luno.core.security import create_access_token, user_id_from_token


def test_signup_returns_token_for_new_user(client):
    data = signup(client)
    assert data["message"] == "User created successfully"
    assert data["user"]["username"] == "alice"
    assert data["user"]["email"] == "alice@example.com"
    assert "password_hash" not in data["user"]
    assert user_id_from_token(data["token"]) == data["user"]["id"]


def test_signup_requires_all_fields(client):
    res = client.post("/api/auth/signup", json={"username": "bob", "email": "bob@example.com"})
    assert res.status_code == 400
    assert res.json() == {"error": "All fields are required"}


def test_signup_rejects_short_password(client):
    res = client.post("/api/auth/signup", json={"username": "bob", "email": "bob@example.com", "password": "123"})
    assert res.status_code == 400
    assert "at least 6" in res.json()["error"]


def test_signup_rejects_duplicate_email_or_username(client):
    signup(client)
    same_email = client.post(
        "/api/auth/signup",
        json={"username": "other", "email": "ALICE@example.com", "password": "secret123"},
    )
    same_username = client.post(
        "/api/auth/signup",
        json={"username": "alice", "email": "other@example.com", "password": "secret123"},
    )
    assert same_email.status_code == 400
    assert same_username.status_code == 400
    assert same_email.json()["error"] == "User already exists with this email or username"


def test_login_with_valid_credentials(client):
    created = signup(client)
    res = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Login successful"
    assert user_id_from_token(body["token"]) == created["user"]["id"]


def test_login_with_wrong_password(client):
    signup(client)
    res = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope-nope"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid credentials"}


def test_login_requires_email_and_password(client):
    res = client.post("/api/auth/login", json={"email": "alice@example.com"})
    assert res.status_code == 400


def test_profile_requires_token(client):
    assert client.get("/api/auth/profile").status_code == 401
    res = client.get("/api/auth/profile", headers=auth_headers("not-a-token"))
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid or expired token"}


def test_profile_returns_current_user(client, user):
    res = client.get("/api/auth/profile", headers=user["headers"])
    assert res.status_code == 200
    profile = res.json()["user"]
    assert profile["id"] == user["id"]
    assert profile["username"] == "alice"
    assert "created_at" in profile


def test_profile_for_deleted_user_is_404(client):
    res = client.get("/api/auth/profile", headers=auth_headers(create_access_token(9999)))
    assert res.status_code == 404
    assert res.json() == {"error": "User not found"}


def test_unknown_route_and_health(client):
    assert client.get("/api/nothing-here").json() == {"error": "Route not found"}
    health = client.get("/api/health")
    assert health.status_code == 200
    assert health.json()["status"] == "ok"
    assert health.headers.get("x-request-id")
