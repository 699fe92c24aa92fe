import uuid
from datetime import timedelta

from app.core.security import create_access_token
from conftest import FakeExtractor, FakeLLMClient

PASSWORD = "s3cret-pass!"


def _signup(client, email=None, password=PASSWORD):
    email = email or f"{uuid.uuid4().hex[:10]}@example.com"
    response = client.post("/api/user/signup", json={"email": email, "password": password, "name": "Student"})
    return email, response


def _login(client, email, password=PASSWORD):
    response = client.post("/api/user/login", json={"email": email, "password": password})
    client.cookies.clear()
    if response.status_code == 200:
        client.cookies.set("access_token", response.cookies["access_token"])
    return response


def test_signup_creates_user(client):
    email, response = _signup(client)

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == email
    assert body["role"] == "user"
    assert "password" not in body


def test_signup_rejects_weak_password(client):
    _, response = _signup(client, password="short")

    assert response.status_code == 400


def test_signup_rejects_duplicate_email(client):
    email, _ = _signup(client)
    _, response = _signup(client, email=email)

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_login_sets_cookies_and_me_returns_user(client):
    email, _ = _signup(client)

    response = _login(client, email)

    assert response.status_code == 200
    assert "access_token" in response.cookies
    assert "refresh_token" in response.cookies
    me = client.get("/api/user/me")
    assert me.status_code == 200
    assert me.json()["email"] == email


def test_login_with_wrong_password_fails(client):
    email, _ = _signup(client)

    response = _login(client, email, password="wrong-pass1!")

    assert response.status_code == 401


def test_me_without_token_is_401(client):
    client.cookies.clear()

    assert client.get("/api/user/me").status_code == 401


def test_expired_access_token_with_valid_refresh_asks_for_refresh(client):
    email, _ = _signup(client)
    client.cookies.clear()
    client.cookies.set("access_token", "not-a-valid-token")
    client.cookies.set("refresh_token", create_access_token({"sub": email, "type": "refresh"}, timedelta(days=1)))

    response = client.get("/api/user/me")

    assert response.status_code == 401
    assert response.headers.get("X-Token-Expired") == "true"


def test_refresh_issues_new_access_token(client):
    email, _ = _signup(client)
    client.cookies.clear()
    client.cookies.set("refresh_token", create_access_token({"sub": email, "type": "refresh"}, timedelta(days=1)))

    response = client.post("/api/user/refresh")

    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"
    assert "access_token" in response.cookies


def test_refresh_rejects_access_token(client):
    email, _ = _signup(client)
    client.cookies.clear()
    client.cookies.set("refresh_token", create_access_token({"sub": email}, timedelta(minutes=5)))

    assert client.post("/api/user/refresh").status_code == 401


def test_logout(client):
    response = client.post("/api/user/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Successfully logged out"}


def test_logged_in_user_can_summarize(client, use_llm, use_extractor, pdf_upload):
    email, _ = _signup(client)
    _login(client, email)
    use_extractor(FakeExtractor("thesis body"))
    use_llm(FakeLLMClient(responder=lambda call: "brief"))

    response = client.post("/api/ai/summarize", files=pdf_upload)

    assert response.status_code == 200
    assert response.json()["summary"] == "brief"
