def test_login_sets_cookie_and_authenticates(client):
    client.post("/users", json={"username": "erin", "password": "pw-erin"})
    r = client.post("/auth/login", json={"username": "erin", "password": "pw-erin"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["token"]

    set_cookie = r.headers["set-cookie"]
    assert set_cookie.startswith("token=")
    assert "HttpOnly" in set_cookie
    assert "SameSite=strict" in set_cookie or "SameSite=Strict" in set_cookie
    assert "Path=/" in set_cookie

    # cookie jar carries the session
    assert client.get("/plans").status_code == 200


def test_bearer_header(client, signup):
    headers = signup("erin")
    assert client.get("/plans", headers=headers).status_code == 200


def test_wrong_password(client):
    client.post("/users", json={"username": "erin", "password": "pw-erin"})
    r = client.post("/auth/login", json={"username": "erin", "password": "nope"})
    assert r.status_code == 401
    assert r.json()["code"] == 40004


def test_lockout_after_repeated_failures(client):
    client.post("/users", json={"username": "erin", "password": "pw-erin"})
    for _ in range(3):
        assert client.post("/auth/login", json={"username": "erin", "password": "nope"}).status_code == 401

    r = client.post("/auth/login", json={"username": "erin", "password": "pw-erin"})
    assert r.status_code == 423
    assert r.json()["code"] == 40006


def test_logout_revokes_session(client, signup):
    headers = signup("erin")
    r = client.get("/auth/logout", headers=headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Logout successful"}

    r = client.get("/plans", headers=headers)
    assert r.status_code == 401


def test_garbage_token(client):
    r = client.get("/plans", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["code"] == 40005


def test_bearer_header_wins_over_stale_cookie(client, signup):
    headers = signup("erin")
    r = client.get("/plans", headers={**headers, "Cookie": "token=garbage"})
    assert r.status_code == 200, r.text


def test_secure_cookie_flag_follows_settings(client, monkeypatch):
    from finance_fusion.core.config import settings

    client.post("/users", json={"username": "erin", "password": "pw-erin"})
    monkeypatch.setattr(settings, "COOKIE_SECURE", True)
    r = client.post("/auth/login", json={"username": "erin", "password": "pw-erin"})
    assert "Secure" in r.headers["set-cookie"]

    monkeypatch.setattr(settings, "COOKIE_SECURE", False)
    r = client.post("/auth/login", json={"username": "erin", "password": "pw-erin"})
    assert "Secure" not in r.headers["set-cookie"]
