def test_vitals(client):
    r = client.get("/vitals")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_create_and_lookup_user(client):
    r = client.post("/users", json={"username": "carol", "password": "pw-123"})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["username"] == "carol"
    assert body["is_dev_mode"] is False
    assert "pw_hash" not in body
    assert "invalid_login_attempts" not in body

    r = client.get("/users/username/carol")
    assert r.status_code == 200
    assert r.json()["id"] == body["id"]


def test_duplicate_username_conflict(client):
    assert client.post("/users", json={"username": "carol", "password": "pw"}).status_code == 201
    r = client.post("/users", json={"username": "carol", "password": "other"})
    assert r.status_code == 409
    assert r.json() == {"code": 40008, "message": "Username already exists"}


def test_unknown_username(client):
    r = client.get("/users/username/nobody")
    assert r.status_code == 404
    assert r.json()["code"] == 40003


def test_update_password_self_only(client, signup, login_as):
    carol = signup("carol", "old-pw")
    dave = signup("dave")
    carol_id = client.get("/users/username/carol").json()["id"]

    r = client.put(f"/users/{carol_id}", json={"password": "new-pw"}, headers=dave)
    assert r.status_code == 403

    r = client.put(f"/users/{carol_id}", json={"password": "new-pw"}, headers=carol)
    assert r.status_code == 200, r.text
    assert client.post("/auth/login", json={"username": "carol", "password": "old-pw"}).status_code == 401
    login_as("carol", "new-pw")


def test_delete_user_requires_auth(client, signup):
    signup("carol")
    carol_id = client.get("/users/username/carol").json()["id"]
    r = client.delete(f"/users/{carol_id}")
    assert r.status_code == 401
    assert r.json()["code"] == 40005


def test_delete_user_cascades(client, signup):
    carol = signup("carol")
    carol_id = client.get("/users/username/carol").json()["id"]
    assert client.post("/currencies", json={"code": "usd", "name": "US Dollar"}, headers=carol).status_code == 201
    assert client.post("/plans/carol-budget", headers=carol).status_code == 201
    r = client.post(
        "/plans/carol-budget/accounts",
        json={"name": "Checking", "currency": "USD", "balance": "100.00"},
        headers=carol,
    )
    assert r.status_code == 201, r.text

    r = client.delete(f"/users/{carol_id}", headers=carol)
    assert r.status_code == 204, r.text

    assert client.get("/users/username/carol").status_code == 404
    dave = signup("dave")
    assert client.get("/currencies", headers=dave).json() == []
    # plan name is free again
    assert client.post("/plans/carol-budget", headers=dave).status_code == 201
