def test_plan_lifecycle(client, signup):
    frank = signup("frank")
    r = client.post("/plans/  Family   Budget ", headers=frank)
    assert r.status_code == 201, r.text
    assert r.json()["name"] == "Family Budget"

    client.post("/plans/Alpha", headers=frank)
    names = [p["name"] for p in client.get("/plans", headers=frank).json()]
    assert names == ["Alpha", "Family Budget"]

    assert client.delete("/plans/Alpha", headers=frank).status_code == 204
    assert client.delete("/plans/Alpha", headers=frank).status_code == 404


def test_plan_names_are_global(client, signup):
    frank = signup("frank")
    grace = signup("grace")
    assert client.post("/plans/shared", headers=frank).status_code == 201

    r = client.post("/plans/shared", headers=grace)
    assert r.status_code == 409
    assert r.json()["code"] == 40008


def test_other_users_plan_is_hidden(client, signup):
    frank = signup("frank")
    grace = signup("grace")
    client.post("/plans/private", headers=frank)

    assert client.get("/plans", headers=grace).json() == []
    assert client.get("/plans/private/accounts", headers=grace).status_code == 404
    assert client.delete("/plans/private", headers=grace).status_code == 404


def test_plans_require_auth(client):
    assert client.get("/plans").status_code == 401


def test_currency_lifecycle(client, signup):
    frank = signup("frank")
    grace = signup("grace")

    r = client.post("/currencies", json={"code": " eur ", "name": "Euro"}, headers=frank)
    assert r.status_code == 201, r.text
    assert r.json()["code"] == "EUR"

    dup = client.post("/currencies", json={"code": "EUR", "name": "Euro again"}, headers=grace)
    assert dup.status_code == 409

    bad = client.post("/currencies", json={"code": "E1R", "name": "Broken"}, headers=frank)
    assert bad.status_code == 422
    assert bad.json()["code"] == 40007

    assert [c["code"] for c in client.get("/currencies", headers=grace).json()] == ["EUR"]
    assert client.get("/currencies", params={"mine": True}, headers=grace).json() == []

    assert client.delete("/currencies/EUR", headers=grace).status_code == 403
    assert client.delete("/currencies/eur", headers=frank).status_code == 204
    assert client.delete("/currencies/EUR", headers=frank).status_code == 404


def test_currency_in_use_cannot_be_deleted(client, signup):
    frank = signup("frank")
    grace = signup("grace")
    client.post("/currencies", json={"code": "EUR", "name": "Euro"}, headers=frank)
    client.post("/plans/grace-plan", headers=grace)
    r = client.post("/plans/grace-plan/accounts", json={"name": "Wallet", "currency": "EUR"}, headers=grace)
    assert r.status_code == 201, r.text

    r = client.delete("/currencies/EUR", headers=frank)
    assert r.status_code == 409
    assert r.json()["message"] == "Currency EUR is in use"
