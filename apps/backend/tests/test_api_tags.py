import pytest


@pytest.fixture()
def setup(client, signup):
    headers = signup("ivy")
    client.post("/currencies", json={"code": "USD", "name": "US Dollar"}, headers=headers)
    client.post("/plans/tagged", headers=headers)
    acc = client.post("/plans/tagged/accounts", json={"name": "Checking", "currency": "USD"}, headers=headers).json()
    txn = client.post(
        "/plans/tagged/transactions",
        json={"type": "expense", "from_account": acc["id"], "amount": "9.99", "currency": "USD"},
        headers=headers,
    ).json()
    tag = client.post("/tags", json={"name": "groceries", "icon": "cart"}, headers=headers).json()
    return headers, acc, txn, tag


def test_tag_and_untag_account(client, setup):
    headers, acc, _, tag = setup
    r = client.put(f"/plans/tagged/accounts/{acc['id']}/tags/{tag['id']}", headers=headers)
    assert r.status_code == 200, r.text
    assert [t["name"] for t in r.json()["tags"]] == ["groceries"]

    # idempotent
    r = client.put(f"/plans/tagged/accounts/{acc['id']}/tags/{tag['id']}", headers=headers)
    assert len(r.json()["tags"]) == 1

    r = client.delete(f"/plans/tagged/accounts/{acc['id']}/tags/{tag['id']}", headers=headers)
    assert r.json()["tags"] == []
    r = client.delete(f"/plans/tagged/accounts/{acc['id']}/tags/{tag['id']}", headers=headers)
    assert r.status_code == 404


def test_deleting_tag_removes_links(client, setup):
    headers, _, txn, tag = setup
    client.put(f"/plans/tagged/transactions/{txn['id']}/tags/{tag['id']}", headers=headers)
    assert len(client.get(f"/plans/tagged/transactions/{txn['id']}", headers=headers).json()["tags"]) == 1

    assert client.delete(f"/tags/{tag['id']}", headers=headers).status_code == 204
    assert client.get("/tags", headers=headers).json() == []
    assert client.get(f"/plans/tagged/transactions/{txn['id']}", headers=headers).json()["tags"] == []


def test_foreign_tag_is_not_usable(client, setup, signup):
    headers, acc, _, _ = setup
    other = signup("jack")
    foreign = client.post("/tags", json={"name": "mine", "icon": "star"}, headers=other).json()

    r = client.put(f"/plans/tagged/accounts/{acc['id']}/tags/{foreign['id']}", headers=headers)
    assert r.status_code == 404
    assert client.delete(f"/tags/{foreign['id']}", headers=headers).status_code == 404
