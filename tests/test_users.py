from models.plots import plot_users


def _create_user(client, name="Alice", email="alice@example.com", **extra):
    response = client.post("/api/users", json={"name": name, "email": email, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def test_get_user(client, plot):
    alice = _create_user(client, mobile="0711")
    client.put(f"/api/plots/{plot['id']}/assign", json={"userIds": [alice["id"]]})

    response = client.get(f"/api/users/{alice['id']}")

    assert response.status_code == 200
    fetched = response.json()
    assert fetched["email"] == "alice@example.com"
    assert fetched["mobile"] == "0711"
    assert fetched["plots"] == [plot["id"]]


def test_get_missing_user_is_not_found(client):
    response = client.get("/api/users/404")

    assert response.status_code == 404
    assert response.json()["detail"] == {"message": "User not found", "code": "not_found"}


def test_update_user_applies_only_sent_fields(client):
    alice = _create_user(client, mobile="0711")

    response = client.put(f"/api/users/{alice['id']}", json={"name": "Alice W"})

    assert response.status_code == 200
    updated = response.json()
    assert updated["name"] == "Alice W"
    assert updated["email"] == "alice@example.com"
    assert updated["mobile"] == "0711"


def test_update_user_can_clear_mobile(client):
    alice = _create_user(client, mobile="0711")

    updated = client.put(f"/api/users/{alice['id']}", json={"mobile": None}).json()

    assert updated["mobile"] is None


def test_update_user_rejects_null_name(client):
    alice = _create_user(client)

    response = client.put(f"/api/users/{alice['id']}", json={"name": None})

    assert response.status_code == 422


def test_update_user_rejects_taken_email(client):
    _create_user(client)
    bob = _create_user(client, name="Bob", email="bob@example.com")

    response = client.put(f"/api/users/{bob['id']}", json={"email": "alice@example.com"})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "duplicate"
    assert client.get(f"/api/users/{bob['id']}").json()["email"] == "bob@example.com"


def test_update_user_keeping_own_email(client):
    alice = _create_user(client)

    response = client.put(f"/api/users/{alice['id']}", json={"email": "alice@example.com", "name": "A"})

    assert response.status_code == 200
    assert response.json()["name"] == "A"


def test_update_missing_user_is_not_found(client):
    response = client.put("/api/users/999", json={"name": "Nobody"})

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "not_found"


def test_delete_user_unassigns_from_plots(client, plot, db_session):
    alice = _create_user(client)
    bob = _create_user(client, name="Bob", email="bob@example.com")
    client.put(f"/api/plots/{plot['id']}/assign", json={"userIds": [alice["id"], bob["id"]]})

    response = client.delete(f"/api/users/{alice['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "User removed"}
    assert client.get(f"/api/users/{alice['id']}").status_code == 404
    assert [u["id"] for u in client.get(f"/api/plots/{plot['id']}").json()["users"]] == [bob["id"]]
    rows = db_session.execute(plot_users.select()).fetchall()
    assert len(rows) == 1


def test_delete_missing_user_is_not_found(client):
    response = client.delete("/api/users/31337")

    assert response.status_code == 404
    assert response.json()["detail"] == {"message": "User not found", "code": "not_found"}
