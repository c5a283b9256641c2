def test_health(user_client):
    assert user_client.get("/health").json() == {"status": "ok", "service": "user-api"}


def test_get_user(user_client):
    response = user_client.get("/users/u1")
    assert response.status_code == 200
    assert response.json() == {"id": "u1", "name": "Alice Example", "loyaltyTier": "GOLD"}


def test_get_missing_user(user_client):
    response = user_client.get("/users/ghost")
    assert response.status_code == 404
    assert response.json()["error"] == "USER_NOT_FOUND"


def test_create_user_normalises_tier(user_client):
    response = user_client.post("/users", json={"id": "u6", "name": "Fay", "loyaltyTier": "bronze"})
    assert response.status_code == 201
    assert response.json() == {"id": "u6", "name": "Fay", "loyaltyTier": "BRONZE"}


def test_create_user_errors(user_client):
    response = user_client.post("/users", json={"id": "u6", "name": "Fay", "loyaltyTier": "PLATINUM"})
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_TIER"

    response = user_client.post("/users", json={"id": "u1", "name": "Fay", "loyaltyTier": "GOLD"})
    assert response.status_code == 409
    assert response.json()["error"] == "USER_ALREADY_EXISTS"

    response = user_client.post("/users", json={"name": "Fay"})
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_PAYLOAD"


def test_update_and_delete_user(user_client):
    response = user_client.put("/users/u2", json={"loyaltyTier": "GOLD"})
    assert response.status_code == 200
    assert response.json()["loyaltyTier"] == "GOLD"
    assert response.json()["name"] == "Bob Example"

    assert user_client.put("/users/u2", json={}).status_code == 400
    assert user_client.delete("/users/u2").status_code == 204
    assert user_client.delete("/users/u2").status_code == 404
