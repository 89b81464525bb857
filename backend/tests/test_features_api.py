from fastapi.testclient import TestClient


def test_list_features_sorted_by_priority(client: TestClient):
    response = client.get("/api/features")

    assert response.status_code == 200
    assert [feature["id"] for feature in response.json()] == [
        "order_bump",
        "smart_recommendations",
        "free_shipping_bar",
        "post_purchase_upsells",
    ]


def test_list_features_by_category(client: TestClient):
    response = client.get("/api/features", params={"category": "checkout_booster"})

    assert response.status_code == 200
    assert [feature["id"] for feature in response.json()] == ["order_bump", "post_purchase_upsells"]


def test_list_categories(client: TestClient):
    response = client.get("/api/features/categories")

    assert response.status_code == 200
    categories = response.json()
    assert [category["id"] for category in categories] == [
        "cart_optimizer",
        "checkout_booster",
        "product_discovery",
        "urgency_scarcity",
        "others",
    ]
    assert categories[0]["name"] == "Cart Optimizer"


def test_read_feature(client: TestClient):
    response = client.get("/api/features/free_shipping_bar")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Free Shipping Bar"
    assert data["enabled"] is False
    assert data["settings"]["threshold"] == 50


def test_read_unknown_feature(client: TestClient):
    response = client.get("/api/features/does_not_exist")

    assert response.status_code == 404
    assert response.json()["detail"] == "Feature not found."


def test_toggle_feature_persists_across_requests(client: TestClient):
    response = client.put("/api/features/order_bump", json={"enabled": True})

    assert response.status_code == 200
    assert response.json()["feature"]["enabled"] is True
    assert response.json()["message"] == "Feature updated successfully."

    assert client.get("/api/features/order_bump").json()["enabled"] is True

    response = client.put("/api/features/order_bump", json={"enabled": False})
    assert response.json()["feature"]["enabled"] is False


def test_update_without_enabled_leaves_state(client: TestClient):
    response = client.put("/api/features/post_purchase_upsells", json={})

    assert response.status_code == 200
    assert response.json()["feature"]["enabled"] is True


def test_update_unknown_feature(client: TestClient):
    assert client.put("/api/features/ghost", json={"enabled": True}).status_code == 404
    assert client.put("/api/features/ghost/settings", json={"a": 1}).status_code == 404


def test_update_settings_merges(client: TestClient):
    response = client.put("/api/features/free_shipping_bar/settings", json={"threshold": 75})

    assert response.status_code == 200
    settings = response.json()["feature"]["settings"]
    assert settings["threshold"] == 75
    assert settings["show_on"] == ["top_cart", "top_checkout"]
    assert response.json()["message"] == "Settings updated successfully."

    assert client.get("/api/features/free_shipping_bar").json()["settings"]["threshold"] == 75
