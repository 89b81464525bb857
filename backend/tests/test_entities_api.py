from fastapi.testclient import TestClient

BASE = "/api/features/order_bump/entities"


def _create(client, **payload):
    response = client.post(BASE, json=payload)
    assert response.status_code == 200, response.text
    return response.json()["entity"]


def test_create_entity(client: TestClient):
    response = client.post(
        BASE,
        json={"name": "<b>Bump</b>", "settings": {"Discount": 10}, "priority": 3},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Entity created successfully."
    assert body["entity"]["name"] == "Bump"
    assert body["entity"]["settings"] == {"discount": 10}
    assert body["entity"]["status"] == "active"
    assert body["entity"]["priority"] == 3
    assert body["entity"]["entity_type"] == "default"


def test_list_entities(client: TestClient):
    _create(client, name="b", priority=2)
    _create(client, name="a", priority=1)
    _create(client, name="off", priority=3, status="inactive")

    response = client.get(BASE)
    assert response.status_code == 200
    assert response.json()["total"] == 3
    assert [item["name"] for item in response.json()["items"]] == ["a", "b", "off"]

    response = client.get(BASE, params={"status": "active", "order": "desc"})
    assert response.json()["total"] == 2
    assert [item["name"] for item in response.json()["items"]] == ["b", "a"]

    response = client.get(BASE, params={"per_page": 1, "offset": 1})
    assert [item["name"] for item in response.json()["items"]] == ["b"]
    assert response.json()["total"] == 3

    response = client.get(BASE, params={"orderby": "priority; DROP TABLE x"})
    assert [item["name"] for item in response.json()["items"]] == ["a", "b", "off"]


def test_entity_type_scopes_requests(client: TestClient):
    entity = _create(client, name="bundle")
    client.post(BASE, params={"entity_type": "bundle"}, json={"name": "scoped"})

    assert [item["name"] for item in client.get(BASE).json()["items"]] == ["bundle"]
    scoped = client.get(BASE, params={"entity_type": "bundle"}).json()["items"]
    assert [item["name"] for item in scoped] == ["scoped"]

    assert client.get(f"{BASE}/{entity['id']}", params={"entity_type": "bundle"}).status_code == 404
    assert client.get(f"/api/features/smart_recommendations/entities/{entity['id']}").status_code == 404


def test_read_entity(client: TestClient):
    entity = _create(client, name="one")

    response = client.get(f"{BASE}/{entity['id']}")

    assert response.status_code == 200
    assert response.json()["name"] == "one"
    assert client.get(f"{BASE}/9999").status_code == 404


def test_update_entity_is_partial(client: TestClient):
    entity = _create(client, name="Original", settings={"discount": 10}, priority=5)

    response = client.put(f"{BASE}/{entity['id']}", json={"status": "draft"})

    assert response.status_code == 200
    updated = response.json()["entity"]
    assert updated["status"] == "draft"
    assert updated["name"] == "Original"
    assert updated["settings"] == {"discount": 10}
    assert updated["priority"] == 5

    assert client.put(f"{BASE}/9999", json={"name": "x"}).status_code == 404


def test_delete_entity(client: TestClient):
    entity = _create(client, name="gone")

    response = client.delete(f"{BASE}/{entity['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "Entity deleted successfully."
    assert client.get(f"{BASE}/{entity['id']}").status_code == 404
    assert client.delete(f"{BASE}/{entity['id']}").status_code == 404


def test_bulk_actions(client: TestClient):
    ids = [_create(client, name=f"n{i}")["id"] for i in range(3)]

    response = client.put(f"{BASE}/bulk", json={"action": "deactivate", "ids": ids[:2]})
    assert response.status_code == 200
    assert response.json() == {"count": 2, "message": "2 entities updated."}
    assert client.get(BASE, params={"status": "inactive"}).json()["total"] == 2

    response = client.put(f"{BASE}/bulk", json={"action": "activate", "ids": ids})
    assert response.json()["count"] == 3

    response = client.put(f"{BASE}/bulk", json={"action": "delete", "ids": [ids[0]]})
    assert response.json()["count"] == 1
    assert client.get(BASE).json()["total"] == 2


def test_bulk_action_validation(client: TestClient):
    entity = _create(client, name="x")

    response = client.put(f"{BASE}/bulk", json={"action": "activate", "ids": []})
    assert response.status_code == 400
    assert response.json()["detail"] == "No entities selected."

    response = client.put(f"{BASE}/bulk", json={"action": "explode", "ids": [entity["id"]]})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid action."


def test_reorder(client: TestClient):
    first = _create(client, name="first", priority=1)
    second = _create(client, name="second", priority=2)

    response = client.put(f"{BASE}/reorder", json={"order": {str(first["id"]): 5, str(second["id"]): 1}})

    assert response.status_code == 200
    assert response.json()["message"] == "Order updated successfully."
    assert [item["name"] for item in client.get(BASE).json()["items"]] == ["second", "first"]

    assert client.put(f"{BASE}/reorder", json={"order": {}}).status_code == 400


def test_duplicate(client: TestClient):
    entity = _create(client, name="Bundle", settings={"discount": 10}, priority=4)

    response = client.post(f"{BASE}/{entity['id']}/duplicate")

    assert response.status_code == 200
    copy = response.json()["entity"]
    assert copy["id"] != entity["id"]
    assert copy["name"] == "Bundle (Copy)"
    assert copy["status"] == "inactive"
    assert copy["priority"] == 5
    assert copy["settings"] == {"discount": 10}

    assert client.post(f"{BASE}/9999/duplicate").status_code == 404


def test_out_of_range_entity_id_is_not_found(client: TestClient):
    response = client.get(f"{BASE}/99999999999999999999999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Entity not found."
