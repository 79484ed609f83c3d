from syncworks.cache import TRUCK_TYPES_KEY
from syncworks.models import TruckType


def test_list_ordered_by_sort_order(client, truck_types):
    response = client.get("/api/truck-types")
    assert response.status_code == 200
    data = response.json()["data"]
    assert [t["name"] for t in data] == ["2t", "4t", "4t+"]
    assert data[0]["basePrice"] == 30000
    assert data[0]["displayName"] == "2 ton"


def test_recommend(client, truck_types):
    data = client.get("/api/truck-types/recommend?points=150").json()["data"]
    assert data["recommended"] == "4t"
    assert data["recommendations"] == ["4t", "4t+"]


def test_recommend_rejects_negative_points(client):
    assert client.get("/api/truck-types/recommend?points=-1").status_code == 400


def test_create_defaults_sort_order_after_existing(client, admin_headers, truck_types):
    response = client.post(
        "/api/truck-types",
        json={"name": "Light", "basePrice": 15000, "maxPoints": 50},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["sortOrder"] == 40


def test_create_duplicate_name_conflicts(client, admin_headers, truck_types):
    response = client.post("/api/truck-types", json={"name": "2t"}, headers=admin_headers)
    assert response.status_code == 409
    assert response.json() == {"success": False, "error": "Truck type already exists: 2t"}


def test_create_requires_admin(client, truck_types):
    assert client.post("/api/truck-types", json={"name": "Light"}).status_code == 401


def test_bulk_save_updates_only_sent_fields(client, admin_headers, truck_types):
    existing = client.get("/api/truck-types").json()["data"][0]

    body = {
        "truckTypes": [
            {"id": existing["id"], "name": "2t short", "basePrice": 28000},
            {"name": "10t", "basePrice": 150000, "maxPoints": 800},
        ]
    }
    response = client.put("/api/truck-types", json=body, headers=admin_headers)
    assert response.status_code == 200
    saved = response.json()["data"]
    assert saved[0]["name"] == "2t short"
    assert saved[0]["basePrice"] == 28000
    assert saved[0]["maxPoints"] == 100
    assert saved[0]["capacityKg"] == 1500
    assert saved[0]["sortOrder"] == 10
    assert saved[1]["sortOrder"] == 20
    assert saved[1]["maxPoints"] == 800


def test_bulk_save_unknown_id(client, admin_headers):
    body = {"truckTypes": [{"id": "nope", "name": "ghost"}]}
    assert client.put("/api/truck-types", json=body, headers=admin_headers).status_code == 404


def test_bulk_save_duplicate_name_rolls_back(client, admin_headers, truck_types):
    body = {"truckTypes": [{"name": "fresh"}, {"name": "4t"}]}
    response = client.put("/api/truck-types", json=body, headers=admin_headers)
    assert response.status_code == 409
    names = [t["name"] for t in client.get("/api/truck-types").json()["data"]]
    assert "fresh" not in names


def test_delete(client, admin_headers, truck_types):
    target = client.get("/api/truck-types").json()["data"][0]

    assert client.delete(f"/api/truck-types?id={target['id']}", headers=admin_headers).status_code == 200
    names = [t["name"] for t in client.get("/api/truck-types").json()["data"]]
    assert names == ["4t", "4t+"]

    assert client.delete(f"/api/truck-types?id={target['id']}", headers=admin_headers).status_code == 404
    assert client.delete("/api/truck-types", headers=admin_headers).status_code == 400


def test_list_served_from_cache_until_write(client, admin_headers, truck_types, db, fake_redis):
    first = client.get("/api/truck-types").json()["data"]
    assert len(first) == 3
    assert TRUCK_TYPES_KEY in fake_redis.store

    db.add(TruckType(name="Direct", display_name="Direct", base_price=1000, max_points=10, sort_order=5))
    db.commit()
    assert client.get("/api/truck-types").json()["data"] == first

    created = client.post(
        "/api/truck-types", json={"name": "Light", "basePrice": 15000, "maxPoints": 50}, headers=admin_headers
    ).json()["data"]
    assert TRUCK_TYPES_KEY not in fake_redis.store
    names = [t["name"] for t in client.get("/api/truck-types").json()["data"]]
    assert names == ["Direct", "2t", "4t", "4t+", "Light"]

    body = {"truckTypes": [{"id": created["id"], "name": "Light", "basePrice": 16000}]}
    assert client.put("/api/truck-types", json=body, headers=admin_headers).status_code == 200
    assert TRUCK_TYPES_KEY not in fake_redis.store

    client.get("/api/truck-types")
    assert client.delete(f"/api/truck-types?id={created['id']}", headers=admin_headers).status_code == 200
    assert TRUCK_TYPES_KEY not in fake_redis.store
    assert "Light" not in [t["name"] for t in client.get("/api/truck-types").json()["data"]]
