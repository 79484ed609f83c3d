from sqlalchemy.exc import IntegrityError

from syncworks.domain.trucks.repository import TruckRepository


def truck_body(company_id, **overrides):
    body = {
        "company_id": company_id,
        "truck_number": "T-01",
        "license_plate": "Shinagawa 100 a 12-34",
        "truck_type": "2t",
        "capacity_cbm": 10.5,
        "max_load_kg": 2000,
        "next_inspection_date": "2026/4/1",
        "insurance_expiry_date": "2026-12-31",
    }
    body.update(overrides)
    return body


def test_create_and_get(client, company):
    response = client.post("/api/trucks", json=truck_body(company.id))
    assert response.status_code == 200
    truck = response.json()["data"]
    assert truck["status"] == "available"
    assert truck["next_inspection_date"] == "2026-04-01"
    assert truck["has_lift_gate"] is False

    fetched = client.get(f"/api/trucks/{truck['id']}").json()["data"]
    assert fetched["license_plate"] == "Shinagawa 100 a 12-34"


def test_create_missing_required_field(client, company):
    body = truck_body(company.id)
    del body["license_plate"]
    response = client.post("/api/trucks", json=body)
    assert response.status_code == 400
    assert response.json()["error"] == "Missing required field: license_plate"


def test_duplicate_plate_and_number(client, company):
    client.post("/api/trucks", json=truck_body(company.id))

    same_plate = client.post("/api/trucks", json=truck_body(company.id, truck_number="T-02"))
    assert same_plate.status_code == 409
    assert same_plate.json()["error"] == "License plate already exists"

    same_number = client.post("/api/trucks", json=truck_body(company.id, license_plate="other"))
    assert same_number.status_code == 409


def test_list_filters(client, company):
    client.post("/api/trucks", json=truck_body(company.id))
    client.post(
        "/api/trucks",
        json=truck_body(company.id, truck_number="T-02", license_plate="P-2", status="maintenance"),
    )

    everything = client.get(f"/api/trucks?company_id={company.id}").json()
    assert everything["count"] == 2

    maintenance = client.get("/api/trucks?status=maintenance").json()["data"]
    assert [t["truck_number"] for t in maintenance] == ["T-02"]


def test_update_is_partial(client, company):
    truck = client.post("/api/trucks", json=truck_body(company.id)).json()["data"]

    response = client.put(f"/api/trucks/{truck['id']}", json={"status": "maintenance", "manufacturer": "Isuzu"})
    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["status"] == "maintenance"
    assert updated["manufacturer"] == "Isuzu"
    assert updated["capacity_cbm"] == 10.5


def test_update_rejects_null_on_required_column(client, company):
    truck = client.post("/api/trucks", json=truck_body(company.id)).json()["data"]
    response = client.put(f"/api/trucks/{truck['id']}", json={"license_plate": None})
    assert response.status_code == 400
    assert response.json()["error"] == "Field cannot be null: license_plate"


def test_update_can_clear_optional_column(client, company):
    truck = client.post("/api/trucks", json=truck_body(company.id, manufacturer="Hino")).json()["data"]
    updated = client.put(f"/api/trucks/{truck['id']}", json={"manufacturer": None}).json()["data"]
    assert updated["manufacturer"] is None


def test_delete(client, company):
    truck = client.post("/api/trucks", json=truck_body(company.id)).json()["data"]

    response = client.delete(f"/api/trucks/{truck['id']}")
    assert response.json() == {"success": True, "message": "Truck deleted successfully"}
    assert client.get(f"/api/trucks/{truck['id']}").status_code == 404


def test_delete_retires_when_still_referenced(client, company, monkeypatch):
    truck = client.post("/api/trucks", json=truck_body(company.id)).json()["data"]

    def referenced(db, truck):
        raise IntegrityError("DELETE FROM trucks", {}, Exception("FOREIGN KEY constraint failed"))

    monkeypatch.setattr(TruckRepository, "delete_truck", staticmethod(referenced))

    response = client.delete(f"/api/trucks/{truck['id']}")
    assert response.status_code == 200
    assert "retired" in response.json()["message"]
    assert client.get(f"/api/trucks/{truck['id']}").json()["data"]["status"] == "retired"


def test_missing_truck(client):
    assert client.get("/api/trucks/nope").status_code == 404
    assert client.put("/api/trucks/nope", json={"status": "inactive"}).status_code == 404
    assert client.delete("/api/trucks/nope").status_code == 404


def test_update_conflict_from_database(client, company, monkeypatch):
    truck = client.post("/api/trucks", json=truck_body(company.id)).json()["data"]

    def rejected(db, truck, **updates):
        raise IntegrityError("UPDATE trucks", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(TruckRepository, "update_truck", staticmethod(rejected))

    response = client.put(f"/api/trucks/{truck['id']}", json={"truck_type": "4t"})
    assert response.status_code == 409
    assert response.json()["error"] == "Truck conflicts with an existing record"
