import pytest

from syncworks import config


@pytest.fixture(autouse=True)
def pricing_config(monkeypatch):
    monkeypatch.setattr(config, "POINT_UNIT_PRICE", 500)
    monkeypatch.setattr(config, "DISTANCE_PRICE_PER_KM", 50)
    monkeypatch.setattr(config, "BASE_DISTANCE_KM", 10)
    monkeypatch.setattr(config, "TAX_RATE", 0.1)


def quote_body(**overrides):
    body = {
        "customer_last_name": "田中",
        "customer_first_name": "一郎",
        "customer_email": "Tanaka@Example.com",
        "customer_phone": "090-1234-5678",
        "from_prefecture": "東京都",
        "from_city": "新宿区",
        "from_address_line": "西新宿2-8-1",
        "to_prefecture": "神奈川県",
        "to_city": "横浜市",
        "to_address_line": "中区1-1",
        "request_source": "web_form",
        "distance_km": 30,
        "preferred_date_1": "2025/9/10",
    }
    body.update(overrides)
    return body


def test_create_defaults(client):
    response = client.post("/api/quote-requests", json=quote_body())
    assert response.status_code == 201
    quote = response.json()["data"]
    assert quote["status"] == "pending"
    assert quote["customer_email"] == "tanaka@example.com"
    assert quote["preferred_date_1"] == "2025-09-10"
    assert quote["packing_required"] is False
    assert quote["estimated_price"] is None


@pytest.mark.parametrize("field", ["customer_phone", "to_city", "request_source"])
def test_create_missing_required(client, field):
    body = quote_body()
    del body[field]
    response = client.post("/api/quote-requests", json=body)
    assert response.status_code == 400
    assert response.json()["error"] == f"Missing required field: {field}"


def test_list_filters(client):
    client.post("/api/quote-requests", json=quote_body())
    client.post(
        "/api/quote-requests",
        json=quote_body(customer_email="other@example.com", request_source="referral", referrer_agent_id="agent-1"),
    )

    assert client.get("/api/quote-requests").json()["count"] == 2
    by_email = client.get("/api/quote-requests?customer_email=TANAKA@example.com").json()["data"]
    assert len(by_email) == 1
    by_agent = client.get("/api/quote-requests?referrer_agent_id=agent-1").json()["data"]
    assert [q["customer_email"] for q in by_agent] == ["other@example.com"]
    assert client.get("/api/quote-requests?status=quoted").json()["count"] == 0


def test_get_missing(client):
    assert client.get("/api/quote-requests/nope").status_code == 404


def test_attach_estimate_uses_request_defaults(client, truck_types):
    quote = client.post("/api/quote-requests", json=quote_body()).json()["data"]

    response = client.post(
        f"/api/quote-requests/{quote['id']}/estimate",
        json={
            "truckType": "4t",
            "items": [{"name": "bed", "points": 8, "quantity": 2}],
            "options": [{"name": "packing", "price": 10000}],
        },
    )
    assert response.status_code == 200
    body = response.json()
    estimate = body["estimate"]
    # 50000 base + 8000 cargo + 10000 options + 1000 for 20 km beyond the base distance
    assert estimate["subtotal"] == 69000
    assert estimate["total"] == 75900
    assert estimate["formattedTotal"] == "¥75,900"

    stored = body["data"]
    assert stored["status"] == "quoted"
    assert stored["estimated_price"] == 75900
    assert stored["estimate_truck_type"] == "4t"
    assert stored["estimate_breakdown"]["distancePrice"] == 1000
    assert stored["estimated_at"] is not None

    assert client.get("/api/quote-requests?status=quoted").json()["count"] == 1


def test_attach_estimate_with_explicit_distance_and_season(client, truck_types, admin_headers):
    client.post(
        "/api/season-rules",
        json={
            "name": "Busy day",
            "startDate": "2025-09-01",
            "endDate": "2025-09-30",
            "priceType": "fixed",
            "price": 5000,
        },
        headers=admin_headers,
    )
    quote = client.post("/api/quote-requests", json=quote_body()).json()["data"]

    response = client.post(
        f"/api/quote-requests/{quote['id']}/estimate",
        json={"truckType": "2t", "distance": 5},
    )
    estimate = response.json()["estimate"]
    assert estimate["distancePrice"] == 0
    assert estimate["seasonAdjustment"] == 5000
    assert estimate["total"] == 38500


def test_attach_estimate_to_missing_request(client):
    response = client.post("/api/quote-requests/nope/estimate", json={"truckType": "2t"})
    assert response.status_code == 404


def test_estimate_pdf(client, truck_types):
    quote = client.post("/api/quote-requests", json=quote_body()).json()["data"]

    assert client.get(f"/api/quote-requests/{quote['id']}/estimate/pdf").status_code == 404

    client.post(f"/api/quote-requests/{quote['id']}/estimate", json={"truckType": "2t"})
    response = client.get(f"/api/quote-requests/{quote['id']}/estimate/pdf")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == f'inline; filename="estimate-{quote["id"]}.pdf"'
    assert response.content.startswith(b"%PDF")
