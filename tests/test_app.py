import importlib.util
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from syncworks.main import app
from syncworks.models import SeasonRule, TruckType

SEED_SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "seed_defaults.py"


def load_seed_module():
    spec = importlib.util.spec_from_file_location("seed_defaults", SEED_SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_root_and_health(client):
    assert client.get("/").json() == {"message": "SyncWorks API is running"}
    assert client.get("/health").json() == {"status": "healthy"}


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}


def test_malformed_json_is_a_bad_request(client):
    response = client.post(
        "/api/quote-requests", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_unhandled_errors_return_500_envelope(monkeypatch):
    from syncworks.domain.trucks.service import TruckService

    def explode(self, company_id=None, status=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(TruckService, "get_trucks", explode)

    response = TestClient(app, raise_server_exceptions=False).get("/api/trucks")
    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"


def test_seed_defaults_fills_empty_tables_once(db):
    seed = load_seed_module()

    assert seed.seed_truck_types(db) == 7
    assert seed.seed_season_rules(db) == 11
    assert seed.seed_truck_types(db) == 0
    assert seed.seed_season_rules(db) == 0

    assert [t.sort_order for t in db.query(TruckType).order_by(TruckType.sort_order)][:2] == [10, 20]
    weekend = db.query(SeasonRule).filter(SeasonRule.name == "週末割増").one()
    assert weekend.recurring_pattern == {"weekdays": [0, 6]}
    assert weekend.rate_multiplier == pytest.approx(1.15)


def test_seeded_catalogue_is_served(client, db):
    seed = load_seed_module()
    seed.seed_truck_types(db)
    seed.seed_season_rules(db)

    assert len(client.get("/api/truck-types").json()["data"]) == 7
    rules = client.get("/api/season-rules").json()["data"]
    assert rules[0]["name"] == "ゴールデンウィーク"


def test_seeded_specific_date_rules_apply(client, db):
    seed = load_seed_module()
    seed.seed_season_rules(db)

    specific = db.query(SeasonRule).filter(SeasonRule.recurring_type == "specific").order_by(SeasonRule.priority)
    assert [r.name for r in specific] == ["特定イベント日", "年度末集中日"]

    # 2025-03-31 (Monday): spring season and the fiscal year end rush
    data = client.get("/api/season-rules/adjustment?date=2025-03-31&base_price=10000").json()["data"]
    assert [r["name"] for r in data["rules"]] == ["春の引越しシーズン", "年度末集中日"]
    assert data["total"] == 4500
