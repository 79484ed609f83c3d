import os
from datetime import date

# Configure the app for tests before anything imports syncworks.config
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["REDIS_URL"] = "redis://127.0.0.1:1/0"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest
from fastapi.testclient import TestClient

from syncworks import config, models, rate_limiter
from syncworks.database import Base, SessionLocal, engine
from syncworks.domain.holidays.store import clear_holiday_cache
from syncworks.main import app
from syncworks.security_utils import create_access_token, hash_password


@pytest.fixture(autouse=True)
def fresh_state(tmp_path, monkeypatch):
    """Empty tables, rate limit counters and holiday file for every test"""
    Base.metadata.create_all(bind=engine)
    rate_limiter.memory_cache.clear()
    clear_holiday_cache()
    monkeypatch.setattr(config, "HOLIDAYS_FILE", tmp_path / "holidays.json")
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    def _make_user(email="owner@example.com", password="secret-pass", role="company_admin", **extra):
        user = models.User(
            email=email,
            password_hash=hash_password(password),
            role=role,
            **extra,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def admin_headers(make_user):
    admin = make_user(email="admin@example.com", role="system_admin")
    token = create_access_token({"sub": admin.id, "role": admin.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def company(db, make_user):
    owner = make_user()
    company = models.MovingCompany(user_id=owner.id, company_name="Sakura Moving", staff_count=12)
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def make_employee(db, company):
    def _make_employee(employee_number="E001", **extra):
        fields = {
            "company_id": company.id,
            "employee_number": employee_number,
            "last_name": "Yamada",
            "first_name": "Taro",
            "role": "driver",
            "hire_date": date(2023, 4, 1),
            "phone_number": "090-1111-2222",
        }
        fields.update(extra)
        employee = models.Employee(**fields)
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee

    return _make_employee


@pytest.fixture
def truck_types(db):
    rows = [
        models.TruckType(name="2t", display_name="2 ton", base_price=30000, capacity_kg=1500, max_points=100, sort_order=10),
        models.TruckType(name="4t", display_name="4 ton", base_price=50000, capacity_kg=3000, max_points=200, sort_order=20),
        models.TruckType(name="4t+", display_name="4 ton x2", base_price=80000, capacity_kg=6000, max_points=400, sort_order=30),
    ]
    db.add_all(rows)
    db.commit()
    return rows


class FakeRedis:
    """Just enough of the redis client for the JSON cache"""

    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value

    def delete(self, key):
        self.store.pop(key, None)


@pytest.fixture
def fake_redis(monkeypatch):
    from syncworks.cache import cache

    client = FakeRedis()
    monkeypatch.setattr(cache, "_get_client", lambda: client)
    return client
