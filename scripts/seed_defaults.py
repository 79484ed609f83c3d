"""
Seed the default truck types and season rules
Usage: python scripts/seed_defaults.py

Tables that already hold rows are left untouched.
"""
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy.orm import Session  # noqa: E402

from syncworks import models  # noqa: E402
from syncworks.cache import invalidate_season_rules_cache, invalidate_truck_types_cache  # noqa: E402
from syncworks.database import Base, SessionLocal, engine  # noqa: E402
from syncworks.domain.season_rules.schemas import SeasonRuleInput  # noqa: E402
from syncworks.domain.season_rules.service import rule_columns  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

DEFAULT_TRUCK_TYPES = [
    {"name": "軽トラ", "display_name": "軽トラック", "base_price": 15000, "capacity_kg": 350, "max_points": 50},
    {"name": "2tショート", "display_name": "2トンショート", "base_price": 25000, "capacity_kg": 1000, "max_points": 75},
    {"name": "2tロング", "display_name": "2トンロング", "base_price": 30000, "capacity_kg": 1500, "max_points": 100},
    {"name": "3t", "display_name": "3トン", "base_price": 40000, "capacity_kg": 2000, "max_points": 150},
    {"name": "4t", "display_name": "4トン", "base_price": 50000, "capacity_kg": 3000, "max_points": 200},
    {"name": "4t複数", "display_name": "4トン複数", "base_price": 80000, "capacity_kg": 6000, "max_points": 400},
    {"name": "特別対応", "display_name": "特別対応", "base_price": 100000, "capacity_kg": 10000, "max_points": 500},
]

DEFAULT_SEASON_RULES = [
    {
        "name": "年末年始繁忙期",
        "startDate": "2024-12-25",
        "endDate": "2025-01-05",
        "priceType": "percentage",
        "price": 25,
        "description": "年末年始の繁忙期",
        "isRecurring": True,
        "recurringType": "yearly",
        "priority": 10,
    },
    {
        "name": "春の引越しシーズン",
        "startDate": "2024-03-01",
        "endDate": "2024-04-30",
        "priceType": "percentage",
        "price": 20,
        "description": "新生活が始まる春の繁忙期",
        "isRecurring": True,
        "recurringType": "yearly",
        "priority": 20,
    },
    {
        "name": "夏の引越しシーズン",
        "startDate": "2024-07-01",
        "endDate": "2024-08-31",
        "priceType": "percentage",
        "price": 15,
        "description": "夏季の作業加算",
        "isRecurring": True,
        "recurringType": "yearly",
        "priority": 30,
    },
    {
        "name": "ゴールデンウィーク",
        "startDate": "2024-04-29",
        "endDate": "2024-05-05",
        "priceType": "percentage",
        "price": 30,
        "description": "連休中の特別料金",
        "isRecurring": True,
        "recurringType": "yearly",
        "priority": 5,
    },
    {
        "name": "夏季特別料金",
        "startDate": "2024-07-15",
        "endDate": "2024-08-15",
        "priceType": "fixed",
        "price": 8000,
        "description": "真夏の暑さ対策費",
        "isRecurring": True,
        "recurringType": "yearly",
        "priority": 25,
    },
    {
        "name": "閑散期割引",
        "startDate": "2024-09-01",
        "endDate": "2024-11-30",
        "priceType": "percentage",
        "price": -10,
        "description": "秋の閑散期割引",
        "isRecurring": True,
        "recurringType": "yearly",
        "priority": 50,
    },
    {
        "name": "週末割増",
        "startDate": "2024-01-01",
        "endDate": "2025-12-31",
        "priceType": "percentage",
        "price": 15,
        "description": "毎週土日の割増",
        "isRecurring": True,
        "recurringType": "weekly",
        "recurringPattern": {"weekdays": [0, 6]},
        "priority": 100,
    },
    {
        "name": "金曜割増",
        "startDate": "2024-01-01",
        "endDate": "2025-12-31",
        "priceType": "percentage",
        "price": 10,
        "description": "毎週金曜日の割増",
        "isRecurring": True,
        "recurringType": "weekly",
        "recurringPattern": {"weekdays": [5]},
        "priority": 110,
    },
    {
        "name": "月末割増",
        "startDate": "2024-01-25",
        "endDate": "2025-12-31",
        "priceType": "fixed",
        "price": 3000,
        "description": "毎月25日の月末割増",
        "isRecurring": True,
        "recurringType": "monthly",
        "recurringPattern": {"monthlyPattern": "date"},
        "priority": 120,
    },
    {
        "name": "特定イベント日",
        "startDate": "2024-01-01",
        "endDate": "2025-12-31",
        "priceType": "percentage",
        "price": 20,
        "description": "地域イベント開催日の特別料金",
        "isRecurring": True,
        "recurringType": "specific",
        "recurringPattern": {
            "specificDates": [
                "2024-02-14",
                "2024-03-03",
                "2024-05-15",
                "2024-07-07",
                "2024-08-11",
                "2024-10-31",
                "2024-11-23",
                "2025-02-14",
                "2025-03-03",
            ]
        },
        "priority": 130,
    },
    {
        "name": "年度末集中日",
        "startDate": "2024-01-01",
        "endDate": "2025-12-31",
        "priceType": "percentage",
        "price": 25,
        "description": "年度末・年度始めの集中する日",
        "isRecurring": True,
        "recurringType": "specific",
        "recurringPattern": {
            "specificDates": [
                "2024-03-25",
                "2024-03-28",
                "2024-03-29",
                "2024-03-31",
                "2024-04-01",
                "2024-04-02",
                "2025-03-25",
                "2025-03-28",
                "2025-03-29",
                "2025-03-31",
                "2025-04-01",
                "2025-04-02",
            ]
        },
        "priority": 135,
    },
]


def seed_truck_types(db: Session) -> int:
    """Insert the default truck types into an empty table; returns rows added"""
    if db.query(models.TruckType).count() > 0:
        logger.info("truck_types already populated, skipping")
        return 0

    for index, truck_type in enumerate(DEFAULT_TRUCK_TYPES):
        db.add(models.TruckType(**truck_type, sort_order=(index + 1) * 10))
    db.commit()
    invalidate_truck_types_cache()

    logger.info(f"✅ Seeded {len(DEFAULT_TRUCK_TYPES)} truck types")
    return len(DEFAULT_TRUCK_TYPES)


def seed_season_rules(db: Session) -> int:
    """Insert the default season rules into an empty table; returns rows added"""
    if db.query(models.SeasonRule).count() > 0:
        logger.info("season_rules already populated, skipping")
        return 0

    for rule in DEFAULT_SEASON_RULES:
        data = SeasonRuleInput.model_validate({k: v for k, v in rule.items() if k != "priority"})
        db.add(models.SeasonRule(**rule_columns(data), priority=rule["priority"]))
    db.commit()
    invalidate_season_rules_cache()

    logger.info(f"✅ Seeded {len(DEFAULT_SEASON_RULES)} season rules")
    return len(DEFAULT_SEASON_RULES)


def main():
    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()
    try:
        seed_truck_types(db)
        seed_season_rules(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
