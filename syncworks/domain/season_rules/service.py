"""Season rule service - Business logic for season pricing rules"""

import logging
from datetime import date

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...cache import SEASON_RULES_KEY, cache, invalidate_season_rules_cache
from ...config import SEASON_RULES_CACHE_TTL
from ...models import SeasonRule
from .matching import calculate_season_adjustment, get_season_rules_for_date
from .repository import SeasonRuleRepository
from .schemas import SeasonAdjustment, SeasonRuleInput, SeasonRuleOut

logger = logging.getLogger(__name__)


def to_season_rule_out(rule: SeasonRule) -> SeasonRuleOut:
    return SeasonRuleOut(
        id=rule.id,
        name=rule.name,
        startDate=rule.start_date,
        endDate=rule.end_date,
        priceType=rule.price_type,
        price=rule.price,
        description=rule.description or "",
        isRecurring=rule.is_recurring,
        recurringType=rule.recurring_type,
        recurringPattern=rule.recurring_pattern,
        recurringEndYear=rule.recurring_end_year,
        priority=rule.priority,
    )


def rule_columns(data: SeasonRuleInput) -> dict:
    """Map the camelCase input onto season_rules columns"""
    return {
        "name": data.name.strip(),
        "season_type": "custom",
        "start_date": data.startDate,
        "end_date": data.endDate,
        "rate_multiplier": 1 + data.price / 100 if data.priceType == "percentage" else 1,
        "price_type": data.priceType,
        "price": data.price,
        "description": data.description or None,
        "is_recurring": data.isRecurring,
        "recurring_type": data.recurringType,
        "recurring_pattern": (
            data.recurringPattern.model_dump(exclude_none=True) if data.recurringPattern else None
        ),
        "recurring_end_year": data.recurringEndYear or None,
    }


class SeasonRuleService:
    """Service layer for season rules"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SeasonRuleRepository()

    def get_active_rules(self) -> list[SeasonRuleOut]:
        """Active rules, served from Redis when possible"""
        cached = cache.get(SEASON_RULES_KEY)
        if cached is not None:
            return [SeasonRuleOut.model_validate(r) for r in cached]

        rules = [to_season_rule_out(r) for r in self.repo.get_active_rules(self.db)]
        cache.set(
            SEASON_RULES_KEY,
            [r.model_dump(mode="json") for r in rules],
            ttl=SEASON_RULES_CACHE_TTL,
        )
        return rules

    def create_rule(self, data: SeasonRuleInput) -> SeasonRuleOut:
        rule = self.repo.create_rule(self.db, **rule_columns(data))
        invalidate_season_rules_cache()
        logger.info(f"Created season rule {rule.id} ({rule.name})")
        return to_season_rule_out(rule)

    def delete_rule(self, rule_id: str) -> None:
        if not rule_id:
            raise HTTPException(status_code=400, detail="Season rule id is required")

        rule = self.repo.get_rule_by_id(self.db, rule_id)
        if not rule:
            raise HTTPException(status_code=404, detail="Season rule not found")

        self.repo.delete_rule(self.db, rule)
        invalidate_season_rules_cache()
        logger.info(f"Deleted season rule {rule_id}")

    def save_rules(self, rules: list[SeasonRuleInput]) -> list[SeasonRuleOut]:
        """
        Bulk save rules in submission order.

        Rules with an id are updated, the rest are created. Priority follows
        list position (0, 10, 20, ...). Nothing is written if any id is unknown.
        """
        rows = []
        for index, data in enumerate(rules):
            existing = None
            if data.id:
                existing = self.repo.get_rule_by_id(self.db, data.id)
                if not existing:
                    raise HTTPException(status_code=404, detail=f"Season rule not found: {data.id}")
            columns = rule_columns(data)
            columns["priority"] = index * 10
            rows.append((existing, columns))

        saved = self.repo.save_rules(self.db, rows)
        invalidate_season_rules_cache()
        logger.info(f"Saved {len(saved)} season rules")
        return [to_season_rule_out(r) for r in saved]

    def adjustment_for_date(
        self, target: date, base_price: float
    ) -> tuple[list[SeasonRuleOut], SeasonAdjustment]:
        """Matching rules and the adjustment they give, from a single rule load"""
        active = self.get_active_rules()
        return (
            get_season_rules_for_date(target, active),
            calculate_season_adjustment(target, base_price, active),
        )
