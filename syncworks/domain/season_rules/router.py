"""Season rule router - FastAPI endpoints for season pricing rules"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import require_roles
from ...database import get_db
from ...shared.validators import parse_date_string
from .schemas import SeasonRuleBulkSave, SeasonRuleInput
from .service import SeasonRuleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/season-rules", tags=["Season Rules"])

catalogue_admin = require_roles("system_admin", "company_admin")


def get_season_rule_service(db: Session = Depends(get_db)) -> SeasonRuleService:
    """Dependency injection for SeasonRuleService"""
    return SeasonRuleService(db)


@router.get("")
async def list_season_rules(service: SeasonRuleService = Depends(get_season_rule_service)):
    """Active season rules ordered by priority"""
    rules = service.get_active_rules()
    return {"success": True, "data": [r.model_dump(mode="json") for r in rules]}


@router.post("", dependencies=[Depends(catalogue_admin)])
async def create_season_rule(
    data: SeasonRuleInput,
    service: SeasonRuleService = Depends(get_season_rule_service),
):
    rule = service.create_rule(data)
    return {"success": True, "data": rule.model_dump(mode="json")}


@router.put("", dependencies=[Depends(catalogue_admin)])
async def save_season_rules(
    data: SeasonRuleBulkSave,
    service: SeasonRuleService = Depends(get_season_rule_service),
):
    """Replace the editable rule list in one transaction"""
    rules = service.save_rules(data.seasonRules)
    return {"success": True, "data": [r.model_dump(mode="json") for r in rules]}


@router.delete("", dependencies=[Depends(catalogue_admin)])
async def delete_season_rule(
    id: Optional[str] = Query(None),
    service: SeasonRuleService = Depends(get_season_rule_service),
):
    service.delete_rule(id)
    return {"success": True}


@router.get("/adjustment")
async def get_season_adjustment(
    date: str = Query(..., description="Target date (YYYY-MM-DD)"),
    base_price: float = Query(0),
    service: SeasonRuleService = Depends(get_season_rule_service),
):
    """Rules that apply on a date and the resulting price adjustment"""
    try:
        target = parse_date_string(date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    rules, adjustment = service.adjustment_for_date(target, base_price)
    return {
        "success": True,
        "data": {
            "date": target.isoformat(),
            "basePrice": base_price,
            "rules": [r.model_dump(mode="json") for r in rules],
            **adjustment.model_dump(),
        },
    }
