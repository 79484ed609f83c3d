"""Holiday router - Holiday calendar endpoints"""

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from ...auth import require_roles
from ...shared.validators import parse_date_string
from .schemas import HolidayImport
from .service import HolidayService
from .store import HolidayStore

router = APIRouter(prefix="/api/holidays", tags=["Holidays"])

catalogue_admin = require_roles("system_admin", "company_admin")


def get_holiday_service() -> HolidayService:
    """Dependency injection for HolidayService"""
    return HolidayService(HolidayStore())


def _saved(data: dict) -> dict:
    return {
        "success": True,
        "message": f"Saved {data['count']} holidays",
        "count": data["count"],
        "lastUpdated": data["lastUpdated"],
        "source": data["source"],
    }


@router.get("")
async def get_holidays(service: HolidayService = Depends(get_holiday_service)):
    return service.get_holidays()


@router.get("/check")
async def check_date(
    date: str = Query(..., description="YYYY-MM-DD"),
    service: HolidayService = Depends(get_holiday_service),
):
    """Holiday, weekend and day-off flags for a date"""
    try:
        target = parse_date_string(date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return service.check_date(target)


@router.post("/import", dependencies=[Depends(catalogue_admin)])
async def import_holidays(
    data: HolidayImport,
    service: HolidayService = Depends(get_holiday_service),
):
    return _saved(service.import_holidays(data.holidays))


@router.post("/import/csv", dependencies=[Depends(catalogue_admin)])
async def import_holiday_csv(
    file: UploadFile = File(...),
    service: HolidayService = Depends(get_holiday_service),
):
    """Import a date,name CSV upload"""
    raw = await file.read()
    return _saved(service.import_csv(raw))


@router.post("/update", dependencies=[Depends(catalogue_admin)])
async def update_holidays(service: HolidayService = Depends(get_holiday_service)):
    """Refresh holidays from the government CSV"""
    return _saved(await service.update_from_government())
