"""Holiday service - Import, government CSV refresh and day-off lookups"""

import logging
from datetime import date

import httpx
from fastapi import HTTPException

from ... import config
from .store import HolidayStore
from .utils import get_holiday_name, is_day_off, is_weekend, normalize_holidays, parse_holiday_csv

logger = logging.getLogger(__name__)

SOURCE_UPLOAD = "csv-upload"
SOURCE_GOVERNMENT = "government-csv"


async def fetch_holiday_csv(url: str, timeout: float) -> bytes:
    """Download the holiday CSV; raises httpx.HTTPError on failure"""
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        response = await client.get(url)
        response.raise_for_status()
        return response.content


def decode_csv_bytes(raw: bytes) -> str:
    """Uploads are usually UTF-8; files saved from Excel in Japan are Shift_JIS"""
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode("cp932", errors="replace")


class HolidayService:
    """Service layer for holidays"""

    def __init__(self, store: HolidayStore):
        self.store = store

    def get_holidays(self) -> dict:
        data = self.store.load()
        if data is None:
            return {
                "holidays": [],
                "lastUpdated": None,
                "count": 0,
                "message": "No holiday data yet. POST /api/holidays/update to download it.",
            }
        holidays = data.get("holidays", [])
        return {
            "holidays": holidays,
            "lastUpdated": data.get("lastUpdated"),
            "count": len(holidays),
        }

    def import_holidays(self, entries: list, source: str = SOURCE_UPLOAD) -> dict:
        holidays = normalize_holidays(entries)
        if not holidays:
            raise HTTPException(status_code=400, detail="No valid holiday entries")

        dropped = len(entries) - len(holidays)
        if dropped:
            logger.warning(f"Dropped {dropped} invalid or duplicate holiday entries")
        return self.store.save(holidays, source)

    def import_csv(self, raw: bytes) -> dict:
        holidays = parse_holiday_csv(decode_csv_bytes(raw))
        if not holidays:
            raise HTTPException(status_code=400, detail="No valid holiday rows in CSV")
        return self.store.save(holidays, SOURCE_UPLOAD)

    async def update_from_government(self) -> dict:
        """Replace the stored holidays with the latest government CSV"""
        url = config.HOLIDAY_CSV_URL
        try:
            raw = await fetch_holiday_csv(url, config.HOLIDAY_CSV_TIMEOUT)
        except httpx.HTTPError as e:
            logger.error(f"Holiday CSV download from {url} failed: {e}")
            raise HTTPException(status_code=502, detail="Failed to download holiday CSV") from e

        # The government file is Shift_JIS encoded
        holidays = parse_holiday_csv(raw.decode("cp932", errors="replace"))
        if not holidays:
            logger.error(f"Holiday CSV from {url} contained no rows")
            raise HTTPException(status_code=502, detail="Holiday CSV contained no valid rows")

        return self.store.save(holidays, SOURCE_GOVERNMENT)

    def check_date(self, target: date) -> dict:
        holidays = self.store.holidays()
        name = get_holiday_name(target, holidays)
        return {
            "date": target.isoformat(),
            "isHoliday": name is not None,
            "holidayName": name,
            "isWeekend": is_weekend(target),
            "isDayOff": is_day_off(target, holidays),
        }
