"""Holiday parsing and day-off checks"""

import csv
import io
from datetime import date
from typing import Iterable, Optional, Union

from ...shared.validators import parse_date_string

DateLike = Union[str, date]


def normalize_holidays(entries: Iterable[dict]) -> list[dict]:
    """
    Keep entries with a name and a parsable date, as {date: YYYY-MM-DD, name}.

    Later duplicates of a date replace earlier ones. Output is sorted by date.
    """
    by_date: dict[str, str] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        raw_date = entry.get("date")
        name = str(entry.get("name") or "").strip()
        if not raw_date or not name:
            continue
        try:
            iso = parse_date_string(raw_date).isoformat()
        except ValueError:
            continue
        by_date[iso] = name
    return [{"date": d, "name": by_date[d]} for d in sorted(by_date)]


def parse_holiday_csv(text: str) -> list[dict]:
    """
    Parse "date,name" rows such as the government holiday CSV.

    Dates may be YYYY/M/D or YYYY-MM-DD; a header row (or any row whose date
    does not parse) is skipped.
    """
    rows = []
    for row in csv.reader(io.StringIO(text.lstrip("\ufeff"))):
        if len(row) < 2:
            continue
        rows.append({"date": row[0].strip(), "name": row[1].strip()})
    return normalize_holidays(rows)


def _iso(target: DateLike) -> str:
    return parse_date_string(target).isoformat()


def get_holiday_name(target: DateLike, holidays: Iterable[dict]) -> Optional[str]:
    iso = _iso(target)
    for holiday in holidays:
        if holiday.get("date") == iso:
            return holiday.get("name")
    return None


def is_holiday(target: DateLike, holidays: Iterable[dict]) -> bool:
    return get_holiday_name(target, holidays) is not None


def is_saturday(target: DateLike) -> bool:
    return parse_date_string(target).weekday() == 5


def is_sunday(target: DateLike) -> bool:
    return parse_date_string(target).weekday() == 6


def is_weekend(target: DateLike) -> bool:
    return is_saturday(target) or is_sunday(target)


def is_day_off(target: DateLike, holidays: Iterable[dict]) -> bool:
    """Weekends and public holidays"""
    return is_weekend(target) or is_holiday(target, holidays)
