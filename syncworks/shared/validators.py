"""Shared validation and parsing utilities"""

import re
from datetime import date, datetime, time
from typing import Annotated, Optional, Union

from pydantic import AfterValidator


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def not_blank(value: Optional[str]) -> Optional[str]:
    """Reject empty or whitespace-only strings on required text fields"""
    if value is not None and not str(value).strip():
        raise ValueError("must not be empty")
    return value


def parse_date_string(value: Union[str, date, datetime]) -> date:
    """
    Parse a calendar date.

    Accepts YYYY-MM-DD, YYYY/M/D or a full ISO timestamp (only the date part is
    kept). Calendar dates carry no timezone, so a shift on 2025-03-01 stays on
    2025-03-01 regardless of where the request came from.

    Raises:
        ValueError: If the value is not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Invalid date: empty value")

    text = value.strip()
    if "T" in text:
        text = text.split("T", 1)[0]
    parts = re.split(r"[-/]", text)
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid date: {value}")

    year, month, day = (int(p) for p in parts)
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Invalid date: {value}") from e


def parse_optional_date(value) -> Optional[date]:
    """Parse a date that may be null or empty"""
    if value is None or value == "":
        return None
    return parse_date_string(value)


def parse_time(value: Union[str, time]) -> time:
    """
    Parse HH:MM (or HH:MM:SS) into a time.

    "24:00" marks the end of the day and is stored as 23:59.

    Raises:
        ValueError: If the value is not a valid time
    """
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid time: {value}")

    match = re.fullmatch(r"(\d{1,2}):(\d{2})(?::(\d{2}))?", value.strip())
    if not match:
        raise ValueError(f"Invalid time: {value}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours == 24 and minutes == 0:
        return time(23, 59)
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time: {value}")
    return time(hours, minutes)


def time_to_minutes(value: Union[str, time]) -> int:
    """Minutes since midnight; compares times numerically instead of as strings"""
    if isinstance(value, str):
        hours, minutes = value.split(":")[:2]
        return int(hours) * 60 + int(minutes)
    return value.hour * 60 + value.minute


def format_time(value: Optional[time]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime("%H:%M")


# Required text field that must contain something other than whitespace
NonBlankStr = Annotated[str, AfterValidator(not_blank)]
