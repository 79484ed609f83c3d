"""Holiday schemas - Pydantic models for holiday import"""

from typing import Any

from pydantic import BaseModel


class HolidayImport(BaseModel):
    """Entries are loosely typed; invalid ones are dropped during import"""

    holidays: list[Any]
