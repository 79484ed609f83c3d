"""
Holiday store - JSON file persistence with an in-process cache

File shape: {"holidays": [{"date", "name"}], "lastUpdated", "source", "count"}
"""

import json
import logging
import os
import tempfile
import time
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Optional

from ... import config

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 24 * 60 * 60

# Format: {file path: (loaded_at, data)}
_cache: dict[str, tuple[float, Optional[dict]]] = {}
_cache_lock = Lock()


def clear_holiday_cache() -> None:
    with _cache_lock:
        _cache.clear()


class HolidayStore:
    """Reads and writes the holiday JSON file"""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or config.HOLIDAYS_FILE)

    def load(self) -> Optional[dict]:
        """
        Stored holiday data, or None when nothing has been imported yet.

        Results are cached for a day; writes through this store clear the cache.
        """
        key = str(self.path)
        now = time.time()
        with _cache_lock:
            cached = _cache.get(key)
            if cached and now - cached[0] < CACHE_TTL_SECONDS:
                return cached[1]

        data = self._read()
        with _cache_lock:
            _cache[key] = (now, data)
        return data

    def _read(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Unreadable holiday file {self.path}, treating as empty: {e}")
            return None
        if not isinstance(data, dict) or not isinstance(data.get("holidays"), list):
            logger.error(f"Holiday file {self.path} has an unexpected shape, treating as empty")
            return None
        return data

    def save(self, holidays: list[dict], source: str) -> dict:
        data = {
            "holidays": holidays,
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
            "source": source,
            "count": len(holidays),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Readers only ever see a complete file
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".holidays-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        clear_holiday_cache()
        logger.info(f"Saved {len(holidays)} holidays to {self.path} (source: {source})")
        return data

    def holidays(self) -> list[dict]:
        data = self.load()
        return (data or {}).get("holidays", [])
