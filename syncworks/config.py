import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./syncworks.db")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "720"))

# CORS
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
).split(",")

# Holiday data (JSON file store + government CSV source)
HOLIDAYS_FILE = Path(os.getenv("HOLIDAYS_FILE", str(PROJECT_ROOT / "data" / "holidays.json")))
HOLIDAY_CSV_URL = os.getenv(
    "HOLIDAY_CSV_URL", "https://www8.cao.go.jp/chosei/shukujitsu/syukujitsu.csv"
)
HOLIDAY_CSV_TIMEOUT = float(os.getenv("HOLIDAY_CSV_TIMEOUT", "15"))

# Pricing - yen
POINT_UNIT_PRICE = int(os.getenv("POINT_UNIT_PRICE", "500"))
DISTANCE_PRICE_PER_KM = int(os.getenv("DISTANCE_PRICE_PER_KM", "50"))
BASE_DISTANCE_KM = float(os.getenv("BASE_DISTANCE_KM", "10"))
TAX_RATE = float(os.getenv("TAX_RATE", "0.1"))

# Cache TTLs (seconds)
SEASON_RULES_CACHE_TTL = int(os.getenv("SEASON_RULES_CACHE_TTL", "300"))
TRUCK_TYPES_CACHE_TTL = int(os.getenv("TRUCK_TYPES_CACHE_TTL", "300"))

# Redis (REDIS_URL wins over the individual settings)
REDIS_URL = os.getenv("REDIS_URL", "")
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD") or None
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_SSL = os.getenv("REDIS_SSL", "false").lower() == "true"

# Rate limiting
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
LOGIN_RATE_LIMIT = int(os.getenv("LOGIN_RATE_LIMIT", "10"))
LOGIN_RATE_WINDOW_SECONDS = int(os.getenv("LOGIN_RATE_WINDOW_SECONDS", "60"))

# Company profile printed on estimate PDFs
COMPANY_PROFILE = {
    "name": os.getenv("COMPANY_NAME", "SyncWorks Moving"),
    "postal": os.getenv("COMPANY_POSTAL", ""),
    "address": os.getenv("COMPANY_ADDRESS", ""),
    "tel": os.getenv("COMPANY_TEL", ""),
    "email": os.getenv("COMPANY_EMAIL", ""),
}


def validate_pricing_config() -> None:
    """Fail fast on pricing settings that would produce nonsense estimates"""
    if POINT_UNIT_PRICE <= 0:
        raise RuntimeError("Invalid POINT_UNIT_PRICE: must be greater than 0")
    if TAX_RATE < 0 or TAX_RATE > 1:
        raise RuntimeError("Invalid TAX_RATE: must be between 0 and 1")


validate_pricing_config()
