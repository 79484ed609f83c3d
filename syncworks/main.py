import logging
from contextlib import asynccontextmanager

import redis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import models  # noqa: F401
from .config import ALLOWED_ORIGINS, validate_pricing_config
from .database import Base, engine
from .domain.auth.router import router as auth_router
from .domain.companies.router import router as companies_router
from .domain.employees.router import router as employees_router
from .domain.holidays.router import router as holidays_router
from .domain.pricing.router import router as pricing_router
from .domain.quote_requests.router import router as quote_requests_router
from .domain.season_rules.router import router as season_rules_router
from .domain.shifts.router import router as shifts_router
from .domain.truck_types.router import router as truck_types_router
from .domain.trucks.router import router as trucks_router
from .domain.users.router import router as users_router
from .errors import register_exception_handlers
from .rate_limiter import get_redis_client

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    validate_pricing_config()

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables ready")

    try:
        get_redis_client()
        logger.info("Redis connection established")
    except redis.RedisError as e:
        logger.warning(
            f"Redis connection failed - caching disabled, rate limiting uses process memory: {e}"
        )

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="SyncWorks API", version="1.0.0", lifespan=lifespan)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(companies_router)
app.include_router(employees_router)
app.include_router(shifts_router)
app.include_router(trucks_router)
app.include_router(truck_types_router)
app.include_router(season_rules_router)
app.include_router(pricing_router)
app.include_router(holidays_router)
app.include_router(quote_requests_router)


@app.get("/")
def root():
    return {"message": "SyncWorks API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
