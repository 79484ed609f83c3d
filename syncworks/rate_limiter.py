"""
Redis connection and request throttling for the login endpoint

Window counters are kept in process memory. When Redis is reachable the
counters are seeded from it and pushed back every few seconds, so several
workers share roughly the same view.
"""

import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Optional

import redis
from fastapi import HTTPException, Request

from . import config
from .config import RATE_LIMIT_ENABLED

logger = logging.getLogger(__name__)

redis_client: Optional[redis.Redis] = None
_last_connect_failure = 0.0

REDIS_RETRY_INTERVAL = 30
PUSH_INTERVAL = 10
PRUNE_INTERVAL = 60


@dataclass
class WindowCounter:
    count: int
    reset_at: int
    pushed_at: int = 0


memory_cache: dict[str, WindowCounter] = {}
cache_lock = Lock()
_last_prune = 0


def _connect() -> redis.Redis:
    options = {
        "decode_responses": True,
        "socket_connect_timeout": 5,
        "socket_timeout": 5,
        "health_check_interval": 30,
    }
    if config.REDIS_URL:
        return redis.from_url(config.REDIS_URL, **options)
    return redis.Redis(
        host=config.REDIS_HOST,
        port=config.REDIS_PORT,
        password=config.REDIS_PASSWORD,
        db=config.REDIS_DB,
        ssl=config.REDIS_SSL,
        **options,
    )


def get_redis_client() -> redis.Redis:
    """
    Shared Redis client, connected lazily.

    After a failed attempt further calls fail fast for REDIS_RETRY_INTERVAL
    seconds instead of waiting on the socket timeout again.

    Raises:
        redis.RedisError: If Redis cannot be reached
    """
    global redis_client, _last_connect_failure

    if redis_client is not None:
        return redis_client

    if time.time() - _last_connect_failure < REDIS_RETRY_INTERVAL:
        raise redis.ConnectionError("Redis unavailable (waiting before retry)")

    try:
        client = _connect()
        client.ping()
    except redis.RedisError as e:
        _last_connect_failure = time.time()
        logger.warning(f"Failed to connect to Redis: {e}")
        raise

    logger.info("Redis connected")
    redis_client = client
    return redis_client


def reset_redis_client() -> None:
    """Drop the cached client so the next call reconnects"""
    global redis_client
    redis_client = None


def _prune(now: int) -> None:
    global _last_prune
    if now - _last_prune < PRUNE_INTERVAL:
        return
    stale = [key for key, counter in memory_cache.items() if now >= counter.reset_at]
    for key in stale:
        del memory_cache[key]
    _last_prune = now


def _load_counter(key: str, window_seconds: int, now: int, client: Optional[redis.Redis]) -> WindowCounter:
    if client is not None:
        try:
            stored = client.get(key)
            remaining = client.ttl(key)
            if stored and remaining > 0:
                return WindowCounter(count=int(stored), reset_at=now + remaining, pushed_at=now)
        except redis.RedisError as e:
            logger.warning(f"Could not read rate limit counter {key} from Redis: {e}")
    return WindowCounter(count=0, reset_at=now + window_seconds, pushed_at=now)


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: Optional[redis.Redis] = None
) -> tuple[bool, int, int]:
    """Count one attempt against ``key``.

    Returns (allowed, count, seconds_until_reset). A refused attempt is not
    counted.
    """
    now = int(time.time())

    with cache_lock:
        _prune(now)

        counter = memory_cache.get(key)
        if counter is None:
            counter = memory_cache[key] = _load_counter(key, window_seconds, now, client)

        if now >= counter.reset_at:
            counter.count = 0
            counter.reset_at = now + window_seconds
            counter.pushed_at = 0

        allowed = counter.count < limit
        if allowed:
            counter.count += 1

        if client is not None and now - counter.pushed_at >= PUSH_INTERVAL:
            try:
                client.set(key, counter.count, ex=window_seconds)
                counter.pushed_at = now
            except redis.RedisError as e:
                logger.warning(f"Could not push rate limit counter {key} to Redis: {e}")

        return allowed, counter.count, max(0, counter.reset_at - now)


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Build a per-IP rate limit dependency, e.g.

        login_limiter = create_rate_limiter(limit=10, window_seconds=60, key_prefix="login")

        @router.post("/login", dependencies=[Depends(login_limiter)])
    """

    async def rate_limiter(request: Request):
        if not RATE_LIMIT_ENABLED:
            return

        key = f"{key_prefix}:{get_client_ip(request)}"
        try:
            client = get_redis_client()
        except redis.RedisError:
            client = None

        allowed, count, retry_after = check_rate_limit(key, limit, window_seconds, client)
        if not allowed:
            logger.warning(f"Rate limit exceeded for {key} ({count}/{limit})")
            raise HTTPException(
                status_code=429,
                detail=f"Too many requests. Try again in {retry_after} seconds.",
                headers={"Retry-After": str(retry_after)},
            )

    return rate_limiter
