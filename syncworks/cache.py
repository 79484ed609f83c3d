"""
Redis caching utilities for frequently read catalogue data
Reduces database load for season rules and truck types
"""
import json
import logging
from typing import Any, Optional

import redis

from .rate_limiter import get_redis_client

logger = logging.getLogger(__name__)

SEASON_RULES_KEY = "season_rules:active"
TRUCK_TYPES_KEY = "truck_types:active"


class Cache:
    """Redis cache wrapper with automatic JSON serialization.

    Every method degrades to a cache miss when Redis is unreachable.
    """

    def _get_client(self) -> Optional[redis.Redis]:
        try:
            return get_redis_client()
        except redis.RedisError as e:
            logger.debug(f"Redis cache unavailable: {e}")
            return None

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        client = self._get_client()
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                logger.debug(f"Cache HIT: {key}")
                return json.loads(value)
            logger.debug(f"Cache MISS: {key}")
            return None
        except (redis.RedisError, ValueError) as e:
            logger.error(f"Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        """Set value in cache with TTL (default 1 hour)"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.setex(key, ttl, json.dumps(value, default=str))
            logger.debug(f"Cache SET: {key} (TTL: {ttl}s)")
            return True
        except (redis.RedisError, TypeError) as e:
            logger.error(f"Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete value from cache"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.delete(key)
            logger.debug(f"Cache DELETE: {key}")
            return True
        except redis.RedisError as e:
            logger.error(f"Cache delete error for {key}: {e}")
            return False


# Global cache instance
cache = Cache()


def invalidate_season_rules_cache() -> bool:
    return cache.delete(SEASON_RULES_KEY)


def invalidate_truck_types_cache() -> bool:
    return cache.delete(TRUCK_TYPES_KEY)
