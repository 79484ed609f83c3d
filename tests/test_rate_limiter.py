from unittest.mock import MagicMock

import redis

from syncworks import rate_limiter
from syncworks.cache import Cache
from syncworks.rate_limiter import check_rate_limit


class TestCheckRateLimit:
    def test_allows_up_to_limit(self):
        results = [check_rate_limit("test:a", 3, 60)[0] for _ in range(4)]
        assert results == [True, True, True, False]

    def test_keys_are_independent(self):
        for _ in range(2):
            check_rate_limit("test:a", 2, 60)
        assert check_rate_limit("test:a", 2, 60)[0] is False
        assert check_rate_limit("test:b", 2, 60)[0] is True

    def test_window_reset(self):
        check_rate_limit("test:a", 1, 60)
        rate_limiter.memory_cache["test:a"].reset_at = 0
        allowed, count, ttl = check_rate_limit("test:a", 1, 60)
        assert allowed
        assert count == 1
        assert 0 < ttl <= 60

    def test_resumes_count_from_redis(self):
        client = MagicMock()
        client.get.return_value = "5"
        client.ttl.return_value = 30
        allowed, count, ttl = check_rate_limit("test:shared", 5, 60, client)
        assert not allowed
        assert count == 5
        assert ttl <= 30

    def test_redis_errors_fall_back_to_memory(self):
        client = MagicMock()
        client.get.side_effect = redis.ConnectionError("down")
        client.set.side_effect = redis.ConnectionError("down")
        allowed, count, _ = check_rate_limit("test:flaky", 5, 60, client)
        assert allowed
        assert count == 1


class TestCache:
    def test_unreachable_redis_is_a_miss(self):
        cache = Cache()
        assert cache.get("anything") is None
        assert cache.set("anything", {"a": 1}) is False
        assert cache.delete("anything") is False

    def test_json_round_trip(self, monkeypatch):
        store = {}
        client = MagicMock()
        client.setex.side_effect = lambda key, ttl, value: store.__setitem__(key, value)
        client.get.side_effect = store.get

        cache = Cache()
        monkeypatch.setattr(cache, "_get_client", lambda: client)
        assert cache.set("season_rules:active", [{"id": "1", "price": 10}], ttl=60)
        assert cache.get("season_rules:active") == [{"id": "1", "price": 10}]
