"""Redis cache service for flight picks."""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import redis.asyncio as redis

from app.config import settings

logger = logging.getLogger(__name__)

# Redis expiry is a backstop; freshness is decided from the stored timestamp.
TTL_FLIGHT_PICKS = settings.flight_cache_ttl_hours * 60 * 60


def is_fresh(cached_at: datetime, now: datetime, max_age: timedelta) -> bool:
    """True when an entry written at ``cached_at`` is still younger than ``max_age``."""
    return now - cached_at < max_age


class CacheService:
    """Redis-backed cache. Every failure reads as a miss and writes as a no-op."""

    def __init__(self, max_age: timedelta | None = None):
        self._redis: redis.Redis | None = None
        self.max_age = max_age or timedelta(hours=settings.flight_cache_ttl_hours)

    async def _get_redis(self) -> redis.Redis | None:
        if self._redis is None:
            try:
                self._redis = redis.from_url(
                    settings.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                    socket_timeout=settings.redis_timeout,
                    socket_connect_timeout=settings.redis_timeout,
                )
                await self._redis.ping()
            except Exception as e:
                logger.warning(f"Redis unavailable, cache disabled: {e}")
                self._redis = None
                return None
        return self._redis

    async def get(self, key: str) -> Any | None:
        """Get a value from cache. Returns None on miss or error."""
        try:
            r = await self._get_redis()
            if r is None:
                return None
            raw = await r.get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except Exception as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: int = TTL_FLIGHT_PICKS) -> bool:
        """Set a value in cache with TTL. Returns False on error."""
        try:
            r = await self._get_redis()
            if r is None:
                return False
            await r.set(key, json.dumps(value, default=str), ex=ttl)
            return True
        except Exception as e:
            logger.warning(f"Cache write failed for {key}: {e}")
            return False

    # Flight picks

    def flight_key(self, origin: str, dest: str, departure_date: str, return_date: str) -> str:
        return f"flights:{origin}:{dest}:{departure_date}:{return_date}"

    async def get_flight_picks(
        self,
        origin: str,
        dest: str,
        departure_date: str,
        return_date: str,
        now: datetime | None = None,
    ) -> dict | None:
        """Cached picks payload, or None when absent or older than ``max_age``."""
        entry = await self.get(self.flight_key(origin, dest, departure_date, return_date))
        if not isinstance(entry, dict) or "cached_at" not in entry:
            return None
        try:
            cached_at = datetime.fromisoformat(entry["cached_at"])
        except (TypeError, ValueError):
            return None
        if not is_fresh(cached_at, now or datetime.now(timezone.utc), self.max_age):
            return None
        return entry.get("picks")

    async def set_flight_picks(
        self,
        origin: str,
        dest: str,
        departure_date: str,
        return_date: str,
        picks: dict,
        now: datetime | None = None,
    ) -> bool:
        entry = {
            "cached_at": (now or datetime.now(timezone.utc)).isoformat(),
            "picks": picks,
        }
        return await self.set(self.flight_key(origin, dest, departure_date, return_date), entry)

    async def close(self):
        if self._redis:
            await self._redis.aclose()
            self._redis = None


cache_service = CacheService()
