"""Shared fakes for the pipeline tests.

Upstreams are faked at the seam each service exposes: the Open-Meteo and
Amadeus clients, the Redis cache, the LLM client and the trip store.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytest

from app.schemas.flight import FlightLeg, FlightOffer
from app.services.cache_service import CacheService
from app.services.rate_limit import FixedDelayPolicy
from app.services.recommendation.context_assembler import GuestRecord, TripRequest


class MemoryCache(CacheService):
    """CacheService with a dict in place of Redis."""

    def __init__(self, max_age: timedelta | None = None):
        super().__init__(max_age=max_age)
        self.store: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        return self.store.get(key)

    async def set(self, key: str, value: Any, ttl: int = 0) -> bool:
        self.store[key] = value
        return True


class RecordingSleep:
    """Async sleep that records requested delays and returns immediately."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_offer(price: float, stops: tuple[int, int] = (0, 0), airlines=("UA",)) -> FlightOffer:
    return FlightOffer(
        price=price,
        airlines=list(airlines),
        outbound=FlightLeg(stops=stops[0], duration="PT3H10M"),
        return_leg=FlightLeg(stops=stops[1], duration="PT3H25M"),
    )


@pytest.fixture
def offer():
    return make_offer


@pytest.fixture
def memory_cache():
    return MemoryCache()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def no_delay(recording_sleep):
    return FixedDelayPolicy(delay_seconds=0.25, sleep=recording_sleep)


@pytest.fixture
def utc_now():
    return datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def trip():
    return TripRequest(
        id="3f1c2a9e-5d4b-4c1a-9a77-2f0c6f5e8b10",
        user_id="user-1",
        trip_name="Powder Week",
        date_start=date(2026, 2, 10),
        date_end=date(2026, 2, 15),
        group_size=5,
        geography=["North America"],
        budget_amount=2500.0,
        budget_type="per_person",
        pass_types=["Epic"],
        lodging_preference="Hotel",
        skill_min="intermediate",
        skill_max="expert",
        vibe="energy:80,budget:40",
    )


@pytest.fixture
def guests():
    return [
        GuestRecord(name="Ana", airports=("JFK", "EWR"), origin_city="New York", skill_level="expert",
                    budget_min=1500, budget_max=3000),
        GuestRecord(name="Ben", airports=("SFO",), origin_city="San Francisco", skill_level="intermediate"),
    ]
