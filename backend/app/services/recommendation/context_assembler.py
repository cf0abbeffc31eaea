"""Context assembler — the trip and guest facts the pipeline works from."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date

from app.models.trip import Guest, Trip

logger = logging.getLogger(__name__)

AIRPORT_CODE = re.compile(r"^[A-Z]{3,4}$")
MAX_GUEST_AIRPORTS = 3
DEFAULT_NIGHTS = 5

VIBE_DEFAULTS = {"energy": "50", "budget": "50", "skill": "50", "ski-in-out": "false"}


# ---------- Data structures ----------

@dataclass(frozen=True)
class TripRequest:
    id: str
    user_id: str | None
    trip_name: str
    date_start: date | None
    date_end: date | None
    group_size: int
    geography: list[str] = field(default_factory=list)
    budget_amount: float | None = None
    budget_type: str | None = None  # "per_person" | "total"
    pass_types: list[str] = field(default_factory=list)
    lodging_preference: str | None = None
    skill_min: str | None = None
    skill_max: str | None = None
    vibe: str | None = None

    @property
    def nights(self) -> int:
        return trip_nights(self.date_start, self.date_end)

    @property
    def vibe_settings(self) -> dict[str, str]:
        return parse_vibe(self.vibe)


@dataclass(frozen=True)
class GuestRecord:
    name: str
    airports: tuple[str, ...] = ()
    origin_city: str | None = None
    skill_level: str | None = None
    budget_min: float | None = None
    budget_max: float | None = None


# ---------- Helpers ----------

def trip_nights(date_start: date | None, date_end: date | None) -> int:
    """Nights between the trip dates, at least 1; a default when either is missing."""
    if not date_start or not date_end:
        return DEFAULT_NIGHTS
    return max(1, (date_end - date_start).days)


def parse_vibe(vibe: str | None) -> dict[str, str]:
    """Parse ``"energy:70,budget:30"`` into a dict, filling unset keys with defaults."""
    values = dict(VIBE_DEFAULTS)
    for part in (vibe or "").split(","):
        key, sep, value = part.partition(":")
        if sep and key.strip() and value.strip():
            values[key.strip()] = value.strip()
    return values


def parse_airports(raw: str | None) -> tuple[str, ...]:
    """Valid, deduplicated airport codes from a comma-separated field (max 3)."""
    codes: dict[str, None] = {}
    for part in (raw or "").split(","):
        code = part.strip().upper()
        if AIRPORT_CODE.match(code):
            codes.setdefault(code, None)
        elif code:
            logger.info(f"Ignoring invalid airport code {code!r}")
    return tuple(codes)[:MAX_GUEST_AIRPORTS]


def flight_origins(guests: list[GuestRecord]) -> list[tuple[str, str]]:
    """Deduplicated (airport, guest name) pairs across the roster."""
    pairs: dict[tuple[str, str], None] = {}
    for guest in guests:
        for airport in guest.airports:
            pairs.setdefault((airport, guest.name), None)
    return list(pairs)


def _float(value) -> float | None:
    return float(value) if value is not None else None


def trip_from_model(trip: Trip) -> TripRequest:
    return TripRequest(
        id=str(trip.id),
        user_id=trip.user_id,
        trip_name=trip.trip_name,
        date_start=trip.date_start,
        date_end=trip.date_end,
        group_size=trip.group_size or 1,
        geography=list(trip.geography or []),
        budget_amount=_float(trip.budget_amount),
        budget_type=trip.budget_type,
        pass_types=list(trip.pass_types or []),
        lodging_preference=trip.lodging_preference,
        skill_min=trip.skill_min,
        skill_max=trip.skill_max,
        vibe=trip.vibe,
    )


def guest_from_model(guest: Guest) -> GuestRecord:
    return GuestRecord(
        name=guest.name,
        airports=parse_airports(guest.airport_code),
        origin_city=guest.origin_city,
        skill_level=guest.skill_level,
        budget_min=_float(guest.budget_min),
        budget_max=_float(guest.budget_max),
    )
