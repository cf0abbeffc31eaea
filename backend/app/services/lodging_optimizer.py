"""Lodging optimizer — cheapest way to bed a group at each resort.

For every candidate option the group needs ``ceil(group / sleeps)`` units;
splits are ranked by cost per person and the first one is the recommendation.
"""

import logging
import math
from dataclasses import dataclass

from app.data.lodging import HOTEL, LODGING_CATALOG, RENTAL, LodgingOption

logger = logging.getLogger(__name__)

DEFAULT_LODGING_RANGE: tuple[int, int] = (100, 400)

# Form values → option type; anything else means no filter.
PREFERENCE_TYPES: dict[str, str] = {
    "hotel": HOTEL,
    "airbnb": RENTAL,
    "rental": RENTAL,
}


@dataclass(frozen=True)
class LodgingSplit:
    option: LodgingOption
    units: int
    total_cost: int
    cost_per_person: int

    def to_dict(self) -> dict:
        return {
            "option": self.option.to_dict(),
            "units": self.units,
            "totalCost": self.total_cost,
            "costPerPerson": self.cost_per_person,
        }


@dataclass(frozen=True)
class ResortLodging:
    options: tuple[LodgingOption, ...]
    best_splits: list[LodgingSplit]

    @property
    def best(self) -> LodgingSplit | None:
        return self.best_splits[0] if self.best_splits else None

    def to_dict(self) -> dict:
        return {
            "options": [o.to_dict() for o in self.options],
            "bestSplits": [s.to_dict() for s in self.best_splits],
        }


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def preference_type(preference: str | None) -> str | None:
    """Map a lodging preference to an option type, or None for "any"."""
    if not preference:
        return None
    return PREFERENCE_TYPES.get(preference.strip().lower())


def generate_lodging(resort_name: str, lodging_range: tuple[int, int]) -> tuple[LodgingOption, ...]:
    """Four representative options scaled from a resort's nightly price range."""
    low, high = lodging_range
    mid = _round_half_up((low + high) / 2)
    return (
        LodgingOption(f"{resort_name} Slopeside Hotel", HOTEL, True, high, 2),
        LodgingOption(f"{resort_name} Town Hotel", HOTEL, False, mid, 2),
        LodgingOption(f"{resort_name} Large Chalet", RENTAL, False, _round_half_up(high * 1.5), 10),
        LodgingOption(f"{resort_name} Condo 3BR", RENTAL, False, mid, 6),
    )


def lodging_options_for(resort_name: str, lodging_range: tuple[int, int] | None = None) -> tuple[LodgingOption, ...]:
    curated = LODGING_CATALOG.get(resort_name)
    if curated:
        return curated
    return generate_lodging(resort_name, tuple(lodging_range or DEFAULT_LODGING_RANGE))


def compute_split(option: LodgingOption, group_size: int, nights: int) -> LodgingSplit:
    units = math.ceil(group_size / option.sleeps)
    total_cost = units * option.price_per_night * nights
    cost_per_person = _round_half_up(total_cost / group_size)
    return LodgingSplit(option=option, units=units, total_cost=total_cost, cost_per_person=cost_per_person)


def calculate_optimal_split(
    options: tuple[LodgingOption, ...] | list[LodgingOption],
    group_size: int,
    preference: str | None,
    nights: int,
) -> list[LodgingSplit]:
    """Splits for every option matching ``preference``, cheapest per person first.

    An empty list means "no lodging data" for the resort, not an error.
    """
    wanted = preference_type(preference)
    candidates = [o for o in options if wanted is None or o.type == wanted]
    splits = [compute_split(o, group_size, nights) for o in candidates]
    splits.sort(key=lambda s: s.cost_per_person)
    return splits


def optimize_for_resorts(
    resorts: list[tuple[str, tuple[int, int] | None]],
    group_size: int,
    preference: str | None,
    nights: int,
) -> dict[str, ResortLodging]:
    """Lodging options and ranked splits keyed by resort name."""
    result: dict[str, ResortLodging] = {}
    for name, lodging_range in resorts:
        options = lodging_options_for(name, lodging_range)
        splits = calculate_optimal_split(options, group_size, preference, nights)
        if not splits:
            logger.info(f"No lodging matches preference {preference!r} at {name}")
        result[name] = ResortLodging(options=options, best_splits=splits)
    return result
