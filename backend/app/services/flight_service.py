"""Flight search & selection — cheapest and most-direct picks per origin/destination pair.

Pairs are searched one at a time with a fixed pause between upstream calls to
stay inside the provider's rate limit. Results are cached per
(origin, destination, departure, return) for ``flight_cache_ttl_hours``.
"""

import logging
from dataclasses import dataclass, field

from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.data.airlines import is_alliance_carrier
from app.data.resorts import RESORT_AIRPORTS, destination_airports
from app.errors import UpstreamAuthError, UpstreamUnavailable
from app.schemas.flight import FlightOffer, FlightPicks
from app.services.amadeus_client import AmadeusClient, amadeus_client
from app.services.cache_service import CacheService, cache_service
from app.services.rate_limit import FixedDelayPolicy

logger = logging.getLogger(__name__)

FlightMatrix = dict[str, dict[str, FlightPicks | None]]


def filter_by_alliance(offers: list[FlightOffer]) -> list[FlightOffer]:
    """Offers flown at least partly by an alliance member.

    Falls back to the unfiltered list when no offer qualifies, so selection
    never starts from an empty pool because of this filter.
    """
    allied = [o for o in offers if any(is_alliance_carrier(code) for code in o.airlines)]
    return allied or list(offers)


def pick_best_flights(offers: list[FlightOffer]) -> FlightPicks:
    """Choose a cheapest and a distinct most-direct offer.

    ``most_direct`` minimises total stops (outbound + return), ties broken by
    price. When that is the cheapest offer itself, the next-best direct
    candidate is used instead; with a single offer it is None. The two picks
    are never the same object.
    """
    if not offers:
        return FlightPicks()

    cheapest = min(offers, key=lambda o: o.price)
    by_directness = sorted(offers, key=lambda o: (o.total_stops, o.price))
    most_direct = next((o for o in by_directness if o is not cheapest), None)
    return FlightPicks(cheapest=cheapest, most_direct=most_direct)


@dataclass
class FlightSearchResult:
    flights: FlightMatrix = field(default_factory=dict)
    resort_airports: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "flights": {
                origin: {
                    dest: picks.model_dump(by_alias=True) if picks else None
                    for dest, picks in dests.items()
                }
                for origin, dests in self.flights.items()
            },
            "resortAirports": self.resort_airports,
        }


class FlightSearchService:
    """Sequential, rate-limited flight search with a TTL cache in front."""

    def __init__(
        self,
        client: AmadeusClient | None = None,
        cache: CacheService | None = None,
        delay: FixedDelayPolicy | None = None,
    ):
        self._client = client or amadeus_client
        self._cache = cache or cache_service
        self._delay = delay or FixedDelayPolicy(settings.flight_request_delay_ms / 1000)

    async def search(
        self,
        origins: list[tuple[str, str | None]],
        resort_names: list[str],
        departure_date: str,
        return_date: str,
    ) -> FlightSearchResult:
        """Search every (origin, destination) pair for the given resorts.

        ``origins`` are (airport, guest name) pairs; duplicates are dropped.
        A pair whose origin equals its destination maps to None.
        """
        destinations = destination_airports(resort_names)
        origin_airports = list(dict.fromkeys(airport for airport, _ in origins))
        logger.info(
            f"Flight search: {len(origin_airports)} origins x {len(destinations)} destinations "
            f"({departure_date} → {return_date})"
        )

        results: FlightMatrix = {}
        auth_failed = False
        for origin in origin_airports:
            row = results.setdefault(origin, {})
            for dest in destinations:
                if origin == dest or auth_failed:
                    row[dest] = None
                    continue
                try:
                    row[dest] = await self._search_pair(origin, dest, departure_date, return_date)
                except UpstreamAuthError as e:
                    # The token is shared, so every remaining pair is lost too.
                    logger.error(f"Flight provider auth failed, skipping remaining pairs: {e}")
                    auth_failed = True
                    row[dest] = None
                except UpstreamUnavailable as e:
                    logger.warning(f"Flight search failed {origin}->{dest}: {e}")
                    row[dest] = None

        return FlightSearchResult(
            flights=results,
            resort_airports={name: RESORT_AIRPORTS[name] for name in resort_names if name in RESORT_AIRPORTS},
        )

    async def _search_pair(
        self,
        origin: str,
        dest: str,
        departure_date: str,
        return_date: str,
    ) -> FlightPicks:
        cached = await self._cache.get_flight_picks(origin, dest, departure_date, return_date)
        if cached is not None:
            try:
                picks = FlightPicks.model_validate(cached)
            except PydanticValidationError as e:
                logger.warning(f"Discarding unreadable cached picks {origin}->{dest}: {e.error_count()} errors")
            else:
                logger.debug(f"Flight cache hit {origin}->{dest}")
                return picks

        try:
            offers = await self._client.search_round_trip(origin, dest, departure_date, return_date)
        finally:
            await self._delay.pause()

        picks = pick_best_flights(filter_by_alliance(offers))
        await self._cache.set_flight_picks(
            origin, dest, departure_date, return_date, picks.model_dump(by_alias=True)
        )
        return picks


flight_search_service = FlightSearchService()
