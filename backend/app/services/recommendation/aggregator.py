"""Recommendation aggregator — runs the full pipeline for one trip.

    load trip → snow → (lodging ‖ flights) → prompt → LLM → parse → enrich → persist

Lodging and flight stages degrade to "no data" on failure. The LLM call and
the decode of its reply are the only fatal steps. A failed persist is logged
and the result is still returned.
"""

import asyncio
import logging
import time

from app.errors import PersistenceError, TripPlannerError
from app.services.flight_service import FlightSearchResult, FlightSearchService, flight_search_service
from app.services.llm_client import LLMClient, llm_client
from app.services.lodging_optimizer import ResortLodging, optimize_for_resorts
from app.services.recommendation import enrichment, output_parser, prompt_builder
from app.services.recommendation.config import recommendation_config
from app.services.recommendation.context_assembler import GuestRecord, TripRequest, flight_origins
from app.services.snow_service import ResortConditions, SnowService, snow_service
from app.services.trip_store import TripStore

logger = logging.getLogger(__name__)

cfg = recommendation_config


class RecommendationAggregator:
    """Orchestrates snow, lodging, flights, and the reasoning model for a trip."""

    def __init__(
        self,
        store: TripStore,
        snow: SnowService | None = None,
        flights: FlightSearchService | None = None,
        llm: LLMClient | None = None,
    ):
        self.store = store
        self.snow = snow or snow_service
        self.flights = flights or flight_search_service
        self.llm = llm or llm_client

    async def generate(self, trip_id: str, user_id: str) -> dict:
        """Build, persist and return the enriched recommendation set for ``trip_id``."""
        start_time = time.monotonic()

        trip, guests = await self.store.load_trip(trip_id, user_id)
        logger.info(f"Trip {trip.trip_name!r} ({trip.id}): {len(guests)} guests, {trip.nights} nights")

        report = await self.snow.get_resorts_with_snow(trip.geography, trip.date_start, trip.date_end)
        logger.info(f"Snow stage: {len(report.resorts)} resorts ({report.mode})")

        lodging, (flights, flight_note) = await asyncio.gather(
            self._lodging_stage(trip, report.resorts),
            self._flight_stage(trip, guests, report.resorts),
        )

        system = prompt_builder.build_system_prompt()
        user = prompt_builder.build_user_prompt(trip, guests, report.resorts, lodging, flights, flight_note)
        logger.info(f"Calling LLM, prompt chars: {len(system) + len(user)}")

        raw = await self.llm.complete(
            system=system,
            user=user,
            max_tokens=cfg.llm.max_tokens,
            temperature=cfg.llm.temperature,
            json_mode=cfg.llm.json_mode,
        )
        result = enrichment.enrich(output_parser.parse_recommendations(raw))
        payload = result.model_dump(by_alias=True)

        try:
            await self.store.save_results(trip.id, payload)
        except PersistenceError as e:
            logger.error(f"Storing recommendations for trip {trip.id} failed: {e}")

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(f"Recommendations for trip {trip.id}: {len(result.recommendations)} resorts in {elapsed_ms}ms")
        return payload

    async def _lodging_stage(
        self,
        trip: TripRequest,
        resorts: list[ResortConditions],
    ) -> dict[str, ResortLodging] | None:
        try:
            return optimize_for_resorts(
                [(r.name, r.profile.lodging_range) for r in resorts],
                trip.group_size,
                trip.lodging_preference or "Hotel",
                trip.nights,
            )
        except (TripPlannerError, ValueError) as e:
            logger.warning(f"Lodging stage failed, continuing without lodging: {e}")
            return None

    async def _flight_stage(
        self,
        trip: TripRequest,
        guests: list[GuestRecord],
        resorts: list[ResortConditions],
    ) -> tuple[FlightSearchResult | None, str | None]:
        """Flight matrix plus a note explaining why it is missing, if it is."""
        if not trip.date_start or not trip.date_end:
            return None, "trip dates are not set"
        origins = flight_origins(guests)
        if not origins:
            return None, "no guest has a valid airport code"

        try:
            result = await self.flights.search(
                origins,
                [r.name for r in resorts],
                trip.date_start.isoformat(),
                trip.date_end.isoformat(),
            )
        except TripPlannerError as e:
            logger.warning(f"Flight stage failed, continuing without flights: {e}")
            return None, "flight search unavailable"
        return result, None
