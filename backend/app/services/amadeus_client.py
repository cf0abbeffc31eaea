"""Amadeus API client — adapter for round-trip flight offers with OAuth2 and rate limiting."""

import logging
from datetime import datetime, timedelta, timezone

import httpx

from app.config import settings
from app.errors import UpstreamAuthError, UpstreamUnavailable
from app.schemas.flight import FlightLeg, FlightOffer, FlightSegment
from app.services.rate_limit import BackoffPolicy, RetryableStatus

logger = logging.getLogger(__name__)


class AmadeusClient:
    """Adapter for Amadeus Self-Service API."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        backoff: BackoffPolicy | None = None,
    ):
        self._token: str | None = None
        self._token_expires: datetime | None = None
        self._client = client
        self._backoff = backoff or BackoffPolicy()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=settings.amadeus_base_url)
        return self._client

    async def ensure_token(self) -> str:
        """Get or refresh the client-credentials bearer token.

        Raises UpstreamAuthError when credentials are missing or rejected.
        """
        if self._token and self._token_expires and datetime.now(timezone.utc) < self._token_expires:
            return self._token

        if not settings.amadeus_client_id or not settings.amadeus_client_secret:
            raise UpstreamAuthError("Amadeus credentials not configured")

        client = await self._get_client()

        async def request_token() -> httpx.Response:
            resp = await client.post(
                "/v1/security/oauth2/token",
                data={
                    "grant_type": "client_credentials",
                    "client_id": settings.amadeus_client_id,
                    "client_secret": settings.amadeus_client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=settings.amadeus_token_timeout,
            )
            if resp.status_code == 429:
                raise RetryableStatus(429)
            return resp

        try:
            resp = await self._backoff.run(request_token)
            resp.raise_for_status()
            data = resp.json()
            token = data["access_token"]
        except (httpx.HTTPError, RetryableStatus, KeyError, ValueError) as e:
            raise UpstreamAuthError(f"Amadeus auth failed: {e}") from e

        self._token = token
        self._token_expires = datetime.now(timezone.utc) + timedelta(
            seconds=data.get("expires_in", 1799) - 60
        )
        logger.info("Amadeus token refreshed")
        return token

    async def search_round_trip(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        return_date: str,
    ) -> list[FlightOffer]:
        """Round-trip offers for one adult, connections allowed, cheapest first.

        Raises UpstreamAuthError without a token and UpstreamUnavailable on
        timeouts or non-2xx responses.
        """
        token = await self.ensure_token()
        client = await self._get_client()

        params = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date,
            "returnDate": return_date,
            "adults": 1,
            "nonStop": "false",
            "currencyCode": settings.flight_currency,
            "max": settings.flight_max_results,
        }

        async def request_offers() -> httpx.Response:
            resp = await client.get(
                "/v2/shopping/flight-offers",
                params=params,
                headers={"Authorization": f"Bearer {token}"},
                timeout=settings.amadeus_offers_timeout,
            )
            if resp.status_code == 429:
                raise RetryableStatus(429)
            return resp

        try:
            resp = await self._backoff.run(request_offers)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 401:
                # Token revoked or expired early; force a refresh next time.
                self._token = None
            raise UpstreamUnavailable(
                f"Amadeus search error {origin}->{destination}: {e.response.status_code}"
            ) from e
        except (httpx.RequestError, RetryableStatus, ValueError) as e:
            raise UpstreamUnavailable(f"Amadeus request error {origin}->{destination}: {e!r}") from e

        try:
            offers = [self.parse_offer(offer) for offer in (data.get("data") or [])[: settings.flight_max_results]]
        except (AttributeError, TypeError, ValueError) as e:
            raise UpstreamUnavailable(f"Malformed Amadeus offers {origin}->{destination}: {e}") from e
        offers.sort(key=lambda o: o.price)
        return offers

    @classmethod
    def parse_offer(cls, offer: dict) -> FlightOffer:
        """Parse Amadeus offer JSON into a FlightOffer."""
        itineraries = offer.get("itineraries") or []

        carriers: dict[str, None] = {}
        for itin in itineraries:
            for seg in itin.get("segments") or []:
                if seg.get("carrierCode"):
                    carriers.setdefault(seg["carrierCode"], None)

        price = offer.get("price") or {}
        return FlightOffer(
            price=float(price.get("grandTotal") or price.get("total") or 0),
            currency=price.get("currency", settings.flight_currency),
            airlines=list(carriers),
            outbound=cls._parse_itinerary(itineraries[0]) if itineraries else FlightLeg(),
            return_leg=cls._parse_itinerary(itineraries[1]) if len(itineraries) > 1 else FlightLeg(),
        )

    @staticmethod
    def _parse_itinerary(itinerary: dict) -> FlightLeg:
        segments = itinerary.get("segments") or []
        parsed = [
            FlightSegment(
                carrier_code=seg.get("carrierCode", ""),
                flight_number=f"{seg.get('carrierCode', '')}{seg.get('number', '')}",
                departure_airport=(seg.get("departure") or {}).get("iataCode", ""),
                arrival_airport=(seg.get("arrival") or {}).get("iataCode", ""),
                departure_time=(seg.get("departure") or {}).get("at", ""),
                arrival_time=(seg.get("arrival") or {}).get("at", ""),
            )
            for seg in segments
        ]
        return FlightLeg(
            departure=parsed[0].departure_time if parsed else "",
            arrival=parsed[-1].arrival_time if parsed else "",
            duration=itinerary.get("duration", ""),
            stops=max(0, len(segments) - 1),
            segments=parsed,
        )

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None


amadeus_client = AmadeusClient()
