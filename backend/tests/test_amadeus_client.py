import httpx
import pytest

from app.config import settings
from app.errors import UpstreamAuthError, UpstreamUnavailable
from app.schemas.flight import parse_duration
from app.services.amadeus_client import AmadeusClient
from app.services.rate_limit import BackoffPolicy

BASE_URL = "https://test.api.amadeus.com"


def _segment(carrier, number, dep, arr):
    return {
        "carrierCode": carrier,
        "number": number,
        "departure": {"iataCode": dep, "at": "2026-02-10T08:00:00"},
        "arrival": {"iataCode": arr, "at": "2026-02-10T11:30:00"},
    }


def _offer(total, outbound_segments, return_segments):
    return {
        "price": {"grandTotal": total, "currency": "USD"},
        "itineraries": [
            {"duration": "PT5H30M", "segments": outbound_segments},
            {"duration": "PT4H05M", "segments": return_segments},
        ],
    }


CONNECTING = _offer(
    "412.50",
    [_segment("UA", "123", "JFK", "ORD"), _segment("UA", "456", "ORD", "DEN")],
    [_segment("DL", "789", "DEN", "JFK")],
)
NONSTOP = _offer("380.00", [_segment("B6", "11", "JFK", "DEN")], [_segment("B6", "12", "DEN", "JFK")])


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setattr(settings, "amadeus_client_id", "client-id")
    monkeypatch.setattr(settings, "amadeus_client_secret", "client-secret")


def _client(handler, sleep) -> AmadeusClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return AmadeusClient(client=http, backoff=BackoffPolicy(max_attempts=3, base_seconds=1.0, sleep=sleep))


class TestParseOffer:
    def test_carriers_union_across_legs(self):
        offer = AmadeusClient.parse_offer(CONNECTING)
        assert offer.airlines == ["UA", "DL"]
        assert offer.price == 412.5
        assert offer.outbound.stops == 1
        assert offer.return_leg.stops == 0
        assert offer.total_stops == 1

    def test_segments_are_ordered(self):
        offer = AmadeusClient.parse_offer(CONNECTING)
        assert [s.flight_number for s in offer.outbound.segments] == ["UA123", "UA456"]
        assert offer.outbound.segments[-1].arrival_airport == "DEN"

    def test_missing_itineraries(self):
        offer = AmadeusClient.parse_offer({"price": {"total": "99"}})
        assert offer.price == 99.0
        assert offer.airlines == []
        assert offer.total_stops == 0

    @pytest.mark.parametrize("iso,minutes", [
        ("PT5H30M", 330),
        ("PT2H", 120),
        ("PT45M", 45),
        ("", 0),
        ("P1D", 0),
        ("PT1H30M15S", 90),
    ])
    def test_parse_duration(self, iso, minutes):
        assert parse_duration(iso) == minutes


class TestSearchRoundTrip:
    async def test_token_then_offers_sorted_by_price(self, credentials, recording_sleep):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/v1/security/oauth2/token":
                return httpx.Response(200, json={"access_token": "tok", "expires_in": 1799})
            seen["auth"] = request.headers["Authorization"]
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"data": [CONNECTING, NONSTOP]})

        client = _client(handler, recording_sleep)
        offers = await client.search_round_trip("JFK", "DEN", "2026-02-10", "2026-02-15")

        assert [o.price for o in offers] == [380.0, 412.5]
        assert seen["auth"] == "Bearer tok"
        assert seen["params"]["adults"] == "1"
        assert seen["params"]["nonStop"] == "false"
        assert seen["params"]["currencyCode"] == "USD"
        assert seen["params"]["max"] == str(settings.flight_max_results)

    async def test_missing_credentials_is_auth_error(self, monkeypatch, recording_sleep):
        monkeypatch.setattr(settings, "amadeus_client_id", "")
        client = _client(lambda request: httpx.Response(500), recording_sleep)
        with pytest.raises(UpstreamAuthError):
            await client.search_round_trip("JFK", "DEN", "2026-02-10", "2026-02-15")

    async def test_rejected_credentials_is_auth_error(self, credentials, recording_sleep):
        client = _client(lambda request: httpx.Response(401, json={"error": "invalid_client"}), recording_sleep)
        with pytest.raises(UpstreamAuthError):
            await client.ensure_token()

    async def test_rate_limited_offers_are_retried(self, credentials, recording_sleep):
        attempts = {"offers": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/v1/security/oauth2/token":
                return httpx.Response(200, json={"access_token": "tok", "expires_in": 1799})
            attempts["offers"] += 1
            if attempts["offers"] < 3:
                return httpx.Response(429)
            return httpx.Response(200, json={"data": [NONSTOP]})

        client = _client(handler, recording_sleep)
        offers = await client.search_round_trip("JFK", "DEN", "2026-02-10", "2026-02-15")

        assert len(offers) == 1
        assert attempts["offers"] == 3
        assert recording_sleep.calls == [1.0, 2.0]

    async def test_rate_limit_exhausted_is_unavailable(self, credentials, recording_sleep):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/v1/security/oauth2/token":
                return httpx.Response(200, json={"access_token": "tok", "expires_in": 1799})
            return httpx.Response(429)

        client = _client(handler, recording_sleep)
        with pytest.raises(UpstreamUnavailable):
            await client.search_round_trip("JFK", "DEN", "2026-02-10", "2026-02-15")

    async def test_server_error_is_unavailable(self, credentials, recording_sleep):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/v1/security/oauth2/token":
                return httpx.Response(200, json={"access_token": "tok", "expires_in": 1799})
            return httpx.Response(503)

        client = _client(handler, recording_sleep)
        with pytest.raises(UpstreamUnavailable):
            await client.search_round_trip("JFK", "DEN", "2026-02-10", "2026-02-15")
        assert recording_sleep.calls == []

    async def test_token_is_reused(self, credentials, recording_sleep):
        token_requests = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/v1/security/oauth2/token":
                token_requests["n"] += 1
                return httpx.Response(200, json={"access_token": "tok", "expires_in": 1799})
            return httpx.Response(200, json={"data": []})

        client = _client(handler, recording_sleep)
        await client.search_round_trip("JFK", "DEN", "2026-02-10", "2026-02-15")
        await client.search_round_trip("JFK", "SLC", "2026-02-10", "2026-02-15")
        assert token_requests["n"] == 1

    @pytest.mark.parametrize("payload", [
        {"data": [{"price": {"grandTotal": "n/a"}}]},
        {"data": ["not-an-offer"]},
        {"data": {"unexpected": "shape"}},
    ])
    async def test_malformed_offers_are_unavailable(self, credentials, recording_sleep, payload):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/v1/security/oauth2/token":
                return httpx.Response(200, json={"access_token": "tok", "expires_in": 1799})
            return httpx.Response(200, json=payload)

        client = _client(handler, recording_sleep)
        with pytest.raises(UpstreamUnavailable):
            await client.search_round_trip("JFK", "DEN", "2026-02-10", "2026-02-15")
