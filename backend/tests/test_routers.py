import httpx
import pytest
from jose import jwt

from app.config import settings
from app.data.resorts import get_resort
from app.database import get_db
from app.errors import AuthorizationError, TripNotFound
from app.main import app
from app.routers import flights as flights_router
from app.routers import recommendations as recommendations_router
from app.routers import resorts as resorts_router
from app.services.flight_service import FlightSearchResult
from app.services.snow_service import CurrentSnow, ResortConditions, SnowReport


@pytest.fixture
async def client():
    async def no_db():
        yield None

    app.dependency_overrides[get_db] = no_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_header():
    token = jwt.encode({"sub": "user-1"}, settings.secret_key, algorithm=settings.algorithm)
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestResorts:
    async def test_returns_snow_mode_and_resorts(self, client, monkeypatch):
        class FakeSnow:
            async def get_resorts_with_snow(self, regions, date_start, date_end):
                assert regions == ["North America"]
                return SnowReport(mode="current", resorts=[
                    ResortConditions(profile=get_resort("Vail"), snow=CurrentSnow(depth=90.0)),
                ])

        monkeypatch.setattr(resorts_router, "snow_service", FakeSnow())
        resp = await client.post("/api/resorts", json={"regions": ["North America"], "dateEnd": "2026-03-01"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["snowMode"] == "current"
        assert body["resorts"][0]["name"] == "Vail"
        assert body["resorts"][0]["snow"]["currentSnowDepth"] == 90.0

    async def test_bad_date_is_400(self, client):
        resp = await client.post("/api/resorts", json={"dateEnd": "March"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid request data"}


class TestLodging:
    async def test_lodging_for_curated_and_synthesized(self, client):
        resp = await client.post("/api/lodging", json={
            "resorts": [{"name": "Vail"}, {"name": "Alta", "lodgingRange": [100, 300]}],
            "groupSize": 4,
            "lodgingPreference": "Hotel",
            "nights": 5,
        })
        assert resp.status_code == 200
        lodging = resp.json()["lodging"]
        assert lodging["Vail"]["bestSplits"][0]["option"]["name"] == "Lodge at Vail"
        assert lodging["Alta"]["bestSplits"][0]["option"]["name"] == "Alta Town Hotel"
        assert len(lodging["Alta"]["options"]) == 4

    @pytest.mark.parametrize("body", [
        {"resorts": []},
        {"resorts": [{"name": "Vail"}], "groupSize": 0},
        {"resorts": [{"name": "Vail"}], "nights": 31},
        {"resorts": [{"name": "Vail", "lodgingRange": [100]}]},
    ])
    async def test_invalid_bodies_are_400(self, client, body):
        resp = await client.post("/api/lodging", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid request data"}


class TestFlights:
    async def test_search(self, client, monkeypatch):
        captured = {}

        class FakeFlights:
            async def search(self, origins, resort_names, departure_date, return_date):
                captured["origins"] = origins
                return FlightSearchResult(flights={"JFK": {"DEN": None}}, resort_airports={"Vail": "DEN"})

        monkeypatch.setattr(flights_router, "flight_search_service", FakeFlights())
        resp = await client.post("/api/flights", json={
            "origins": [{"airport": "JFK", "guestName": "Ana"}, {"airport": "SFO"}],
            "departureDate": "2026-02-10",
            "returnDate": "2026-02-15",
            "resorts": ["Vail"],
        })

        assert resp.status_code == 200
        assert resp.json() == {"flights": {"JFK": {"DEN": None}}, "resortAirports": {"Vail": "DEN"}}
        assert captured["origins"] == [("JFK", "Ana"), ("SFO", "SFO")]

    @pytest.mark.parametrize("airport", ["jfk", "JF", "JFKXX", "J1K"])
    async def test_bad_airport_is_400(self, client, airport):
        resp = await client.post("/api/flights", json={
            "origins": [{"airport": airport}],
            "departureDate": "2026-02-10",
            "returnDate": "2026-02-15",
            "resorts": ["Vail"],
        })
        assert resp.status_code == 400


class TestRecommendations:
    async def test_missing_token_is_401(self, client):
        resp = await client.post("/api/recommendations", json={"tripId": "abc"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized"}

    async def test_garbage_token_is_401(self, client):
        resp = await client.post("/api/recommendations", json={"tripId": "abc"},
                                 headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401

    async def test_missing_trip_id_is_400(self, client, auth_header):
        resp = await client.post("/api/recommendations", json={}, headers=auth_header)
        assert resp.status_code == 400

    @pytest.mark.parametrize("error,status", [
        (AuthorizationError("Forbidden", status_code=403), 403),
        (TripNotFound("Trip not found"), 404),
    ])
    async def test_pipeline_errors_map_to_status(self, client, auth_header, monkeypatch, error, status):
        class FailingAggregator:
            def __init__(self, store):
                pass

            async def generate(self, trip_id, user_id):
                raise error

        monkeypatch.setattr(recommendations_router, "RecommendationAggregator", FailingAggregator)
        resp = await client.post("/api/recommendations", json={"tripId": "abc"}, headers=auth_header)
        assert resp.status_code == status
        assert resp.json() == {"error": error.message}

    async def test_generate_passes_caller_identity(self, client, auth_header, monkeypatch):
        calls = []

        class FakeAggregator:
            def __init__(self, store):
                pass

            async def generate(self, trip_id, user_id):
                calls.append((trip_id, user_id))
                return {"recommendations": [], "flightSummary": {}}

        monkeypatch.setattr(recommendations_router, "RecommendationAggregator", FakeAggregator)
        resp = await client.post("/api/recommendations", json={"tripId": "trip-9"}, headers=auth_header)
        assert resp.status_code == 200
        assert calls == [("trip-9", "user-1")]

    async def test_get_latest_without_results_is_404(self, client, auth_header, monkeypatch):
        class EmptyStore:
            def __init__(self, db):
                pass

            async def latest_results(self, trip_id, user_id):
                return None

        monkeypatch.setattr(recommendations_router, "TripStore", EmptyStore)
        resp = await client.get("/api/recommendations/trip-9", headers=auth_header)
        assert resp.status_code == 404
