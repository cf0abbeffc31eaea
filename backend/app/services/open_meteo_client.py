"""Open-Meteo client — forecast and archive endpoints for snow data."""

import logging
from datetime import date

import httpx

from app.config import settings
from app.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


class OpenMeteoClient:
    """Adapter for the Open-Meteo forecast and historical archive APIs.

    Both calls return the decoded JSON body. Timeouts, transport failures and
    non-2xx responses raise ``UpstreamUnavailable``.
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=settings.weather_timeout)
        return self._client

    async def forecast(self, lat: float, lng: float) -> dict:
        """Daily snowfall sums and hourly snow depth for recent past + forecast days."""
        params = {
            "latitude": lat,
            "longitude": lng,
            "daily": "snowfall_sum",
            "hourly": "snow_depth",
            "timezone": "auto",
            "past_days": settings.forecast_past_days,
            "forecast_days": settings.forecast_days,
        }
        return await self._get_json(settings.open_meteo_forecast_url, params)

    async def archive(self, lat: float, lng: float, start: date, end: date) -> dict:
        """Same fields as ``forecast`` over an explicit historical window."""
        params = {
            "latitude": lat,
            "longitude": lng,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "daily": "snowfall_sum",
            "hourly": "snow_depth",
            "timezone": "auto",
        }
        return await self._get_json(settings.open_meteo_archive_url, params)

    async def _get_json(self, url: str, params: dict) -> dict:
        client = await self._get_client()
        try:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailable(f"Open-Meteo error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise UpstreamUnavailable(f"Open-Meteo request failed: {e!r}") from e
        except ValueError as e:
            raise UpstreamUnavailable(f"Open-Meteo returned invalid JSON: {e}") from e

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None


open_meteo_client = OpenMeteoClient()
