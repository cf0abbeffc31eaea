"""Resort & snow data service — static resort catalog enriched with snow conditions.

Mode selection:
- "current": the trip ends inside the active ski season (Nov 1 – Apr 30).
  Snow comes from the forecast endpoint (7 past days + today) plus an archive
  query for the season-to-date total.
- "historical": the trip ends after the active season. Snow comes from the
  archive for the same calendar window in the most recently completed season.

Open-Meteo reports ``snow_depth`` in metres and ``snowfall_sum`` in
centimetres; snapshots carry both in centimetres.
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import ClassVar

from app.config import settings
from app.data.resorts import ResortProfile, filter_by_regions
from app.errors import UpstreamUnavailable
from app.services.open_meteo_client import OpenMeteoClient, open_meteo_client

logger = logging.getLogger(__name__)

CURRENT = "current"
HISTORICAL = "historical"

SEASON_START_MONTH = 11
SEASON_END_MONTH = 4
SEASON_END_DAY = 30


# ---------- Snapshots ----------


@dataclass(frozen=True)
class CurrentSnow:
    depth: float = 0.0
    last_24h_snowfall: float = 0.0
    last_7d_snowfall: float = 0.0
    season_total_snowfall: float = 0.0

    mode: ClassVar[str] = CURRENT

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "isHistorical": False,
            "currentSnowDepth": self.depth,
            "last24hrSnowfall": self.last_24h_snowfall,
            "last7daysSnowfall": self.last_7d_snowfall,
            "seasonTotalSnowfall": self.season_total_snowfall,
        }


@dataclass(frozen=True)
class HistoricalSnow:
    avg_depth: float = 0.0
    total_snowfall: float = 0.0

    mode: ClassVar[str] = HISTORICAL

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "isHistorical": True,
            "historicalSnowDepth": self.avg_depth,
            "historicalSnowfall": self.total_snowfall,
        }


SnowSnapshot = CurrentSnow | HistoricalSnow


@dataclass(frozen=True)
class ResortConditions:
    """A resort profile merged with the snapshot fetched for this request."""

    profile: ResortProfile
    snow: SnowSnapshot

    @property
    def name(self) -> str:
        return self.profile.name

    def to_dict(self) -> dict:
        data = self.profile.to_dict()
        data["snow"] = self.snow.to_dict()
        return data


@dataclass(frozen=True)
class SnowReport:
    mode: str
    resorts: list[ResortConditions]

    def to_dict(self) -> dict:
        return {
            "snowMode": self.mode,
            "resorts": [r.to_dict() for r in self.resorts],
        }


# ---------- Season arithmetic ----------


def season_window(today: date) -> tuple[date, date]:
    """Start (Nov 1) and end (Apr 30) of the season ``today`` belongs to.

    Nov/Dec belong to the season that starts this calendar year; every other
    month to the season that started last year.
    """
    start_year = today.year if today.month >= SEASON_START_MONTH else today.year - 1
    return (
        date(start_year, SEASON_START_MONTH, 1),
        date(start_year + 1, SEASON_END_MONTH, SEASON_END_DAY),
    )


def select_mode(trip_end: date | None, today: date) -> str:
    if trip_end is None:
        return CURRENT
    _, season_end = season_window(today)
    return HISTORICAL if trip_end > season_end else CURRENT


def _with_year(d: date, year: int) -> date:
    try:
        return d.replace(year=year)
    except ValueError:
        # Feb 29 onto a non-leap year
        return d.replace(year=year, day=28)


def historical_window(trip_start: date, trip_end: date, today: date) -> tuple[date, date]:
    """Map the trip's month/day onto the most recently completed season.

    The completed season ends Apr 30 of this year once April is over, else of
    last year. Jan–Apr dates land in that end year; May–Dec dates in the year
    before it. An end date that falls before the mapped start rolls forward a
    year (Dec→Jan trips).
    """
    end_year = today.year if today.month > SEASON_END_MONTH else today.year - 1
    start_year = end_year if trip_start.month <= SEASON_END_MONTH else end_year - 1

    mapped_start = _with_year(trip_start, start_year)
    mapped_end = _with_year(trip_end, start_year)
    if mapped_end < mapped_start:
        mapped_end = _with_year(trip_end, start_year + 1)
    return mapped_start, mapped_end


# ---------- Series helpers ----------


def _round1(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def _clean(values: list | None) -> list[float]:
    return [v if isinstance(v, (int, float)) and v >= 0 else 0.0 for v in (values or [])]


def latest_depth(hourly_depths: list | None) -> float:
    """Newest non-negative hourly reading, scanning backwards; 0 when none."""
    for value in reversed(hourly_depths or []):
        if value is not None and value >= 0:
            return float(value)
    return 0.0


def mean_depth(hourly_depths: list | None) -> float:
    readings = [v for v in (hourly_depths or []) if v is not None and v >= 0]
    if not readings:
        return 0.0
    return sum(readings) / len(readings)


def _metres_to_cm(value: float) -> float:
    return value * 100


# ---------- Service ----------


class SnowService:
    """Fetches snow snapshots for the resort catalog in bounded parallel batches."""

    def __init__(self, client: OpenMeteoClient | None = None, batch_size: int | None = None):
        self._client = client or open_meteo_client
        self._batch_size = batch_size or settings.snow_batch_size

    async def get_resorts_with_snow(
        self,
        regions: list[str] | None = None,
        date_start: date | None = None,
        date_end: date | None = None,
        today: date | None = None,
    ) -> SnowReport:
        today = today or date.today()
        resorts = filter_by_regions(regions)
        mode = select_mode(date_end, today)
        logger.info(f"Snow data: {len(resorts)} resorts, mode={mode}")

        snapshots: dict[str, SnowSnapshot] = {}
        for i in range(0, len(resorts), self._batch_size):
            batch = resorts[i:i + self._batch_size]
            coros = [
                self._snapshot_for(resort, mode, date_start, date_end, today)
                for resort in batch
            ]
            results = await asyncio.gather(*coros, return_exceptions=True)
            for resort, result in zip(batch, results):
                if isinstance(result, BaseException):
                    logger.warning(f"Snow fetch failed for {resort.name}: {result}")
                    snapshots[resort.name] = self._empty(mode)
                else:
                    snapshots[resort.name] = result

        return SnowReport(
            mode=mode,
            resorts=[ResortConditions(profile=r, snow=snapshots[r.name]) for r in resorts],
        )

    @staticmethod
    def _empty(mode: str) -> SnowSnapshot:
        return HistoricalSnow() if mode == HISTORICAL else CurrentSnow()

    async def _snapshot_for(
        self,
        resort: ResortProfile,
        mode: str,
        date_start: date | None,
        date_end: date | None,
        today: date,
    ) -> SnowSnapshot:
        if mode == HISTORICAL and date_end is not None:
            return await self.historical_snapshot(resort, date_start or date_end, date_end, today)
        return await self.current_snapshot(resort, today)

    async def current_snapshot(self, resort: ResortProfile, today: date) -> CurrentSnow:
        data = await self._client.forecast(resort.lat, resort.lng)
        daily = _clean((data.get("daily") or {}).get("snowfall_sum"))
        hourly = (data.get("hourly") or {}).get("snow_depth")

        # Last daily entry is today and still accumulating.
        completed = daily[:-1][-settings.forecast_past_days:]
        last_24h = completed[-1] if completed else 0.0
        last_7d = sum(completed)

        season_start, _ = season_window(today)
        archive_end = today - timedelta(days=settings.forecast_past_days + 1)
        archived = 0.0
        if archive_end >= season_start:
            try:
                archive = await self._client.archive(resort.lat, resort.lng, season_start, archive_end)
                archived = sum(_clean((archive.get("daily") or {}).get("snowfall_sum")))
            except UpstreamUnavailable as e:
                logger.warning(f"Season archive unavailable for {resort.name}, using forecast window only: {e}")

        return CurrentSnow(
            depth=_round1(_metres_to_cm(latest_depth(hourly))),
            last_24h_snowfall=_round1(last_24h),
            last_7d_snowfall=_round1(last_7d),
            season_total_snowfall=_round1(archived + last_7d),
        )

    async def historical_snapshot(
        self,
        resort: ResortProfile,
        trip_start: date,
        trip_end: date,
        today: date,
    ) -> HistoricalSnow:
        start, end = historical_window(trip_start, trip_end, today)
        data = await self._client.archive(resort.lat, resort.lng, start, end)
        daily = _clean((data.get("daily") or {}).get("snowfall_sum"))
        hourly = (data.get("hourly") or {}).get("snow_depth")
        return HistoricalSnow(
            avg_depth=_round1(_metres_to_cm(mean_depth(hourly))),
            total_snowfall=_round1(sum(daily)),
        )


snow_service = SnowService()
