"""Trip store — reads trips/guests and persists recommendation results."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import AuthorizationError, PersistenceError, TripNotFound
from app.models.recommendation import RecommendationRecord
from app.models.trip import Guest, Trip
from app.services.recommendation.context_assembler import (
    GuestRecord,
    TripRequest,
    guest_from_model,
    trip_from_model,
)

logger = logging.getLogger(__name__)


def _trip_uuid(trip_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(trip_id))
    except ValueError:
        raise TripNotFound("Trip not found")


class TripStore:
    """SQLAlchemy-backed access to trips, guests, and recommendation results."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load_trip(self, trip_id: str, user_id: str) -> tuple[TripRequest, list[GuestRecord]]:
        """Fetch a trip and its guests, ensuring the trip belongs to ``user_id``."""
        tid = _trip_uuid(trip_id)
        trip = (await self.db.execute(select(Trip).where(Trip.id == tid))).scalar_one_or_none()
        if trip is None:
            raise TripNotFound("Trip not found")
        if trip.user_id != user_id:
            raise AuthorizationError("Forbidden", status_code=403)

        result = await self.db.execute(
            select(Guest).where(Guest.trip_id == tid).order_by(Guest.created_at)
        )
        guests = [guest_from_model(g) for g in result.scalars().all()]
        return trip_from_model(trip), guests

    async def save_results(self, trip_id: str, results: dict) -> None:
        """Insert a recommendation set. Raises PersistenceError on failure."""
        try:
            self.db.add(RecommendationRecord(trip_id=_trip_uuid(trip_id), results=results))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to store recommendations: {e}") from e

    async def latest_results(self, trip_id: str, user_id: str) -> dict | None:
        await self.load_trip(trip_id, user_id)
        result = await self.db.execute(
            select(RecommendationRecord)
            .where(RecommendationRecord.trip_id == _trip_uuid(trip_id))
            .order_by(RecommendationRecord.created_at.desc())
            .limit(1)
        )
        record = result.scalar_one_or_none()
        return record.results if record else None
