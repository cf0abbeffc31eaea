"""Recommendations router — generate and fetch AI resort picks for a trip."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user_id
from app.errors import TripNotFound
from app.schemas.recommendation import GenerateRecommendationsRequest
from app.services.recommendation.aggregator import RecommendationAggregator
from app.services.trip_store import TripStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
async def generate_recommendations(
    req: GenerateRecommendationsRequest,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Run the full pipeline for a trip the caller owns."""
    aggregator = RecommendationAggregator(TripStore(db))
    return await aggregator.generate(req.trip_id, user_id)


@router.get("/{trip_id}")
async def get_latest_recommendations(
    trip_id: str,
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    results = await TripStore(db).latest_results(trip_id, user_id)
    if results is None:
        raise TripNotFound("No recommendations generated for this trip yet")
    return results
