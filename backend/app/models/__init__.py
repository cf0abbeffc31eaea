from app.models.trip import Guest, Trip
from app.models.recommendation import RecommendationRecord

__all__ = [
    "Guest",
    "RecommendationRecord",
    "Trip",
]
