"""Overwrite model-supplied resort facts with catalog data, then build the flight summary."""

import logging

from app.data.resorts import REFERENCE_PASSES, ResortProfile, get_resort
from app.schemas.recommendation import PassCoverage, Recommendation, RecommendationSet, Terrain

logger = logging.getLogger(__name__)


def pass_coverage(profile: ResortProfile) -> list[PassCoverage]:
    return [
        PassCoverage(pass_name=f"{name} Pass", covered=name.lower() in profile.passes)
        for name in REFERENCE_PASSES
    ]


def enrich_recommendation(rec: Recommendation) -> Recommendation:
    profile = get_resort(rec.resort_name)
    if profile is None:
        logger.warning(f"Model recommended unknown resort {rec.resort_name!r}, leaving as-is")
        return rec
    t = profile.terrain
    return rec.model_copy(update={
        "terrain_breakdown": Terrain(
            beginner=t.beginner,
            intermediate=t.intermediate,
            advanced=t.advanced,
            expert=t.expert,
        ),
        "pass_coverage": pass_coverage(profile),
        "country": profile.country,
        "region": profile.region,
        "ski_in_out": profile.ski_in_out,
    })


def build_flight_summary(recommendations: list[Recommendation]) -> dict[str, dict[str, float | None]]:
    """Transpose per-guest flight details into "guest (origin)" → resort → cost."""
    summary: dict[str, dict[str, float | None]] = {}
    for rec in recommendations:
        for detail in rec.flight_details_per_guest:
            key = f"{detail.guest_name} ({detail.origin})"
            summary.setdefault(key, {})[rec.resort_name] = detail.estimated_cost
    return summary


def enrich(result: RecommendationSet) -> RecommendationSet:
    recommendations = [enrich_recommendation(r) for r in result.recommendations]
    return RecommendationSet(
        recommendations=recommendations,
        flight_summary=build_flight_summary(recommendations),
    )
