"""Decode the reasoning model's reply into a RecommendationSet.

Decoding is two-stage: a strict ``json.loads`` of the whole reply, then the
contents of the first fenced code block. When both fail, ParseError.
"""

import json
import logging
import re

from pydantic import ValidationError as PydanticValidationError

from app.errors import ParseError
from app.schemas.recommendation import Recommendation, RecommendationSet
from app.services.recommendation.config import recommendation_config

logger = logging.getLogger(__name__)

_FENCED = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def decode_json(raw: str) -> dict:
    """Strict parse first, fenced-block extraction second."""
    text = (raw or "").strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        match = _FENCED.search(text)
        if not match:
            raise ParseError("Could not parse model response as JSON")
        try:
            parsed = json.loads(match.group(1))
        except json.JSONDecodeError as e:
            raise ParseError(f"Could not parse fenced JSON in model response: {e}") from e

    if not isinstance(parsed, dict):
        raise ParseError("Model response is not a JSON object")
    return parsed


def parse_recommendations(raw: str) -> RecommendationSet:
    data = decode_json(raw)
    items = data.get("recommendations")
    if not isinstance(items, list):
        raise ParseError("Model response has no recommendations array")

    limit = recommendation_config.prompt.recommendation_count
    recommendations: list[Recommendation] = []
    for i, item in enumerate(items):
        try:
            recommendations.append(Recommendation.model_validate(item))
        except PydanticValidationError as e:
            logger.warning(f"Skipping malformed recommendation #{i}: {e.error_count()} errors")
        if len(recommendations) == limit:
            break

    if not recommendations:
        raise ParseError("Model response contained no usable recommendations")
    if len(items) != limit:
        logger.warning(f"Model returned {len(items)} recommendations, expected {limit}")
    return RecommendationSet(recommendations=recommendations)
