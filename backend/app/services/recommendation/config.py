"""Recommendation pipeline configuration — single source for prompt and model thresholds."""

from dataclasses import dataclass, field

from app.config import settings


@dataclass(frozen=True)
class LLMParams:
    """Parameters for the reasoning-model call."""
    model_primary: str = "gpt-4o-mini"
    model_fallback: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = settings.llm_max_tokens
    temperature: float = 0.7
    json_mode: bool = True


@dataclass(frozen=True)
class PromptLimits:
    """Bounds on what goes into the user message."""
    recommendation_count: int = 3   # resorts the model must return
    max_flight_lines: int = 60      # origin→destination summaries
    max_guests: int = 40


@dataclass(frozen=True)
class RecommendationConfig:
    """Top-level config aggregating all sub-configs."""
    llm: LLMParams = field(default_factory=LLMParams)
    prompt: PromptLimits = field(default_factory=PromptLimits)


# Singleton
recommendation_config = RecommendationConfig()
