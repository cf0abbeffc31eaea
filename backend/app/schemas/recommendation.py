from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

_CAMEL = {"populate_by_name": True, "alias_generator": to_camel, "extra": "ignore"}


class ModelReply(BaseModel):
    """Shape decoded from model output; a JSON null takes the field default."""

    @model_validator(mode="before")
    @classmethod
    def _nulls_to_defaults(cls, data):
        if isinstance(data, dict):
            return {
                k: [x for x in v if x is not None] if isinstance(v, list) else v
                for k, v in data.items()
                if v is not None
            }
        return data


class CostBreakdown(ModelReply):
    flights_avg: float = 0
    lodging_per_person: float = 0
    lift_tickets: float = 0
    misc: float = 0
    total: float = 0


class ItineraryDay(ModelReply):
    day: int | None = None
    morning: str = ""
    afternoon: str = ""
    evening: str = ""


class SnowConditions(ModelReply):
    current_snow_depth: float | None = None
    last_24hr_snowfall: float | None = Field(default=None, alias="last24hrSnowfall")
    last_7days_snowfall: float | None = Field(default=None, alias="last7daysSnowfall")
    season_total_snowfall: float | None = None
    is_historical: bool = False
    historical_snow_depth: float | None = None
    historical_snowfall: float | None = None

    model_config = _CAMEL


class LodgingRecommendation(ModelReply):
    name: str = ""
    type: str = ""
    units: int | None = None
    price_per_night: float | None = None
    cost_per_person: float | None = None

    model_config = _CAMEL


class GuestFlightDetail(ModelReply):
    guest_name: str = ""
    origin: str = ""
    destination_airport: str = ""
    estimated_cost: float | None = None
    airline: str = ""
    stops: int | None = None
    duration: str = ""

    model_config = _CAMEL


class PassCoverage(ModelReply):
    pass_name: str = Field(alias="pass")
    covered: bool = False

    model_config = {"populate_by_name": True}


class Terrain(ModelReply):
    beginner: int = 0
    intermediate: int = 0
    advanced: int = 0
    expert: int = 0


class Recommendation(ModelReply):
    """One resort pick as returned by the model, plus ground-truth enrichment."""

    resort_name: str
    match_score: float = 0
    summary: str = ""
    why_this_resort: str = ""
    cost_breakdown: CostBreakdown = Field(default_factory=CostBreakdown)
    vibe_match_tags: list[str] = Field(default_factory=list)
    itinerary: list[ItineraryDay] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    snow_conditions: SnowConditions | None = None
    lodging_recommendation: LodgingRecommendation | None = None
    flight_details_per_guest: list[GuestFlightDetail] = Field(default_factory=list)

    # Filled from the resort catalog, never trusted from the model.
    terrain_breakdown: Terrain | None = None
    pass_coverage: list[PassCoverage] = Field(default_factory=list)
    country: str | None = None
    region: str | None = None
    ski_in_out: bool | None = None

    model_config = _CAMEL


class RecommendationSet(BaseModel):
    recommendations: list[Recommendation]
    # "guest (origin)" → resort name → estimated flight cost
    flight_summary: dict[str, dict[str, float | None]] = Field(default_factory=dict)

    model_config = _CAMEL


class GenerateRecommendationsRequest(BaseModel):
    trip_id: str = Field(min_length=1, max_length=64)

    model_config = _CAMEL
