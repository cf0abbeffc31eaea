from datetime import date
from typing import Annotated

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_CAMEL = {"populate_by_name": True, "alias_generator": to_camel}


class ResortDataRequest(BaseModel):
    regions: list[str] | None = None
    date_start: date | None = None
    date_end: date | None = None

    model_config = _CAMEL


class LodgingResort(BaseModel):
    name: str = Field(max_length=100)
    lodging_range: Annotated[list[int], Field(min_length=2, max_length=2)] | None = None

    model_config = _CAMEL


class LodgingRequest(BaseModel):
    resorts: list[LodgingResort] = Field(min_length=1, max_length=50)
    group_size: int = Field(default=4, ge=1, le=100)
    lodging_preference: str = Field(default="Hotel", max_length=50)
    nights: int = Field(default=5, ge=1, le=30)

    model_config = _CAMEL
