import re
from typing import Annotated

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_CAMEL = {"populate_by_name": True, "alias_generator": to_camel}
_ISO_DURATION = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?")


def parse_duration(duration_str: str) -> int:
    """Parse ISO 8601 duration (PT2H30M) to minutes. Unreadable input is 0."""
    match = _ISO_DURATION.match(duration_str or "")
    if not match:
        return 0
    hours, minutes = match.groups()
    return int(hours or 0) * 60 + int(minutes or 0)


class FlightSegment(BaseModel):
    carrier_code: str = ""
    flight_number: str = ""
    departure_airport: str = ""
    arrival_airport: str = ""
    departure_time: str = ""
    arrival_time: str = ""

    model_config = _CAMEL


class FlightLeg(BaseModel):
    departure: str = ""
    arrival: str = ""
    duration: str = ""  # ISO 8601, e.g. PT4H35M
    stops: int = 0
    segments: list[FlightSegment] = Field(default_factory=list)

    model_config = _CAMEL


class FlightOffer(BaseModel):
    price: float
    currency: str = "USD"
    airlines: list[str] = Field(default_factory=list)
    outbound: FlightLeg = Field(default_factory=FlightLeg)
    return_leg: FlightLeg = Field(default_factory=FlightLeg, alias="return")

    model_config = _CAMEL

    @property
    def total_stops(self) -> int:
        return self.outbound.stops + self.return_leg.stops


class FlightPicks(BaseModel):
    cheapest: FlightOffer | None = None
    most_direct: FlightOffer | None = None

    model_config = _CAMEL


class FlightOrigin(BaseModel):
    airport: str = Field(pattern=r"^[A-Z]{3,4}$")
    guest_name: str | None = Field(default=None, max_length=100)

    model_config = _CAMEL


class FlightSearchRequest(BaseModel):
    origins: list[FlightOrigin] = Field(min_length=1, max_length=20)
    departure_date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    return_date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    resorts: list[Annotated[str, Field(max_length=100)]] = Field(min_length=1, max_length=50)

    model_config = _CAMEL
