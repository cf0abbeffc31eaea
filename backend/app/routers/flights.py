"""Flights router — cheapest and most-direct picks per origin/resort airport."""

import logging

from fastapi import APIRouter

from app.schemas.flight import FlightSearchRequest
from app.services.flight_service import flight_search_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
async def search_flights(req: FlightSearchRequest):
    origins = [(o.airport, o.guest_name or o.airport) for o in req.origins]
    result = await flight_search_service.search(
        origins, req.resorts, req.departure_date, req.return_date
    )
    return result.to_dict()
