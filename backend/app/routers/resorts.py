"""Resorts router — resort catalog merged with live or historical snow."""

import logging

from fastapi import APIRouter

from app.schemas.resort import ResortDataRequest
from app.services.snow_service import snow_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
async def get_resorts(req: ResortDataRequest):
    """Resorts in the requested regions, each with a snow snapshot."""
    report = await snow_service.get_resorts_with_snow(req.regions, req.date_start, req.date_end)
    return report.to_dict()
