"""Lodging router — cheapest way to house the group at each resort."""

import logging

from fastapi import APIRouter

from app.schemas.resort import LodgingRequest
from app.services.lodging_optimizer import optimize_for_resorts

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
async def get_lodging(req: LodgingRequest):
    resorts = [
        (r.name, tuple(r.lodging_range) if r.lodging_range else None)
        for r in req.resorts
    ]
    lodging = optimize_for_resorts(resorts, req.group_size, req.lodging_preference, req.nights)
    return {"lodging": {name: data.to_dict() for name, data in lodging.items()}}
