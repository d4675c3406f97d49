"""
Squeeze Indicator API Endpoints

Endpoints for squeeze indicator calculations.
"""

import logging

from fastapi import APIRouter, HTTPException

from squeeze_alert.schemas.squeeze import SqueezeRequest, SqueezeResponse
from squeeze_alert.services.base import InvalidInputError
from squeeze_alert.services.indicators import get_squeeze_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=SqueezeResponse)
async def calculate_squeeze(request: SqueezeRequest):
    """
    Calculate the squeeze indicator for the posted series.

    Returns:
        - Momentum value per bar (linear regression of the detrended close)
        - Squeeze flag per bar (Bollinger Bands inside Keltner Channel)
    """
    service = get_squeeze_service()
    try:
        return await service.execute(request)
    except InvalidInputError as e:
        logger.info(f"Squeeze request rejected: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/demo", response_model=SqueezeResponse)
async def get_demo_squeeze():
    """
    Squeeze indicator over the built-in demo series with the demo parameters.
    """
    service = get_squeeze_service()
    return await service.calculate_demo()
