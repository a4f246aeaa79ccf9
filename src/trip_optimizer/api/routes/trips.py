"""Trip optimization endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.trips import TripOptimizationRequest, TripOptimizationResponse
from ...services.routing.service import optimize_trip_request

router = APIRouter(prefix="/trips", tags=["trips"])

logger = logging.getLogger(__name__)


@router.post(
    "/optimize",
    response_model=TripOptimizationResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
)
def optimize(payload: TripOptimizationRequest) -> TripOptimizationResponse:
    """Order the given locations into a short route and split it across days."""
    try:
        return optimize_trip_request(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Error optimizing trip: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to optimize trip",
        ) from exc
