"""
Reservation endpoints for the current user.
"""

from fastapi import APIRouter, Depends, Query
from typing import Any, Dict
from lightbnb.config import settings
from lightbnb.gateway import QueryGateway
from lightbnb.schemas.reservation import ReservationResponse, ReservationListResponse
from lightbnb.utils.dependencies import get_gateway, get_current_user


router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.get(
    "",
    response_model=ReservationListResponse,
    summary="List the current user's reservations"
)
async def list_reservations(
    limit: int = Query(settings.default_result_limit, ge=1, le=settings.max_result_limit),
    current_user: Dict[str, Any] = Depends(get_current_user),
    gateway: QueryGateway = Depends(get_gateway)
) -> ReservationListResponse:
    reservations = await gateway.get_all_reservations(current_user["id"], limit)
    return ReservationListResponse(
        reservations=[ReservationResponse.model_validate(r) for r in reservations]
    )
