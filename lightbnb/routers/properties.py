"""
Property endpoints: search listings and create a listing.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Any, Dict, Optional
from lightbnb.config import settings
from lightbnb.gateway import QueryGateway
from lightbnb.schemas.property import (
    PropertyCreate,
    PropertySearchParams,
    PropertyResponse,
    PropertyListResponse
)
from lightbnb.utils.dependencies import get_gateway, get_current_user


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=PropertyListResponse,
    summary="Search properties",
    description="List reviewed properties filtered by city, nightly price (dollars) and rating, "
                "or every property of one owner when owner_id is given"
)
async def list_properties(
    city: Optional[str] = Query(None, description="Substring of the city name"),
    owner_id: Optional[int] = Query(None, ge=1, description="Only this owner's properties; other filters are ignored"),
    minimum_price_per_night: Optional[float] = Query(None, ge=0, allow_inf_nan=False, description="Lower price bound in dollars"),
    maximum_price_per_night: Optional[float] = Query(None, ge=0, allow_inf_nan=False, description="Upper price bound in dollars"),
    minimum_rating: Optional[float] = Query(None, ge=0, le=5, allow_inf_nan=False, description="Minimum average review rating"),
    limit: int = Query(settings.default_result_limit, ge=1, le=settings.max_result_limit),
    gateway: QueryGateway = Depends(get_gateway)
) -> PropertyListResponse:
    params = PropertySearchParams(
        city=city,
        owner_id=owner_id,
        minimum_price_per_night=minimum_price_per_night,
        maximum_price_per_night=maximum_price_per_night,
        minimum_rating=minimum_rating
    )
    properties = await gateway.get_all_properties(params.model_dump(), limit)
    return PropertyListResponse(
        properties=[PropertyResponse.model_validate(p) for p in properties]
    )


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a property owned by the current user"
)
async def create_property(
    property_data: PropertyCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    gateway: QueryGateway = Depends(get_gateway)
) -> PropertyResponse:
    create_data = property_data.model_dump()
    create_data["owner_id"] = current_user["id"]
    created = await gateway.add_property(create_data)
    return PropertyResponse.model_validate(created)
