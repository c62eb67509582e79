"""
Pydantic schemas for property creation, search and responses.
"""

from pydantic import BaseModel, Field, validator
from typing import Optional, List


class PropertyCreate(BaseModel):
    """Schema for creating a property. The owner is the authenticated user."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=10000)
    thumbnail_photo_url: str = Field(..., min_length=1, max_length=255)
    cover_photo_url: str = Field(..., min_length=1, max_length=255)
    cost_per_night: int = Field(..., ge=0, description="Nightly price in cents")
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=255)
    province: str = Field(..., min_length=1, max_length=255)
    post_code: str = Field(..., min_length=1, max_length=255)
    country: str = Field(..., min_length=1, max_length=255)
    parking_spaces: int = Field(0, ge=0)
    number_of_bathrooms: int = Field(0, ge=0)
    number_of_bedrooms: int = Field(0, ge=0)

    @validator("title", "city", "street", "province", "country")
    def strip_text(cls, v):
        if not v.strip():
            raise ValueError("Field cannot be blank")
        return v.strip()


class PropertySearchParams(BaseModel):
    """Search options; prices in dollars."""

    city: Optional[str] = None
    owner_id: Optional[int] = Field(None, ge=1)
    minimum_price_per_night: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    maximum_price_per_night: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    minimum_rating: Optional[float] = Field(None, ge=0, le=5, allow_inf_nan=False)

    @validator("city")
    def blank_city_is_no_filter(cls, v):
        if v is None:
            return None
        return v.strip() or None


class PropertyResponse(BaseModel):
    """A stored property. average_rating is present on rated searches only."""

    id: int
    owner_id: int
    title: str
    description: str
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int
    street: str
    city: str
    province: str
    post_code: str
    country: str
    parking_spaces: int
    number_of_bathrooms: int
    number_of_bedrooms: int
    average_rating: Optional[float] = None


class PropertyListResponse(BaseModel):
    properties: List[PropertyResponse]
