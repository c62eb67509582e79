"""
Pydantic schemas for reservation listings.
"""

from pydantic import BaseModel
from datetime import date
from typing import List


class ReservationResponse(BaseModel):
    """A reservation together with the booked property's details."""

    id: int
    guest_id: int
    property_id: int
    start_date: date
    end_date: date
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


class ReservationListResponse(BaseModel):
    reservations: List[ReservationResponse]
