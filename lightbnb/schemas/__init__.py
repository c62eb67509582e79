"""
Pydantic schemas for request/response validation.
"""

from lightbnb.schemas.user import UserCreate, LoginRequest, UserResponse, AuthResponse
from lightbnb.schemas.property import (
    PropertyCreate,
    PropertySearchParams,
    PropertyResponse,
    PropertyListResponse
)
from lightbnb.schemas.reservation import ReservationResponse, ReservationListResponse

__all__ = [
    "UserCreate",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "PropertyCreate",
    "PropertySearchParams",
    "PropertyResponse",
    "PropertyListResponse",
    "ReservationResponse",
    "ReservationListResponse",
]
