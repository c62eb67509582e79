"""
Repository layer for data access operations.
Every method issues exactly one parameterized statement.
"""

from lightbnb.repositories.base import BaseRepository, Record, translate_error
from lightbnb.repositories.property import PropertyRepository, PropertySearchFilters, PropertySearchQuery
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "Record",
    "translate_error",
    "PropertyRepository",
    "PropertySearchFilters",
    "PropertySearchQuery",
    "ReservationRepository",
    "UserRepository"
]
