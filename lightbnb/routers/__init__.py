"""
API route handlers for LightBnB.
"""

from .users import router as users_router
from .properties import router as properties_router
from .reservations import router as reservations_router

__all__ = ["users_router", "properties_router", "reservations_router"]
