"""
Query gateway for LightBnB.
Maps each logical data operation to one parameterized statement over the shared pool.
"""

from sqlalchemy.ext.asyncio import AsyncEngine
from lightbnb.config import settings
from lightbnb.database import Database
from lightbnb.models.property import Property
from lightbnb.repositories import (
    PropertyRepository,
    PropertySearchFilters,
    ReservationRepository,
    UserRepository,
    Record
)
from lightbnb.repositories.user import USER_FIELDS
from lightbnb.utils.exceptions import ValidationError
from typing import Any, Iterable, List, Mapping, Optional, Union
import logging

logger = logging.getLogger(__name__)


def _require_fields(data: Mapping[str, Any], fields: Iterable[str], resource: str) -> None:
    missing = [field for field in fields if field not in data]
    if missing:
        raise ValidationError(
            f"{resource} is missing required fields: {', '.join(missing)}",
            field_errors=[{"field": field, "message": "Field is required"} for field in missing]
        )


def _check_limit(limit: Any) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError(
            f"limit must be a positive integer, got {limit!r}",
            field_errors=[{"field": "limit", "message": "Must be a positive integer"}]
        )
    return limit


class QueryGateway:
    """
    Data access entry point used by the web layer.

    Single-record reads return None when nothing matches, list reads return an
    empty list, and failed statements raise a DatabaseError subclass.
    """

    def __init__(self, pool: Union[Database, AsyncEngine]):
        """
        Args:
            pool: The process-wide Database handle, or its engine directly
        """
        engine = pool.engine if isinstance(pool, Database) else pool
        self.users = UserRepository(engine)
        self.reservations = ReservationRepository(engine)
        self.properties = PropertyRepository(engine)

    # Users

    async def get_user_with_email(self, email: str) -> Optional[Record]:
        """Get a single user by email, case-insensitively."""
        return await self.users.get_by_email(email)

    async def get_user_with_id(self, user_id: int) -> Optional[Record]:
        """Get a single user by id."""
        return await self.users.get_by_id(user_id)

    async def add_user(self, user: Mapping[str, Any]) -> Record:
        """
        Add a new user.

        Args:
            user: Mapping with name, email and an already hashed password

        Returns:
            The stored user, generated id included

        Raises:
            ValidationError: If a field is missing
            ConstraintViolationError: If the email is taken
        """
        _require_fields(user, USER_FIELDS, "User")
        return await self.users.create_user(user)

    # Reservations

    async def get_all_reservations(
        self,
        guest_id: int,
        limit: int = settings.default_result_limit
    ) -> List[Record]:
        """
        Get all reservations for a single user.

        Returns:
            Reservation records joined with their property, possibly empty
        """
        return await self.reservations.get_for_guest(guest_id, _check_limit(limit))

    # Properties

    async def get_all_properties(
        self,
        options: Optional[Union[Mapping[str, Any], PropertySearchFilters]] = None,
        limit: int = settings.default_result_limit
    ) -> List[Record]:
        """
        Search properties.

        With owner_id set, returns that owner's properties and ignores the
        other options. Otherwise returns reviewed properties filtered by city,
        price range (dollars; both bounds required) and minimum average
        rating, cheapest first.
        """
        filters = PropertySearchFilters.from_options(options)
        return await self.properties.search_properties(filters, _check_limit(limit))

    async def add_property(self, property: Mapping[str, Any]) -> Record:
        """
        Add a property to the database.

        Args:
            property: Mapping with all property fields; cost_per_night in cents

        Returns:
            The stored property
        """
        _require_fields(property, Property.INSERT_FIELDS, "Property")
        return await self.properties.create_property(property)
