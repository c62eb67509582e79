"""
Reservation repository. Lists a guest's stays together with the booked property.
"""

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy import select
from lightbnb.repositories.base import BaseRepository, Record
from lightbnb.models.reservation import Reservation
from lightbnb.models.property import Property
from typing import List
import logging

logger = logging.getLogger(__name__)


class ReservationRepository(BaseRepository[Reservation]):

    def __init__(self, engine: AsyncEngine):
        super().__init__(Reservation, engine)

    def reservations_for_guest_query(self, guest_id: int, limit: int):
        # properties.id duplicates reservations.property_id, so it is left out
        property_columns = [c for c in Property.__table__.c if c.name != "id"]
        return (
            select(*Reservation.__table__.c, *property_columns)
            .join(Property, Property.id == Reservation.property_id)
            .where(Reservation.guest_id == guest_id)
            .order_by(Reservation.start_date, Reservation.id)
            .limit(limit)
        )

    async def get_for_guest(self, guest_id: int, limit: int) -> List[Record]:
        """
        Get a guest's reservations joined to their properties.

        Args:
            guest_id: ID of the guest
            limit: Maximum number of reservations to return

        Returns:
            List of reservation records, empty when the guest has none
        """
        query = self.reservations_for_guest_query(guest_id, limit)
        reservations = await self.execute(query, f"get reservations for guest {guest_id}")
        logger.debug(f"Retrieved {len(reservations)} reservations for guest {guest_id}")
        return reservations
