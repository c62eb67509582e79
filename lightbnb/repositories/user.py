"""
User repository for account lookups and registration.
"""

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy import select, func
from lightbnb.repositories.base import BaseRepository, Record
from lightbnb.models.user import User
from typing import Optional, Dict, Any, Mapping
import logging

logger = logging.getLogger(__name__)

USER_FIELDS = ("name", "email", "password")


class UserRepository(BaseRepository[User]):
    """
    Repository for users. Passwords arrive already hashed; nothing is hashed here.
    """

    def __init__(self, engine: AsyncEngine):
        super().__init__(User, engine)

    async def get_by_email(self, email: str) -> Optional[Record]:
        """
        Get user by email address, ignoring case on both sides.

        Args:
            email: Email address to search for

        Returns:
            User record if found, None otherwise
        """
        query = (
            select(User.__table__)
            .where(func.lower(User.email) == func.lower(email))
            .limit(1)
        )
        user = await self.fetch_one(query, f"get user by email {email}")

        if user:
            logger.debug(f"Retrieved user by email: {email}")
        else:
            logger.debug(f"User with email {email} not found")

        return user

    async def create_user(self, user_data: Mapping[str, Any]) -> Record:
        """
        Create a new user.

        Args:
            user_data: Mapping with name, email and (hashed) password

        Returns:
            Created user record including its generated id

        Raises:
            ConstraintViolationError: If the email is already registered
        """
        create_data: Dict[str, Any] = {field: user_data[field] for field in USER_FIELDS}
        created_user = await self.create(create_data)
        logger.info(f"Created user: {created_user['email']} (ID: {created_user['id']})")
        return created_user
