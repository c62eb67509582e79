"""
User model for guests and property owners.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from lightbnb.database import Base
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from lightbnb.models.property import Property
    from lightbnb.models.reservation import Reservation


class User(Base):
    """
    A registered user. The same account can own properties and book them.
    Password holds an already hashed credential.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        comment="Login email, matched case-insensitively"
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    properties: Mapped[List["Property"]] = relationship(
        "Property",
        back_populates="owner",
        cascade="all, delete-orphan"
    )

    reservations: Mapped[List["Reservation"]] = relationship(
        "Reservation",
        back_populates="guest",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email})>"
