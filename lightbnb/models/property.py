"""
Property model for rental listings.
Prices are stored as integer cents.
"""

from sqlalchemy import String, Text, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from lightbnb.database import Base
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from lightbnb.models.user import User
    from lightbnb.models.reservation import Reservation
    from lightbnb.models.review import PropertyReview


class Property(Base):
    """
    A listing offered for nightly rental by its owner.
    """

    __tablename__ = "properties"

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this property"
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    thumbnail_photo_url: Mapped[str] = mapped_column(String(255), nullable=False)

    cover_photo_url: Mapped[str] = mapped_column(String(255), nullable=False)

    cost_per_night: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Nightly price in cents"
    )

    parking_spaces: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    number_of_bathrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    number_of_bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Address
    country: Mapped[str] = mapped_column(String(255), nullable=False)

    street: Mapped[str] = mapped_column(String(255), nullable=False)

    city: Mapped[str] = mapped_column(String(255), nullable=False)

    province: Mapped[str] = mapped_column(String(255), nullable=False)

    post_code: Mapped[str] = mapped_column(String(255), nullable=False)

    owner: Mapped["User"] = relationship("User", back_populates="properties")

    reservations: Mapped[List["Reservation"]] = relationship(
        "Reservation",
        back_populates="property",
        cascade="all, delete-orphan"
    )

    reviews: Mapped[List["PropertyReview"]] = relationship(
        "PropertyReview",
        back_populates="property",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_properties_city", "city"),
        Index("idx_properties_cost_per_night", "cost_per_night"),
    )

    # Columns accepted on insert; everything but the surrogate key
    INSERT_FIELDS = (
        "owner_id",
        "title",
        "description",
        "thumbnail_photo_url",
        "cover_photo_url",
        "cost_per_night",
        "street",
        "city",
        "province",
        "post_code",
        "country",
        "parking_spaces",
        "number_of_bathrooms",
        "number_of_bedrooms",
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title}, city={self.city})>"
