"""
Property repository for listing search and insertion.
The search statement is assembled from ordered predicate lists so that every
bound parameter travels with the clause that uses it.
"""

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy import select, and_, func, asc
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement
from lightbnb.repositories.base import BaseRepository, Record
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from lightbnb.utils.money import to_minor_units
from typing import Optional, List, Dict, Any, Mapping, Union
from decimal import Decimal
import logging

logger = logging.getLogger(__name__)

Amount = Union[int, float, Decimal, str]


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally, using backslash as the escape character."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PropertySearchFilters:
    """Search options for property listings. Prices are in major units (dollars)."""

    def __init__(
        self,
        city: Optional[str] = None,
        owner_id: Optional[int] = None,
        minimum_price_per_night: Optional[Amount] = None,
        maximum_price_per_night: Optional[Amount] = None,
        minimum_rating: Optional[Amount] = None
    ):
        self.city = city
        self.owner_id = owner_id
        self.minimum_price_per_night = minimum_price_per_night
        self.maximum_price_per_night = maximum_price_per_night
        self.minimum_rating = minimum_rating

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]]) -> "PropertySearchFilters":
        """Build filters from a loose options mapping, ignoring unknown keys."""
        if isinstance(options, cls):
            return options
        options = options or {}
        return cls(
            city=options.get("city"),
            owner_id=options.get("owner_id"),
            minimum_price_per_night=options.get("minimum_price_per_night"),
            maximum_price_per_night=options.get("maximum_price_per_night"),
            minimum_rating=options.get("minimum_rating")
        )

    @property
    def has_price_range(self) -> bool:
        # A single bound on its own applies no price filter
        return self.minimum_price_per_night is not None and self.maximum_price_per_night is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "owner_id": self.owner_id,
            "minimum_price_per_night": self.minimum_price_per_night,
            "maximum_price_per_night": self.maximum_price_per_night,
            "minimum_rating": self.minimum_rating,
        }


class PropertySearchQuery:
    """
    Builds the rated-property search statement.

    WHERE predicates and HAVING predicates are kept in separate ordered lists.
    Each predicate is an SQLAlchemy expression holding its own bind parameter,
    so placeholder numbering follows clause order and the limit is always the
    last parameter.
    """

    def __init__(self, filters: PropertySearchFilters, limit: int):
        self.filters = filters
        self.limit = limit
        self.where_clauses: List[ColumnElement] = []
        self.having_clauses: List[ColumnElement] = []
        self.average_rating = func.avg(PropertyReview.rating)

        if filters.city:
            self.where_clauses.append(
                Property.city.ilike(f"%{escape_like(filters.city)}%", escape="\\")
            )

        if filters.has_price_range:
            self.where_clauses.append(
                Property.cost_per_night >= to_minor_units(filters.minimum_price_per_night, "minimum_price_per_night")
            )
            self.where_clauses.append(
                Property.cost_per_night <= to_minor_units(filters.maximum_price_per_night, "maximum_price_per_night")
            )

        if filters.minimum_rating is not None:
            self.having_clauses.append(self.average_rating >= filters.minimum_rating)

    def statement(self) -> Select:
        query = (
            select(*Property.__table__.c, self.average_rating.label("average_rating"))
            .join(PropertyReview, PropertyReview.property_id == Property.id)
        )

        if self.where_clauses:
            query = query.where(and_(*self.where_clauses))

        query = query.group_by(Property.id)

        if self.having_clauses:
            query = query.having(and_(*self.having_clauses))

        return query.order_by(asc(Property.cost_per_night), asc(Property.id)).limit(self.limit)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings: owner listing, rated search, insertion.
    """

    def __init__(self, engine: AsyncEngine):
        super().__init__(Property, engine)

    def owner_properties_query(self, owner_id: int, limit: int) -> Select:
        return (
            select(Property.__table__)
            .where(Property.owner_id == owner_id)
            .order_by(asc(Property.id))
            .limit(limit)
        )

    def build_search_query(self, filters: PropertySearchFilters, limit: int) -> Select:
        """
        Pick the statement for a search.

        An owner filter short-circuits every other filter and lists that
        owner's properties, reviewed or not.
        """
        if filters.owner_id is not None:
            return self.owner_properties_query(filters.owner_id, limit)
        return PropertySearchQuery(filters, limit).statement()

    async def search_properties(self, filters: PropertySearchFilters, limit: int) -> List[Record]:
        """
        Search properties.

        Args:
            filters: PropertySearchFilters instance with search criteria
            limit: Maximum number of records to return

        Returns:
            List of property records, possibly empty
        """
        query = self.build_search_query(filters, limit)
        properties = await self.execute(query, "search properties")
        logger.debug(f"Property search {filters.to_dict()} returned {len(properties)} results")
        return properties

    async def create_property(self, property_data: Mapping[str, Any]) -> Record:
        """
        Create a new property listing.

        Values are taken by column name, so the order of the incoming mapping
        does not matter.

        Args:
            property_data: Mapping with every field in Property.INSERT_FIELDS

        Returns:
            Created property record

        Raises:
            KeyError: If a field is missing
            ConstraintViolationError: If the owner does not exist
        """
        create_data = {field: property_data[field] for field in Property.INSERT_FIELDS}
        created_property = await self.create(create_data)
        logger.info(f"Created property: {created_property['title']} (ID: {created_property['id']})")
        return created_property
