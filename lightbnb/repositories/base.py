"""
Base repository class running single statements through the shared async engine.
Translates driver failures into the LightBnB error taxonomy.
"""

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.exc import (
    SQLAlchemyError,
    IntegrityError,
    OperationalError,
    InterfaceError,
    DBAPIError,
    TimeoutError as PoolTimeoutError
)
from sqlalchemy.sql import Executable
from sqlalchemy import select, insert
from lightbnb.database import Base
from lightbnb.utils.exceptions import (
    DatabaseError,
    DatabaseUnavailableError,
    ConstraintViolationError,
    QueryExecutionError
)
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type, Mapping
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)

# A result row as a plain column -> value mapping
Record = Dict[str, Any]


def _constraint_name(exc: IntegrityError) -> Optional[str]:
    """Constraint reported by the driver, if any (asyncpg exposes it on the cause)."""
    for candidate in (exc.orig, getattr(exc.orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name
    return None


def translate_error(exc: Exception) -> DatabaseError:
    """
    Map a driver or SQLAlchemy exception onto the gateway error taxonomy.

    Args:
        exc: Exception raised while executing a statement

    Returns:
        DatabaseError subclass describing the failure
    """
    if isinstance(exc, IntegrityError):
        constraint = _constraint_name(exc)
        detail = "Constraint violation"
        if constraint:
            detail += f" on {constraint}"
        return ConstraintViolationError(detail, constraint=constraint)

    if isinstance(exc, (OperationalError, InterfaceError, PoolTimeoutError, OSError)):
        return DatabaseUnavailableError()

    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return DatabaseUnavailableError()

    return QueryExecutionError(f"Query failed: {exc}")


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing single-statement reads and inserts.
    Each call checks one connection out of the pool for exactly one statement.
    """

    def __init__(self, model: Type[ModelType], engine: AsyncEngine):
        """
        Initialize repository with model class and the shared engine.

        Args:
            model: SQLAlchemy model class
            engine: Async engine owning the connection pool
        """
        self.model = model
        self.engine = engine

    async def execute(self, statement: Executable, action: str) -> List[Record]:
        """
        Run one statement and return its rows as plain records.

        Args:
            statement: Statement to execute
            action: Short description used in log messages

        Returns:
            List of records, empty when the statement produced no rows

        Raises:
            DatabaseError: If the statement could not be executed
        """
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(statement)
                rows = result.mappings().all() if result.returns_rows else []
            return [dict(row) for row in rows]
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to {action}: {e}")
            raise translate_error(e) from e

    async def fetch_one(self, statement: Executable, action: str) -> Optional[Record]:
        """Run a statement and return its first record, or None when there are no rows."""
        records = await self.execute(statement, action)
        return records[0] if records else None

    async def get_by_id(self, id: int) -> Optional[Record]:
        """
        Get a record by its surrogate key.

        Args:
            id: Primary key value

        Returns:
            Record if found, None otherwise
        """
        query = select(self.model.__table__).where(self.model.id == id)
        record = await self.fetch_one(query, f"get {self.model.__name__} by id {id}")

        if record:
            logger.debug(f"Retrieved {self.model.__name__} with id: {id}")
        else:
            logger.debug(f"{self.model.__name__} with id {id} not found")

        return record

    async def create(self, obj_in: Mapping[str, Any]) -> Record:
        """
        Insert one row and return it as stored, generated id included.

        Args:
            obj_in: Column values keyed by column name

        Returns:
            Created record

        Raises:
            ConstraintViolationError: If the row conflicts with a constraint
        """
        table = self.model.__table__
        stmt = insert(table).values(dict(obj_in)).returning(*table.c)
        record = await self.fetch_one(stmt, f"create {self.model.__name__}")
        logger.debug(f"Created {self.model.__name__} with id: {record['id']}")
        return record
