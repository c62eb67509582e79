"""
Database connection pool management for PostgreSQL.
A single async SQLAlchemy engine is created per process and handed to the gateway.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.engine import make_url
from sqlalchemy import Integer, text
from lightbnb.config import Settings, settings as default_settings
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Every table carries a serial integer surrogate key.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


def create_engine_from_settings(config: Optional[Settings] = None) -> AsyncEngine:
    """
    Build the async engine (and with it the connection pool) from settings.

    Args:
        config: Settings to read from, defaults to the global settings

    Returns:
        Configured AsyncEngine
    """
    config = config or default_settings
    url = config.sqlalchemy_url

    if make_url(url).get_backend_name() == "sqlite":
        return create_async_engine(url, echo=config.debug)

    return create_async_engine(
        url,
        echo=config.debug,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_pre_ping=True,
        pool_recycle=config.pool_recycle,
        pool_timeout=config.pool_timeout,
        connect_args={
            "server_settings": {
                "application_name": config.app_name.lower(),
            }
        }
    )


class Database:
    """
    Process-wide handle around the connection pool.
    Owns the engine lifecycle; the gateway only borrows connections from it.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "Database":
        return cls(create_engine_from_settings(config))

    @property
    def name(self) -> str:
        url = self.engine.url
        return url.database or "memory"

    async def ping(self) -> bool:
        """
        Test database connectivity.
        Returns True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                result.scalar()
            port = self.engine.url.port
            logger.debug(f"Connected to {self.name} db" + (f" on port {port}" if port else ""))
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    async def create_tables(self) -> None:
        """Create all tables known to the model metadata."""
        # Register every model on Base.metadata
        import lightbnb.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        """Drop all tables. Development and tests only."""
        import lightbnb.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

    async def dispose(self) -> None:
        """Close every pooled connection. Called at application shutdown."""
        await self.engine.dispose()
        logger.info("Database connections closed")

    def pool_status(self) -> Dict[str, Any]:
        """Connection pool counters for health reporting."""
        pool = self.engine.pool
        status: Dict[str, Any] = {"pool_class": type(pool).__name__}
        for counter in ("size", "checkedin", "checkedout", "overflow"):
            method = getattr(pool, counter, None)
            if callable(method):
                status[counter] = method()
        return status
