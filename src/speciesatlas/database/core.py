import contextlib
import logging
from collections.abc import AsyncGenerator
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,  # type: ignore[attr-defined]
    create_async_engine,
)
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)


class DatabaseService:
    """Provides an interface for database operations, including initialization."""

    def __init__(self, database_url: str):
        self.database_url = database_url

        url = make_url(database_url)
        if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self.async_engine = create_async_engine(
            database_url,
            pool_pre_ping=True,
            pool_recycle=3600,  # Recycle connections every hour
        )

        self.async_session_local = async_sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.async_engine,
            class_=AsyncSession,
        )

        # Tables are created asynchronously - must call initialize() after creation

    async def initialize(self) -> None:
        """Create all tables known to SQLModel metadata."""
        # Import table models so their metadata is registered
        from speciesatlas.species import models  # noqa: F401

        async with self.async_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized at %s", make_url(self.database_url).render_as_string())

    @contextlib.asynccontextmanager
    async def get_async_db(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide an async database session for dependency injection."""
        async with self.async_session_local() as session:
            yield session

    async def clear_database(self) -> None:
        """Clear all data from the database tables."""
        async with self.get_async_db() as session:
            try:
                for table in SQLModel.metadata.sorted_tables:
                    await session.execute(table.delete())
                await session.commit()
                logger.info("Database cleared successfully")
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Error clearing database: %s", e)
                raise

    async def dispose(self) -> None:
        """Dispose of database engines to release resources.

        This should be called when the DatabaseService is no longer needed,
        especially in tests, to prevent file descriptor leaks.
        """
        if hasattr(self, "async_engine") and self.async_engine:
            await self.async_engine.dispose()
            logger.debug("Async database engine disposed")
