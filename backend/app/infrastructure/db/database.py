"""
Database Configuration for Team Billing

Async SQLAlchemy engine and session management:
- One engine (and connection pool) per process
- One session per request, committed once at the end, so every write a
  handler makes lands atomically or not at all
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import event, make_url, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from app.config.settings import Settings, get_settings
from app.infrastructure.exceptions import DatabaseError


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores REFERENCES clauses unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """
    Manages async database connections and sessions.

    Constructed from an explicit ``Settings`` object; the engine is
    created lazily on first use and dropped by ``close()``.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create async engine with connection pooling."""
        if self._engine is None:
            self._initialize_engine()
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create session factory."""
        if self._session_factory is None:
            self._initialize_engine()
        return self._session_factory

    def _initialize_engine(self) -> None:
        """Initialize async engine with pooling suited to the dialect."""
        database_url = self._settings.async_database_url

        if self._settings.is_sqlite:
            engine_kwargs = {"connect_args": {"check_same_thread": False}}
            if make_url(database_url).database in (None, "", ":memory:"):
                # a single shared connection, otherwise every checkout sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs = {
                "pool_size": self._settings.database_pool_size,
                "max_overflow": self._settings.database_max_overflow,
                "pool_timeout": self._settings.database_pool_timeout,
                "pool_pre_ping": True,  # Verify connections before use
            }

        self._engine = create_async_engine(
            database_url,
            echo=self._settings.database_echo,
            **engine_kwargs,
        )

        if self._settings.is_sqlite:
            event.listen(
                self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys
            )

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_tables(self) -> None:
        """Create all tables from SQLModel metadata."""
        # registers every table on SQLModel.metadata
        import app.infrastructure.db.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop all tables (use with caution, mainly for testing)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    async def close(self) -> None:
        """Close engine and dispose of connection pool."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None


# Global instance (lazy initialization)
_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Get or create the database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(get_settings())
    return _db_manager


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency injection for async database sessions.

    Usage in FastAPI:
        @app.get("/items")
        async def get_items(session: AsyncSession = Depends(get_session)):
            ...

    Yields:
        AsyncSession: committed when the handler returns, rolled back if
        it raises
    """
    db = get_db_manager()
    async with db.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database sessions outside FastAPI requests.

    Usage:
        async with get_session_context() as session:
            result = await session.execute(query)
    """
    db = get_db_manager()
    async with db.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Create missing tables and verify the connection (called on app startup).

    Raises:
        DatabaseError: the database cannot be reached or initialized
    """
    db = get_db_manager()
    try:
        await db.create_tables()
        async with db.session_factory() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise DatabaseError(
            "Database initialization failed",
            operation="init",
            original_error=e,
        ) from e


async def close_db() -> None:
    """Close database connection pool (called on app shutdown)."""
    db = get_db_manager()
    await db.close()
