"""Async SQLAlchemy database setup."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def normalize_async_db_url(url: str) -> str:
    """Coerce common sync database URLs into their async-driver variants."""
    u = (url or "").strip()
    if u.startswith("sqlite:///") and "aiosqlite" not in u:
        return u.replace("sqlite:///", "sqlite+aiosqlite:///")
    if u.startswith("postgresql://") and "+asyncpg" not in u:
        return u.replace("postgresql://", "postgresql+asyncpg://")
    return u


class Database:
    """Async database connection manager.

    Provides async session management with automatic transaction handling.
    All database operations should use the session() context manager.
    """

    def __init__(self, database_url: str):
        """Initialize database with connection URL.

        Args:
            database_url: SQLAlchemy database URL. sqlite:/// URLs are
                converted to sqlite+aiosqlite:///.
        """
        database_url = normalize_async_db_url(database_url)
        is_sqlite = database_url.startswith("sqlite")

        connect_args = {}
        if is_sqlite:
            # Concurrent writers wait on the database lock instead of failing
            connect_args["timeout"] = 30

        self._engine: AsyncEngine = create_async_engine(
            database_url,
            echo=False,
            connect_args=connect_args,
        )
        self._async_session: async_sessionmaker[AsyncSession] = (
            async_sessionmaker(
                self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        )

    @property
    def engine(self) -> AsyncEngine:
        """Get the async engine instance."""
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional scope around a series of operations.

        Usage:
            async with db.session() as session:
                session.add(model)
                # commit happens automatically on success
                # rollback happens automatically on exception

        Yields:
            AsyncSession: An async SQLAlchemy session.
        """
        async with self._async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def init_db(self) -> None:
        """Create tables from ORM models if they don't exist.

        For production, use Alembic migrations instead.
        """
        # Register the models on Base.metadata
        from signed_url_store.models import orm  # noqa: F401

        async with self._engine.begin() as conn:
            if conn.dialect.name == "sqlite":
                # WAL lets readers proceed while a consume holds the write lock
                await conn.execute(text("PRAGMA journal_mode=WAL"))
                await conn.execute(text("PRAGMA busy_timeout=30000"))
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """Close database connections and dispose of the engine."""
        await self._engine.dispose()
