import contextlib
import os
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from alumni_backend.common.base import Base
from alumni_backend.common.environment_constants import DATABASE_URL


class Database:
    """
    Owns the async engine of the record store and hands out sessions.

    One instance is shared by every controller. Services receive the session
    opened by their controller and commit their single-record mutation
    themselves; this class never commits.
    """

    def __init__(self, database_url: str | None = None, echo=False, **engine_kwargs):
        """
        Args:
            database_url (str | None): Async SQLAlchemy URL, for example
                postgresql+asyncpg://... ; read from DATABASE_URL when omitted.
            echo (bool): Log emitted SQL.
            **engine_kwargs: Passed to create_async_engine (tests use a StaticPool
                so an in-memory SQLite database survives across sessions).

        Raises:
            ValueError: If no URL is given and DATABASE_URL is unset.
        """
        self.database_url = database_url or os.getenv(DATABASE_URL)
        if not self.database_url:
            raise ValueError("DATABASE_URL must be set")

        self._engine = create_async_engine(
            self.database_url, echo=echo, **engine_kwargs
        )
        self._session_factory = async_sessionmaker(
            bind=self._engine, autoflush=False, expire_on_commit=False
        )

    def get_engine(self) -> AsyncEngine:
        return self._engine

    async def create_schema(self, reset: bool = False):
        """
        Create every table registered on Base.metadata.

        Entity modules must be imported beforehand so their tables are known.

        Args:
            reset (bool): Drop the known tables first.
        """
        async with self._engine.begin() as conn:
            if reset:
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    async def close(self):
        """Dispose the engine and its connection pool on shutdown."""
        await self._engine.dispose()

    @contextlib.asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Open a session for one request.

        Any exception rolls back whatever was flushed but not committed and is
        re-raised unchanged; the session is always closed.
        """
        session: AsyncSession = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
