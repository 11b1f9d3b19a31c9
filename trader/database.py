"""Async database connection using SQLAlchemy (SQLite by default)."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)


def get_database_url(url: str) -> str:
    """Swap a sync driver URL for its async driver (aiosqlite, asyncpg)."""
    # SQLite
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)

    # PostgreSQL (needs the asyncpg extra)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)

    return url


class Database:
    """Engine and session factory for one database URL."""

    def __init__(self, url: str, echo: bool = False):
        self.url = get_database_url(url)
        self.is_sqlite = self.url.startswith("sqlite")

        engine_kwargs = {"echo": echo}
        if self.is_sqlite:
            # One shared connection, so ":memory:" databases survive across sessions
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True
            engine_kwargs["pool_recycle"] = 300

        self.engine = create_async_engine(self.url, **engine_kwargs)
        self.session_maker = sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_maker() as session:
            try:
                yield session
            finally:
                await session.close()

    async def init(self) -> None:
        """Create the profile tables if missing."""
        # Registers the table models on SQLModel.metadata
        from trader import models  # noqa: F401

        logger.info(f"Creating profile tables on {self.engine.url.get_backend_name()}")
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Profile tables ready")

    async def close(self) -> None:
        """Dispose the engine and its pooled connections."""
        await self.engine.dispose()
        logger.info("Profile database engine disposed")
