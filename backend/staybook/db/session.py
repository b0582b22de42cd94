"""Database handle owned by the running application."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

logger = logging.getLogger(__name__)


class Database:
    """Engine plus session factory for one database URL.

    The application builds exactly one instance in its lifespan and keeps it
    on ``app.state``; request handlers receive sessions from it through
    ``staybook.api.deps.get_db_session``.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo)
        self.sessionmaker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine, expire_on_commit=False, class_=AsyncSession
        )

    @property
    def backend(self) -> str:
        return self.engine.url.get_backend_name()

    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.sessionmaker() as session:
            yield session

    async def ping(self) -> dict[str, Any]:
        """Run ``SELECT 1`` and report reachability and latency."""
        started = time.perf_counter()
        try:
            async with self.engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            logger.exception("Database ping failed (%s)", self.backend)
            return {"status": "down", "backend": self.backend}
        latency_ms = (time.perf_counter() - started) * 1000
        return {
            "status": "up",
            "backend": self.backend,
            "latency_ms": round(latency_ms, 2),
        }

    async def dispose(self) -> None:
        await self.engine.dispose()
