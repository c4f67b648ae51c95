"""
DatabaseManager — Async connection management for the options API.

Key design decisions:
- NullPool: each request opens/closes its own connection, so engines can
  be shared safely between the uvicorn loop and short-lived scripts.
- Lazy engine: created on first use, not at import time.
- ``configure(url)`` swaps the target database (tests, seeding scripts).
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from dependent_filter.core.config import settings


Base = declarative_base()


def _engine_kwargs(url: str) -> dict:
    kwargs = {"poolclass": NullPool}
    if url.startswith("mysql"):
        kwargs["connect_args"] = {"charset": "utf8mb4"}
    return kwargs


class DatabaseManager:
    """
    Centralised database connection manager.

    Responsibilities:
    - One async engine for the configured ``DATABASE_URL``.
    - Context-managed sessions with auto-commit/rollback.
    - Schema creation for the demo / test databases.
    """

    def __init__(self, url: Optional[str] = None) -> None:
        self._url = url or settings.DATABASE_URL
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(
                self._url,
                echo=settings.DEBUG,
                **_engine_kwargs(self._url),
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._session_factory

    def configure(self, url: str) -> None:
        """Point the manager at another database; engines are rebuilt lazily."""
        self._url = url
        self._engine = None
        self._session_factory = None

    # ─────────────────────────────────────────────────────────────
    #  SESSION CONTEXT MANAGER
    # ─────────────────────────────────────────────────────────────

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    # ─────────────────────────────────────────────────────────────
    #  SCHEMA / CLEANUP
    # ─────────────────────────────────────────────────────────────

    async def create_all(self) -> None:
        """Create every table registered on ``Base``."""
        # Models must be imported so their tables are on the metadata.
        import dependent_filter.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """Dispose of the engine on shutdown."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None


# ── Global singleton ─────────────────────────────────────────────
db_manager = DatabaseManager()


# ── FastAPI dependency injection ─────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI Depends() for the configured database."""
    async with db_manager.get_session() as session:
        yield session
