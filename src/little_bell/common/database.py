"""Async storage engine for Little Bell (single serialized SQLite/SQL store)."""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from little_bell.common.config import LittleBellSettings, get_settings
from little_bell.common.exceptions import StorageFault
from little_bell.common.models import Base

# Import all model modules so Base.metadata is complete for create_all().
import little_bell.tenants.models  # noqa: F401
import little_bell.emails.models  # noqa: F401
import little_bell.events.models  # noqa: F401


def _ensure_sqlite_dir(db_url: str) -> None:
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite":
        return
    if not url.database or url.database == ":memory:":
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


class DatabaseManager:
    """Owns the engine and serializes every unit of work behind one lock.

    Each ``get_session()`` block is one atomic unit: it holds the lock for
    its whole duration and commits (or rolls back) before releasing it.
    """

    def __init__(self, settings: LittleBellSettings | None = None):
        self._settings = settings or get_settings()
        self.engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._lock = asyncio.Lock()

    async def init(self) -> None:
        url = self._settings.db_url
        try:
            _ensure_sqlite_dir(url)
            self.engine = create_async_engine(url, echo=False)
        except (OSError, SQLAlchemyError) as exc:
            raise StorageFault(f"Cannot open store {url!r}: {exc}") from exc
        self._session_factory = async_sessionmaker(
            self.engine, expire_on_commit=False
        )

    async def initialize(self) -> None:
        """Create tables and indexes if absent. Safe to call on every startup."""
        if self.engine is None:
            await self.init()
        async with self._lock:
            try:
                async with self.engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
            except (OSError, SQLAlchemyError) as exc:
                raise StorageFault(f"Schema creation failed: {exc}") from exc

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._session_factory is None:
            raise RuntimeError("DatabaseManager not initialized; call init() first")
        async with self._lock:
            async with self._session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except SQLAlchemyError as exc:
                    await session.rollback()
                    raise StorageFault(str(exc)) from exc
                except Exception:
                    await session.rollback()
                    raise

    async def close(self) -> None:
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self._session_factory = None
