"""Shared test fixtures for Little Bell."""

import pytest
from httpx import ASGITransport, AsyncClient

from little_bell.common.config import LittleBellSettings
from little_bell.common.database import DatabaseManager


BASE_URL = "http://localhost:3000"


def make_settings(**overrides) -> LittleBellSettings:
    defaults = {"db_url": "sqlite+aiosqlite://", "base_url": BASE_URL}
    defaults.update(overrides)
    return LittleBellSettings(**defaults)


@pytest.fixture
async def db():
    """Initialized in-memory storage engine."""
    manager = DatabaseManager(make_settings())
    await manager.initialize()
    yield manager
    await manager.close()


@pytest.fixture
def app(monkeypatch):
    """Create a test app with in-memory DB."""
    monkeypatch.setenv("LITTLE_BELL_DB_URL", "sqlite+aiosqlite://")
    monkeypatch.setenv("LITTLE_BELL_BASE_URL", BASE_URL)

    # Clear caches and singletons so new env vars take effect
    from little_bell.common.config import get_settings
    get_settings.cache_clear()

    from little_bell.deps import reset_singletons
    reset_singletons()

    from little_bell.app import create_app
    return create_app()


@pytest.fixture
async def client(app):
    # Manually init DB since ASGITransport doesn't run lifespan
    from little_bell.deps import get_db
    db = get_db()
    await db.initialize()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await db.close()
