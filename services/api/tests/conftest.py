"""Shared fixtures: SQLite-backed database and an HTTP client."""

import pytest
from httpx import ASGITransport, AsyncClient

from message_api import dependencies
from message_api.main import app
from message_api.settings import get_settings
from message_api.stores.postgres import close_db, create_tables, init_db


def _clear_caches() -> None:
    get_settings.cache_clear()
    dependencies.get_reply_locks.cache_clear()
    dependencies.get_message_service.cache_clear()
    dependencies.get_feed_service.cache_clear()


@pytest.fixture
async def db(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Fresh SQLite database per test."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'messages.db'}")
    _clear_caches()
    await init_db()
    await create_tables()
    yield
    await close_db()
    monkeypatch.delenv("DATABASE_URL")
    _clear_caches()


@pytest.fixture
async def client(db):
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
