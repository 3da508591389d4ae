"""Tests for health endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from message_api import dependencies
from message_api.main import app
from message_api.settings import get_settings
from message_api.stores.postgres import close_db, init_db


@pytest.fixture
async def bare_client():
    """Client without a database behind it."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.mark.asyncio
async def test_health_check(bare_client: AsyncClient):
    """Test health endpoint returns ok."""
    response = await bare_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_store_unavailable_is_503(bare_client: AsyncClient):
    """Without an initialized database, store calls surface as 503."""
    response = await bare_client.get("/message")
    assert response.status_code == 503
    assert response.json()["error"]["code"] == "STORE_UNAVAILABLE"


@pytest.fixture
async def unreachable_db(monkeypatch: pytest.MonkeyPatch):
    """Engine pointed at a port where nothing listens."""
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@127.0.0.1:1/messages")
    get_settings.cache_clear()
    dependencies.get_message_service.cache_clear()
    await init_db()
    yield
    await close_db()
    monkeypatch.delenv("DATABASE_URL")
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_refused_connection_is_503(unreachable_db, bare_client: AsyncClient):
    """A database that refuses connections surfaces as 503, not 500."""
    response = await bare_client.get("/message")
    assert response.status_code == 503
    assert response.json()["error"]["code"] == "STORE_UNAVAILABLE"

    response = await bare_client.post("/message", json={"text": "hi"})
    assert response.status_code == 503
