import pytest
from unittest.mock import AsyncMock, patch
from httpx import AsyncClient

from app.core.config import settings


@pytest.mark.asyncio
async def test_health_check_endpoint_success(async_client: AsyncClient, monkeypatch):
    """
    Verify that /health returns 200 when the database answers.
    The ping is mocked so the test passes regardless of local env state.
    """
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "postgres")
    with patch("app.core.database.db.ping", new_callable=AsyncMock) as mock_db_ping:
        mock_db_ping.return_value = True

        response = await async_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"]["database"] == "connected"


@pytest.mark.asyncio
async def test_health_check_db_failure(async_client: AsyncClient, monkeypatch):
    """
    Verify that /health returns 503 if DB ping fails.
    """
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "postgres")
    with patch("app.core.database.db.ping", new_callable=AsyncMock) as mock_ping:
        mock_ping.return_value = False

        response = await async_client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["components"]["database"] == "disconnected"


@pytest.mark.asyncio
async def test_health_check_memory_backend(async_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "memory")

    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json()["components"]["storage"] == "memory"
