"""
Tests de integración para los endpoints de estado
"""
import pytest
from httpx import AsyncClient

from kontaflow.core.settings import settings


@pytest.mark.integration
class TestHealthEndpoints:

    async def test_root(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == settings.PROJECT_NAME
        assert body["status"] == "running"
        assert body["docs"] == "/api/docs"

    async def test_health_check(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "database": "connected",
            "version": settings.VERSION,
            "environment": "testing"
        }

    async def test_unknown_route(self, client: AsyncClient):
        response = await client.get("/api/unknown")

        assert response.status_code == 404
