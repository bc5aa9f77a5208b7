"""Health probe at /health and /api/health."""

from unittest.mock import AsyncMock, patch

import pytest

from influencer_network import __version__


class TestHealthCheck:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/health", "/api/health"])
    async def test_healthy(self, client, path):
        response = await client.get(path)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__
        assert body["uptimeSeconds"] >= 0

    @pytest.mark.asyncio
    async def test_degraded_when_database_unreachable(self, client):
        with patch("influencer_network.routes.health.check_database", new=AsyncMock(return_value=False)):
            response = await client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "degraded"
        assert body["database"] == "disconnected"
