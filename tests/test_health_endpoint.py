"""Test health endpoints"""

import httpx
import pytest

from event_signup.main import app


class TestHealthEndpoint:
    """Test health endpoint is accessible"""

    @pytest.mark.asyncio
    async def test_health_endpoint(self):
        """Test that the health endpoint is accessible"""
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "event-signup"

    def test_detailed_health(self, client):
        """Database and Redis checks pass against the test backends"""
        response = client.get("/health/detailed")

        assert response.status_code == 200
        checks = response.json()["checks"]
        assert checks == {"database": "healthy", "redis": "healthy"}
