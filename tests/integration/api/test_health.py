"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_200(self, client: AsyncClient) -> None:
        """Test that health endpoint returns 200 OK."""
        response = await client.get("/health")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_health_returns_correct_structure(self, client: AsyncClient) -> None:
        """Test that health endpoint returns expected structure."""
        response = await client.get("/health")
        data = response.json()

        assert "status" in data
        assert "version" in data
        assert "timestamp" in data
        assert "environment" in data

    @pytest.mark.asyncio
    async def test_health_status_is_healthy(self, client: AsyncClient) -> None:
        """Test that health status is 'healthy'."""
        response = await client.get("/health")
        data = response.json()

        assert data["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_health_does_not_require_auth(self, client: AsyncClient) -> None:
        """Health is reachable without an Authorization header."""
        response = await client.get("/health")

        assert response.status_code != 401


class TestDetailedHealthEndpoint:
    """Tests for the detailed health check endpoint."""

    @pytest.mark.asyncio
    async def test_reports_database_status(self, client: AsyncClient) -> None:
        response = await client.get("/health/detailed")
        data = response.json()

        assert response.status_code == 200
        assert data["database"] == "healthy"
        assert data["schema_ready"] is True
        assert data["status"] == "healthy"


class TestSecurityHeaders:
    @pytest.mark.asyncio
    async def test_responses_carry_request_id_and_security_headers(
        self, client: AsyncClient
    ) -> None:
        response = await client.get("/health")

        assert response.headers["x-request-id"]
        assert response.headers["x-content-type-options"] == "nosniff"
