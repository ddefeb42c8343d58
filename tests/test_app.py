"""
Employee Directory API - Application Wiring Tests
==================================================

What we test:
    ✅ /health and / respond without touching the store
    ✅ Middleware headers: request id, advisory rate limit, security headers
    ✅ CORS policy per environment
    ✅ OpenAPI document and Swagger UI location
    ✅ Lifespan builds, initializes and closes the repository
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from employee_directory.config import Settings
from employee_directory.main import create_app, lifespan
from employee_directory.middleware.logging import level_for_status
from employee_directory.repositories.memory import InMemoryDocumentRepository

API = "/api/v1"


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["uptime"] >= 0
        assert body["timestamp"]
        assert body["version"] == "1.0.0"

    @pytest.mark.asyncio
    async def test_root_greeting(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.text == "Welcome Client"


class TestMiddleware:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get(f"{API}/branches")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get(f"{API}/branches", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_rate_limit_headers_are_advisory(self, repository):
        config = Settings(rate_limit_requests=10, rate_limit_window=60)
        app = create_app(repository=repository, config=config)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            responses = [await client.get(f"{API}/branches") for _ in range(12)]

        assert all(r.status_code == 200 for r in responses)
        assert responses[0].headers["X-RateLimit-Limit"] == "10"
        assert responses[0].headers["X-RateLimit-Remaining"] == "9"
        assert responses[-1].headers["X-RateLimit-Remaining"] == "0"
        assert int(responses[-1].headers["X-RateLimit-Reset"]) <= 61

    @pytest.mark.asyncio
    async def test_security_headers(self, test_client):
        response = await test_client.get(f"{API}/branches")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert "Strict-Transport-Security" in response.headers

    @pytest.mark.asyncio
    async def test_access_log_line(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="employee_directory.access"):
            await test_client.get(f"{API}/branches")
            await test_client.get("/health")

        lines = [r.getMessage() for r in caplog.records if r.name == "employee_directory.access"]
        assert len(lines) == 1
        assert lines[0].startswith("GET /api/v1/branches 200")

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (201, logging.INFO), (404, logging.WARNING), (503, logging.ERROR)],
    )
    def test_log_level_by_status_class(self, status, level):
        assert level_for_status(status) == level


class TestCors:

    @pytest.mark.asyncio
    async def test_development_allows_any_origin(self, repository):
        app = create_app(repository=repository, config=Settings(app_env="development"))
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get(f"{API}/branches", headers={"Origin": "http://anything.example"})

        assert response.headers["access-control-allow-origin"] == "http://anything.example"
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.asyncio
    async def test_production_restricts_origins(self, repository):
        config = Settings(app_env="production", allowed_origins="https://hr.example.com")
        app = create_app(repository=repository, config=config)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            allowed = await client.options(
                f"{API}/branches",
                headers={"Origin": "https://hr.example.com", "Access-Control-Request-Method": "POST"},
            )
            refused = await client.get(f"{API}/branches", headers={"Origin": "https://evil.example"})

        assert allowed.headers["access-control-allow-origin"] == "https://hr.example.com"
        assert allowed.headers["access-control-max-age"] == "36000"
        assert "access-control-allow-origin" not in refused.headers


class TestOpenApi:

    @pytest.mark.asyncio
    async def test_openapi_document(self, test_client):
        response = await test_client.get("/openapi.json")

        assert response.status_code == 200
        document = response.json()
        assert document["info"]["title"] == "Employee Directory & Branch Management API Documentation"
        assert document["components"]["securitySchemes"]["bearerAuth"]["scheme"] == "bearer"
        assert "/api/v1/employee/department/{departmentName}" in document["paths"]

        create = document["paths"]["/api/v1/branches"]["post"]
        assert "requestBody" in create
        get_one = document["paths"]["/api/v1/branches/{id}"]["get"]
        assert [p["name"] for p in get_one["parameters"]] == ["id"]

    @pytest.mark.asyncio
    async def test_swagger_ui(self, test_client):
        response = await test_client.get("/api-docs")
        assert response.status_code == 200
        assert "swagger" in response.text.lower()

    @pytest.mark.asyncio
    async def test_bearer_token_not_required(self, test_client):
        response = await test_client.get(f"{API}/branches")
        assert response.status_code == 200


class TestLifespan:

    @pytest.mark.asyncio
    async def test_injected_repository_initialized_and_closed(self):
        repository = InMemoryDocumentRepository()
        repository.initialize = AsyncMock()
        repository.close = AsyncMock()
        app = create_app(repository=repository, config=Settings(log_level="WARNING"))

        with patch("employee_directory.main.setup_logging"):
            async with lifespan(app):
                assert app.state.repository is repository
                repository.initialize.assert_awaited_once()

        repository.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_repository_built_from_settings(self):
        app = create_app(config=Settings(document_store="memory", log_level="WARNING"))

        with patch("employee_directory.main.setup_logging"):
            async with lifespan(app):
                assert isinstance(app.state.repository, InMemoryDocumentRepository)
