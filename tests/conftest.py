"""
Employee Directory API - Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── repository:          fresh InMemoryDocumentRepository
    ├── branch_service:      BranchService over `repository`
    ├── employee_service:    EmployeeService over `repository` (404 on empty filters)
    ├── app:                 create_app(repository=repository)
    ├── test_client:         HTTPX AsyncClient bound to `app`
    ├── sample_branch:       valid branch create payload
    └── sample_employee:     valid employee create payload (JSON field names)
"""

import os

# Override settings for testing BEFORE any application imports
os.environ["APP_ENV"] = "test"
os.environ["DOCUMENT_STORE"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["EMPTY_FILTER_RAISES_NOT_FOUND"] = "true"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from employee_directory.main import create_app
from employee_directory.repositories.memory import InMemoryDocumentRepository
from employee_directory.services.branch_service import BranchService
from employee_directory.services.employee_service import EmployeeService


# ══════════════════════════════════════════════════════════════════════════
# Storage & Services
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def repository():
    """A new empty in-memory store per test; nothing leaks between tests."""
    return InMemoryDocumentRepository(timeout=1.0)


@pytest.fixture
def branch_service(repository):
    return BranchService(repository)


@pytest.fixture
def employee_service(repository):
    return EmployeeService(repository, empty_filter_raises_not_found=True)


# ══════════════════════════════════════════════════════════════════════════
# Sample payloads
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_branch():
    return {
        "name": "Winnipeg Branch",
        "address": "1300 Joe St",
        "phone": "204-456-0022",
    }


@pytest.fixture
def sample_employee():
    return {
        "name": "Alice Johnson",
        "position": "Branch Manager",
        "department": "Management",
        "email": "alice.johnson@pixell-river.com",
        "phone": "604-555-0148",
        "branchId": "1",
    }


# ══════════════════════════════════════════════════════════════════════════
# HTTP
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(repository):
    return create_app(repository=repository)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    ASGITransport does not run the lifespan; the repository is injected
    through create_app() instead.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
