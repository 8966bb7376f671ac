"""
Shared pytest fixtures for the automation API test suite.

Scenario suites talk to the API over real HTTP.  By default that API is
the in-memory stub served on a background thread; exporting
``TEST_API_BASE_URL`` points the same tests at a live host instead.

Each test acquires its own token (no caching across tests), builds an
explicit ``Session`` and clears the resource it exercises before acting,
so every scenario starts from an empty collection.

Key Concepts Demonstrated:
- Session-scoped target resolution shared by every scenario
- Function-scoped tokens and cleanup for test isolation
- Parametrised fixtures running one scenario against both resources
"""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest

# Set testing environment before importing the stub
os.environ.setdefault("API_TEST_ENV", "testing")

from automation_client import (
    COMPANIES,
    EMPLOYEES,
    RESOURCES,
    ResourceClient,
    Session,
    open_session,
)
from automation_stub import create_app
from config import Config, get_config
from shared.live_api import api_base_url as resolve_api_base_url
from shared.test_helpers import INVALID_TOKEN


# -----------------------------------------------------------------------------
# Target Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def api_config() -> type[Config]:
    """
    Provide the configuration matching the API under test.

    Returns:
        LiveConfig when TEST_API_BASE_URL is set, TestingConfig otherwise.
    """
    return get_config("live" if os.getenv("TEST_API_BASE_URL") else "testing")


@pytest.fixture(scope="session")
def stub_app():
    """Create the stub application once for the test session."""
    return create_app("testing")


@pytest.fixture(scope="session")
def api_base_url(stub_app) -> Generator[str, None, None]:
    """Yield the base URL of the live host or of the locally served stub."""
    yield from resolve_api_base_url(
        stub_app=stub_app,
        host=stub_app.config["STUB_HOST"],
        port=stub_app.config["STUB_PORT"],
    )


@pytest.fixture
def stub_client():
    """
    Provide a Flask test client for a fresh, empty stub app.

    Used by tests that exercise the stub directly without a server.
    """
    application = create_app("testing")
    with application.test_client() as test_client:
        yield test_client


# -----------------------------------------------------------------------------
# Session Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def session(api_base_url, api_config) -> Session:
    """
    Acquire a fresh token for this test and wrap it in a Session.

    Returns:
        Session bound to the API under test.
    """
    return open_session(
        api_base_url,
        api_config.credentials(),
        timeout=api_config.REQUEST_TIMEOUT,
    )


@pytest.fixture
def invalid_session(session) -> Session:
    """Provide a session presenting a token the server must reject."""
    return session.with_token(INVALID_TOKEN)


# -----------------------------------------------------------------------------
# Resource Client Fixtures
# -----------------------------------------------------------------------------

def _cleared_client(session: Session, resource: str) -> ResourceClient:
    """Build a client and delete every existing record of its resource."""
    client = ResourceClient(session, resource)
    client.clear()
    return client


@pytest.fixture(params=RESOURCES)
def resource_client(request, session) -> ResourceClient:
    """
    Provide a client for each resource with an empty remote collection.

    Tests using this fixture run once for companies and once for employees.
    """
    return _cleared_client(session, request.param)


@pytest.fixture
def companies(session) -> ResourceClient:
    """Provide a companies client with an empty remote collection."""
    return _cleared_client(session, COMPANIES)


@pytest.fixture
def employees(session) -> ResourceClient:
    """Provide an employees client with an empty remote collection."""
    return _cleared_client(session, EMPLOYEES)


@pytest.fixture
def record_prefix(resource_client) -> str:
    """Name prefix matching the resource, e.g. ``Company`` or ``Employee``."""
    return {COMPANIES: "Company", EMPLOYEES: "TestEmployee"}[resource_client.resource]
