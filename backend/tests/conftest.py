"""Pytest configuration and fixtures.

Provides fixtures for:
- Settings override for testing
- Content score service configured from test settings
- FastAPI test clients
- Sample article HTML
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings, get_settings
from app.services import content_score as content_score_module
from app.services.content_score import ContentScoreService

TEST_SITE_HOST = "blog.example.com"

# ---------------------------------------------------------------------------
# Settings Fixtures
# ---------------------------------------------------------------------------


def get_test_settings() -> Settings:
    """Get test settings with no artificial delay."""
    return Settings(
        app_name="Test App",
        app_version="0.0.1",
        debug=True,
        environment="test",
        log_level="DEBUG",
        log_format="text",
        site_hostnames=[TEST_SITE_HOST],
        score_simulated_delay_ms=0,
        score_batch_max_items=5,
    )


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Session-scoped test settings."""
    return get_test_settings()


# ---------------------------------------------------------------------------
# Service Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def score_service(test_settings: Settings) -> ContentScoreService:
    """Service built from test settings."""
    return ContentScoreService.from_settings(test_settings)


@pytest.fixture(autouse=True)
def content_score_singleton(
    score_service: ContentScoreService,
) -> Generator[ContentScoreService, None, None]:
    """Point the global service singleton at the test service."""
    original = content_score_module._content_score_service
    content_score_module._content_score_service = score_service
    yield score_service
    content_score_module._content_score_service = original


# ---------------------------------------------------------------------------
# FastAPI Test Client Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def app():
    """Create FastAPI app for testing."""
    from app.main import create_app

    return create_app()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create synchronous test client with test settings."""
    # Override settings
    app.dependency_overrides[get_settings] = get_test_settings

    # Use Starlette TestClient (handles ASGI app internally)
    test_client = TestClient(app)
    yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for testing async endpoints."""
    # Override settings
    app.dependency_overrides[get_settings] = get_test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Content Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_article() -> str:
    """A well-formed article touching most metrics."""
    intro = (
        "Coffee brewing at home rewards patience. This guide explains how "
        "grind size, water temperature and timing change the flavour of every "
        "cup you make, and how Blue Bottle and Stumptown roasters approach it."
    )
    return (
        "<h1>7 Coffee Brewing Tips</h1>"
        f"<p>{intro}</p>"
        "<h2>Grind size</h2>"
        "<p>Use a burr grinder. <a href=\"/guides/grinders\">Grinders</a></p>"
        "<h2>Water</h2>"
        "<h3>Temperature</h3>"
        "<p>Keep water just off the boil. <a href=\"/guides/water\">Water</a> "
        "<a href=\"https://blog.example.com/kettles\">Kettles</a> "
        "<a href=\"https://en.wikipedia.org/wiki/Coffee\">Coffee</a></p>"
        "<img src=\"a.jpg\" alt=\"coffee beans\">"
        "<img src=\"b.jpg\" alt=\"\">"
    )

