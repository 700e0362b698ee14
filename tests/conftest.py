"""
Test Configuration
==================

Pytest configuration with fixtures for settings, fake renderers and the
FastAPI test client.
"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from pydantic_settings import SettingsConfigDict

from html2image.api.main import create_app
from html2image.config.settings import Settings
from html2image.core.handler import RenderHandler

from tests.utils.mocks import FakeRenderer


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    debug: bool = True
    log_level: str = "DEBUG"

    model_config = SettingsConfigDict(env_file=None, env_prefix="HTML2IMAGE_TEST_")


@pytest.fixture
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    """Renderer that never launches a browser."""
    return FakeRenderer()


@pytest.fixture
def handler(test_settings: TestSettings, fake_renderer: FakeRenderer) -> RenderHandler:
    """Render handler wired to the fake renderer."""
    return RenderHandler(settings=test_settings, renderer=fake_renderer)


@pytest.fixture
def fastapi_client(
    test_settings: TestSettings, fake_renderer: FakeRenderer
) -> Generator[TestClient, None, None]:
    """FastAPI test client."""
    app = create_app(settings=test_settings, renderer=fake_renderer)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def sample_html() -> str:
    """Small HTML document."""
    return "<html><body><h1>Hello</h1><p>World</p></body></html>"
