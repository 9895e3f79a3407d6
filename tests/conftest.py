"""Pytest configuration and shared fixtures."""

import os

# app.config reads the environment at import time
os.environ.setdefault("SCREENSHOTONE_ACCESS_KEY", "test-access-key")
os.environ.setdefault("SCREENSHOTONE_SECRET_KEY", "test-secret-key")

from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient
from screenshotone import Client

from app import main
from app.config import Settings
from app.screenshot_service import ScreenshotService

ACCESS_KEY = "test-access-key"
SECRET_KEY = "test-secret-key"
EXAMPLE_URL = "https://example.com"


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def settings(monkeypatch) -> Settings:
    """Settings with ScreenshotOne credentials and a known example URL."""
    monkeypatch.setenv("SCREENSHOTONE_ACCESS_KEY", ACCESS_KEY)
    monkeypatch.setenv("SCREENSHOTONE_SECRET_KEY", SECRET_KEY)
    monkeypatch.setenv("SCREENSHOT_EXAMPLE_URL", EXAMPLE_URL)
    return Settings()


@pytest.fixture
def unconfigured_settings(monkeypatch) -> Settings:
    """Settings without ScreenshotOne credentials."""
    monkeypatch.delenv("SCREENSHOTONE_ACCESS_KEY", raising=False)
    monkeypatch.delenv("SCREENSHOTONE_SECRET_KEY", raising=False)
    monkeypatch.setenv("SCREENSHOT_EXAMPLE_URL", EXAMPLE_URL)
    return Settings()


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def service(settings: Settings) -> ScreenshotService:
    """Screenshot service with a lazily created client."""
    return ScreenshotService(settings=settings)


@pytest.fixture
def sdk_client() -> Client:
    """A real ScreenshotOne client; signing never touches the network."""
    return Client(ACCESS_KEY, SECRET_KEY)


@pytest.fixture
def api_client(monkeypatch, service: ScreenshotService) -> TestClient:
    """HTTP client for the FastAPI app backed by the test service."""
    monkeypatch.setattr(main, "screenshot_service", service)
    return TestClient(main.app)


# ============================================================================
# Helper Functions
# ============================================================================


def query_of(url: str) -> dict:
    """Flatten a signed URL's query into a {name: value} dict."""
    return {name: values[-1] for name, values in parse_qs(urlparse(url).query).items()}


@pytest.fixture
def parse_query():
    """Fixture that provides the query_of helper."""
    return query_of
