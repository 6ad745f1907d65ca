"""
Pytest configuration and fixtures for utapi tests.

No test talks to the real UploadThing API: HTTP traffic is served by
httpx.MockTransport handlers defined in each test.
"""
import sys
from pathlib import Path
from typing import Callable

import httpx
import pytest

# Add package root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tests.utils.test_helpers import TEST_API_KEY
from utapi.client import UTApi
from utapi.config import Settings, get_settings


# ============================================
# Test Fixtures
# ============================================

@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Keep the cached settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a test secret, ignoring any local .env file."""
    return Settings(UPLOADTHING_SECRET=TEST_API_KEY, _env_file=None)


@pytest.fixture
def captured() -> list[httpx.Request]:
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def make_api(captured) -> Callable[..., UTApi]:
    """Factory for a UTApi whose requests go to ``handler``.

    Every request is appended to ``captured`` before the handler runs.
    """
    clients: list[UTApi] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> UTApi:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return handler(request)

        kwargs.setdefault("api_key", TEST_API_KEY)
        api = UTApi(transport=httpx.MockTransport(recording_handler), **kwargs)
        clients.append(api)
        return api

    yield _make

    for api in clients:
        api.close()


@pytest.fixture
def presigned_payload() -> dict:
    """A presigned POST entry as returned by /v6/uploadFiles."""
    return {
        "key": "abc123-report.pdf",
        "fileName": "report.pdf",
        "fileType": "application/pdf",
        "fileUrl": "https://utfs.io/f/abc123-report.pdf",
        "contentDisposition": "inline",
        "pollingJwt": "eyJhbGciOiJIUzI1NiJ9.e30.sig",
        "pollingUrl": "https://api.uploadthing.com/v6/pollUpload/abc123-report.pdf",
        "customId": None,
        "url": "https://uploads.example.com/bucket",
        "fields": {
            "key": "abc123-report.pdf",
            "Content-Type": "application/pdf",
            "policy": "eyJleHBpcmF0aW9uIjoiMjAyNiJ9",
            "X-Amz-Signature": "deadbeef",
        },
    }


# ============================================
# Pytest Configuration
# ============================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "fast: Fast unit tests (no external API calls)"
    )
