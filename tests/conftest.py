"""Shared pytest fixtures for apikit test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _reset_api_settings() -> Generator[None, None, None]:
    """Keep environment-derived settings isolated between tests."""
    from apikit.core.config import get_api_settings

    get_api_settings.cache_clear()
    yield
    get_api_settings.cache_clear()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Provide a test client for the reference application."""
    from apikit.core.config import ApiSettings
    from apikit.main import create_app

    app = create_app(ApiSettings(debug=False, fail_status=422, fail_code=None))
    with TestClient(app) as test_client:
        yield test_client
