# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Every test gets its own empty store and an app built around it, so no
# records leak between tests.
# =============================================================================

import pytest
from fastapi.testclient import TestClient

from locallibrary.config import Settings
from locallibrary.main import create_app
from locallibrary.storage import CatalogStore


@pytest.fixture
def store():
    """A fresh, empty in-memory store."""
    return CatalogStore()


@pytest.fixture
def app(store):
    return create_app(Settings(), store=store)


@pytest.fixture
def client(app):
    """Test client that reports redirects instead of following them."""
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
