"""Pytest fixtures for API tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from core.db import Database
from core.settings import Settings
from main import create_app


@pytest.fixture
def mock_db():
    """Create a mock Database with no rows."""
    db = MagicMock(spec=Database)
    db.connect = AsyncMock()
    db.close = AsyncMock()
    db.fetch_all = AsyncMock(return_value=[])
    return db


@pytest.fixture
def client(mock_db):
    """Create a test client backed by the mock database."""
    app = create_app(settings=Settings(), database=mock_db)
    with TestClient(app) as test_client:
        yield test_client
