"""Tests for the Database pool wrapper."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from core.db import Database, _sanitize_database_url


def test_sanitize_strips_sslmode():
    url = "postgresql://u:p@localhost:5432/stars?sslmode=disable&application_name=api"

    assert _sanitize_database_url(url) == "postgresql://u:p@localhost:5432/stars?application_name=api"


def test_sanitize_leaves_plain_url():
    url = "postgresql://u:p@localhost/stars"

    assert _sanitize_database_url(url) == url


def test_pool_before_connect_raises():
    db = Database("postgresql://localhost/stars")

    with pytest.raises(RuntimeError):
        db.pool


@pytest.fixture
def fake_pool():
    pool = MagicMock()
    pool.fetchval = AsyncMock(return_value=1)
    pool.fetch = AsyncMock(return_value=[{"id": 1, "name": "Vega"}])
    pool.close = AsyncMock()
    return pool


@pytest.mark.asyncio
async def test_connect_pings_and_fetches(fake_pool):
    db = Database("postgresql://localhost/stars?sslmode=disable")

    with patch("core.db.asyncpg.create_pool", AsyncMock(return_value=fake_pool)) as create_pool:
        await db.connect()

    create_pool.assert_awaited_once_with(
        dsn="postgresql://localhost/stars",
        min_size=1,
        max_size=5,
        command_timeout=30,
    )
    fake_pool.fetchval.assert_awaited_once_with("SELECT 1")

    rows = await db.fetch_all("SELECT $1", 7)
    assert rows == [{"id": 1, "name": "Vega"}]
    fake_pool.fetch.assert_awaited_once_with("SELECT $1", 7)

    await db.close()
    await db.close()
    fake_pool.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_connect_failed_ping_closes_pool(fake_pool):
    fake_pool.fetchval.side_effect = OSError("connection refused")
    db = Database("postgresql://localhost/stars")

    with patch("core.db.asyncpg.create_pool", AsyncMock(return_value=fake_pool)):
        with pytest.raises(OSError):
            await db.connect()

    fake_pool.close.assert_awaited_once()
    with pytest.raises(RuntimeError):
        db.pool
