"""
Fixtures for integration tests.

The application fixture runs the real lifespan against a file store in a
temporary directory. PostgreSQL fixtures skip when no database is reachable.
"""

from collections.abc import Generator
from pathlib import Path

import psycopg
import pytest
from fastapi.testclient import TestClient
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.api.dependencies import get_notifier
from src.api.main import app
from src.config.settings import get_settings
from tests.support import RecordingNotifier


@pytest.fixture
def app_notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def client(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, app_notifier: RecordingNotifier
) -> Generator[TestClient, None, None]:
    """Test client for the full application over a temporary account file."""
    monkeypatch.setenv("STORE_BACKEND", "file")
    monkeypatch.setenv("ACCOUNTS_FILE", str(tmp_path / "users.json"))
    monkeypatch.setenv("BCRYPT_COST", "4")
    get_settings.cache_clear()
    app.dependency_overrides[get_notifier] = lambda: app_notifier

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    get_settings.cache_clear()


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Connection pool for PostgreSQL tests; skips when the database is down."""
    settings = get_settings()
    try:
        with psycopg.connect(settings.database_url, connect_timeout=2):
            pass
    except psycopg.OperationalError:
        pytest.skip("PostgreSQL not reachable")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> None:
    """Clean accounts table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM accounts")
        conn.commit()
