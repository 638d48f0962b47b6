import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from roi_api.config import Settings
from roi_api.database import Database
from roi_api.main import create_app


@pytest.fixture
def db_url(tmp_path):
    """A throwaway SQLite file per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def make_settings(monkeypatch, db_url):
    def _make(**env):
        monkeypatch.setenv("DATABASE_URL", db_url)
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return Settings()
    return _make


@pytest.fixture
def client(make_settings):
    """Client for a freshly created and seeded app.

    Entering the client runs the lifespan, so tables and seed data exist
    before the first request.
    """
    app = create_app(make_settings())
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def session(db_url):
    """Session on an empty schema (no seed data)."""
    db = Database(db_url)
    await db.create_tables()
    async with db.session() as s:
        yield s
    await db.dispose()
