import asyncio
import os
from contextlib import asynccontextmanager

# must be set before src.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./club_events.db")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.config.database import async_session_maker, drop_test_db, init_test_db  # noqa: E402
from src.events.testing import Seeder  # noqa: E402
from src.main import app  # noqa: E402
from src.models import BaseModel  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    asyncio.run(init_test_db(BaseModel.metadata))
    yield
    asyncio.run(drop_test_db(BaseModel.metadata))


@pytest.fixture
def client_factory():
    @asynccontextmanager
    async def factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest.fixture
async def client(client_factory):
    async with client_factory() as ac:
        yield ac


@pytest.fixture
async def db_session():
    """Session whose changes are rolled back after the test."""
    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def seed(db_session) -> Seeder:
    return Seeder(db_session)
