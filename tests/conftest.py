"""
Shared fixtures: an app wired to an in-memory SQLite database.
"""

import httpx
import pytest
import pytest_asyncio

from config.settings import Settings
from database.session import init_schema
from main import create_app

TEST_SECRET = "test-secret-test-secret-test-secret"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        connection_str="sqlite+aiosqlite://",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture
async def app(settings):
    application = create_app(settings)
    await init_schema(application.state.engine)
    yield application
    await application.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def db(app):
    async with app.state.session_factory() as session:
        yield session
