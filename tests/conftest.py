import os

# Must be set before the application settings are loaded
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FORMAT", "console")

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.engine import Engine

from users_api.database import build_engine, get_engine
from users_api.main import app
from users_api.models import metadata
from users_api.services.user_service import UserService

# In-memory database shared by every worker thread
test_engine = build_engine("sqlite://")


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """Create the users table for one test and drop it afterwards."""
    metadata.drop_all(test_engine)
    metadata.create_all(test_engine)

    yield test_engine

    metadata.drop_all(test_engine)


@pytest.fixture
def user_service(db_engine: Engine) -> UserService:
    return UserService(db_engine)


@pytest_asyncio.fixture
async def client(db_engine: Engine) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    app.dependency_overrides[get_engine] = lambda: db_engine

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_user_data() -> dict:
    """Sample user payload for testing."""
    return {
        "first_name": "John",
        "last_name": "Doe",
        "email": "j@x.com",
    }
