"""
Pytest configuration and fixtures for the Quizora auth API tests.

Environment variables are set before anything under ``backend`` is
imported, because settings and the database engine are created at import
time.
"""
import os
import tempfile

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

_TEST_DB_DIR = tempfile.mkdtemp(prefix="quizora-tests-")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DB_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "60"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["CORS_ORIGINS"] = "http://localhost:3000"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"


@pytest_asyncio.fixture
async def fresh_db():
    """Drop and recreate every table."""
    from backend.app.db import init_models
    await init_models(drop=True)
    yield


@pytest_asyncio.fixture
async def db_session(fresh_db):
    from backend.app.db.session import AsyncSessionLocal
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
def test_app():
    from backend.app.main import app
    return app


@pytest_asyncio.fixture
async def client(fresh_db, test_app):
    """
    Async client bound to the ASGI app.

    raise_app_exceptions=False so unhandled errors come back as the 500
    response the app renders, as a real client would see them.
    """
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register_payload():
    return {
        "name": "Integration Test User",
        "msisdn": "01712345678",
        "password": "password123",
    }


@pytest.fixture
def login_payload(register_payload):
    return {
        "msisdn": register_payload["msisdn"],
        "password": register_payload["password"],
    }
