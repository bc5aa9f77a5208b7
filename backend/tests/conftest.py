"""
Influencer Network Backend: Test Configuration (conftest.py)
=============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set before any application import so the
       engine, settings and file storage point at a throwaway directory.
       Each test gets freshly created tables in a SQLite file database.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── database: creates all tables, drops them afterwards
    ├── db_session: AsyncSession on the test database
    ├── app / client: new FastAPI app and HTTPX AsyncClient per test
    ├── make_user / headers_for: persisted users and their bearer headers
    ├── admin_user / staff_user (+ admin_headers / staff_headers)
    ├── mock_db_session: AsyncMock session for pure unit tests
    ├── temp_storage: temporary directory for file operations
    └── sample_image_bytes: tiny PNG payload for upload tests
"""

import os
import tempfile

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before influencer_network is imported anywhere
_TEST_DIR = tempfile.mkdtemp(prefix="influencer_network_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["STORAGE_ROOT"] = os.path.join(_TEST_DIR, "storage")
os.environ["JWT_SECRET"] = "test-jwt-secret-with-at-least-32-characters"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"
os.environ["USER_RATE_LIMIT_REQUESTS"] = "10000"
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)

from typing import Callable, Dict  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from influencer_network.database import Base, async_session_factory, engine  # noqa: E402
from influencer_network.main import create_app  # noqa: E402
from influencer_network.models.enums import UserRole  # noqa: E402
from influencer_network.models.user import User  # noqa: E402
from influencer_network.security import create_access_token, hash_password  # noqa: E402

TEST_PASSWORD = "password123"


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database():
    """Create every table before the test and drop them afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session(database):
    """
    A session on the test database for service-level tests.

    Services only flush, so nothing is committed unless a test does it.
    """
    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.get.return_value = None
        with pytest.raises(NotFoundError):
            await client_service.get_client(mock_db_session, uuid4())
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Users & Tokens
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_user(database) -> Callable:
    """
    Factory that persists a user in its own committed session.

    Usage:
        user = await make_user(role="admin", email="boss@example.com")
    """
    counter = {"n": 0}

    async def _make(
        role: str = UserRole.USER.value,
        email: str = None,
        password: str = TEST_PASSWORD,
        is_active: bool = True,
        is_email_verified: bool = True,
        first_name: str = "Test",
        last_name: str = "User",
    ) -> User:
        counter["n"] += 1
        user = User(
            email=(email or f"user{counter['n']}@example.com").lower(),
            password_hash=hash_password(password, rounds=4),
            role=role,
            is_active=is_active,
            is_email_verified=is_email_verified,
        )
        user.set_names(first_name, last_name)
        async with async_session_factory() as session:
            session.add(user)
            await session.commit()
        return user

    return _make


@pytest.fixture
def headers_for() -> Callable[[User], Dict[str, str]]:
    def _headers(user: User) -> Dict[str, str]:
        token = create_access_token(user.id, user.email, user.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def admin_user(make_user) -> User:
    return await make_user(role=UserRole.ADMIN.value, email="admin@example.com", first_name="Ada")


@pytest_asyncio.fixture
async def staff_user(make_user) -> User:
    return await make_user(role=UserRole.MANAGER.value, email="manager@example.com", first_name="Max")


@pytest.fixture
def admin_headers(admin_user, headers_for) -> Dict[str, str]:
    return headers_for(admin_user)


@pytest.fixture
def staff_headers(staff_user, headers_for) -> Dict[str, str]:
    return headers_for(staff_user)


# ══════════════════════════════════════════════════════════════════════════
# HTTP
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app():
    """A fresh application, so rate-limit state never leaks between tests."""
    return create_app()


@pytest_asyncio.fixture
async def client(app, database):
    """
    HTTPX AsyncClient wired straight into the ASGI app.

    raise_app_exceptions=False lets tests observe the 500 error envelope
    instead of the re-raised exception.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


# ══════════════════════════════════════════════════════════════════════════
# Files
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def temp_storage(tmp_path):
    """A fresh storage root for each test (cleaned up by pytest)."""
    storage_dir = tmp_path / "storage"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def sample_image_bytes():
    """PNG signature plus a few bytes; only extension and size are validated."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
