"""Pytest configuration and fixtures for backend tests.

Database selection:
- TEST_DATABASE_URL if set (e.g. a local PostgreSQL)
- testcontainers PostgreSQL when USE_TESTCONTAINERS=1 and Docker is available
- otherwise a temporary SQLite file through aiosqlite
"""

import os
import tempfile
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import NullPool

# Set test environment variables before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-at-least-32-characters"
os.environ.setdefault("LOG_LEVEL", "WARNING")

TEST_PASSWORD = "testpassword123"


# --- Database URL selection ---

_container = None
_database_url = None


def _try_testcontainers() -> str | None:
    """Try to start PostgreSQL using testcontainers.

    Returns database URL if successful, None otherwise.
    """
    try:
        from testcontainers.postgres import PostgresContainer
    except ImportError:
        return None

    global _container
    try:
        _container = PostgresContainer(
            image="postgres:16-alpine",
            username="test",
            password="test",
            dbname="household_test",
        )
        _container.start()
    except Exception as e:
        import warnings

        warnings.warn(f"Testcontainers not available: {e}", stacklevel=2)
        _container = None
        return None

    url = _container.get_connection_url()
    url = url.replace("postgresql+psycopg2://", "postgresql+asyncpg://")
    return url.replace("postgresql://", "postgresql+asyncpg://")


def _get_database_url() -> str:
    global _database_url

    if _database_url is not None:
        return _database_url

    explicit_url = os.environ.get("TEST_DATABASE_URL")
    if explicit_url:
        _database_url = explicit_url
        return _database_url

    if os.environ.get("USE_TESTCONTAINERS") == "1":
        container_url = _try_testcontainers()
        if container_url:
            _database_url = container_url
            return _database_url

    sqlite_dir = tempfile.mkdtemp(prefix="household-tests-")
    _database_url = f"sqlite+aiosqlite:///{sqlite_dir}/test.db"
    return _database_url


# Set DATABASE_URL for app imports
os.environ["DATABASE_URL"] = _get_database_url()


def pytest_sessionfinish(session, exitstatus):
    """Clean up testcontainers when tests finish."""
    global _container
    if _container:
        _container.stop()
        _container = None


# --- Database Fixtures ---


@pytest_asyncio.fixture
async def database():
    """Storage context with fresh tables for one test."""
    import household.models  # noqa: F401 - registers every table on Base.metadata
    from household.core import Base, Database

    db =Database(_get_database_url(), poolclass=NullPool)
    await db.create_all()

    yield db

    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing."""
    async with database.session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def app(database):
    """Application wired to the test storage context."""
    from household.core import get_settings
    from household.main import create_app

    return create_app(settings=get_settings(), database=database)


@pytest_asyncio.fixture
async def async_client(app, db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client sharing the test session."""
    from household.core import get_db

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# --- Test Factories ---


@pytest.fixture
def user_factory(db_session):
    """Factory for creating users directly in the database."""
    from household.models import User, UserRole
    from household.services.auth import hash_password

    async def _create_user(
        email: str = "user@example.com",
        password: str = TEST_PASSWORD,
        name: str = "Test User",
        role: UserRole = UserRole.USER,
    ) -> User:
        user = User(
            email=email,
            password_hash=hash_password(password),
            name=name,
            role=role,
        )
        db_session.add(user)
        await db_session.flush()
        await db_session.refresh(user)
        return user

    return _create_user


@pytest_asyncio.fixture
async def user(user_factory):
    return await user_factory()


@pytest_asyncio.fixture
async def admin_user(user_factory):
    from household.models import UserRole

    return await user_factory(email="admin@example.com", name="Admin", role=UserRole.ADMIN)


def _bearer(user) -> dict[str, str]:
    from household.services.auth import create_access_token

    token = create_access_token(user.id, user.role, user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(user) -> dict[str, str]:
    """Authorization headers for a regular user."""
    return _bearer(user)


@pytest.fixture
def admin_headers(admin_user) -> dict[str, str]:
    """Authorization headers for an admin."""
    return _bearer(admin_user)


@pytest.fixture
def user_password() -> str:
    """Plaintext password of users created by ``user_factory``."""
    return TEST_PASSWORD
