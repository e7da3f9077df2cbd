"""Shared test fixtures and utilities for all tests."""
import asyncio
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from dependency_injector import providers
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.app.containers import Container, WIRED_MODULES
from src.client import OnboardingClient
from src.shared.auth.supabase_auth import Session
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork
from tests.mocks import MockSessionProvider, MockWelcomeNotifier

OPERATOR_TOKEN = "operator-token"


@pytest.fixture
def async_db_url(tmp_path):
    """
    SQLite database file for the test.
    Function-scoped so every test starts from an empty file.
    """
    return f"sqlite+aiosqlite:///{tmp_path / 'onboarding.db'}"


@pytest.fixture
def test_settings_override(monkeypatch, async_db_url):
    """
    Centralized settings override for all test configurations.

    Points the app at the test database and makes sure no real email
    provider key leaks in from the environment.
    """
    monkeypatch.setenv("DATABASE_URL", async_db_url)
    monkeypatch.delenv("RESEND_API_KEY", raising=False)
    monkeypatch.setenv("INTAKE__SUCCESS_BANNER_SECONDS", "0.05")

    # Clear settings cache to force reload with new env vars
    from src.app.config import get_settings
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


async def wait_till_db_ready(db: Database, max_attempts: int = 20):
    """
    Wait for database to be ready.

    Args:
        db: Database instance to test
        max_attempts: Maximum number of connection attempts

    Raises:
        Exception: If database is not ready after max_attempts
    """
    for attempt in range(max_attempts):
        try:
            async with db._engine.begin():
                return
        except Exception:
            await asyncio.sleep(0.2)
    raise Exception(f"Database not ready after {max_attempts} attempts")


@pytest_asyncio.fixture
async def db(async_db_url):
    """
    Create database instance with test database.
    Function-scoped for test isolation.
    """
    db = Database(DatabaseSettings(db_url=async_db_url))
    await wait_till_db_ready(db)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def clean_database(db):
    """Drop and recreate all tables before the test."""
    await db.drop_tables()
    await db.create_tables()
    yield db


@pytest.fixture
def operator_session():
    return Session(user_id="user-1", email="operator@firm.com", access_token=OPERATOR_TOKEN)


@pytest.fixture
def session_provider(operator_session):
    return MockSessionProvider({OPERATOR_TOKEN: operator_session})


@pytest.fixture
def welcome_notifier():
    return MockWelcomeNotifier()


@pytest.fixture
def test_container(test_settings_override, clean_database, session_provider, welcome_notifier):
    """
    Create a test container with database and collaborator overrides.
    Function-scoped to ensure each test gets a fresh container.
    """
    container = Container()

    container.database.override(providers.Object(clean_database))
    container.session_provider.override(providers.Object(session_provider))
    container.welcome_notifier.override(providers.Object(welcome_notifier))

    container.wire(modules=WIRED_MODULES)
    yield container
    container.unwire()
    container.database.reset_override()
    container.session_provider.reset_override()
    container.welcome_notifier.reset_override()


@pytest_asyncio.fixture
async def test_app(test_container):
    """
    Create test application with container.
    Function-scoped for test isolation.
    """
    from src.app.api import auth, email, views
    from src.app.api.middleware import SessionGateMiddleware
    from src.app.api.v1 import clients

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Database tables are already created by clean_database fixture
        yield

    config = test_container.config()
    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        lifespan=lifespan
    )
    app.state.container = test_container
    app.add_middleware(SessionGateMiddleware)

    app.include_router(clients.router, prefix="/api/v1")
    app.include_router(email.router, prefix="/api")
    app.include_router(auth.router, prefix="/api")
    app.include_router(views.router)

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    yield app


@pytest_asyncio.fixture
async def onboarding_client(test_app):
    """Onboarding client signed in as the operator."""
    transport = ASGITransport(app=test_app)
    http_client = AsyncClient(transport=transport, base_url="http://test")
    client = OnboardingClient(base_url="http://test", client=http_client, access_token=OPERATOR_TOKEN)

    async with client:
        yield client
    await http_client.aclose()


@pytest_asyncio.fixture
async def anonymous_client(test_app):
    """Onboarding client without a session."""
    transport = ASGITransport(app=test_app)
    http_client = AsyncClient(transport=transport, base_url="http://test")
    client = OnboardingClient(base_url="http://test", client=http_client)

    async with client:
        yield client
    await http_client.aclose()


@pytest_asyncio.fixture
async def unit_of_work(clean_database, test_container):
    """
    Fixture for a UnitOfWork instance with a clean database.
    Uses the container's entity_mapper singleton.
    """
    entity_mapper = test_container.entity_mapper()
    yield UnitOfWork(clean_database, entity_mapper)


# =========================================================================
# Common repository and service fixtures (available to all test directories)
# =========================================================================

@pytest.fixture
def client_repository(test_container):
    """Get client repository from container."""
    return test_container.client_repository()


@pytest.fixture
def client_service(test_container):
    """Get client service from container."""
    return test_container.client_service()


@pytest.fixture
def workflow_registry(test_container):
    """Get the session workflow registry from container."""
    return test_container.workflow_registry()
