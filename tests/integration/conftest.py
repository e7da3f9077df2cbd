"""Integration test fixtures: the same app and services against real PostgreSQL.

Most fixtures are inherited from tests/conftest.py. Only the database URL is
overridden here, so every fixture above it (settings, container, clients)
runs against a PostgreSQL container instead of the SQLite file.
"""
import pytest
from testcontainers.postgres import PostgresContainer


@pytest.fixture(scope="module")
def postgres_container():
    """Start a PostgreSQL container for testing. Module-scoped for reuse."""
    try:
        container = PostgresContainer("postgres:16-alpine")
        container.start()
    except Exception as e:
        pytest.skip(f"Docker is not available: {e}")
    yield container
    container.stop()


@pytest.fixture(scope="module")
def async_db_url(postgres_container):
    """
    Get the async database URL from the postgres container.
    Module-scoped so it can be reused across tests.
    """
    connection_url = postgres_container.get_connection_url()
    return connection_url.replace("postgresql+psycopg2://", "postgresql+asyncpg://")
