"""
Test configuration and fixtures for the Viandas CRM
"""

import os
from datetime import datetime
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest

from viandas.domain.entities.profile_entity import Role
from viandas.infrastructure.configuration.config import Settings, reset_config
from viandas.infrastructure.container.dependency_injection import DependencyContainer
from viandas.infrastructure.database.operations import DatabaseManager

BUENOS_AIRES = ZoneInfo("America/Argentina/Buenos_Aires")


# Mock environment variables for testing
@pytest.fixture(autouse=True)
def mock_env():
    """Mock environment variables for testing"""
    test_env = {
        "DATABASE_URL": "sqlite:///:memory:",
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
        "TIMEZONE": "America/Argentina/Buenos_Aires",
    }

    with patch.dict(os.environ, test_env, clear=True):
        reset_config()
        yield test_env
    reset_config()


@pytest.fixture
def now() -> datetime:
    """Wednesday afternoon in the business timezone"""
    return datetime(2024, 6, 12, 15, 30, tzinfo=BUENOS_AIRES)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def database(settings):
    """Fresh in-memory SQLite record store"""
    manager = DatabaseManager(settings, database_url="sqlite:///:memory:")
    manager.create_tables()
    yield manager
    manager.dispose()


@pytest.fixture
def container(settings, database, now):
    """Application context wired to the in-memory store and a frozen clock"""
    app = DependencyContainer(config=settings, database_manager=database, clock=lambda: now)
    yield app
    app.cleanup()


@pytest.fixture
async def signed_in(container):
    """Staff member signed in on ``container``"""
    auth = container.get_auth_service()
    await auth.register("staff@viandas.test", "secret-pass")
    return await auth.sign_in("staff@viandas.test", "secret-pass")


@pytest.fixture
async def signed_in_admin(container):
    """Admin signed in on ``container``"""
    auth = container.get_auth_service()
    await auth.register("admin@viandas.test", "secret-pass", Role.ADMIN)
    return await auth.sign_in("admin@viandas.test", "secret-pass")
